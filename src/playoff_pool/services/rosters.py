from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

from playoff_pool.domain.errors import ParticipantNotFound, PlayerNotFound, PoolError, StorageError, ValidationError
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.domain.roster import RosterEntry, RosterEntryScores

if TYPE_CHECKING:
    from playoff_pool.auth import AdminCapability
    from playoff_pool.repos.protocols import (
        ParticipantRepo,
        PlayerRepo,
        RosterRepo,
        SeasonRepo,
        WeeklyScoreRepo,
    )

logger = logging.getLogger(__name__)


class RosterService:
    """Roster reads and admin edits outside of the draft."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        roster_repo: RosterRepo,
        weekly_score_repo: WeeklyScoreRepo,
        participant_repo: ParticipantRepo,
        player_repo: PlayerRepo,
        season_repo: SeasonRepo,
    ) -> None:
        self._conn = conn
        self._roster_repo = roster_repo
        self._weekly_score_repo = weekly_score_repo
        self._participant_repo = participant_repo
        self._player_repo = player_repo
        self._season_repo = season_repo

    def add_player(
        self,
        participant_id: int,
        player_id: int,
        season_year: int,
        *,
        admin: AdminCapability,
    ) -> Result[int, PoolError]:
        """Attach a player to a participant's roster directly, bypassing the draft."""
        if self._participant_repo.get_by_id(participant_id) is None:
            return Err(ParticipantNotFound())
        player = self._player_repo.get_by_id(player_id)
        if player is None:
            return Err(PlayerNotFound())
        try:
            season_id = self._season_repo.get_or_create(participant_id, season_year)
            entry_id = self._roster_repo.insert(
                RosterEntry(
                    participant_id=participant_id,
                    season_id=season_id,
                    player_id=player_id,
                    player_name=player.name,
                    position=player.position,
                    team=player.team,
                )
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            self._conn.rollback()
            logger.exception("Adding player %d to participant %d failed", player_id, participant_id)
            return Err(StorageError(f"Failed to add player to roster: {exc}"))
        logger.info("%s added %s to participant %d for %d", admin.granted_to, player.name, participant_id, season_year)
        return Ok(entry_id)

    def remove_entry(self, roster_entry_id: int, *, admin: AdminCapability) -> Result[None, PoolError]:
        if not self._roster_repo.delete(roster_entry_id):
            return Err(ValidationError("Roster entry not found", field="roster_entry_id"))
        self._conn.commit()
        logger.info("%s removed roster entry %d", admin.granted_to, roster_entry_id)
        return Ok(None)

    def roster_with_scores(self, participant_id: int, season_year: int) -> list[RosterEntryScores]:
        result: list[RosterEntryScores] = []
        for entry in self._roster_repo.get_by_participant_year(participant_id, season_year):
            assert entry.id is not None
            scores = self._weekly_score_repo.get_by_roster_entry(entry.id)
            result.append(RosterEntryScores(entry=entry, weekly_points={s.week: s.points for s in scores}))
        return result
