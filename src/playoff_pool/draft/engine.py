from __future__ import annotations

import dataclasses
import logging
import random
import sqlite3
from typing import TYPE_CHECKING

from playoff_pool.db.connection import transaction
from playoff_pool.domain.draft import Draft, DraftOrderEntry, DraftPick, DraftPickDetail, DraftSnapshot
from playoff_pool.domain.errors import (
    DraftComplete,
    DraftError,
    DraftNotFound,
    NoDraftOrder,
    NoParticipants,
    NotYourTurn,
    ParticipantNotFound,
    PlayerAlreadyDrafted,
    PlayerNotFound,
    PoolError,
    StorageError,
    ValidationError,
)
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.domain.roster import RosterEntry
from playoff_pool.draft.snake import advance, current_picker, overall_pick_number

if TYPE_CHECKING:
    from playoff_pool.auth import AdminCapability
    from playoff_pool.repos.protocols import DraftRepo, ParticipantRepo, PlayerRepo, RosterRepo, SeasonRepo

logger = logging.getLogger(__name__)


class DraftEngine:
    """Runs a season's snake draft.

    All state lives in the repositories; each mutating call runs in a single
    ``BEGIN IMMEDIATE`` transaction on ``conn`` so a pick, its roster entry and
    the advanced turn counters land together or not at all.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        draft_repo: DraftRepo,
        participant_repo: ParticipantRepo,
        player_repo: PlayerRepo,
        season_repo: SeasonRepo,
        roster_repo: RosterRepo,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._conn = conn
        self._draft_repo = draft_repo
        self._participant_repo = participant_repo
        self._player_repo = player_repo
        self._season_repo = season_repo
        self._roster_repo = roster_repo
        self._rng = rng or random.Random()

    def create_draft(self, season_year: int, total_rounds: int) -> Result[int, PoolError]:
        """Start a fresh draft for ``season_year``, discarding any previous draft and rosters for that year."""
        if total_rounds < 1:
            return Err(ValidationError("Total rounds must be at least 1", field="total_rounds"))
        try:
            with transaction(self._conn):
                participants = self._participant_repo.all_by_creation()
                if not participants:
                    return Err(NoParticipants())

                cleared = self._roster_repo.delete_for_season_year(season_year)
                for draft_id in self._draft_repo.get_ids_by_season_year(season_year):
                    self._draft_repo.delete(draft_id)

                draft_id = self._draft_repo.insert(Draft(season_year=season_year, total_rounds=total_rounds))
                participant_ids = [p.id for p in participants if p.id is not None]
                self._rng.shuffle(participant_ids)
                self._draft_repo.insert_order(draft_id, participant_ids)
        except sqlite3.Error as exc:
            logger.exception("Creating draft for %d failed", season_year)
            return Err(StorageError(f"Failed to create draft: {exc}"))

        logger.info(
            "Created draft %d for %d: %d participants, %d rounds (%d roster entries cleared)",
            draft_id,
            season_year,
            len(participant_ids),
            total_rounds,
            cleared,
        )
        return Ok(draft_id)

    def delete_draft(self, season_year: int) -> Result[None, DraftError]:
        try:
            with transaction(self._conn):
                draft_ids = self._draft_repo.get_ids_by_season_year(season_year)
                if not draft_ids:
                    return Err(DraftNotFound("No draft found for this season"))
                for draft_id in draft_ids:
                    self._draft_repo.delete(draft_id)
                cleared = self._roster_repo.delete_for_season_year(season_year)
        except sqlite3.Error as exc:
            logger.exception("Deleting draft for %d failed", season_year)
            return Err(StorageError(f"Failed to delete draft: {exc}"))
        logger.info("Deleted draft for %d (%d roster entries cleared)", season_year, cleared)
        return Ok(None)

    def get_current_draft(self, season_year: int) -> DraftSnapshot | None:
        draft = self._draft_repo.get_latest_by_season_year(season_year)
        if draft is None:
            return None
        assert draft.id is not None
        return DraftSnapshot(draft=draft, order=tuple(self._draft_repo.get_order(draft.id)))

    def get_draft_picks(self, draft_id: int) -> list[DraftPickDetail]:
        return self._draft_repo.get_picks(draft_id)

    def get_current_picker(self, draft_id: int) -> DraftOrderEntry | None:
        draft = self._draft_repo.get_by_id(draft_id)
        if draft is None:
            return None
        return current_picker(self._draft_repo.get_order(draft_id), draft.state)

    def make_pick(
        self,
        draft_id: int,
        participant_id: int,
        player_id: int,
        *,
        override: AdminCapability | None = None,
    ) -> Result[DraftPick, PoolError]:
        """Record ``participant_id`` taking ``player_id`` in the current slot of the draft.

        Passing an ``override`` capability skips the turn check so an admin can
        pick on behalf of an absent participant; it never reopens a complete draft.
        """
        try:
            with transaction(self._conn):
                return self._apply_pick(draft_id, participant_id, player_id, override)
        except sqlite3.IntegrityError as exc:
            if "draft_pick.player_id" in str(exc):
                return Err(PlayerAlreadyDrafted())
            logger.exception("Pick %d/%d in draft %d violated a constraint", participant_id, player_id, draft_id)
            return Err(StorageError(f"Failed to make draft pick: {exc}"))
        except sqlite3.Error as exc:
            logger.exception("Pick %d/%d in draft %d failed", participant_id, player_id, draft_id)
            return Err(StorageError(f"Failed to make draft pick: {exc}"))

    def _apply_pick(
        self,
        draft_id: int,
        participant_id: int,
        player_id: int,
        override: AdminCapability | None,
    ) -> Result[DraftPick, PoolError]:
        draft = self._draft_repo.get_by_id(draft_id)
        if draft is None:
            return Err(DraftNotFound())
        if draft.is_complete:
            return Err(DraftComplete())

        order = self._draft_repo.get_order(draft_id)
        if not order:
            return Err(NoDraftOrder())

        state = draft.state
        if override is None:
            expected = current_picker(order, state)
            if expected is None or expected.participant_id != participant_id:
                return Err(NotYourTurn())
        else:
            if all(entry.participant_id != participant_id for entry in order):
                return Err(ParticipantNotFound("Participant is not in the draft order"))
            logger.info("Admin override by %s: pick for participant %d", override.granted_to, participant_id)

        if self._draft_repo.is_player_picked(draft_id, player_id):
            return Err(PlayerAlreadyDrafted())

        player = self._player_repo.get_by_id(player_id)
        if player is None:
            return Err(PlayerNotFound())

        team_count = len(order)
        pick = DraftPick(
            draft_id=draft_id,
            participant_id=participant_id,
            player_id=player_id,
            round=state.current_round,
            pick_number=overall_pick_number(state.current_round, state.current_pick, team_count),
        )
        pick_id = self._draft_repo.insert_pick(pick)

        season_id = self._season_repo.get_or_create(participant_id, draft.season_year)
        self._roster_repo.insert(
            RosterEntry(
                participant_id=participant_id,
                season_id=season_id,
                player_id=player_id,
                player_name=player.name,
                position=player.position,
                team=player.team,
            )
        )

        next_state = advance(state, team_count)
        self._draft_repo.update_state(draft_id, next_state)

        logger.info(
            "Draft %d pick %d (round %d): participant %d took %s",
            draft_id,
            pick.pick_number,
            pick.round,
            participant_id,
            player.name,
        )
        if next_state.is_complete:
            logger.info("Draft %d complete after %d picks", draft_id, pick.pick_number)
        return Ok(dataclasses.replace(pick, id=pick_id))
