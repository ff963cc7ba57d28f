import logging
import sqlite3
from collections import defaultdict

from playoff_pool.domain.errors import PlayerNotFound
from playoff_pool.domain.player import EligibilityStats, Player, TeamEligibility
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.repos.protocols import PlayerRepo

logger = logging.getLogger(__name__)


class PlayerCatalogService:
    """Player search and draft-eligibility management."""

    def __init__(self, conn: sqlite3.Connection, player_repo: PlayerRepo) -> None:
        self._conn = conn
        self._player_repo = player_repo

    def search(self, query: str, *, limit: int = 100) -> list[Player]:
        return self._player_repo.search(query, limit=limit)

    def set_team_eligibility(self, teams: list[str], eligible: bool) -> int:
        normalized = sorted({team.strip().upper() for team in teams if team.strip()})
        updated = self._player_repo.set_eligibility_for_teams(normalized, eligible)
        self._conn.commit()
        logger.info("Set %d players on %s %s", updated, ",".join(normalized), _label(eligible))
        return updated

    def set_all_eligibility(self, eligible: bool) -> int:
        updated = self._player_repo.set_eligibility_all(eligible)
        self._conn.commit()
        logger.info("Set all %d players %s", updated, _label(eligible))
        return updated

    def toggle_eligibility(self, player_id: int) -> Result[bool, PlayerNotFound]:
        player = self._player_repo.get_by_id(player_id)
        if player is None:
            return Err(PlayerNotFound())
        eligible = not player.is_draft_eligible
        self._player_repo.set_eligibility(player_id, eligible)
        self._conn.commit()
        logger.info("Player %d (%s) now %s", player_id, player.name, _label(eligible))
        return Ok(eligible)

    def eligibility_stats(self) -> EligibilityStats:
        counts: defaultdict[str, list[int]] = defaultdict(lambda: [0, 0])
        for player in self._player_repo.all():
            counts[player.team][0 if player.is_draft_eligible else 1] += 1
        teams = tuple(
            TeamEligibility(team=team, eligible=eligible, ineligible=ineligible)
            for team, (eligible, ineligible) in sorted(counts.items())
        )
        eligible_total = sum(t.eligible for t in teams)
        ineligible_total = sum(t.ineligible for t in teams)
        return EligibilityStats(
            total=eligible_total + ineligible_total,
            eligible=eligible_total,
            ineligible=ineligible_total,
            teams=teams,
        )


def _label(eligible: bool) -> str:
    return "eligible" if eligible else "ineligible"
