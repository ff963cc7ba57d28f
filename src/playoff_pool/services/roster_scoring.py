import logging
import sqlite3

from playoff_pool.domain.errors import NotPlayoffWeek
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.domain.roster import WeeklyScore
from playoff_pool.domain.stats import SyncSummary
from playoff_pool.repos.protocols import RosterRepo, WeeklyActualRepo, WeeklyScoreRepo
from playoff_pool.scoring import PLAYOFF_WEEK_BY_NFL_WEEK, playoff_week

logger = logging.getLogger(__name__)


class RosterScoringService:
    """Copy weekly actuals onto roster entries as playoff-week scores."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        roster_repo: RosterRepo,
        weekly_actual_repo: WeeklyActualRepo,
        weekly_score_repo: WeeklyScoreRepo,
    ) -> None:
        self._conn = conn
        self._roster_repo = roster_repo
        self._weekly_actual_repo = weekly_actual_repo
        self._weekly_score_repo = weekly_score_repo

    def calculate(self, season: int, nfl_week: int) -> Result[SyncSummary, NotPlayoffWeek]:
        week = playoff_week(nfl_week)
        if week is None:
            valid = ", ".join(str(w) for w in PLAYOFF_WEEK_BY_NFL_WEEK)
            return Err(NotPlayoffWeek(f"NFL week {nfl_week} is not a playoff week. Valid weeks: {valid}", nfl_week))

        updated = 0
        skipped = 0
        for entry in self._roster_repo.get_active_by_year(season):
            assert entry.id is not None
            actual = self._weekly_actual_repo.get(entry.player_id, season, nfl_week)
            if actual is None:
                skipped += 1
                continue
            self._weekly_score_repo.upsert(WeeklyScore(roster_entry_id=entry.id, week=week, points=actual.fantasy_points))
            updated += 1
        self._conn.commit()

        logger.info(
            "Roster scores %d NFL week %d (playoff week %d): %d updated, %d skipped",
            season,
            nfl_week,
            week,
            updated,
            skipped,
        )
        return Ok(SyncSummary(updated=updated, skipped=skipped, week=week))

    def calculate_weeks(
        self, season: int, start_week: int, end_week: int
    ) -> dict[int, Result[SyncSummary, NotPlayoffWeek]]:
        return {week: self.calculate(season, week) for week in range(start_week, end_week + 1)}
