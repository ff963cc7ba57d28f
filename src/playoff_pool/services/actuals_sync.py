import logging
import sqlite3

from playoff_pool.domain.errors import IngestError
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.domain.stats import SyncSummary, WeeklyActual
from playoff_pool.ingest.column_maps import box_score_row_to_stat_line
from playoff_pool.ingest.protocols import DataSource
from playoff_pool.repos.protocols import PlayerRepo, WeeklyActualRepo
from playoff_pool.scoring import HALF_PPR, ScoringRules, fantasy_points

logger = logging.getLogger(__name__)


class ActualsSyncService:
    """Score one NFL week of box scores for every catalog player."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        source: DataSource,
        player_repo: PlayerRepo,
        weekly_actual_repo: WeeklyActualRepo,
        *,
        rules: ScoringRules = HALF_PPR,
    ) -> None:
        self._conn = conn
        self._source = source
        self._player_repo = player_repo
        self._weekly_actual_repo = weekly_actual_repo
        self._rules = rules

    def sync_week(self, season: int, week: int) -> Result[SyncSummary, IngestError]:
        try:
            rows = self._source.fetch(season=season, week=week)
        except Exception as exc:
            logger.error("Box score fetch failed for %d week %d: %s", season, week, exc)
            return Err(
                IngestError(
                    message=str(exc),
                    source_type=self._source.source_type,
                    source_detail=self._source.source_detail,
                    target_table="weekly_actual",
                )
            )
        by_espn_id = {str(row["espn_id"]): row for row in rows}

        updated = 0
        skipped = 0
        for player in self._player_repo.all():
            row = by_espn_id.get(player.espn_id) if player.espn_id else None
            if row is None or player.id is None:
                skipped += 1
                continue
            stats = box_score_row_to_stat_line(row)
            points = fantasy_points(stats, self._rules)
            if points == 0 and not stats.has_activity:
                skipped += 1
                continue
            self._weekly_actual_repo.upsert(
                WeeklyActual(
                    player_id=player.id,
                    espn_id=player.espn_id,
                    season=season,
                    week=week,
                    fantasy_points=points,
                    stats=stats,
                )
            )
            updated += 1
        self._conn.commit()

        logger.info("Weekly actuals %d week %d: %d updated, %d skipped", season, week, updated, skipped)
        return Ok(SyncSummary(updated=updated, skipped=skipped, week=week))

    def sync_weeks(self, season: int, start_week: int, end_week: int) -> list[Result[SyncSummary, IngestError]]:
        return [self.sync_week(season, week) for week in range(start_week, end_week + 1)]
