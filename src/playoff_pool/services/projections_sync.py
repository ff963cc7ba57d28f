import logging
import sqlite3

from playoff_pool.domain.stats import SyncSummary
from playoff_pool.ingest.sleeper_source import SleeperSource, half_ppr_projection, index_by_espn_id
from playoff_pool.repos.protocols import PlayerRepo

logger = logging.getLogger(__name__)


class ProjectionsSyncService:
    def __init__(self, conn: sqlite3.Connection, source: SleeperSource, player_repo: PlayerRepo) -> None:
        self._conn = conn
        self._source = source
        self._player_repo = player_repo

    def sync(self, season: int, week: int) -> SyncSummary:
        """Store each catalog player's rounded half-PPR projection for ``week``.

        Players are matched on ESPN id. A matched player without a projection
        is stored as 0 and counted as skipped.
        """
        sleeper_by_espn_id = index_by_espn_id(self._source.fetch_players())
        projections = self._source.fetch_projections(season, week)

        updated = 0
        skipped = 0
        for player in self._player_repo.all():
            sleeper_player = sleeper_by_espn_id.get(player.espn_id) if player.espn_id else None
            if sleeper_player is None or player.id is None:
                logger.debug("No Sleeper match for %s (ESPN %s)", player.name, player.espn_id)
                skipped += 1
                continue
            projection = half_ppr_projection(projections, str(sleeper_player["player_id"]))
            self._player_repo.update_projection(player.id, projection)
            if projection > 0:
                updated += 1
            else:
                skipped += 1
        self._conn.commit()

        logger.info("Projections %d week %d: %d updated, %d skipped", season, week, updated, skipped)
        return SyncSummary(updated=updated, skipped=skipped, week=week)
