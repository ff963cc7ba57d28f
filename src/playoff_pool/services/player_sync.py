import sqlite3

from playoff_pool.domain.errors import IngestError
from playoff_pool.domain.load_log import LoadLog
from playoff_pool.domain.result import Result
from playoff_pool.ingest.column_maps import espn_roster_row_to_player
from playoff_pool.ingest.loader import Loader
from playoff_pool.ingest.protocols import DataSource
from playoff_pool.repos.protocols import LoadLogRepo, PlayerRepo


class PlayerSyncService:
    """Refresh the player catalog from NFL team rosters.

    Existing players are matched on ESPN id and keep their draft eligibility.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        source: DataSource,
        player_repo: PlayerRepo,
        load_log_repo: LoadLogRepo,
    ) -> None:
        self._loader = Loader(
            source,
            player_repo,
            load_log_repo,
            espn_roster_row_to_player,
            "player",
            conn=conn,
        )

    def sync(self) -> Result[LoadLog, IngestError]:
        return self._loader.load()
