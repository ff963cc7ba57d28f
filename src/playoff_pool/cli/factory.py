import functools
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from playoff_pool.config import PoolSettings
from playoff_pool.db.connection import create_connection
from playoff_pool.draft.engine import DraftEngine
from playoff_pool.ingest._retry import RetryDecorator
from playoff_pool.ingest.espn_source import EspnBoxScoreSource, EspnRosterSource
from playoff_pool.ingest.sleeper_source import SleeperSource
from playoff_pool.repos.draft_repo import SqliteDraftRepo
from playoff_pool.repos.load_log_repo import SqliteLoadLogRepo
from playoff_pool.repos.participant_repo import SqliteParticipantRepo
from playoff_pool.repos.player_repo import SqlitePlayerRepo
from playoff_pool.repos.roster_repo import SqliteRosterRepo, SqliteWeeklyScoreRepo
from playoff_pool.repos.season_repo import SqliteSeasonRepo
from playoff_pool.repos.weekly_actual_repo import SqliteWeeklyActualRepo
from playoff_pool.services import (
    ActualsSyncService,
    ParticipantService,
    PlayerCatalogService,
    PlayerSyncService,
    ProjectionsSyncService,
    RosterScoringService,
    RosterService,
    StandingsService,
)


class PoolContainer:
    """Wires repositories and services over one connection.

    HTTP sources share a single lazily-created client, closed by ``close``.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        settings: PoolSettings,
        *,
        http_client: httpx.Client | None = None,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._conn = conn
        self._settings = settings
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._retry = retry

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    @property
    def settings(self) -> PoolSettings:
        return self._settings

    @property
    def http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=httpx.Timeout(self._settings.http_timeout, connect=5.0))
        return self._http_client

    def close(self) -> None:
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    @functools.cached_property
    def participant_repo(self) -> SqliteParticipantRepo:
        return SqliteParticipantRepo(self._conn)

    @functools.cached_property
    def player_repo(self) -> SqlitePlayerRepo:
        return SqlitePlayerRepo(self._conn)

    @functools.cached_property
    def season_repo(self) -> SqliteSeasonRepo:
        return SqliteSeasonRepo(self._conn)

    @functools.cached_property
    def roster_repo(self) -> SqliteRosterRepo:
        return SqliteRosterRepo(self._conn)

    @functools.cached_property
    def weekly_score_repo(self) -> SqliteWeeklyScoreRepo:
        return SqliteWeeklyScoreRepo(self._conn)

    @functools.cached_property
    def weekly_actual_repo(self) -> SqliteWeeklyActualRepo:
        return SqliteWeeklyActualRepo(self._conn)

    @functools.cached_property
    def draft_repo(self) -> SqliteDraftRepo:
        return SqliteDraftRepo(self._conn)

    @functools.cached_property
    def load_log_repo(self) -> SqliteLoadLogRepo:
        return SqliteLoadLogRepo(self._conn)

    @functools.cached_property
    def draft_engine(self) -> DraftEngine:
        return DraftEngine(
            self._conn,
            self.draft_repo,
            self.participant_repo,
            self.player_repo,
            self.season_repo,
            self.roster_repo,
        )

    @functools.cached_property
    def participant_service(self) -> ParticipantService:
        return ParticipantService(self._conn, self.participant_repo)

    @functools.cached_property
    def catalog_service(self) -> PlayerCatalogService:
        return PlayerCatalogService(self._conn, self.player_repo)

    @functools.cached_property
    def roster_service(self) -> RosterService:
        return RosterService(
            self._conn,
            self.roster_repo,
            self.weekly_score_repo,
            self.participant_repo,
            self.player_repo,
            self.season_repo,
        )

    @functools.cached_property
    def standings_service(self) -> StandingsService:
        return StandingsService(self.weekly_score_repo)

    @functools.cached_property
    def roster_scoring_service(self) -> RosterScoringService:
        return RosterScoringService(self._conn, self.roster_repo, self.weekly_actual_repo, self.weekly_score_repo)

    def player_sync_service(self) -> PlayerSyncService:
        source = EspnRosterSource(self.http_client, base_url=self._settings.espn_base_url, retry=self._retry)
        return PlayerSyncService(self._conn, source, self.player_repo, self.load_log_repo)

    def actuals_sync_service(self) -> ActualsSyncService:
        source = EspnBoxScoreSource(self.http_client, base_url=self._settings.espn_base_url, retry=self._retry)
        return ActualsSyncService(self._conn, source, self.player_repo, self.weekly_actual_repo)

    def projections_sync_service(self) -> ProjectionsSyncService:
        source = SleeperSource(
            self.http_client,
            base_url=self._settings.sleeper_base_url,
            projections_url=self._settings.sleeper_projections_url,
            retry=self._retry,
        )
        return ProjectionsSyncService(self._conn, source, self.player_repo)


@contextmanager
def build_pool_container(settings: PoolSettings) -> Iterator[PoolContainer]:
    """Composition-root context manager: opens the pool database, yields a container, closes everything."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    conn = create_connection(settings.db_path)
    container = PoolContainer(conn, settings)
    try:
        yield container
    finally:
        container.close()
        conn.close()
