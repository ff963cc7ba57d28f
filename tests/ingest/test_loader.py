import sqlite3

from playoff_pool.domain.result import Err, Ok
from playoff_pool.ingest.column_maps import espn_roster_row_to_player
from playoff_pool.ingest.loader import Loader
from playoff_pool.repos.load_log_repo import SqliteLoadLogRepo
from playoff_pool.repos.player_repo import SqlitePlayerRepo
from tests.ingest.conftest import ErrorDataSource, FakeDataSource


def _row(**overrides: object) -> dict[str, object]:
    return {"espn_id": "3918298", "name": "Josh Allen", "position": "QB", "team": "BUF", **overrides}


def _loader(conn: sqlite3.Connection, source: object) -> Loader:
    return Loader(
        source,  # type: ignore[arg-type]
        SqlitePlayerRepo(conn),
        SqliteLoadLogRepo(conn),
        espn_roster_row_to_player,
        "player",
        conn=conn,
    )


class _ExplodingRepo:
    def __init__(self, inner: SqlitePlayerRepo) -> None:
        self._inner = inner
        self.calls = 0

    def upsert(self, player: object) -> int:
        self.calls += 1
        if self.calls > 1:
            raise sqlite3.OperationalError("disk I/O error")
        return self._inner.upsert(player)  # type: ignore[arg-type]


class TestLoader:
    def test_loads_rows_and_writes_success_log(self, conn: sqlite3.Connection) -> None:
        result = _loader(conn, FakeDataSource([_row()])).load()

        assert isinstance(result, Ok)
        log = result.value
        assert log.status == "success"
        assert log.rows_loaded == 1
        assert log.source_type == "test"
        assert log.source_detail == "fake"
        assert log.target_table == "player"
        assert log.id is not None
        assert len(SqlitePlayerRepo(conn).all()) == 1

    def test_skips_rows_where_mapper_returns_none(self, conn: sqlite3.Connection) -> None:
        source = FakeDataSource([_row(), _row(espn_id="1", position="K")])
        result = _loader(conn, source).load()
        assert isinstance(result, Ok)
        assert result.value.rows_loaded == 1

    def test_upsert_is_idempotent(self, conn: sqlite3.Connection) -> None:
        loader = _loader(conn, FakeDataSource([_row()]))
        loader.load()
        loader.load()
        assert len(SqlitePlayerRepo(conn).all()) == 1
        assert len(SqliteLoadLogRepo(conn).get_recent()) == 2

    def test_passes_fetch_params(self, conn: sqlite3.Connection) -> None:
        source = FakeDataSource([])
        _loader(conn, source).load(season=2024)
        assert source.last_params == {"season": 2024}

    def test_fetch_error_writes_error_log(self, conn: sqlite3.Connection) -> None:
        result = _loader(conn, ErrorDataSource()).load()

        assert isinstance(result, Err)
        assert result.error.message == "fetch failed"
        assert result.error.source_detail == "error"
        assert result.error.target_table == "player"
        logs = SqliteLoadLogRepo(conn).get_recent()
        assert len(logs) == 1
        assert logs[0].status == "error"
        assert logs[0].error_message == "fetch failed"

    def test_processing_error_rolls_back_batch(self, conn: sqlite3.Connection) -> None:
        repo = _ExplodingRepo(SqlitePlayerRepo(conn))
        loader = Loader(
            FakeDataSource([_row(), _row(espn_id="2", name="Other Guy")]),
            repo,
            SqliteLoadLogRepo(conn),
            espn_roster_row_to_player,
            "player",
            conn=conn,
        )

        result = loader.load()

        assert isinstance(result, Err)
        assert "disk I/O error" in result.error.message
        assert SqlitePlayerRepo(conn).all() == []
        assert SqliteLoadLogRepo(conn).get_recent()[0].status == "error"
