import sqlite3
from pathlib import Path

import pytest

from playoff_pool.db.connection import create_connection, get_schema_version, transaction


class TestCreateConnection:
    def test_enables_wal_mode(self, tmp_path: Path) -> None:
        conn = create_connection(tmp_path / "pool.db")
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        conn.close()

    def test_enables_foreign_keys(self, conn: sqlite3.Connection) -> None:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1

    def test_creates_all_tables(self, conn: sqlite3.Connection) -> None:
        tables = {
            row[0]
            for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            ).fetchall()
        }
        assert tables == {
            "schema_version",
            "participant",
            "player",
            "season",
            "roster_entry",
            "weekly_score",
            "weekly_actual",
            "draft",
            "draft_order",
            "draft_pick",
            "load_log",
        }

    def test_schema_version_recorded(self, conn: sqlite3.Connection) -> None:
        assert get_schema_version(conn) == 1

    def test_reopening_does_not_reapply_migrations(self, tmp_path: Path) -> None:
        create_connection(tmp_path / "pool.db").close()
        conn = create_connection(tmp_path / "pool.db")
        assert get_schema_version(conn) == 1
        conn.close()

    def test_custom_migrations_dir(self, tmp_path: Path) -> None:
        migrations = tmp_path / "migrations"
        migrations.mkdir()
        (migrations / "001_one.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY);")
        (migrations / "002_two.sql").write_text("CREATE TABLE b (id INTEGER PRIMARY KEY);")
        conn = create_connection(":memory:", migrations_dir=migrations)
        assert get_schema_version(conn) == 2
        conn.close()

    def test_failed_migration_rolls_back(self, tmp_path: Path) -> None:
        migrations = tmp_path / "migrations"
        migrations.mkdir()
        (migrations / "001_bad.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY); NOT SQL")
        with pytest.raises(sqlite3.OperationalError):
            create_connection(tmp_path / "bad.db", migrations_dir=migrations)


class TestGetSchemaVersion:
    def test_zero_without_version_table(self) -> None:
        raw = sqlite3.connect(":memory:")
        assert get_schema_version(raw) == 0
        raw.close()


class TestTransaction:
    def test_commits_on_success(self, conn: sqlite3.Connection) -> None:
        with transaction(conn):
            conn.execute("INSERT INTO participant (name) VALUES ('Alice')")
        conn.rollback()
        assert conn.execute("SELECT COUNT(*) FROM participant").fetchone()[0] == 1

    def test_rolls_back_on_error(self, conn: sqlite3.Connection) -> None:
        with pytest.raises(RuntimeError):
            with transaction(conn):
                conn.execute("INSERT INTO participant (name) VALUES ('Alice')")
                raise RuntimeError("boom")
        assert conn.execute("SELECT COUNT(*) FROM participant").fetchone()[0] == 0

    def test_restores_isolation_level(self, conn: sqlite3.Connection) -> None:
        before = conn.isolation_level
        with transaction(conn):
            pass
        assert conn.isolation_level == before

    def test_commits_pending_work_first(self, conn: sqlite3.Connection) -> None:
        conn.execute("INSERT INTO participant (name) VALUES ('Pending')")
        with pytest.raises(RuntimeError):
            with transaction(conn):
                raise RuntimeError("boom")
        assert conn.execute("SELECT COUNT(*) FROM participant").fetchone()[0] == 1

    def test_second_writer_waits_for_lock(self, tmp_path: Path) -> None:
        path = tmp_path / "pool.db"
        first = create_connection(path)
        second = sqlite3.connect(str(path), timeout=0.05)
        with transaction(first):
            with pytest.raises(sqlite3.OperationalError, match="locked"):
                second.execute("BEGIN IMMEDIATE")
        second.close()
        first.close()
