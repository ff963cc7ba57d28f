import sqlite3

from playoff_pool.repos.season_repo import SqliteSeasonRepo
from tests.helpers import seed_participant


class TestSqliteSeasonRepo:
    def test_get_or_create_is_idempotent(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        repo = SqliteSeasonRepo(conn)
        first = repo.get_or_create(participant_id, 2024)
        second = repo.get_or_create(participant_id, 2024)
        assert first == second
        assert repo.get_ids_by_year(2024) == [first]

    def test_separate_years(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        repo = SqliteSeasonRepo(conn)
        assert repo.get_or_create(participant_id, 2023) != repo.get_or_create(participant_id, 2024)

    def test_get_and_set_active(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        repo = SqliteSeasonRepo(conn)
        season_id = repo.get_or_create(participant_id, 2024)
        season = repo.get(participant_id, 2024)
        assert season is not None
        assert season.is_active is True
        repo.set_active(season_id, False)
        season = repo.get(participant_id, 2024)
        assert season is not None
        assert season.is_active is False

    def test_get_missing(self, conn: sqlite3.Connection) -> None:
        assert SqliteSeasonRepo(conn).get(1, 2024) is None
