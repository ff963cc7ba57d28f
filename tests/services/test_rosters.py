import sqlite3

from playoff_pool.auth import AdminCapability, authorize_admin
from playoff_pool.domain.errors import ParticipantNotFound, PlayerNotFound, ValidationError
from playoff_pool.domain.result import Err, Ok
from playoff_pool.domain.roster import WeeklyScore
from playoff_pool.repos.participant_repo import SqliteParticipantRepo
from playoff_pool.repos.player_repo import SqlitePlayerRepo
from playoff_pool.repos.roster_repo import SqliteRosterRepo, SqliteWeeklyScoreRepo
from playoff_pool.repos.season_repo import SqliteSeasonRepo
from playoff_pool.services.rosters import RosterService
from tests.helpers import seed_participant, seed_player, seed_roster_entry


def _service(conn: sqlite3.Connection) -> RosterService:
    return RosterService(
        conn,
        SqliteRosterRepo(conn),
        SqliteWeeklyScoreRepo(conn),
        SqliteParticipantRepo(conn),
        SqlitePlayerRepo(conn),
        SqliteSeasonRepo(conn),
    )


def _admin() -> AdminCapability:
    capability = authorize_admin("t", "t", granted_to="test")
    assert capability is not None
    return capability


class TestAddPlayer:
    def test_adds_entry_with_player_details(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        player_id = seed_player(conn, "Derrick Henry", position="RB", team="BAL")

        result = _service(conn).add_player(participant_id, player_id, 2024, admin=_admin())

        assert isinstance(result, Ok)
        entry = SqliteRosterRepo(conn).get_by_id(result.value)
        assert entry is not None
        assert (entry.player_name, entry.position, entry.team) == ("Derrick Henry", "RB", "BAL")
        assert SqliteSeasonRepo(conn).get(participant_id, 2024) is not None

    def test_unknown_participant(self, conn: sqlite3.Connection) -> None:
        player_id = seed_player(conn)
        result = _service(conn).add_player(99, player_id, 2024, admin=_admin())
        assert isinstance(result, Err)
        assert isinstance(result.error, ParticipantNotFound)

    def test_unknown_player(self, conn: sqlite3.Connection) -> None:
        result = _service(conn).add_player(seed_participant(conn), 99, 2024, admin=_admin())
        assert isinstance(result, Err)
        assert isinstance(result.error, PlayerNotFound)


class TestRemoveEntry:
    def test_removes(self, conn: sqlite3.Connection) -> None:
        entry_id = seed_roster_entry(conn, seed_participant(conn), seed_player(conn))
        assert _service(conn).remove_entry(entry_id, admin=_admin()) == Ok(None)
        assert SqliteRosterRepo(conn).get_by_id(entry_id) is None

    def test_missing_entry(self, conn: sqlite3.Connection) -> None:
        result = _service(conn).remove_entry(5, admin=_admin())
        assert isinstance(result, Err)
        assert isinstance(result.error, ValidationError)


class TestRosterWithScores:
    def test_weekly_points_and_totals(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        first = seed_roster_entry(conn, participant_id, seed_player(conn, "Josh Allen"))
        second = seed_roster_entry(conn, participant_id, seed_player(conn, "James Cook"), player_name="James Cook")
        scores = SqliteWeeklyScoreRepo(conn)
        scores.upsert(WeeklyScore(roster_entry_id=first, week=1, points=24.5))
        scores.upsert(WeeklyScore(roster_entry_id=first, week=2, points=18.0))

        entries = _service(conn).roster_with_scores(participant_id, 2024)

        assert [e.entry.player_name for e in entries] == ["Josh Allen", "James Cook"]
        assert entries[0].weekly_points == {1: 24.5, 2: 18.0}
        assert entries[0].total_points == 42.5
        assert entries[1].entry.id == second
        assert entries[1].total_points == 0

    def test_other_years_excluded(self, conn: sqlite3.Connection) -> None:
        participant_id = seed_participant(conn)
        seed_roster_entry(conn, participant_id, seed_player(conn), 2023)
        assert _service(conn).roster_with_scores(participant_id, 2024) == []
