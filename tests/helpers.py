import sqlite3

from playoff_pool.domain.participant import Participant
from playoff_pool.domain.player import Player
from playoff_pool.domain.roster import RosterEntry
from playoff_pool.domain.stats import StatLine, WeeklyActual
from playoff_pool.repos.participant_repo import SqliteParticipantRepo
from playoff_pool.repos.player_repo import SqlitePlayerRepo
from playoff_pool.repos.roster_repo import SqliteRosterRepo
from playoff_pool.repos.season_repo import SqliteSeasonRepo
from playoff_pool.repos.weekly_actual_repo import SqliteWeeklyActualRepo


def seed_participant(
    conn: sqlite3.Connection,
    name: str = "Alice",
    *,
    email: str | None = None,
    external_id: str | None = None,
) -> int:
    participant_id = SqliteParticipantRepo(conn).insert(Participant(name=name, email=email, external_id=external_id))
    conn.commit()
    return participant_id


def seed_participants(conn: sqlite3.Connection, *names: str) -> list[int]:
    return [seed_participant(conn, name) for name in names]


def seed_player(
    conn: sqlite3.Connection,
    name: str = "Josh Allen",
    *,
    position: str = "QB",
    team: str = "BUF",
    espn_id: str | None = None,
    is_draft_eligible: bool = True,
) -> int:
    """Seed a catalog player; ``espn_id`` defaults to a value derived from ``name``."""
    player_id = SqlitePlayerRepo(conn).upsert(
        Player(
            name=name,
            position=position,
            team=team,
            espn_id=espn_id if espn_id is not None else f"espn-{name.lower().replace(' ', '-')}",
            is_draft_eligible=is_draft_eligible,
        )
    )
    conn.commit()
    return player_id


def seed_players(conn: sqlite3.Connection, count: int, *, team: str = "KC") -> list[int]:
    return [seed_player(conn, f"Player {i}", position="WR", team=team) for i in range(1, count + 1)]


def seed_roster_entry(
    conn: sqlite3.Connection,
    participant_id: int,
    player_id: int,
    year: int = 2024,
    *,
    player_name: str = "Josh Allen",
) -> int:
    season_id = SqliteSeasonRepo(conn).get_or_create(participant_id, year)
    entry_id = SqliteRosterRepo(conn).insert(
        RosterEntry(participant_id=participant_id, season_id=season_id, player_id=player_id, player_name=player_name)
    )
    conn.commit()
    return entry_id


def seed_weekly_actual(
    conn: sqlite3.Connection,
    player_id: int,
    *,
    season: int = 2024,
    week: int = 19,
    fantasy_points: float = 10.0,
    stats: StatLine | None = None,
) -> int:
    actual_id = SqliteWeeklyActualRepo(conn).upsert(
        WeeklyActual(
            player_id=player_id,
            season=season,
            week=week,
            fantasy_points=fantasy_points,
            stats=stats or StatLine(rushing_yards=100.0),
        )
    )
    conn.commit()
    return actual_id
