import dataclasses
import json
import sqlite3
from datetime import datetime, timezone

from playoff_pool.domain.stats import StatLine, WeeklyActual


class SqliteWeeklyActualRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, actual: WeeklyActual) -> int:
        cursor = self._conn.execute(
            "INSERT INTO weekly_actual (player_id, espn_id, season, week, fantasy_points, stats_json, updated_at)"
            " VALUES (?, ?, ?, ?, ?, ?, ?)"
            " ON CONFLICT(player_id, season, week) DO UPDATE SET"
            "    espn_id=excluded.espn_id,"
            "    fantasy_points=excluded.fantasy_points,"
            "    stats_json=excluded.stats_json,"
            "    updated_at=excluded.updated_at",
            (
                actual.player_id,
                actual.espn_id,
                actual.season,
                actual.week,
                actual.fantasy_points,
                json.dumps(dataclasses.asdict(actual.stats)),
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get(self, player_id: int, season: int, week: int) -> WeeklyActual | None:
        row = self._conn.execute(
            "SELECT * FROM weekly_actual WHERE player_id = ? AND season = ? AND week = ?",
            (player_id, season, week),
        ).fetchone()
        return self._row_to_actual(row) if row else None

    def get_by_season_week(self, season: int, week: int) -> list[WeeklyActual]:
        rows = self._conn.execute(
            "SELECT * FROM weekly_actual WHERE season = ? AND week = ? ORDER BY player_id",
            (season, week),
        ).fetchall()
        return [self._row_to_actual(row) for row in rows]

    @staticmethod
    def _row_to_actual(row: sqlite3.Row) -> WeeklyActual:
        return WeeklyActual(
            id=row["id"],
            player_id=row["player_id"],
            espn_id=row["espn_id"],
            season=row["season"],
            week=row["week"],
            fantasy_points=row["fantasy_points"],
            stats=StatLine(**json.loads(row["stats_json"])),
            updated_at=row["updated_at"],
        )
