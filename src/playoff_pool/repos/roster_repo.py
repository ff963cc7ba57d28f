import sqlite3
from datetime import datetime, timezone

from playoff_pool.domain.roster import RosterEntry, Standing, WeeklyScore


class SqliteRosterRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, entry: RosterEntry) -> int:
        cursor = self._conn.execute(
            """INSERT INTO roster_entry (participant_id, season_id, player_id, player_name, position, team)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (entry.participant_id, entry.season_id, entry.player_id, entry.player_name, entry.position, entry.team),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, entry_id: int) -> RosterEntry | None:
        row = self._conn.execute("SELECT * FROM roster_entry WHERE id = ?", (entry_id,)).fetchone()
        return self._row_to_entry(row) if row else None

    def delete(self, entry_id: int) -> bool:
        cursor = self._conn.execute("DELETE FROM roster_entry WHERE id = ?", (entry_id,))
        return cursor.rowcount > 0

    def delete_for_season_year(self, year: int) -> int:
        """Delete every roster entry of every season tagged with ``year``, across all participants."""
        cursor = self._conn.execute(
            "DELETE FROM roster_entry WHERE season_id IN (SELECT id FROM season WHERE year = ?)",
            (year,),
        )
        return cursor.rowcount

    def get_by_participant_year(self, participant_id: int, year: int) -> list[RosterEntry]:
        rows = self._conn.execute(
            "SELECT r.* FROM roster_entry r JOIN season s ON r.season_id = s.id"
            " WHERE r.participant_id = ? AND s.year = ? ORDER BY r.id",
            (participant_id, year),
        ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def get_active_by_year(self, year: int) -> list[RosterEntry]:
        rows = self._conn.execute(
            "SELECT r.* FROM roster_entry r JOIN season s ON r.season_id = s.id"
            " WHERE s.year = ? AND s.is_active = 1 ORDER BY r.id",
            (year,),
        ).fetchall()
        return [self._row_to_entry(row) for row in rows]

    def count_by_year(self, year: int) -> int:
        row = self._conn.execute(
            "SELECT COUNT(*) FROM roster_entry r JOIN season s ON r.season_id = s.id WHERE s.year = ?",
            (year,),
        ).fetchone()
        return row[0]

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> RosterEntry:
        return RosterEntry(
            id=row["id"],
            participant_id=row["participant_id"],
            season_id=row["season_id"],
            player_id=row["player_id"],
            player_name=row["player_name"],
            position=row["position"],
            team=row["team"],
            created_at=row["created_at"],
        )


class SqliteWeeklyScoreRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, score: WeeklyScore) -> int:
        cursor = self._conn.execute(
            "INSERT INTO weekly_score (roster_entry_id, week, points, updated_at)"
            " VALUES (?, ?, ?, ?)"
            " ON CONFLICT(roster_entry_id, week) DO UPDATE SET"
            "    points=excluded.points,"
            "    updated_at=excluded.updated_at",
            (score.roster_entry_id, score.week, score.points, datetime.now(timezone.utc).isoformat()),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_roster_entry(self, roster_entry_id: int) -> list[WeeklyScore]:
        rows = self._conn.execute(
            "SELECT * FROM weekly_score WHERE roster_entry_id = ? ORDER BY week",
            (roster_entry_id,),
        ).fetchall()
        return [self._row_to_score(row) for row in rows]

    def standings(self, year: int) -> list[Standing]:
        rows = self._conn.execute(
            "SELECT p.id AS participant_id, p.name AS participant_name,"
            "       COALESCE(SUM(ws.points), 0) AS total_points"
            " FROM participant p"
            " LEFT JOIN season s ON s.participant_id = p.id AND s.year = ?"
            " LEFT JOIN roster_entry r ON r.season_id = s.id"
            " LEFT JOIN weekly_score ws ON ws.roster_entry_id = r.id"
            " GROUP BY p.id, p.name"
            " ORDER BY total_points DESC, p.name COLLATE NOCASE",
            (year,),
        ).fetchall()
        return [
            Standing(
                participant_id=row["participant_id"],
                participant_name=row["participant_name"],
                total_points=float(row["total_points"]),
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_score(row: sqlite3.Row) -> WeeklyScore:
        return WeeklyScore(
            id=row["id"],
            roster_entry_id=row["roster_entry_id"],
            week=row["week"],
            points=row["points"],
            updated_at=row["updated_at"],
        )
