import sqlite3

from playoff_pool.domain.season import Season


class SqliteSeasonRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get_or_create(self, participant_id: int, year: int) -> int:
        """Return the season id for ``(participant_id, year)``, creating it if needed."""
        row = self._conn.execute(
            "SELECT id FROM season WHERE participant_id = ? AND year = ?",
            (participant_id, year),
        ).fetchone()
        if row is not None:
            return row["id"]
        cursor = self._conn.execute(
            "INSERT INTO season (participant_id, year, is_active) VALUES (?, ?, 1)",
            (participant_id, year),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get(self, participant_id: int, year: int) -> Season | None:
        row = self._conn.execute(
            "SELECT * FROM season WHERE participant_id = ? AND year = ?",
            (participant_id, year),
        ).fetchone()
        return self._row_to_season(row) if row else None

    def get_ids_by_year(self, year: int) -> list[int]:
        rows = self._conn.execute("SELECT id FROM season WHERE year = ?", (year,)).fetchall()
        return [row["id"] for row in rows]

    def set_active(self, season_id: int, active: bool) -> None:
        self._conn.execute("UPDATE season SET is_active = ? WHERE id = ?", (int(active), season_id))

    @staticmethod
    def _row_to_season(row: sqlite3.Row) -> Season:
        return Season(
            id=row["id"],
            participant_id=row["participant_id"],
            year=row["year"],
            is_active=bool(row["is_active"]),
        )
