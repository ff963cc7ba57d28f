import sqlite3

from playoff_pool.domain.participant import Participant
from playoff_pool.repos.errors import DuplicateParticipantError

_UNIQUE_COLUMNS = ("email", "external_id")


class SqliteParticipantRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, participant: Participant) -> int:
        try:
            cursor = self._conn.execute(
                "INSERT INTO participant (name, email, external_id) VALUES (?, ?, ?)",
                (participant.name, participant.email, participant.external_id),
            )
        except sqlite3.IntegrityError:
            for col in _UNIQUE_COLUMNS:
                value = getattr(participant, col)
                if value is None:
                    continue
                row = self._conn.execute(f"SELECT id FROM participant WHERE {col} = ?", (value,)).fetchone()
                if row is not None:
                    raise DuplicateParticipantError(col, value) from None
            raise
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, participant_id: int) -> Participant | None:
        row = self._conn.execute("SELECT * FROM participant WHERE id = ?", (participant_id,)).fetchone()
        return self._row_to_participant(row) if row else None

    def get_by_external_id(self, external_id: str) -> Participant | None:
        row = self._conn.execute("SELECT * FROM participant WHERE external_id = ?", (external_id,)).fetchone()
        return self._row_to_participant(row) if row else None

    def all_by_creation(self) -> list[Participant]:
        rows = self._conn.execute("SELECT * FROM participant ORDER BY created_at, id").fetchall()
        return [self._row_to_participant(row) for row in rows]

    def all_by_name(self) -> list[Participant]:
        rows = self._conn.execute("SELECT * FROM participant ORDER BY name COLLATE NOCASE, id").fetchall()
        return [self._row_to_participant(row) for row in rows]

    @staticmethod
    def _row_to_participant(row: sqlite3.Row) -> Participant:
        return Participant(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            external_id=row["external_id"],
            created_at=row["created_at"],
        )
