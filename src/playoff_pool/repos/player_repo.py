import sqlite3
from datetime import datetime, timezone

from playoff_pool.domain.player import Player


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqlitePlayerRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, player: Player) -> int:
        """Insert or update a player keyed on ``espn_id``.

        Draft eligibility and projections are owned by this application, so an
        update from the external roster feed leaves them untouched.
        """
        if player.espn_id is None:
            return self._insert(player)
        existing = self._conn.execute("SELECT id FROM player WHERE espn_id = ?", (player.espn_id,)).fetchone()
        if existing is None:
            return self._insert(player)
        self._conn.execute(
            """UPDATE player SET
                   name=?, position=?, team=?, jersey_number=?, status=?,
                   image_url=?, updated_at=?
               WHERE id=?""",
            (
                player.name,
                player.position,
                player.team,
                player.jersey_number,
                player.status,
                player.image_url,
                _now(),
                existing["id"],
            ),
        )
        return existing["id"]

    def _insert(self, player: Player) -> int:
        cursor = self._conn.execute(
            """INSERT INTO player (espn_id, name, position, team, jersey_number, status,
                                   image_url, is_draft_eligible, projected_points, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                player.espn_id,
                player.name,
                player.position,
                player.team,
                player.jersey_number,
                player.status,
                player.image_url,
                int(player.is_draft_eligible),
                player.projected_points,
                _now(),
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, player_id: int) -> Player | None:
        row = self._conn.execute("SELECT * FROM player WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row else None

    def get_by_espn_id(self, espn_id: str) -> Player | None:
        row = self._conn.execute("SELECT * FROM player WHERE espn_id = ?", (espn_id,)).fetchone()
        return self._row_to_player(row) if row else None

    def search(self, query: str, *, limit: int = 100) -> list[Player]:
        if not query.strip():
            rows = self._conn.execute("SELECT * FROM player ORDER BY id LIMIT ?", (limit,)).fetchall()
            return [self._row_to_player(row) for row in rows]
        pattern = f"%{query.strip().lower()}%"
        rows = self._conn.execute(
            "SELECT * FROM player"
            " WHERE LOWER(name) LIKE ? OR LOWER(team) LIKE ? OR LOWER(position) LIKE ?"
            " ORDER BY id LIMIT ?",
            (pattern, pattern, pattern, limit),
        ).fetchall()
        return [self._row_to_player(row) for row in rows]

    def all(self) -> list[Player]:
        rows = self._conn.execute("SELECT * FROM player ORDER BY id").fetchall()
        return [self._row_to_player(row) for row in rows]

    def set_eligibility(self, player_id: int, eligible: bool) -> None:
        self._conn.execute(
            "UPDATE player SET is_draft_eligible = ?, updated_at = ? WHERE id = ?",
            (int(eligible), _now(), player_id),
        )

    def set_eligibility_for_teams(self, teams: list[str], eligible: bool) -> int:
        if not teams:
            return 0
        placeholders = ",".join("?" * len(teams))
        cursor = self._conn.execute(
            f"UPDATE player SET is_draft_eligible = ?, updated_at = ? WHERE team IN ({placeholders})",
            (int(eligible), _now(), *teams),
        )
        return cursor.rowcount

    def set_eligibility_all(self, eligible: bool) -> int:
        cursor = self._conn.execute(
            "UPDATE player SET is_draft_eligible = ?, updated_at = ?",
            (int(eligible), _now()),
        )
        return cursor.rowcount

    def update_projection(self, player_id: int, projected_points: float) -> None:
        self._conn.execute(
            "UPDATE player SET projected_points = ?, projections_updated_at = ? WHERE id = ?",
            (projected_points, _now(), player_id),
        )

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            espn_id=row["espn_id"],
            name=row["name"],
            position=row["position"],
            team=row["team"],
            jersey_number=row["jersey_number"],
            status=row["status"],
            image_url=row["image_url"],
            is_draft_eligible=bool(row["is_draft_eligible"]),
            projected_points=row["projected_points"],
            projections_updated_at=row["projections_updated_at"],
            updated_at=row["updated_at"],
        )
