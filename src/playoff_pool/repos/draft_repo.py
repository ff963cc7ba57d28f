import sqlite3
from collections.abc import Sequence
from datetime import datetime, timezone

from playoff_pool.domain.draft import Draft, DraftOrderEntry, DraftPick, DraftPickDetail, DraftState


class SqliteDraftRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, draft: Draft) -> int:
        cursor = self._conn.execute(
            """INSERT INTO draft (season_year, total_rounds, current_round, current_pick, is_complete)
               VALUES (?, ?, ?, ?, ?)""",
            (draft.season_year, draft.total_rounds, draft.current_round, draft.current_pick, int(draft.is_complete)),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, draft_id: int) -> Draft | None:
        row = self._conn.execute("SELECT * FROM draft WHERE id = ?", (draft_id,)).fetchone()
        return self._row_to_draft(row) if row else None

    def get_latest_by_season_year(self, season_year: int) -> Draft | None:
        row = self._conn.execute(
            "SELECT * FROM draft WHERE season_year = ? ORDER BY created_at DESC, id DESC LIMIT 1",
            (season_year,),
        ).fetchone()
        return self._row_to_draft(row) if row else None

    def get_ids_by_season_year(self, season_year: int) -> list[int]:
        rows = self._conn.execute("SELECT id FROM draft WHERE season_year = ?", (season_year,)).fetchall()
        return [row["id"] for row in rows]

    def delete(self, draft_id: int) -> None:
        self._conn.execute("DELETE FROM draft_pick WHERE draft_id = ?", (draft_id,))
        self._conn.execute("DELETE FROM draft_order WHERE draft_id = ?", (draft_id,))
        self._conn.execute("DELETE FROM draft WHERE id = ?", (draft_id,))

    def update_state(self, draft_id: int, state: DraftState) -> None:
        self._conn.execute(
            "UPDATE draft SET current_round = ?, current_pick = ?, is_complete = ?, updated_at = ? WHERE id = ?",
            (
                state.current_round,
                state.current_pick,
                int(state.is_complete),
                datetime.now(timezone.utc).isoformat(),
                draft_id,
            ),
        )

    def insert_order(self, draft_id: int, participant_ids: Sequence[int]) -> None:
        self._conn.executemany(
            "INSERT INTO draft_order (draft_id, participant_id, pick_order) VALUES (?, ?, ?)",
            [(draft_id, participant_id, position) for position, participant_id in enumerate(participant_ids, start=1)],
        )

    def get_order(self, draft_id: int) -> list[DraftOrderEntry]:
        rows = self._conn.execute(
            "SELECT o.id, o.draft_id, o.participant_id, o.pick_order, p.name AS participant_name"
            " FROM draft_order o JOIN participant p ON o.participant_id = p.id"
            " WHERE o.draft_id = ? ORDER BY o.pick_order",
            (draft_id,),
        ).fetchall()
        return [
            DraftOrderEntry(
                id=row["id"],
                draft_id=row["draft_id"],
                participant_id=row["participant_id"],
                pick_order=row["pick_order"],
                participant_name=row["participant_name"],
            )
            for row in rows
        ]

    def insert_pick(self, pick: DraftPick) -> int:
        cursor = self._conn.execute(
            "INSERT INTO draft_pick (draft_id, participant_id, player_id, round, pick_number, picked_at)"
            " VALUES (?, ?, ?, ?, ?, ?)",
            (
                pick.draft_id,
                pick.participant_id,
                pick.player_id,
                pick.round,
                pick.pick_number,
                pick.picked_at or datetime.now(timezone.utc).isoformat(),
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def is_player_picked(self, draft_id: int, player_id: int) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM draft_pick WHERE draft_id = ? AND player_id = ? LIMIT 1",
            (draft_id, player_id),
        ).fetchone()
        return row is not None

    def get_picks(self, draft_id: int) -> list[DraftPickDetail]:
        rows = self._conn.execute(
            "SELECT dp.*, pa.name AS participant_name, pl.name AS player_name,"
            "       pl.position AS player_position, pl.team AS player_team"
            " FROM draft_pick dp"
            " JOIN participant pa ON dp.participant_id = pa.id"
            " JOIN player pl ON dp.player_id = pl.id"
            " WHERE dp.draft_id = ? ORDER BY dp.pick_number",
            (draft_id,),
        ).fetchall()
        return [
            DraftPickDetail(
                pick=self._row_to_pick(row),
                participant_name=row["participant_name"],
                player_name=row["player_name"],
                player_position=row["player_position"],
                player_team=row["player_team"],
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_pick(row: sqlite3.Row) -> DraftPick:
        return DraftPick(
            id=row["id"],
            draft_id=row["draft_id"],
            participant_id=row["participant_id"],
            player_id=row["player_id"],
            round=row["round"],
            pick_number=row["pick_number"],
            picked_at=row["picked_at"],
        )

    @staticmethod
    def _row_to_draft(row: sqlite3.Row) -> Draft:
        return Draft(
            id=row["id"],
            season_year=row["season_year"],
            total_rounds=row["total_rounds"],
            current_round=row["current_round"],
            current_pick=row["current_pick"],
            is_complete=bool(row["is_complete"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
