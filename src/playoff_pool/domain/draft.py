from dataclasses import dataclass


@dataclass(frozen=True)
class DraftState:
    """Turn counters of a draft; ``current_round`` is ``total_rounds + 1`` once complete."""

    total_rounds: int
    current_round: int = 1
    current_pick: int = 1
    is_complete: bool = False


@dataclass(frozen=True)
class Draft:
    season_year: int
    total_rounds: int
    current_round: int = 1
    current_pick: int = 1
    is_complete: bool = False
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def state(self) -> DraftState:
        return DraftState(
            total_rounds=self.total_rounds,
            current_round=self.current_round,
            current_pick=self.current_pick,
            is_complete=self.is_complete,
        )


@dataclass(frozen=True)
class DraftOrderEntry:
    draft_id: int
    participant_id: int
    pick_order: int
    participant_name: str | None = None
    id: int | None = None


@dataclass(frozen=True)
class DraftPick:
    draft_id: int
    participant_id: int
    player_id: int
    round: int
    pick_number: int
    id: int | None = None
    picked_at: str | None = None


@dataclass(frozen=True)
class DraftPickDetail:
    pick: DraftPick
    participant_name: str
    player_name: str
    player_position: str | None
    player_team: str | None


@dataclass(frozen=True)
class DraftSnapshot:
    draft: Draft
    order: tuple[DraftOrderEntry, ...]
