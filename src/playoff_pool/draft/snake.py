"""Snake-draft turn arithmetic.

Everything here is a pure function of the draft order length and a
``DraftState``; persistence is the engine's job.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from playoff_pool.domain.draft import DraftState

if TYPE_CHECKING:
    from collections.abc import Sequence

    from playoff_pool.domain.draft import DraftOrderEntry


def picker_index(current_round: int, current_pick: int, team_count: int) -> int:
    """Return the 0-based draft-order index of the team on the clock.

    Odd rounds run front to back, even rounds back to front.
    """
    if current_round % 2 == 1:
        return current_pick - 1
    return team_count - current_pick


def current_picker(order: Sequence[DraftOrderEntry], state: DraftState) -> DraftOrderEntry | None:
    """Return the order entry whose turn it is, or None once the draft is complete or has no order."""
    if state.is_complete or not order:
        return None
    index = picker_index(state.current_round, state.current_pick, len(order))
    if not 0 <= index < len(order):
        return None
    return order[index]


def overall_pick_number(current_round: int, current_pick: int, team_count: int) -> int:
    return (current_round - 1) * team_count + current_pick


def advance(state: DraftState, team_count: int) -> DraftState:
    """Return the state after one pick has been made from ``state``."""
    if state.is_complete:
        raise ValueError("Cannot advance a complete draft")
    next_pick = state.current_pick + 1
    next_round = state.current_round
    if next_pick > team_count:
        next_pick = 1
        next_round += 1
    return dataclasses.replace(
        state,
        current_round=next_round,
        current_pick=next_pick,
        is_complete=next_round > state.total_rounds,
    )


def snake_order(team_count: int, total_rounds: int) -> list[int]:
    """Return 1-based order positions in pick sequence: 1..n, n..1, ..."""
    sequence: list[int] = []
    for round_index in range(total_rounds):
        positions = list(range(1, team_count + 1))
        if round_index % 2 == 1:
            positions.reverse()
        sequence.extend(positions)
    return sequence
