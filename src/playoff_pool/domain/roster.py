from dataclasses import dataclass, field

PLAYOFF_WEEKS: tuple[int, ...] = (1, 2, 3, 4)


@dataclass(frozen=True)
class RosterEntry:
    participant_id: int
    season_id: int
    player_id: int
    player_name: str
    position: str | None = None
    team: str | None = None
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class WeeklyScore:
    roster_entry_id: int
    week: int
    points: float
    id: int | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class RosterEntryScores:
    entry: RosterEntry
    weekly_points: dict[int, float] = field(default_factory=dict)

    @property
    def total_points(self) -> float:
        return sum(self.weekly_points.values())


@dataclass(frozen=True)
class Standing:
    participant_id: int
    participant_name: str
    total_points: float
