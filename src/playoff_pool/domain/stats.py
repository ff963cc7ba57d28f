from dataclasses import dataclass


@dataclass(frozen=True)
class StatLine:
    passing_yards: float = 0.0
    passing_touchdowns: int = 0
    interceptions: int = 0
    rushing_yards: float = 0.0
    rushing_touchdowns: int = 0
    receptions: int = 0
    receiving_yards: float = 0.0
    receiving_touchdowns: int = 0
    fumbles_lost: int = 0

    @property
    def has_activity(self) -> bool:
        return bool(self.passing_yards or self.rushing_yards or self.receptions)


@dataclass(frozen=True)
class WeeklyActual:
    player_id: int
    season: int
    week: int
    fantasy_points: float
    stats: StatLine
    espn_id: str | None = None
    id: int | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class SyncSummary:
    updated: int
    skipped: int
    week: int | None = None
