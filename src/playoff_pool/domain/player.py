from dataclasses import dataclass

FANTASY_POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE")


@dataclass(frozen=True)
class Player:
    name: str
    position: str
    team: str
    espn_id: str | None = None
    jersey_number: str | None = None
    status: str | None = None
    image_url: str | None = None
    is_draft_eligible: bool = True
    projected_points: float | None = None
    projections_updated_at: str | None = None
    id: int | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class TeamEligibility:
    team: str
    eligible: int
    ineligible: int

    @property
    def total(self) -> int:
        return self.eligible + self.ineligible


@dataclass(frozen=True)
class EligibilityStats:
    total: int
    eligible: int
    ineligible: int
    teams: tuple[TeamEligibility, ...]
