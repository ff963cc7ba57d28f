from dataclasses import dataclass
from datetime import date

# NFL seasons straddle New Year; a season is named for the year it kicks off.
SEASON_START_MONTH = 9


@dataclass(frozen=True)
class Season:
    participant_id: int
    year: int
    is_active: bool = True
    id: int | None = None


def current_season_year(today: date | None = None) -> int:
    """Return the NFL season year that ``today`` belongs to.

    September through December belong to that calendar year's season;
    January through August still belong to the previous year's season
    (the playoffs run in January and February).
    """
    if today is None:
        today = date.today()
    if today.month >= SEASON_START_MONTH:
        return today.year
    return today.year - 1
