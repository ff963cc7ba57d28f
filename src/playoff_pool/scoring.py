from dataclasses import dataclass

from playoff_pool.domain.stats import StatLine

# NFL playoff rounds (wild card, divisional, conference, Super Bowl) by NFL week.
PLAYOFF_WEEK_BY_NFL_WEEK: dict[int, int] = {19: 1, 20: 2, 21: 3, 22: 4}


@dataclass(frozen=True)
class ScoringRules:
    passing_yard: float = 0.04
    passing_touchdown: float = 6.0
    interception: float = -2.0
    rushing_yard: float = 0.1
    rushing_touchdown: float = 6.0
    reception: float = 0.5
    receiving_yard: float = 0.1
    receiving_touchdown: float = 6.0
    fumble_lost: float = -2.0


HALF_PPR = ScoringRules()


def fantasy_points(stats: StatLine, rules: ScoringRules = HALF_PPR) -> float:
    points = (
        stats.passing_yards * rules.passing_yard
        + stats.passing_touchdowns * rules.passing_touchdown
        + stats.interceptions * rules.interception
        + stats.rushing_yards * rules.rushing_yard
        + stats.rushing_touchdowns * rules.rushing_touchdown
        + stats.receptions * rules.reception
        + stats.receiving_yards * rules.receiving_yard
        + stats.receiving_touchdowns * rules.receiving_touchdown
        + stats.fumbles_lost * rules.fumble_lost
    )
    return round(points, 2)


def playoff_week(nfl_week: int) -> int | None:
    """Map an NFL week number to pool playoff week 1-4, or None outside the playoffs."""
    return PLAYOFF_WEEK_BY_NFL_WEEK.get(nfl_week)
