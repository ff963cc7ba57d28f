from typing import Any

from playoff_pool.domain.player import FANTASY_POSITIONS, Player
from playoff_pool.domain.stats import StatLine


def _to_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    if s == "":
        return None
    return s


def _to_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(str(value).replace(",", ""))


def _to_int(value: Any) -> int:
    return int(_to_float(value))


def espn_roster_row_to_player(row: dict[str, Any]) -> Player | None:
    espn_id = _to_optional_str(row.get("espn_id"))
    name = _to_optional_str(row.get("name"))
    position = _to_optional_str(row.get("position"))
    team = _to_optional_str(row.get("team"))
    if espn_id is None or name is None or team is None or position not in FANTASY_POSITIONS:
        return None
    assert position is not None
    return Player(
        name=name,
        position=position,
        team=team,
        espn_id=espn_id,
        jersey_number=_to_optional_str(row.get("jersey")),
        status=_to_optional_str(row.get("status")),
        image_url=_to_optional_str(row.get("image_url")),
    )


def box_score_row_to_stat_line(row: dict[str, Any]) -> StatLine:
    return StatLine(
        passing_yards=_to_float(row.get("passing_yards")),
        passing_touchdowns=_to_int(row.get("passing_touchdowns")),
        interceptions=_to_int(row.get("interceptions")),
        rushing_yards=_to_float(row.get("rushing_yards")),
        rushing_touchdowns=_to_int(row.get("rushing_touchdowns")),
        receptions=_to_int(row.get("receptions")),
        receiving_yards=_to_float(row.get("receiving_yards")),
        receiving_touchdowns=_to_int(row.get("receiving_touchdowns")),
        fumbles_lost=_to_int(row.get("fumbles_lost")),
    )
