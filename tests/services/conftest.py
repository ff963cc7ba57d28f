from typing import Any


class FakeBoxScoreSource:
    """Stands in for the ESPN box-score source, keyed by NFL week."""

    def __init__(self, rows_by_week: dict[int, list[dict[str, Any]]]) -> None:
        self._rows_by_week = rows_by_week
        self.calls: list[dict[str, Any]] = []

    @property
    def source_type(self) -> str:
        return "test"

    @property
    def source_detail(self) -> str:
        return "box_scores"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        self.calls.append(params)
        week = params["week"]
        if week not in self._rows_by_week:
            raise RuntimeError(f"no games for week {week}")
        return self._rows_by_week[week]


class FakeSleeperSource:
    def __init__(self, players: dict[str, dict[str, Any]], projections: dict[str, dict[str, Any]]) -> None:
        self._players = players
        self._projections = projections

    def fetch_players(self) -> dict[str, dict[str, Any]]:
        return self._players

    def fetch_projections(self, season: int, week: int) -> dict[str, dict[str, Any]]:
        return self._projections
