import logging
from typing import Any

import httpx

from playoff_pool.domain.player import FANTASY_POSITIONS
from playoff_pool.ingest._retry import RetryDecorator, default_http_retry

logger = logging.getLogger(__name__)

ESPN_BASE_URL = "https://site.api.espn.com/apis/site/v2/sports/football/nfl"

_REGULAR_SEASON = 2
_POSTSEASON = 3
_LAST_REGULAR_SEASON_WEEK = 18

# Box-score column positions per stat category.
_PASSING = {"passing_yards": 1, "passing_touchdowns": 3, "interceptions": 4}
_RUSHING = {"rushing_yards": 1, "rushing_touchdowns": 3}
_RECEIVING = {"receptions": 0, "receiving_yards": 1, "receiving_touchdowns": 3}
_FUMBLES = {"fumbles_lost": 1}
_CATEGORY_COLUMNS: dict[str, tuple[dict[str, int], int]] = {
    "passing": (_PASSING, 5),
    "rushing": (_RUSHING, 4),
    "receiving": (_RECEIVING, 4),
    "fumbles": (_FUMBLES, 2),
}
_STAT_FIELDS = tuple(field for columns, _ in _CATEGORY_COLUMNS.values() for field in columns)


def _default_client() -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(10.0, connect=5.0))


def _to_number(raw: Any) -> float:
    try:
        return float(str(raw).replace(",", ""))
    except ValueError:
        return 0.0


class _EspnClient:
    def __init__(self, client: httpx.Client | None, base_url: str, retry: RetryDecorator | None) -> None:
        self._client = client or _default_client()
        self._base_url = base_url.rstrip("/")
        self._get_with_retry = (retry or default_http_retry("ESPN request"))(self._get)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}/{path}"
        logger.debug("GET %s %s", url, params or "")
        response = self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._get_with_retry(path, params)


class EspnRosterSource:
    """Offensive skill-position players from every NFL team roster."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = ESPN_BASE_URL,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._espn = _EspnClient(client, base_url, retry)

    @property
    def source_type(self) -> str:
        return "espn_api"

    @property
    def source_detail(self) -> str:
        return "team_rosters"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        data = self._espn.get_json("teams", {"limit": 32})
        teams = data["sports"][0]["leagues"][0]["teams"]

        rows: list[dict[str, Any]] = []
        for entry in teams:
            team = entry["team"]
            try:
                roster = self._espn.get_json(f"teams/{team['id']}/roster")
            except httpx.HTTPError as exc:
                logger.warning("Skipping roster for %s: %s", team.get("abbreviation"), exc)
                continue
            rows.extend(self._offense_rows(roster, team["abbreviation"]))

        logger.info("Fetched %d players from %d ESPN team rosters", len(rows), len(teams))
        return rows

    @staticmethod
    def _offense_rows(roster: dict[str, Any], team_abbreviation: str) -> list[dict[str, Any]]:
        offense = next((g for g in roster.get("athletes", []) if g.get("position") == "offense"), None)
        if offense is None:
            return []
        rows: list[dict[str, Any]] = []
        for athlete in offense.get("items", []):
            position = (athlete.get("position") or {}).get("abbreviation")
            if position not in FANTASY_POSITIONS:
                continue
            rows.append(
                {
                    "espn_id": str(athlete["id"]),
                    "name": athlete.get("displayName") or athlete.get("fullName", ""),
                    "position": position,
                    "team": team_abbreviation,
                    "jersey": athlete.get("jersey"),
                    "status": (athlete.get("status") or {}).get("type"),
                    "image_url": (athlete.get("headshot") or {}).get("href"),
                }
            )
        return rows


class EspnBoxScoreSource:
    """Per-player stat lines from every game box score of one NFL week."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = ESPN_BASE_URL,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._espn = _EspnClient(client, base_url, retry)

    @property
    def source_type(self) -> str:
        return "espn_api"

    @property
    def source_detail(self) -> str:
        return "box_scores"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        season: int = params["season"]
        week: int = params["week"]
        season_type = _REGULAR_SEASON if week <= _LAST_REGULAR_SEASON_WEEK else _POSTSEASON
        scoreboard = self._espn.get_json(
            "scoreboard",
            {"dates": season, "seasontype": season_type, "week": week},
        )
        games = scoreboard.get("events", [])
        logger.debug("Found %d games for %d week %d", len(games), season, week)

        by_athlete: dict[str, dict[str, Any]] = {}
        for game in games:
            try:
                summary = self._espn.get_json("summary", {"event": game["id"]})
            except httpx.HTTPError as exc:
                logger.warning("Skipping game %s: %s", game.get("id"), exc)
                continue
            for team_stats in (summary.get("boxscore") or {}).get("players", []):
                for category in team_stats.get("statistics", []):
                    self._merge_category(by_athlete, category)

        logger.info("Fetched stat lines for %d players (%d week %d)", len(by_athlete), season, week)
        return list(by_athlete.values())

    @staticmethod
    def _merge_category(by_athlete: dict[str, dict[str, Any]], category: dict[str, Any]) -> None:
        mapping = _CATEGORY_COLUMNS.get(category.get("name", ""))
        if mapping is None:
            return
        columns, min_length = mapping
        for athlete_stats in category.get("athletes", []):
            athlete = athlete_stats["athlete"]
            espn_id = str(athlete["id"])
            row = by_athlete.get(espn_id)
            if row is None:
                row = {
                    "espn_id": espn_id,
                    "name": athlete.get("displayName", ""),
                    "position": (athlete.get("position") or {}).get("abbreviation", ""),
                    **{field: 0.0 for field in _STAT_FIELDS},
                }
                by_athlete[espn_id] = row
            stats = athlete_stats.get("stats") or []
            if len(stats) < min_length:
                continue
            for field, index in columns.items():
                row[field] = _to_number(stats[index])
