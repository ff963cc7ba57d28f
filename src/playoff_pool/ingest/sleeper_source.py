"""Sleeper player directory and weekly projections.

Sleeper publishes ESPN ids alongside its own player ids, which is how catalog
players are matched. A name and team fallback covers players whose ESPN id is
missing on the Sleeper side.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

import httpx

from playoff_pool.ingest._retry import RetryDecorator, default_http_retry

logger = logging.getLogger(__name__)

SLEEPER_BASE_URL = "https://api.sleeper.app/v1"
SLEEPER_PROJECTIONS_URL = "https://api.sleeper.app/projections/nfl"

_LAST_REGULAR_SEASON_WEEK = 18

# ESPN abbreviation -> Sleeper abbreviation where they differ.
_TEAM_ALIASES = {"JAX": "JAC", "WSH": "WAS"}
_NAME_SUFFIX = re.compile(r"\s+(jr\.?|sr\.?|ii|iii|iv|v)$", re.IGNORECASE)


def _default_client() -> httpx.Client:
    return httpx.Client(timeout=httpx.Timeout(30.0, connect=5.0))


class SleeperSource:
    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = SLEEPER_BASE_URL,
        projections_url: str = SLEEPER_PROJECTIONS_URL,
        retry: RetryDecorator | None = None,
    ) -> None:
        self._client = client or _default_client()
        self._base_url = base_url.rstrip("/")
        self._projections_url = projections_url.rstrip("/")
        retry = retry or default_http_retry("Sleeper request")
        self._fetch_players_with_retry = retry(self._fetch_players)
        self._fetch_projections_with_retry = retry(self._fetch_projections)

    @property
    def source_type(self) -> str:
        return "sleeper_api"

    @property
    def source_detail(self) -> str:
        return "players/nfl"

    def fetch_players(self) -> dict[str, dict[str, Any]]:
        """Return every Sleeper NFL player keyed by Sleeper player id."""
        players = self._fetch_players_with_retry()
        logger.info("Fetched %d Sleeper players", len(players))
        return players

    def _fetch_players(self) -> dict[str, dict[str, Any]]:
        url = f"{self._base_url}/players/nfl"
        logger.debug("GET %s", url)
        response = self._client.get(url)
        response.raise_for_status()
        return response.json()

    def fetch_projections(self, season: int, week: int) -> dict[str, dict[str, Any]]:
        """Return projected stats keyed by Sleeper player id.

        Sleeper has no projections for many playoff weeks; a non-2xx response
        or an unreachable endpoint yields an empty mapping.
        """
        try:
            projections = self._fetch_projections_with_retry(season, week)
        except httpx.HTTPError as exc:
            logger.warning("No Sleeper projections for %d week %d: %s", season, week, exc)
            return {}
        logger.info("Fetched %d Sleeper projections for %d week %d", len(projections), season, week)
        return projections

    def _fetch_projections(self, season: int, week: int) -> dict[str, dict[str, Any]]:
        season_type = "regular" if week <= _LAST_REGULAR_SEASON_WEEK else "post"
        url = f"{self._projections_url}/{season}/{week}"
        logger.debug("GET %s season_type=%s", url, season_type)
        response = self._client.get(url, params={"season_type": season_type})
        if response.is_server_error or response.status_code == 429:
            response.raise_for_status()
        if not response.is_success:
            logger.warning("Sleeper returned %d for %d week %d projections", response.status_code, season, week)
            return {}
        return {
            str(item["player_id"]): item["stats"]
            for item in response.json()
            if item.get("player_id") and item.get("stats")
        }


def index_by_espn_id(players: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    index: dict[str, dict[str, Any]] = {}
    for player in players.values():
        espn_id = player.get("espn_id")
        if espn_id:
            index[str(espn_id)] = player
    return index


def normalize_team(team: str) -> str:
    upper = team.upper()
    return _TEAM_ALIASES.get(upper, upper)


def clean_name(name: str) -> str:
    return " ".join(_NAME_SUFFIX.sub("", name.strip().lower()).split())


def find_by_name_and_team(
    players: Iterable[dict[str, Any]],
    name: str,
    team: str,
    position: str,
) -> dict[str, Any] | None:
    """Match an active Sleeper player on position, team and name.

    Tries the cleaned full name first, then the last name.
    """
    target_team = normalize_team(team)
    target_position = position.upper()
    target_name = clean_name(name)
    target_last = target_name.split(" ")[-1] if target_name else ""

    last_name_match: dict[str, Any] | None = None
    for player in players:
        if not player.get("active"):
            continue
        if (player.get("position") or "").upper() != target_position:
            continue
        player_team = player.get("team") or player.get("team_abbr") or ""
        if player_team and player_team.upper() != target_team:
            continue
        if clean_name(player.get("full_name") or "") == target_name:
            return player
        if last_name_match is None and (player.get("last_name") or "").lower() == target_last:
            last_name_match = player
    return last_name_match


def half_ppr_projection(projections: dict[str, dict[str, Any]], sleeper_id: str) -> int:
    stats = projections.get(sleeper_id)
    if not stats:
        return 0
    return round(stats.get("pts_half_ppr") or 0)
