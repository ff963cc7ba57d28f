from playoff_pool.domain.roster import Standing
from playoff_pool.repos.protocols import WeeklyScoreRepo


class StandingsService:
    def __init__(self, weekly_score_repo: WeeklyScoreRepo) -> None:
        self._weekly_score_repo = weekly_score_repo

    def standings(self, season_year: int) -> list[Standing]:
        """Every participant with their total playoff points for the year, highest first."""
        return self._weekly_score_repo.standings(season_year)
