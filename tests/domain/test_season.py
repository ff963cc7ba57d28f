from datetime import date

import pytest

from playoff_pool.domain.season import current_season_year


class TestCurrentSeasonYear:
    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2024, 9, 1), 2024),
            (date(2024, 12, 31), 2024),
            (date(2025, 1, 12), 2024),
            (date(2025, 2, 9), 2024),
            (date(2025, 8, 31), 2024),
        ],
    )
    def test_september_cutover(self, today: date, expected: int) -> None:
        assert current_season_year(today) == expected

    def test_defaults_to_today(self) -> None:
        assert current_season_year() in (date.today().year, date.today().year - 1)
