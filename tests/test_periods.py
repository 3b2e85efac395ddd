"""
Unit tests for calendar helpers
"""

from datetime import date, datetime

import pytest

from app.services.periods import (
    as_date,
    days_back,
    months_back,
    previous_month,
    same_month,
    week_windows,
    within_days,
)


@pytest.mark.unit
class TestPeriods:

    def test_as_date_accepts_strings_and_datetimes(self):
        assert as_date("2024-03-15") == date(2024, 3, 15)
        assert as_date("2024-03-15T10:20:00Z") == date(2024, 3, 15)
        assert as_date(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)

    def test_previous_month_rolls_over_year(self):
        assert previous_month(date(2024, 1, 10)) == (12, 2023)
        assert previous_month(date(2024, 3, 31)) == (2, 2024)

    def test_same_month(self):
        assert same_month("2024-02-29", 2, 2024)
        assert not same_month("2023-02-28", 2, 2024)

    def test_months_back_oldest_first(self):
        months = months_back(date(2024, 2, 15), 3)
        assert months == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]

    def test_days_back_ends_today(self):
        days = days_back(date(2024, 3, 2), 3)
        assert days == [date(2024, 2, 29), date(2024, 3, 1), date(2024, 3, 2)]

    def test_week_windows_are_contiguous(self):
        windows = week_windows(date(2024, 3, 14), 3)
        assert windows[-1] == (date(2024, 3, 8), date(2024, 3, 15))
        for (_, end), (start, _) in zip(windows, windows[1:]):
            assert end == start

    def test_within_days(self):
        now = date(2024, 3, 14)
        assert within_days(date(2024, 3, 8), now, 7)
        assert not within_days(date(2024, 3, 7), now, 7)
        assert within_days(date(2024, 3, 20), now, 7)
