"""
Calendar helpers shared by the dashboard statistics

Every helper takes the reference instant explicitly.
"""
from datetime import date, datetime, timedelta
from typing import List, Tuple, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """Calendar date of a date, datetime or ISO string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def same_month(value: DateLike, month: int, year: int) -> bool:
    d = as_date(value)
    return d.month == month and d.year == year


def previous_month(now: DateLike) -> Tuple[int, int]:
    """(month, year) of the calendar month before `now`"""
    first = as_date(now).replace(day=1) - relativedelta(months=1)
    return first.month, first.year


def months_back(now: DateLike, count: int) -> List[date]:
    """First day of the last `count` months, oldest first, current month last"""
    first = as_date(now).replace(day=1)
    return [first - relativedelta(months=offset) for offset in range(count - 1, -1, -1)]


def days_back(now: DateLike, count: int) -> List[date]:
    """The last `count` calendar days, oldest first, today last"""
    today = as_date(now)
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def week_windows(now: DateLike, count: int) -> List[Tuple[date, date]]:
    """
    Half-open [start, end) seven-day windows, oldest first

    Window i starts (count - 1 - i) * 7 days before the window
    that ends tomorrow, so the last window covers the last 7 days.
    """
    today = as_date(now)
    windows = []
    for index in range(count):
        start = today - timedelta(days=(count - 1 - index) * 7 + 6)
        windows.append((start, start + timedelta(days=7)))
    return windows


def days_between(later: DateLike, earlier: DateLike) -> int:
    return (as_date(later) - as_date(earlier)).days


def within_days(value: DateLike, now: DateLike, days: int) -> bool:
    """True for dates less than `days` days before now (future dates included)"""
    return days_between(now, value) < days
