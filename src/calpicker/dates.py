"""Date arithmetic for the picker grids.

All functions are pure and operate on ``datetime.date`` values. Month and
year arithmetic clamps the day of month instead of overflowing into the
following month.
"""

import calendar
from datetime import date, datetime, timedelta
from enum import IntEnum
from typing import Any, Iterable

DateLike = date | datetime | str


class SelectState(IntEnum):
    """Membership of a date in a selection."""

    NONE = 0
    IN_RANGE = 1
    SELECTED = 2


def as_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a date at midnight precision."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise TypeError(f"Cannot convert {type(value).__name__} to date")


def weekday_from_sunday(d: date) -> int:
    """Day of week with Sunday = 0 through Saturday = 6."""
    return d.isoweekday() % 7


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def subtract_days(d: date, n: int) -> date:
    return d - timedelta(days=n)


def add_months(d: date, n: int) -> date:
    """Shift by n months, clamping the day to the target month's length."""
    index = d.year * 12 + (d.month - 1) + n
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def subtract_months(d: date, n: int) -> date:
    return add_months(d, -n)


def add_years(d: date, n: int) -> date:
    """Shift by n years. Feb 29 becomes Feb 28 in non-leap years."""
    return add_months(d, 12 * n)


def subtract_years(d: date, n: int) -> date:
    return add_years(d, -n)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def end_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def start_of_year(d: date) -> date:
    return date(d.year, 1, 1)


def end_of_year(d: date) -> date:
    return date(d.year, 12, 31)


def days_apart(a: date, b: date) -> int:
    """Signed whole-day count from b to a."""
    return (a - b).days


def same_day(a: date, b: date) -> bool:
    return a == b


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def same_year(a: date, b: date) -> bool:
    return a.year == b.year


def _month_index(d: date) -> int:
    return d.year * 12 + d.month - 1


def _entries(value: Any) -> Iterable[Any]:
    """Flatten a selection-like value into dates and (start, end) pairs."""
    if value is None:
        return ()
    entries = getattr(value, "entries", None)
    if entries is not None:
        return entries
    if isinstance(value, (date, str)):
        return (value,)
    return value


def _within(d: date, value: Any, same, between) -> SelectState:
    result = SelectState.NONE
    for entry in _entries(value):
        if isinstance(entry, (date, str)):
            if same(d, as_date(entry)):
                return SelectState.SELECTED
            continue
        first, second = (as_date(e) for e in entry)
        low, high = min(first, second), max(first, second)
        if same(d, low) or same(d, high):
            return SelectState.SELECTED
        if between(d, low, high):
            result = SelectState.IN_RANGE
    return result


def within_dates(d: date, value: Any) -> SelectState:
    """Membership of d in a single date, a selection, or a list of dates and ranges.

    Range endpoints and single dates are SELECTED, range interiors are
    IN_RANGE. Reversed pairs are reordered before comparison.
    """
    return _within(d, value, same_day, lambda x, low, high: low < x < high)


def within_months(d: date, value: Any) -> SelectState:
    """Month-granularity analog of within_dates."""
    return _within(
        d,
        value,
        same_month,
        lambda x, low, high: _month_index(low) < _month_index(x) < _month_index(high),
    )


def between_dates(d: date, bounds: Any) -> bool:
    """Inclusive range test. No bounds means unbounded."""
    if not bounds:
        return True
    first, second = (as_date(b) for b in bounds)
    return min(first, second) <= d <= max(first, second)


def between_months(d: date, bounds: Any) -> bool:
    """Inclusive month-granularity range test."""
    if not bounds:
        return True
    first, second = (_month_index(as_date(b)) for b in bounds)
    return min(first, second) <= _month_index(d) <= max(first, second)
