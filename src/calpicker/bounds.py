"""Display window computation for the day grid."""

from datetime import date
from typing import Any, Iterator, NamedTuple

from calpicker.dates import (
    add_days,
    as_date,
    days_apart,
    start_of_month,
    subtract_days,
    weekday_from_sunday,
)

DAYS_PER_WEEK = 7
WEEKS_IN_WINDOW = 6


class DisplayBounds(NamedTuple):
    """Half-open [start, end) range of days rendered in the grid."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return days_apart(self.end, self.start)

    @property
    def weeks(self) -> float:
        return self.days / DAYS_PER_WEEK

    def contains(self, d: date) -> bool:
        return self.start <= d < self.end

    def union(self, other: "DisplayBounds") -> "DisplayBounds":
        return DisplayBounds(min(self.start, other.start), max(self.end, other.end))

    def iter_days(self) -> Iterator[date]:
        current = self.start
        while current < self.end:
            yield current
            current = add_days(current, 1)

    def iter_weeks(self, first_day_of_week: int) -> Iterator[list[date]]:
        """Yield grid rows, starting a new row on each first_day_of_week.

        While a transition is in flight the window may not be week aligned
        for the new first day of week, so the leading row can be short.
        """
        row: list[date] = []
        for d in self.iter_days():
            if weekday_from_sunday(d) == first_day_of_week and row:
                yield row
                row = []
            row.append(d)
        if row:
            yield row


def build_display_bounds(reference: date, first_day_of_week: int) -> DisplayBounds:
    """Compute the six-week window that covers reference's month.

    The window starts on first_day_of_week at or before the 1st of the
    month. A month starting the day before the week start (Sunday with a
    Monday week) pulls back six days rather than leaving the 1st out.
    """
    first = start_of_month(reference)
    offset = (weekday_from_sunday(first) - first_day_of_week) % DAYS_PER_WEEK
    start = subtract_days(first, offset)
    end = add_days(start, DAYS_PER_WEEK * WEEKS_IN_WINDOW)
    return DisplayBounds(start, end)


def normalize_reference(
    reference: Any = None,
    selection: Any = None,
    today: date | None = None,
) -> date:
    """Pick the date the calendar is anchored on.

    An explicit reference wins, then the selection's anchor (the single
    date, or the start of the first range), then today.
    """
    if reference is not None:
        return as_date(reference)
    anchor = getattr(selection, "anchor", None)
    if anchor is not None:
        return anchor
    if selection is not None and not hasattr(selection, "anchor"):
        if isinstance(selection, (date, str)):
            return as_date(selection)
        items = list(selection)
        if items:
            head = items[0]
            if isinstance(head, (date, str)):
                return as_date(head)
            return as_date(head[0])
    return today or date.today()
