"""Selection values and the click resolution policy."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Union

from calpicker.dates import as_date
from calpicker.logging import get_logger

_log = get_logger(__name__)


@dataclass(frozen=True)
class NoSelection:
    @property
    def value(self) -> None:
        return None

    @property
    def anchor(self) -> None:
        return None

    @property
    def entries(self) -> tuple:
        return ()

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class SingleDate:
    date: date

    @property
    def value(self) -> date:
        return self.date

    @property
    def anchor(self) -> date:
        return self.date

    @property
    def entries(self) -> tuple:
        return (self.date,)


@dataclass(frozen=True)
class DateRange:
    """Contiguous inclusive range. Reversed endpoints are swapped."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @property
    def value(self) -> tuple[date, date]:
        return (self.start, self.end)

    @property
    def anchor(self) -> date:
        return self.start

    @property
    def entries(self) -> tuple:
        return ((self.start, self.end),)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


Selection = Union[NoSelection, SingleDate, DateRange]

NO_SELECTION = NoSelection()


def selection_from_value(date: Any = None, dates: Any = None) -> Selection:
    """Build a Selection from external input.

    ``date`` is a single date. ``dates`` is a list whose first entry is
    either a date or a [start, end] pair; only the first entry is used.
    """
    if dates:
        head = list(dates)[0]
        if isinstance(head, (list, tuple)):
            return DateRange(as_date(head[0]), as_date(head[1]))
        return SingleDate(as_date(head))
    if date is not None:
        return SingleDate(as_date(date))
    return NO_SELECTION


def _adjust_range(
    clicked: date, current: DateRange, last_clicked: date
) -> Selection:
    lo, hi = current.start, current.end

    if clicked == lo:
        return SingleDate(hi)
    if clicked == hi:
        return SingleDate(lo)

    if clicked <= last_clicked:
        # At or before the last interaction: move the start if we are before
        # it, otherwise pull the end in.
        if clicked < lo:
            return DateRange(clicked, hi)
        return DateRange(lo, clicked)

    if clicked > hi:
        return DateRange(lo, clicked)
    return DateRange(clicked, hi)


def resolve_selection(
    clicked: date,
    current: Selection,
    range_mode: bool,
    last_clicked: date | None = None,
) -> Selection:
    """Compute the selection that follows a click on ``clicked``.

    Outside range mode the click always selects a single date. In range
    mode the first click selects a single date, a second click on another
    date forms a range, and a second click on the same date clears the
    selection. With a range in place, clicking an endpoint collapses the
    range to the other endpoint, and any other click adjusts an endpoint
    according to which side of the last clicked date it falls on.
    """
    if not range_mode:
        return SingleDate(clicked)

    if isinstance(current, DateRange):
        return _adjust_range(clicked, current, last_clicked or current.start)

    if isinstance(current, SingleDate):
        if clicked == current.date:
            return NO_SELECTION
        return DateRange(current.date, clicked)

    return SingleDate(clicked)


@dataclass(frozen=True)
class SelectionState:
    selection: Selection = NO_SELECTION
    last_clicked: date | None = None


def select_date(state: SelectionState, clicked: date, range_mode: bool) -> SelectionState:
    """Resolve a click and record it as the last interaction."""
    selection = resolve_selection(clicked, state.selection, range_mode, state.last_clicked)
    _log.debug(
        "selection_resolved",
        clicked=clicked.isoformat(),
        range_mode=range_mode,
        before=type(state.selection).__name__,
        after=type(selection).__name__,
    )
    return SelectionState(selection=selection, last_clicked=clicked)
