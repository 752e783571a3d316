"""Roving keyboard/pointer cursor for the day and month grids."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from calpicker.bounds import DisplayBounds
from calpicker.dates import add_days, add_months, same_year, start_of_year
from calpicker.selection import Selection, SingleDate


class DisplayMode(str, Enum):
    DAYS = "days"
    MONTHS = "months"


class Key(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"


MONTHS_PER_ROW = 3

_DAY_STEPS = {Key.LEFT: -1, Key.RIGHT: 1, Key.UP: -7, Key.DOWN: 7}
_MONTH_STEPS = {
    Key.LEFT: -1,
    Key.RIGHT: 1,
    Key.UP: -MONTHS_PER_ROW,
    Key.DOWN: MONTHS_PER_ROW,
}


def move_cursor(cursor: date, key: Key, mode: DisplayMode) -> date:
    """Move the cursor one cell in the direction of key."""
    if key is Key.ENTER:
        return cursor
    if mode is DisplayMode.MONTHS:
        return add_months(cursor, _MONTH_STEPS[key])
    return add_days(cursor, _DAY_STEPS[key])


@dataclass(frozen=True)
class NavigationOutcome:
    """Result of a key press.

    ``commit`` is set when ENTER should select the active cell.
    ``reference_change`` is set when the month cursor left the referenced year.
    """

    active: date | None
    commit: date | None = None
    reference_change: date | None = None


class NavigationController:
    """Tracks the active cell, independent of the selection."""

    def __init__(self) -> None:
        self.active: date | None = None
        self.focused = False

    def focus_days(
        self,
        selection: Selection,
        bounds: DisplayBounds,
        first_enabled: date | None,
    ) -> date | None:
        self.focused = True
        if isinstance(selection, SingleDate) and bounds.contains(selection.date):
            self.active = selection.date
        else:
            self.active = first_enabled
        return self.active

    def focus_months(self, selection: Selection, reference: date) -> date:
        self.focused = True
        if isinstance(selection, SingleDate):
            self.active = selection.date
        else:
            self.active = start_of_year(reference)
        return self.active

    def blur(self) -> None:
        self.focused = False
        self.active = None

    def hover(self, d: date) -> None:
        self.active = d

    def unhover(self) -> None:
        self.active = None

    def press(self, key: Key, mode: DisplayMode, reference: date) -> NavigationOutcome:
        if self.active is None:
            return NavigationOutcome(active=None)
        if key is Key.ENTER:
            return NavigationOutcome(active=self.active, commit=self.active)

        self.active = move_cursor(self.active, key, mode)
        if mode is DisplayMode.MONTHS and not same_year(self.active, reference):
            return NavigationOutcome(active=self.active, reference_change=self.active)
        return NavigationOutcome(active=self.active)
