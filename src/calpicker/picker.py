"""DatePicker: the state object handed to a presentation adapter."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from calpicker.bounds import DisplayBounds, build_display_bounds, normalize_reference
from calpicker.config import get_calendar_config
from calpicker.dates import (
    SelectState,
    add_days,
    add_months,
    add_years,
    as_date,
    between_dates,
    between_months,
    end_of_month,
    end_of_year,
    same_month,
    same_year,
    start_of_month,
    start_of_year,
    subtract_months,
    subtract_years,
    within_dates,
    within_months,
)
from calpicker.formatting import DEFAULT_THEME, DateFormatter, Granularity, StrftimeFormatter, Theme
from calpicker.logging import get_logger, timed_block
from calpicker.navigation import DisplayMode, Key, NavigationController, NavigationOutcome
from calpicker.scheduler import Scheduler
from calpicker.selection import (
    Selection,
    SelectionState,
    SingleDate,
    select_date,
    selection_from_value,
)
from calpicker.transition import Phase, Slide, WindowState, WindowTransitionEngine
from calpicker.validation import (
    normalize_bounds,
    validate_first_day_of_week,
    validate_settle_delay,
    validate_size,
)

# How far rewind / fast-forward jump when no valid bounds are configured.
YEAR_JUMP = 10


@dataclass(frozen=True)
class DayCell:
    date: date
    day: int
    label: str
    is_selected: bool = False
    is_in_range: bool = False
    is_other_month: bool = False
    is_disabled: bool = False
    is_active: bool = False
    is_hidden: bool = False  # adjacent-month day with show_adjacent_days off


@dataclass(frozen=True)
class MonthCell:
    date: date
    label: str
    is_selected: bool = False
    is_in_range: bool = False
    is_disabled: bool = False
    is_active: bool = False


@dataclass(frozen=True)
class NavButton:
    target: date
    title: str
    icon: str
    disabled: bool
    label: str | None = None


@dataclass(frozen=True)
class Header:
    title: str
    previous: NavButton
    next: NavButton
    heading_level: int


class DatePicker:
    """Day and month grid state with animated paging and range selection.

    The picker never draws anything. A presentation adapter reads
    ``display_bounds``, ``slide``, ``display_mode``, ``active`` and
    ``selection`` (or the ready-made cell models) and feeds user input back
    through ``select_date``, ``press``, ``focus`` and the navigation methods.
    """

    def __init__(
        self,
        date: Any = None,
        dates: Any = None,
        reference: Any = None,
        first_day_of_week: int | None = None,
        range_mode: bool = False,
        animate: bool | None = None,
        show_adjacent_days: bool = True,
        bounds: Any = None,
        disabled: Any = None,
        size: str | None = None,
        locale: str | None = None,
        days_of_week: bool = False,
        on_select: Callable[[Any], None] | None = None,
        on_reference: Callable[[str], None] | None = None,
        on_window_change: Callable[[WindowState], None] | None = None,
        formatter: DateFormatter | None = None,
        theme: Theme | None = None,
        scheduler: Scheduler | None = None,
        settle_delay: float | None = None,
        today: Any = None,
    ) -> None:
        """Initialize a DatePicker.

        Args:
            date: Initially selected single date (date, datetime or ISO string).
            dates: Initially selected dates; the first entry may be a
                [start, end] pair.
            reference: Date whose month is shown. Defaults to the selection,
                then today.
            first_day_of_week: 0 (Sunday) through 6 (Saturday).
            range_mode: Clicks build a two-endpoint range.
            animate: Slide between windows instead of snapping.
            show_adjacent_days: Render days of neighbouring months.
            bounds: Inclusive [min, max] of reachable dates.
            disabled: Dates and [start, end] pairs that cannot be selected.
            size: "small", "medium" or "large"; selects icons and heading level.
            locale: Locale identifier for the default formatter.
            days_of_week: Expose weekday header labels.
            on_select: Called with the new selection value after each click.
            on_reference: Called with the ISO date after navigation.
            on_window_change: Called with the new WindowState after every
                window transition, including the delayed settle.
            formatter: Label formatter. Defaults to StrftimeFormatter(locale).
            theme: Icons and heading level. Defaults to DEFAULT_THEME.
            scheduler: Timer source for the settle step. Defaults to
                ThreadingScheduler, which runs the settle and
                on_window_change on a daemon timer thread. Hosts with an
                event loop should pass AsyncioScheduler, or ManualScheduler
                when they pump timers themselves, so every state change stays
                on the host thread.
            settle_delay: Seconds between expanding and pruning the window.
            today: Override today's date, used when nothing else anchors the
                reference.
        """
        config = get_calendar_config()

        self._first_day_of_week = validate_first_day_of_week(
            config.default_first_day_of_week if first_day_of_week is None else first_day_of_week
        )
        self._size = validate_size(config.default_size if size is None else size)
        self._locale = config.default_locale if locale is None else locale
        animate = config.default_animate if animate is None else bool(animate)
        settle_delay = validate_settle_delay(
            config.default_settle_delay if settle_delay is None else settle_delay
        )

        self._range_mode = bool(range_mode)
        self._show_adjacent_days = show_adjacent_days
        self._days_of_week = days_of_week
        self._valid_bounds = normalize_bounds(bounds)
        self._disabled = disabled
        self._on_select = on_select
        self._on_reference = on_reference
        self._formatter = formatter or StrftimeFormatter(self._locale)
        self._theme = theme or DEFAULT_THEME
        self._today = as_date(today) if today is not None else None

        self._selection_state = SelectionState(selection_from_value(date, dates))
        self._reference_prop = reference
        self._mode = DisplayMode.DAYS
        self._nav = NavigationController()

        self._engine = WindowTransitionEngine(
            normalize_reference(reference, self.selection, self._today),
            first_day_of_week=self._first_day_of_week,
            animate=animate,
            settle_delay=settle_delay,
            scheduler=scheduler,
            on_change=on_window_change,
        )
        self._log = get_logger(__name__).bind(range_mode=self._range_mode, size=self._size)
        self._log.info(
            "picker_created",
            reference=self.reference.isoformat(),
            first_day_of_week=self._first_day_of_week,
            animate=animate,
        )

    # ------------------------------------------------------------------
    # Exposed state
    # ------------------------------------------------------------------

    @property
    def window(self) -> WindowState:
        return self._engine.state

    @property
    def reference(self) -> date:
        return self._engine.state.reference

    @property
    def display_bounds(self) -> DisplayBounds:
        return self._engine.state.bounds

    @property
    def target_bounds(self) -> DisplayBounds | None:
        return self._engine.state.target

    @property
    def slide(self) -> Slide | None:
        return self._engine.state.slide

    @property
    def phase(self) -> Phase:
        return self._engine.state.phase

    @property
    def first_day_of_week(self) -> int:
        return self._engine.state.first_day_of_week

    @property
    def display_mode(self) -> DisplayMode:
        return self._mode

    @property
    def active(self) -> date | None:
        return self._nav.active

    @property
    def focused(self) -> bool:
        return self._nav.focused

    @property
    def selection(self) -> Selection:
        return self._selection_state.selection

    @property
    def last_clicked(self) -> date | None:
        return self._selection_state.last_clicked

    @property
    def range_mode(self) -> bool:
        return self._range_mode

    @property
    def valid_bounds(self) -> tuple[date, date] | None:
        return self._valid_bounds

    # ------------------------------------------------------------------
    # Prop updates
    # ------------------------------------------------------------------

    def set_selection(self, date: Any = None, dates: Any = None) -> None:
        """Replace the selection from outside and re-anchor the reference."""
        self._selection_state = SelectionState(
            selection_from_value(date, dates), self._selection_state.last_clicked
        )
        self._engine.set_reference(
            normalize_reference(self._reference_prop, self.selection, self._today)
        )

    def set_reference(self, reference: Any) -> None:
        self._reference_prop = reference
        self._engine.set_reference(
            normalize_reference(reference, self.selection, self._today)
        )

    def set_first_day_of_week(self, first_day_of_week: int) -> None:
        self._engine.set_first_day_of_week(validate_first_day_of_week(first_day_of_week))

    def set_animate(self, animate: bool) -> None:
        self._engine.set_animate(bool(animate))

    def set_range_mode(self, range_mode: bool) -> None:
        self._range_mode = bool(range_mode)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def previous_month(self) -> date:
        return end_of_month(subtract_months(start_of_month(self.reference), 1))

    @property
    def next_month(self) -> date:
        return start_of_month(add_months(start_of_month(self.reference), 1))

    @property
    def previous_year(self) -> date:
        return end_of_year(subtract_years(self.reference, 1))

    @property
    def next_year(self) -> date:
        return start_of_year(add_years(self.reference, 1))

    @property
    def rewind_year(self) -> date:
        if self._valid_bounds:
            return end_of_year(self._valid_bounds[0])
        return subtract_years(self.reference, YEAR_JUMP)

    @property
    def fast_forward_year(self) -> date:
        if self._valid_bounds:
            return start_of_year(self._valid_bounds[1])
        return add_years(self.reference, YEAR_JUMP)

    def in_bounds(self, d: date) -> bool:
        return between_dates(d, self._valid_bounds)

    def change_reference(self, reference: Any) -> bool:
        """Move the view to reference if it lies inside the valid bounds."""
        reference = as_date(reference)
        if not self.in_bounds(reference):
            self._log.debug("reference_rejected", reference=reference.isoformat())
            return False
        self._engine.set_reference(reference)
        if self._on_reference is not None:
            self._on_reference(reference.isoformat())
        return True

    def _previous_target(self) -> date:
        return self.previous_month if self._mode is DisplayMode.DAYS else self.previous_year

    def _next_target(self) -> date:
        return self.next_month if self._mode is DisplayMode.DAYS else self.next_year

    def go_previous(self) -> bool:
        """Previous month in the day grid, previous year in the month grid."""
        return self.change_reference(self._previous_target())

    def go_next(self) -> bool:
        """Next month in the day grid, next year in the month grid."""
        return self.change_reference(self._next_target())

    def _year_jump_disabled(self, target: date) -> bool:
        return same_year(target, self.reference) or not self.in_bounds(target)

    def rewind(self) -> bool:
        target = self.rewind_year
        if self._year_jump_disabled(target):
            return False
        return self.change_reference(target)

    def fast_forward(self) -> bool:
        target = self.fast_forward_year
        if self._year_jump_disabled(target):
            return False
        return self.change_reference(target)

    def toggle_display_mode(self) -> DisplayMode:
        """Header title click: days open the month grid, months go back to days."""
        if self._mode is DisplayMode.DAYS:
            self._mode = DisplayMode.MONTHS
        else:
            selection = self.selection
            self._show_days(selection.date if isinstance(selection, SingleDate) else None)
        return self._mode

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def _format(self, d: date, granularity: Granularity) -> str:
        return self._formatter.format(d, granularity)

    def header(self) -> Header:
        icons = self._theme.icons_for(self._size)
        granularity = (
            Granularity.MONTH_YEAR if self._mode is DisplayMode.DAYS else Granularity.YEAR
        )
        previous, nxt = self._previous_target(), self._next_target()
        return Header(
            title=self._format(self.reference, granularity),
            previous=NavButton(
                target=previous,
                title=self._format(previous, granularity),
                icon=icons.previous,
                disabled=not self.in_bounds(previous),
            ),
            next=NavButton(
                target=nxt,
                title=self._format(nxt, granularity),
                icon=icons.next,
                disabled=not self.in_bounds(nxt),
            ),
            heading_level=self._theme.heading_level_for(self._size),
        )

    def month_controls(self) -> tuple[NavButton, NavButton]:
        """Rewind and fast-forward buttons shown under the month grid."""
        icons = self._theme.icons_for(self._size)
        rewind, forward = self.rewind_year, self.fast_forward_year
        return (
            NavButton(
                target=rewind,
                title=self._format(rewind, Granularity.YEAR),
                icon=icons.rewind,
                disabled=self._year_jump_disabled(rewind),
                label=str(rewind.year),
            ),
            NavButton(
                target=forward,
                title=self._format(forward, Granularity.YEAR),
                icon=icons.fast_forward,
                disabled=self._year_jump_disabled(forward),
                label=str(forward.year),
            ),
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def is_day_disabled(self, d: date) -> bool:
        return within_dates(d, self._disabled) is not SelectState.NONE or not self.in_bounds(d)

    def is_month_disabled(self, d: date) -> bool:
        return (
            within_months(d, self._disabled) is not SelectState.NONE
            or not between_months(d, self._valid_bounds)
        )

    def select_date(self, clicked: Any) -> bool:
        """Resolve a click on a day. Disabled days are ignored."""
        clicked = as_date(clicked)
        if self.is_day_disabled(clicked):
            self._log.debug("disabled_day_ignored", date=clicked.isoformat())
            return False
        self._selection_state = select_date(self._selection_state, clicked, self._range_mode)
        self._nav.active = clicked
        if self._on_select is not None:
            self._on_select(self.selection.value)
        return True

    def select_month(self, month: Any) -> bool:
        """Pick a month from the month grid and return to the day grid."""
        month = as_date(month)
        if self.is_month_disabled(month):
            self._log.debug("disabled_month_ignored", month=month.isoformat())
            return False
        self._show_days(month)
        return True

    def _show_days(self, month: date | None) -> None:
        self._mode = DisplayMode.DAYS
        if month is not None:
            self._nav.active = month
            self._engine.set_reference(month)

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------

    def first_enabled_day(self) -> date | None:
        """First selectable day of the reference month inside the window."""
        for d in self.display_bounds.iter_days():
            if same_month(d, self.reference) and not self.is_day_disabled(d):
                return d
        return None

    def weekday_labels(self) -> list[str]:
        if not self._days_of_week:
            return []
        start = build_display_bounds(self.reference, self.first_day_of_week).start
        return [self._format(add_days(start, i), Granularity.DAY_NAME) for i in range(7)]

    def day_cells(self) -> list[list[DayCell]]:
        """Rows of day cells covering the current (possibly widened) window."""
        state = self._engine.state
        active = self._nav.active
        weeks: list[list[DayCell]] = []
        with timed_block(self._log, "day_cells_built", start=state.bounds.start.isoformat()):
            for row in state.bounds.iter_weeks(state.first_day_of_week):
                cells = []
                for d in row:
                    other_month = not same_month(d, state.reference)
                    if other_month and not self._show_adjacent_days:
                        cells.append(
                            DayCell(date=d, day=d.day, label="", is_other_month=True, is_hidden=True)
                        )
                        continue
                    selected = within_dates(d, self.selection)
                    cells.append(
                        DayCell(
                            date=d,
                            day=d.day,
                            label=self._format(d, Granularity.DATE),
                            is_selected=selected is SelectState.SELECTED,
                            is_in_range=selected is SelectState.IN_RANGE,
                            is_other_month=other_month,
                            is_disabled=self.is_day_disabled(d),
                            is_active=active is not None and active == d,
                        )
                    )
                weeks.append(cells)
        return weeks

    def month_cells(self) -> list[MonthCell]:
        """The twelve months of the reference year."""
        active = self._nav.active
        cells = []
        month = start_of_year(self.reference)
        for _ in range(12):
            selected = within_months(month, self.selection)
            cells.append(
                MonthCell(
                    date=month,
                    label=self._format(month, Granularity.MONTH),
                    is_selected=selected is SelectState.SELECTED,
                    is_in_range=selected is SelectState.IN_RANGE,
                    is_disabled=self.is_month_disabled(month),
                    is_active=active is not None and same_month(active, month),
                )
            )
            month = add_months(month, 1)
        return cells

    # ------------------------------------------------------------------
    # Keyboard and pointer
    # ------------------------------------------------------------------

    def _set_active_month(self, month: date | None) -> None:
        if month is not None and not same_year(self.reference, month):
            self.change_reference(month)
        self._nav.active = month

    def focus(self) -> date | None:
        """Grid gained focus: seed the active cursor."""
        if self._mode is DisplayMode.DAYS:
            return self._nav.focus_days(
                self.selection, self.display_bounds, self.first_enabled_day()
            )
        active = self._nav.focus_months(self.selection, self.reference)
        self._set_active_month(active)
        return active

    def blur(self) -> None:
        self._nav.blur()

    def hover(self, d: Any) -> None:
        d = as_date(d)
        if self._mode is DisplayMode.MONTHS:
            self._set_active_month(d)
        else:
            self._nav.hover(d)

    def unhover(self) -> None:
        self._nav.unhover()

    def press(self, key: Key | str) -> NavigationOutcome:
        """Handle an arrow or enter key on the focused grid."""
        outcome = self._nav.press(Key(key), self._mode, self.reference)
        if outcome.commit is not None:
            if self._mode is DisplayMode.DAYS:
                self.select_date(outcome.commit)
            else:
                self.select_month(outcome.commit)
        elif outcome.reference_change is not None:
            self.change_reference(outcome.reference_change)
        return outcome

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def settle(self) -> WindowState:
        """Finish any in-flight window transition immediately."""
        return self._engine.settle_now()

    def close(self) -> None:
        """Cancel the pending settle timer."""
        self._engine.cancel()
