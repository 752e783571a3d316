"""calpicker - Date-picker state: display windows, animated paging and range selection."""

from calpicker.bounds import DisplayBounds, build_display_bounds, normalize_reference
from calpicker.config import (
    CalendarConfig,
    configure_calendar,
    get_calendar_config,
    reset_calendar_config,
)
from calpicker.dates import SelectState, within_dates, within_months
from calpicker.formatting import (
    DEFAULT_THEME,
    DateFormatter,
    Granularity,
    IconSet,
    StrftimeFormatter,
    Theme,
)
from calpicker.logging import configure_logging, get_logger
from calpicker.navigation import DisplayMode, Key, NavigationController
from calpicker.picker import DatePicker, DayCell, Header, MonthCell, NavButton
from calpicker.scheduler import (
    AsyncioScheduler,
    DeferredTask,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
)
from calpicker.selection import (
    NO_SELECTION,
    DateRange,
    NoSelection,
    Selection,
    SingleDate,
    resolve_selection,
)
from calpicker.transition import (
    Phase,
    Slide,
    SlideDirection,
    WindowState,
    WindowTransitionEngine,
)
from calpicker.validation import ValidationError

__all__ = [
    # Primary API - adapters interact with DatePicker
    "DatePicker",
    "DayCell",
    "MonthCell",
    "Header",
    "NavButton",
    # Display window
    "DisplayBounds",
    "build_display_bounds",
    "normalize_reference",
    # Transitions
    "Phase",
    "Slide",
    "SlideDirection",
    "WindowState",
    "WindowTransitionEngine",
    # Selection
    "Selection",
    "NoSelection",
    "SingleDate",
    "DateRange",
    "NO_SELECTION",
    "SelectState",
    "resolve_selection",
    "within_dates",
    "within_months",
    # Navigation
    "DisplayMode",
    "Key",
    "NavigationController",
    # Scheduling
    "Scheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "ManualScheduler",
    "DeferredTask",
    # Formatting
    "DateFormatter",
    "Granularity",
    "StrftimeFormatter",
    "IconSet",
    "Theme",
    "DEFAULT_THEME",
    # Config
    "CalendarConfig",
    "configure_calendar",
    "get_calendar_config",
    "reset_calendar_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "ValidationError",
]
__version__ = "0.1.0"
