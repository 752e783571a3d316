"""Module-level configuration for calpicker defaults."""

import threading
from dataclasses import dataclass

SIZES = ("small", "medium", "large")


@dataclass
class CalendarConfig:
    """Defaults applied to new DatePicker instances."""

    default_first_day_of_week: int = 0  # Sunday
    default_locale: str = "en-US"
    default_animate: bool = True
    default_settle_delay: float = 0.4  # seconds, matches the slide animation
    default_size: str = "medium"


# Module-level singleton
_calendar_config: CalendarConfig | None = None
_config_lock = threading.Lock()


def get_calendar_config() -> CalendarConfig:
    """Get the global calendar configuration singleton."""
    global _calendar_config
    if _calendar_config is None:
        with _config_lock:
            if _calendar_config is None:
                _calendar_config = CalendarConfig()
    return _calendar_config


def configure_calendar(
    first_day_of_week: int | None = None,
    locale: str | None = None,
    animate: bool | None = None,
    settle_delay: float | None = None,
    size: str | None = None,
) -> None:
    """Configure default calendar settings.

    Args:
        first_day_of_week: Default week start, 0 (Sunday) through 6 (Saturday).
        locale: Default locale identifier passed to formatters.
        animate: Whether new pickers animate window transitions.
        settle_delay: Seconds to wait before pruning an expanded window.
        size: Default size category ("small", "medium" or "large").

    Example:
        from calpicker import DatePicker, configure_calendar

        configure_calendar(first_day_of_week=1, animate=False)

        # Now all pickers start weeks on Monday and snap between months
        picker = DatePicker(date="2024-03-15")
    """
    from calpicker.validation import (
        validate_first_day_of_week,
        validate_settle_delay,
        validate_size,
    )

    config = get_calendar_config()
    with _config_lock:
        if first_day_of_week is not None:
            config.default_first_day_of_week = validate_first_day_of_week(
                first_day_of_week
            )
        if locale is not None:
            config.default_locale = locale
        if animate is not None:
            config.default_animate = bool(animate)
        if settle_delay is not None:
            config.default_settle_delay = validate_settle_delay(settle_delay)
        if size is not None:
            config.default_size = validate_size(size)


def reset_calendar_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _calendar_config
    with _config_lock:
        _calendar_config = CalendarConfig()
