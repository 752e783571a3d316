"""Label formatting and icon lookup handed to the picker explicitly."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Protocol


class Granularity(str, Enum):
    DAY_NAME = "day-name"
    MONTH_YEAR = "month-year"
    YEAR = "year"
    MONTH = "month"
    DATE = "date"


class DateFormatter(Protocol):
    """Locale-aware label formatter."""

    def format(self, d: date, granularity: Granularity) -> str:
        ...


_PATTERNS = {
    Granularity.MONTH_YEAR: "%B %Y",
    Granularity.YEAR: "%Y",
    Granularity.MONTH: "%b",
    Granularity.DATE: "%a %b %d %Y",
}


class StrftimeFormatter:
    """Formatter built on date.strftime.

    strftime follows the process locale, so ``locale`` is informational
    only. Pass a different DateFormatter for real localization.
    """

    def __init__(self, locale: str = "en-US"):
        self.locale = locale

    def format(self, d: date, granularity: Granularity) -> str:
        if granularity is Granularity.DAY_NAME:
            return d.strftime("%a")[:1]
        return d.strftime(_PATTERNS[granularity])


@dataclass(frozen=True)
class IconSet:
    previous: str = "previous"
    next: str = "next"
    rewind: str = "rewind"
    fast_forward: str = "fast-forward"


@dataclass(frozen=True)
class Theme:
    """Icons and heading level for the calendar header."""

    icons: IconSet = field(default_factory=IconSet)
    small_icons: IconSet = field(
        default_factory=lambda: IconSet(
            previous="previous-small",
            next="next-small",
            rewind="rewind-small",
            fast_forward="fast-forward-small",
        )
    )
    heading_level: int = 4

    def icons_for(self, size: str) -> IconSet:
        return self.small_icons if size == "small" else self.icons

    def heading_level_for(self, size: str) -> int:
        return self.heading_level if size == "small" else self.heading_level - 1


DEFAULT_THEME = Theme()
