"""Option validation for DatePicker construction."""

from datetime import date
from typing import Any

from calpicker.config import SIZES
from calpicker.dates import as_date


class ValidationError(Exception):
    """Raised when picker options are malformed."""
    pass


def validate_first_day_of_week(value: Any) -> int:
    """Check that value is a weekday number, 0 (Sunday) through 6 (Saturday).

    Raises:
        ValidationError: If value is not an int in 0..6
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"first_day_of_week must be an int, got {type(value).__name__}"
        )
    if not 0 <= value <= 6:
        raise ValidationError(f"first_day_of_week must be in 0..6, got {value}")
    return value


def validate_size(value: Any) -> str:
    """Check that value is a known size category."""
    if value not in SIZES:
        raise ValidationError(f"Unknown size: {value!r} (expected one of {SIZES})")
    return value


def validate_settle_delay(value: Any) -> float:
    """Check that the settle delay is a non-negative number of seconds."""
    try:
        delay = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"settle_delay must be a number, got {value!r}") from None
    if delay < 0:
        raise ValidationError(f"settle_delay must be >= 0, got {delay}")
    return delay


def normalize_bounds(bounds: Any) -> tuple[date, date] | None:
    """Normalize a [min, max] pair of valid bounds.

    Endpoints may be dates, datetimes or ISO strings. A reversed pair is
    reordered rather than rejected.

    Raises:
        ValidationError: If bounds is not a pair or an endpoint is unparseable
    """
    if bounds is None:
        return None
    try:
        low, high = bounds
    except (TypeError, ValueError):
        raise ValidationError(f"bounds must be a [min, max] pair, got {bounds!r}") from None
    try:
        low, high = as_date(low), as_date(high)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid bounds endpoint: {e}") from None
    return (min(low, high), max(low, high))
