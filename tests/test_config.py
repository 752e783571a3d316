"""Tests for configuration defaults and option validation."""

from datetime import date

import pytest

from calpicker import (
    DatePicker,
    ValidationError,
    configure_calendar,
    get_calendar_config,
    reset_calendar_config,
)
from calpicker.validation import (
    normalize_bounds,
    validate_first_day_of_week,
    validate_settle_delay,
    validate_size,
)


class TestCalendarConfig:
    """Test the module-level defaults."""

    def test_defaults(self):
        """The singleton starts with the documented defaults."""
        config = get_calendar_config()

        assert config.default_first_day_of_week == 0
        assert config.default_locale == "en-US"
        assert config.default_animate is True
        assert config.default_settle_delay == 0.4
        assert config.default_size == "medium"

    def test_configure_applies_to_new_pickers(self, scheduler):
        """Configured defaults flow into pickers that do not override them."""
        configure_calendar(first_day_of_week=1, animate=False, size="small")
        picker = DatePicker(date="2024-03-15", scheduler=scheduler)

        assert picker.first_day_of_week == 1
        assert picker.display_bounds.start == date(2024, 2, 26)
        picker.go_next()
        assert picker.slide is None

    def test_explicit_options_win(self, scheduler):
        """Constructor options override the defaults."""
        configure_calendar(first_day_of_week=1)
        picker = DatePicker(date="2024-03-15", first_day_of_week=0, scheduler=scheduler)

        assert picker.first_day_of_week == 0

    def test_configure_validates(self):
        """Bad defaults are rejected."""
        with pytest.raises(ValidationError):
            configure_calendar(first_day_of_week=7)
        with pytest.raises(ValidationError):
            configure_calendar(size="huge")

    def test_reset(self):
        """reset restores the defaults."""
        configure_calendar(locale="de-DE", settle_delay=1)
        reset_calendar_config()

        assert get_calendar_config().default_locale == "en-US"
        assert get_calendar_config().default_settle_delay == 0.4


class TestValidation:
    """Test option validators."""

    @pytest.mark.parametrize("value", [-1, 7, 1.5, "1", True])
    def test_bad_first_day_of_week(self, value):
        """Only ints 0..6 are accepted."""
        with pytest.raises(ValidationError):
            validate_first_day_of_week(value)

    def test_good_first_day_of_week(self):
        """Valid week starts pass through."""
        assert validate_first_day_of_week(6) == 6

    def test_size(self):
        """Only known size categories are accepted."""
        assert validate_size("large") == "large"
        with pytest.raises(ValidationError, match="Unknown size"):
            validate_size("xl")

    def test_settle_delay(self):
        """Delays must be non-negative numbers."""
        assert validate_settle_delay("0.25") == 0.25
        with pytest.raises(ValidationError):
            validate_settle_delay(-0.1)
        with pytest.raises(ValidationError):
            validate_settle_delay("soon")

    def test_bounds_are_reordered(self):
        """A reversed bounds pair is normalized rather than rejected."""
        assert normalize_bounds(("2024-12-31", "2024-01-01")) == (
            date(2024, 1, 1),
            date(2024, 12, 31),
        )
        assert normalize_bounds(None) is None

    def test_bad_bounds(self):
        """Bounds must be a pair of parseable dates."""
        with pytest.raises(ValidationError, match="pair"):
            normalize_bounds(["2024-01-01"])
        with pytest.raises(ValidationError, match="endpoint"):
            normalize_bounds(["2024-01-01", "not a date"])

    def test_picker_rejects_bad_options(self):
        """DatePicker surfaces validation errors at construction."""
        with pytest.raises(ValidationError):
            DatePicker(first_day_of_week=9)
