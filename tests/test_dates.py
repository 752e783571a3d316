"""Tests for date arithmetic."""

from datetime import date, datetime

import pytest

from calpicker.dates import (
    SelectState,
    add_days,
    add_months,
    add_years,
    as_date,
    between_dates,
    between_months,
    days_apart,
    end_of_month,
    end_of_year,
    same_month,
    same_year,
    start_of_month,
    start_of_year,
    subtract_days,
    subtract_months,
    subtract_years,
    weekday_from_sunday,
    within_dates,
    within_months,
)
from calpicker.selection import NO_SELECTION, DateRange, SingleDate


class TestAsDate:
    """Test input normalization."""

    def test_date_passthrough(self):
        """A date is returned unchanged."""
        assert as_date(date(2024, 3, 1)) == date(2024, 3, 1)

    def test_datetime_drops_time(self):
        """A datetime is truncated to its date."""
        assert as_date(datetime(2024, 3, 1, 17, 45)) == date(2024, 3, 1)

    def test_iso_date_string(self):
        """Plain ISO date strings are parsed."""
        assert as_date("2024-03-01") == date(2024, 3, 1)

    def test_iso_timestamp_string(self):
        """Full ISO timestamps, including a Z suffix, are parsed."""
        assert as_date("2024-03-01T00:00:00.000Z") == date(2024, 3, 1)

    def test_unsupported_type(self):
        """Other types raise TypeError."""
        with pytest.raises(TypeError):
            as_date(20240301)


class TestArithmetic:
    """Test day, month and year arithmetic."""

    def test_add_and_subtract_days(self):
        """Day arithmetic crosses month boundaries."""
        assert add_days(date(2024, 2, 28), 2) == date(2024, 3, 1)
        assert subtract_days(date(2024, 3, 1), 1) == date(2024, 2, 29)

    def test_add_months_clamps_day(self):
        """Jan 31 plus one month lands on the last day of February."""
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_subtract_months_clamps_day(self):
        """Mar 31 minus one month does not overflow into March."""
        assert subtract_months(date(2023, 3, 31), 1) == date(2023, 2, 28)

    def test_months_cross_year(self):
        """Month arithmetic wraps years in both directions."""
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
        assert subtract_months(date(2024, 1, 15), 1) == date(2023, 12, 15)

    def test_years_leap_day(self):
        """Feb 29 shifted to a non-leap year becomes Feb 28."""
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert subtract_years(date(2024, 2, 29), 4) == date(2020, 2, 29)

    def test_month_and_year_edges(self):
        """Start and end helpers return the boundary days."""
        d = date(2024, 2, 14)
        assert start_of_month(d) == date(2024, 2, 1)
        assert end_of_month(d) == date(2024, 2, 29)
        assert start_of_year(d) == date(2024, 1, 1)
        assert end_of_year(d) == date(2024, 12, 31)

    def test_days_apart_is_signed(self):
        """days_apart counts from the second argument to the first."""
        assert days_apart(date(2024, 2, 25), date(2024, 1, 28)) == 28
        assert days_apart(date(2024, 1, 28), date(2024, 2, 25)) == -28

    def test_same_month_and_year(self):
        """Month comparison includes the year."""
        assert same_month(date(2024, 3, 1), date(2024, 3, 31))
        assert not same_month(date(2024, 3, 1), date(2023, 3, 1))
        assert same_year(date(2024, 1, 1), date(2024, 12, 31))

    def test_weekday_from_sunday(self):
        """Sunday is 0 and Saturday is 6."""
        assert weekday_from_sunday(date(2024, 2, 25)) == 0  # Sunday
        assert weekday_from_sunday(date(2024, 3, 2)) == 6  # Saturday


class TestWithinDates:
    """Test selection membership."""

    def test_range_endpoints_and_interior(self):
        """Endpoints are selected, interior days are in range."""
        rng = [(date(2024, 3, 10), date(2024, 3, 20))]
        assert within_dates(date(2024, 3, 10), rng) is SelectState.SELECTED
        assert within_dates(date(2024, 3, 20), rng) is SelectState.SELECTED
        assert within_dates(date(2024, 3, 15), rng) is SelectState.IN_RANGE
        assert within_dates(date(2024, 3, 9), rng) is SelectState.NONE
        assert within_dates(date(2024, 3, 21), rng) is SelectState.NONE

    def test_reversed_pair_is_normalized(self):
        """A pair given end-first behaves like the ordered pair."""
        rng = [("2024-03-20", "2024-03-10")]
        assert within_dates(date(2024, 3, 15), rng) is SelectState.IN_RANGE
        assert within_dates(date(2024, 3, 10), rng) is SelectState.SELECTED

    def test_single_values(self):
        """A single date or ISO string matches only that day."""
        assert within_dates(date(2024, 3, 5), date(2024, 3, 5)) is SelectState.SELECTED
        assert within_dates(date(2024, 3, 5), "2024-03-06") is SelectState.NONE

    def test_none_selects_nothing(self):
        """No value means nothing is selected."""
        assert within_dates(date(2024, 3, 5), None) is SelectState.NONE
        assert within_dates(date(2024, 3, 5), NO_SELECTION) is SelectState.NONE

    def test_selection_variants(self):
        """Selection variants are understood directly."""
        assert within_dates(date(2024, 3, 5), SingleDate(date(2024, 3, 5))) is SelectState.SELECTED
        rng = DateRange(date(2024, 3, 1), date(2024, 3, 9))
        assert within_dates(date(2024, 3, 5), rng) is SelectState.IN_RANGE

    def test_mixed_disabled_list(self):
        """A disabled list may mix single dates and ranges."""
        disabled = ["2024-03-01", ("2024-03-10", "2024-03-12")]
        assert within_dates(date(2024, 3, 1), disabled) is SelectState.SELECTED
        assert within_dates(date(2024, 3, 11), disabled) is SelectState.IN_RANGE
        assert within_dates(date(2024, 3, 2), disabled) is SelectState.NONE


class TestWithinMonths:
    """Test month-granularity membership."""

    def test_range_months(self):
        """Months holding endpoints are selected, months between are in range."""
        rng = [(date(2024, 1, 20), date(2024, 4, 2))]
        assert within_months(date(2024, 1, 1), rng) is SelectState.SELECTED
        assert within_months(date(2024, 4, 1), rng) is SelectState.SELECTED
        assert within_months(date(2024, 2, 1), rng) is SelectState.IN_RANGE
        assert within_months(date(2024, 5, 1), rng) is SelectState.NONE

    def test_single_month(self):
        """A single date selects its month only."""
        assert within_months(date(2024, 3, 1), date(2024, 3, 17)) is SelectState.SELECTED
        assert within_months(date(2023, 3, 1), date(2024, 3, 17)) is SelectState.NONE


class TestBetween:
    """Test inclusive bounds checks."""

    def test_between_dates_inclusive(self):
        """Both bounds are inclusive."""
        bounds = (date(2024, 1, 1), date(2024, 12, 31))
        assert between_dates(date(2024, 1, 1), bounds)
        assert between_dates(date(2024, 12, 31), bounds)
        assert not between_dates(date(2025, 1, 1), bounds)

    def test_no_bounds_is_unbounded(self):
        """Missing bounds allow every date."""
        assert between_dates(date(1900, 1, 1), None)
        assert between_months(date(1900, 1, 1), None)

    def test_between_months(self):
        """Month check admits any day of the boundary months."""
        bounds = ("2024-03-15", "2024-05-15")
        assert between_months(date(2024, 3, 1), bounds)
        assert between_months(date(2024, 5, 31), bounds)
        assert not between_months(date(2024, 6, 1), bounds)
