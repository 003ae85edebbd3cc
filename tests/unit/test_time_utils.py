"""Unit tests for wall-clock arithmetic."""
from datetime import time

import pytest

from app.core.exceptions import InvalidTimeError
from app.services.availability.time_utils import (
    is_valid_time,
    overlaps,
    to_clock_string,
    to_minutes,
)


class TestToMinutes:

    def test_hours_and_minutes(self):
        assert to_minutes("09:00") == 540
        assert to_minutes("9:05") == 545
        assert to_minutes("23:59") == 1439

    def test_seconds_are_ignored(self):
        assert to_minutes("13:30:45") == 810

    def test_empty_values_are_midnight(self):
        assert to_minutes(None) == 0
        assert to_minutes("") == 0

    def test_accepts_time_objects(self):
        assert to_minutes(time(10, 15)) == 615

    def test_end_of_day(self):
        assert to_minutes("24:00") == 1440

    @pytest.mark.parametrize("value", ["abc", "9", "09:60", "25:00", "24:30", "09-00", "0900"])
    def test_malformed_values_raise(self, value):
        with pytest.raises(InvalidTimeError):
            to_minutes(value)

    def test_invalid_time_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            to_minutes("nope")


class TestToClockString:

    def test_zero_padded(self):
        assert to_clock_string(0) == "00:00"
        assert to_clock_string(545) == "09:05"
        assert to_clock_string(1439) == "23:59"

    def test_inverse_of_to_minutes(self):
        for minutes in range(0, 24 * 60, 7):
            assert to_minutes(to_clock_string(minutes)) == minutes


class TestIsValidTime:

    def test_valid(self):
        assert is_valid_time("00:00")
        assert is_valid_time("9:30")
        assert is_valid_time("23:59:59")

    def test_invalid(self):
        assert not is_valid_time(None)
        assert not is_valid_time("")
        assert not is_valid_time("24:00")
        assert not is_valid_time("12:60")
        assert not is_valid_time("12:00:60")
        assert not is_valid_time("noon")


class TestOverlaps:

    def test_partial_overlap(self):
        assert overlaps(540, 600, 570, 630)

    def test_containment(self):
        assert overlaps(540, 720, 600, 630)

    def test_touching_endpoints_do_not_overlap(self):
        assert not overlaps(540, 600, 600, 660)
        assert not overlaps(600, 660, 540, 600)

    def test_disjoint(self):
        assert not overlaps(540, 570, 600, 630)

    def test_symmetric(self):
        intervals = [(540, 600), (570, 630), (600, 660), (480, 720), (700, 710)]
        for a in intervals:
            for b in intervals:
                assert overlaps(*a, *b) == overlaps(*b, *a)
