"""
Unit tests for HoursCalculator and its duration helpers.
"""

import pytest
from datetime import date, datetime, timedelta
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import DailyShift
from domain.hours_calculator import (
    HoursCalculator, shift_duration, whole_hours, fractional_hours
)


DAY = date(2024, 5, 6)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2024, 5, 6, hour, minute, second)


def make_shift(*times) -> DailyShift:
    shift = DailyShift(date=DAY)
    for t in times:
        shift.assign(t)
    return shift


class TestDurationHelpers:
    """Tests for the module-level duration helpers."""

    def test_shift_duration_missing_side_is_zero(self):
        assert shift_duration(at(8), None) == timedelta(0)
        assert shift_duration(None, at(12)) == timedelta(0)
        assert shift_duration(None, None) == timedelta(0)

    def test_shift_duration(self):
        assert shift_duration(at(13, 30), at(17, 45)) == timedelta(hours=4, minutes=15)

    def test_whole_hours_drops_minutes_and_seconds(self):
        assert whole_hours(timedelta(hours=4, minutes=59, seconds=59)) == 4
        assert whole_hours(timedelta(minutes=45)) == 0

    def test_fractional_hours(self):
        assert fractional_hours(timedelta(hours=4, minutes=30)) == 4.5


class TestWorkedHours:
    """Tests for HoursCalculator.worked_hours."""

    @pytest.fixture
    def calculator(self):
        return HoursCalculator()

    def test_single_shift(self, calculator):
        assert calculator.worked_hours(make_shift(at(8), at(17))) == 9

    def test_two_full_shifts(self, calculator):
        shift = make_shift(at(8), at(12), at(13), at(17))
        assert calculator.worked_hours(shift) == 8

    def test_second_shift_minutes_are_dropped(self, calculator):
        # Second shift lasts 4h15m but only 4 whole hours count
        shift = make_shift(at(8), at(12), at(13, 30), at(17, 45))
        assert calculator.worked_hours(shift) == 8

    def test_second_shift_minutes_never_round_up(self, calculator):
        shift = make_shift(at(8), at(12), at(13), at(17, 59, 59))
        assert calculator.worked_hours(shift) == 8

    def test_first_shift_minutes_count(self, calculator):
        # 4h40m + 4h -> 8.67 -> 9
        shift = make_shift(at(8), at(12, 40), at(13), at(17))
        assert calculator.worked_hours(shift) == 9

    def test_half_hour_rounds_to_even(self, calculator):
        assert calculator.worked_hours(make_shift(at(8), at(12, 30))) == 4
        assert calculator.worked_hours(make_shift(at(8), at(13, 30))) == 6

    def test_single_punch_is_zero(self, calculator):
        assert calculator.worked_hours(make_shift(at(8))) == 0

    def test_three_punches_count_first_shift_only(self, calculator):
        assert calculator.worked_hours(make_shift(at(8), at(12), at(13))) == 4

    def test_pure(self, calculator):
        shift = make_shift(at(8), at(12, 20), at(13), at(17, 10))
        assert calculator.worked_hours(shift) == calculator.worked_hours(shift)
        assert shift.worked_hours == 0
        assert shift.closed is False


class TestFinalizeAndTotal:
    """Tests for finalize and monthly_total."""

    def test_finalize_closes_shift(self):
        shift = make_shift(at(8), at(17))
        result = HoursCalculator().finalize(shift)

        assert result is shift
        assert shift.closed is True
        assert shift.worked_hours == 9

    def test_monthly_total_sums_rounded_hours(self):
        calculator = HoursCalculator()
        first = DailyShift(date=date(2024, 5, 6), worked_hours=8)
        second = DailyShift(date=date(2024, 5, 7), worked_hours=8)

        assert calculator.monthly_total([first, second]) == 16

    def test_monthly_total_empty(self):
        assert HoursCalculator().monthly_total([]) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
