"""
Hours Calculator Module

Computes worked hours for a single day and the monthly total.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from .entities import DailyShift


HOUR = timedelta(hours=1)


def shift_duration(entry: Optional[datetime], exit_: Optional[datetime]) -> timedelta:
    """Duration of one entry/exit pair, zero when either side is missing."""
    if entry is None or exit_ is None:
        return timedelta(0)
    return exit_ - entry


def fractional_hours(duration: timedelta) -> float:
    return duration / HOUR


def whole_hours(duration: timedelta) -> int:
    """
    Hour component of a duration with minutes and seconds dropped.

    Applied to the second shift of the day only. Existing reports count
    4h15m as 4 hours here, so the truncation is kept as-is.
    """
    return int(duration / HOUR)


class HoursCalculator:
    """
    Calculates worked hours for daily shifts.

    Shift 1 counts as fractional hours, shift 2 counts whole hours only.
    The sum is rounded half-to-even.
    """

    def worked_hours(self, shift: DailyShift) -> int:
        """
        Calculate worked hours for one day.

        Args:
            shift: The daily shift with its slots filled

        Returns:
            Worked hours rounded to the nearest integer (half to even)
        """
        first = shift_duration(shift.entry1, shift.exit1)
        second = shift_duration(shift.entry2, shift.exit2)

        if not first and not second:
            return 0

        return round(fractional_hours(first) + whole_hours(second))

    def finalize(self, shift: DailyShift) -> DailyShift:
        """Close the shift with its computed hours."""
        shift.close(self.worked_hours(shift))
        return shift

    def monthly_total(self, shifts: Iterable[DailyShift]) -> int:
        """Sum the already-rounded hours of every shift."""
        return sum(shift.worked_hours for shift in shifts)
