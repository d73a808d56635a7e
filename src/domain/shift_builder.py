"""
Shift Builder Module

Groups an ordered punch stream into per-day four-slot shift records.
"""

from datetime import date
from typing import Iterable, List, Optional

from .entities import DailyShift, PunchEvent
from .hours_calculator import HoursCalculator


class DailyShiftBuilder:
    """
    Builds finalized DailyShift records from punches.

    Precondition: punches are sorted ascending by timestamp. Unsorted input
    yields wrong day grouping unless ``sort_input`` is enabled, in which case
    the punches are re-sorted (stable) before grouping.

    A day holds at most four punches. The fifth and later punches of a date
    are discarded without error and kept in ``discarded`` until the next
    build, so callers can report them.
    """

    def __init__(
        self,
        calculator: Optional[HoursCalculator] = None,
        sort_input: bool = False
    ):
        self.calculator = calculator or HoursCalculator()
        self.sort_input = sort_input
        self.discarded: List[PunchEvent] = []

    def build(self, punches: Iterable[PunchEvent]) -> List[DailyShift]:
        """
        Group punches into daily shifts.

        Args:
            punches: Punches for one employee and period

        Returns:
            Finalized shifts, one per distinct date, in order of first appearance
        """
        if self.sort_input:
            punches = sorted(punches, key=lambda p: p.timestamp)

        shifts: List[DailyShift] = []
        discarded: List[PunchEvent] = []
        current_date: Optional[date] = None
        working: Optional[DailyShift] = None

        for punch in punches:
            punch_date = punch.date

            if current_date is not None and punch_date != current_date:
                shifts.append(self.calculator.finalize(working))
                working = None

            if working is None:
                current_date = punch_date
                working = DailyShift(date=punch_date)

            if not working.assign(punch.timestamp):
                discarded.append(punch)

        if working is not None:
            shifts.append(self.calculator.finalize(working))

        self.discarded = discarded
        return shifts


def build_daily_shifts(
    punches: Iterable[PunchEvent],
    calculator: Optional[HoursCalculator] = None,
    sort_input: bool = False
) -> List[DailyShift]:
    """Convenience wrapper around DailyShiftBuilder.build."""
    return DailyShiftBuilder(calculator, sort_input).build(punches)
