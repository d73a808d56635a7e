"""
Report Assembler Module

Combines employee identity, period, daily shifts and the monthly total
into a single renderer-agnostic MonthlyReport.
"""

from datetime import datetime
from typing import Optional, Sequence

from .entities import (
    DailyShift, MonthlyReport, ReportFooter, ReportPeriod, ReportRow
)
from .hours_calculator import HoursCalculator


DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_TIME_FORMAT = "%H:%M:%S"
DEFAULT_HOURS_LABEL = "{hours} hours"


class ReportAssembler:
    """
    Builds MonthlyReport values.

    Formatting of dates, times and hour labels is configurable; the
    assembler has no knowledge of the output document format.
    """

    def __init__(
        self,
        date_format: str = DEFAULT_DATE_FORMAT,
        time_format: str = DEFAULT_TIME_FORMAT,
        hours_label_pattern: str = DEFAULT_HOURS_LABEL
    ):
        self.date_format = date_format
        self.time_format = time_format
        self.hours_label_pattern = hours_label_pattern

    def assemble(
        self,
        employee_name: str,
        employee_email: str,
        period: ReportPeriod,
        shifts: Sequence[DailyShift],
        total_hours: Optional[int] = None
    ) -> MonthlyReport:
        """
        Assemble the monthly report.

        Args:
            employee_name: Display name
            employee_email: Contact address
            period: Requested period
            shifts: Finalized shifts in ascending date order
            total_hours: Monthly total; computed from the shifts if omitted

        Returns:
            Immutable MonthlyReport
        """
        if total_hours is None:
            total_hours = HoursCalculator().monthly_total(shifts)

        rows = tuple(self.build_row(shift) for shift in shifts)

        return MonthlyReport(
            employee_name=employee_name,
            employee_email=employee_email,
            period=period,
            period_label=period.label,
            shifts=tuple(shifts),
            rows=rows,
            footer=ReportFooter(total_hours=total_hours),
            total_hours_label=self.hours_label(total_hours),
        )

    def build_row(self, shift: DailyShift) -> ReportRow:
        return ReportRow(
            date=shift.date.strftime(self.date_format),
            entry1=self.format_slot(shift.entry1),
            exit1=self.format_slot(shift.exit1),
            entry2=self.format_slot(shift.entry2),
            exit2=self.format_slot(shift.exit2),
            hours=shift.worked_hours,
            hours_label=self.hours_label(shift.worked_hours),
        )

    def format_slot(self, value: Optional[datetime]) -> str:
        if value is None:
            return ""
        return value.strftime(self.time_format)

    def hours_label(self, hours: int) -> str:
        return self.hours_label_pattern.format(hours=hours)
