"""
Domain Entities Module

Core domain entities using dataclasses for the punch report system.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple

from .errors import ShiftClosedError


class SlotState(Enum):
    """
    Position of a day in the four-slot punch sequence.

    Each non-terminal state names the slot the next punch fills.
    FULL is terminal: further punches for the day are discarded.
    """
    AWAITING_ENTRY1 = "entry1"
    AWAITING_EXIT1 = "exit1"
    AWAITING_ENTRY2 = "entry2"
    AWAITING_EXIT2 = "exit2"
    FULL = None

    @property
    def slot_name(self) -> Optional[str]:
        return self.value


SLOT_ORDER: Tuple[SlotState, ...] = (
    SlotState.AWAITING_ENTRY1,
    SlotState.AWAITING_EXIT1,
    SlotState.AWAITING_ENTRY2,
    SlotState.AWAITING_EXIT2,
    SlotState.FULL,
)


@dataclass(frozen=True)
class PunchEvent:
    """
    A single clock-in or clock-out event.

    Attributes:
        punch_id: Identifier of the punch in the source store
        employee_id: Owning employee identifier
        timestamp: Date and time of the punch (second precision)
    """
    punch_id: str
    employee_id: str
    timestamp: datetime

    @property
    def date(self) -> date:
        return self.timestamp.date()


@dataclass
class DailyShift:
    """
    Up to two entry/exit pairs recorded on one calendar date.

    Slots are filled strictly in the order entry1, exit1, entry2, exit2.
    Once closed, the shift carries its worked hours and rejects any change.

    Attributes:
        date: The calendar date
        entry1: First entry (None if not recorded)
        exit1: First exit, usually the lunch break
        entry2: Return from the break
        exit2: Final exit
        worked_hours: Hours computed when the shift is closed
    """
    date: date
    entry1: Optional[datetime] = None
    exit1: Optional[datetime] = None
    entry2: Optional[datetime] = None
    exit2: Optional[datetime] = None
    worked_hours: int = 0
    closed: bool = field(default=False, compare=False)

    @property
    def state(self) -> SlotState:
        """Derive the state machine position from the filled slots."""
        for state in SLOT_ORDER[:-1]:
            if getattr(self, state.slot_name) is None:
                return state
        return SlotState.FULL

    @property
    def slots(self) -> Tuple[Optional[datetime], ...]:
        return (self.entry1, self.exit1, self.entry2, self.exit2)

    def assign(self, timestamp: datetime) -> bool:
        """
        Store a punch in the next empty slot.

        Returns:
            True if the punch was stored, False if the day is already full

        Raises:
            ShiftClosedError: If the shift has been finalized
        """
        if self.closed:
            raise ShiftClosedError(f"Shift for {self.date.isoformat()} is already closed")

        state = self.state
        if state is SlotState.FULL:
            return False

        setattr(self, state.slot_name, timestamp)
        return True

    def close(self, worked_hours: int) -> None:
        """
        Record the computed hours and freeze the shift.

        Raises:
            ShiftClosedError: If the shift is already closed
        """
        self.worked_hours = worked_hours
        self.closed = True

    def __setattr__(self, name, value):
        # Closed shifts are read-only; "closed" is the last field set by __init__
        if self.__dict__.get("closed", False):
            raise ShiftClosedError(
                f"Shift for {self.date.isoformat()} is already closed, cannot set {name}"
            )
        super().__setattr__(name, value)


@dataclass(frozen=True)
class Employee:
    """Identity of the employee a report is produced for."""
    employee_id: str
    name: str
    email: str


@dataclass(frozen=True)
class ReportPeriod:
    """
    The (year, month) scope of a report request.

    Raises:
        ValueError: If month is outside 1-12 or year is not positive
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid month: {self.month}")
        if self.year <= 0:
            raise ValueError(f"Invalid year: {self.year}")

    @property
    def label(self) -> str:
        return f"{self.month:02d}/{self.year}"

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month


@dataclass(frozen=True)
class ReportRow:
    """One formatted table row of the monthly report."""
    date: str
    entry1: str
    exit1: str
    entry2: str
    exit2: str
    hours: int
    hours_label: str = ""


@dataclass(frozen=True)
class ReportFooter:
    total_hours: int


@dataclass(frozen=True)
class MonthlyReport:
    """
    Renderer-agnostic monthly attendance report for one employee.

    Attributes:
        employee_name: Display name (blank in lenient mode for unknown employees)
        employee_email: Contact address
        period: Report period
        period_label: Formatted period, e.g. "05/2024"
        shifts: Finalized daily shifts in ascending date order
        rows: Formatted rows, one per shift
        footer: Monthly total
        total_hours_label: Formatted monthly total
    """
    employee_name: str
    employee_email: str
    period: ReportPeriod
    period_label: str
    shifts: Tuple[DailyShift, ...] = ()
    rows: Tuple[ReportRow, ...] = ()
    footer: ReportFooter = ReportFooter(total_hours=0)
    total_hours_label: str = ""

    @property
    def total_hours(self) -> int:
        return self.footer.total_hours
