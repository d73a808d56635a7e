"""
Punch Loader Module

Reads employees and punches from an Excel workbook.

Expected layout:
- Sheet "Employees": Id | Name | Email
- Sheet "Punches":   Id | EmployeeId | Timestamp

Header rows are detected by keyword within the first rows of each sheet.
"""

from datetime import datetime, date
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from domain.entities import Employee, PunchEvent, ReportPeriod
from domain.errors import DataSourceError
from infrastructure.logger import get_logger

logger = get_logger("PunchLoader")


EMPLOYEES_SHEET = "Employees"
PUNCHES_SHEET = "Punches"

# Header keyword -> column key, checked in order ("employeeid" before "id")
EMPLOYEE_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("name", "name"),
    ("email", "email"),
    ("id", "id"),
)
PUNCH_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("employee", "employee_id"),
    ("timestamp", "timestamp"),
    ("time", "timestamp"),
    ("id", "id"),
)

TIMESTAMP_FORMATS = ['%Y-%m-%d %H:%M:%S', '%Y-%m-%dT%H:%M:%S', '%d/%m/%Y %H:%M:%S', '%Y-%m-%d %H:%M']


class WorkbookPunchSource:
    """
    Punch and employee source backed by an .xlsx workbook.

    The workbook is read once, lazily, and cached for subsequent lookups.
    """

    # Maximum rows to search for header
    MAX_HEADER_SEARCH_ROWS = 15

    def __init__(self, path: Path):
        self.path = Path(path)
        self._employees: Optional[Dict[str, Employee]] = None
        self._punches: Optional[List[PunchEvent]] = None

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        """Look up an employee; returns None if no record matches."""
        self._ensure_loaded()
        return self._employees.get(str(employee_id))

    def load_punches(self, employee_id: str, period: ReportPeriod) -> List[PunchEvent]:
        """
        Get the employee's punches for a period.

        Returns:
            Punches sorted ascending by timestamp
        """
        self._ensure_loaded()
        employee_id = str(employee_id)
        punches = [
            punch for punch in self._punches
            if punch.employee_id == employee_id and period.contains(punch.date)
        ]
        punches.sort(key=lambda p: p.timestamp)
        logger.info(
            f"Loaded {len(punches)} punches for employee {employee_id} in {period.label}"
        )
        return punches

    def _ensure_loaded(self) -> None:
        if self._employees is not None and self._punches is not None:
            return

        if not self.path.exists():
            raise DataSourceError(f"Punch workbook not found: {self.path}")

        logger.info(f"Reading punch workbook: {self.path.name}")
        wb = load_workbook(self.path, read_only=True, data_only=True)
        try:
            employees = self._parse_employees(self._get_sheet(wb, EMPLOYEES_SHEET))
            punches = self._parse_punches(self._get_sheet(wb, PUNCHES_SHEET))
        finally:
            wb.close()

        # Cache only a fully parsed workbook
        self._employees = employees
        self._punches = punches

        logger.info(
            f"Workbook parsed: {len(self._employees)} employees, {len(self._punches)} punches"
        )

    def _get_sheet(self, wb, name: str) -> Worksheet:
        for ws in wb.worksheets:
            if ws.title.strip().lower() == name.lower():
                return ws
        raise DataSourceError(f"Sheet '{name}' not found in {self.path.name}")

    def _find_header(
        self,
        rows: List[tuple],
        headers: Tuple[Tuple[str, str], ...],
        sheet_name: str
    ) -> Tuple[int, Dict[str, int]]:
        """Locate the header row and map column keys to indexes."""
        wanted = {key for _, key in headers}
        for row_idx, row in enumerate(rows[:self.MAX_HEADER_SEARCH_ROWS]):
            columns: Dict[str, int] = {}
            for col_idx, value in enumerate(row):
                cell = str(value or '').strip().lower()
                if not cell:
                    continue
                for keyword, key in headers:
                    if keyword in cell and key not in columns:
                        columns[key] = col_idx
                        break
            if wanted <= columns.keys():
                return row_idx, columns

        raise DataSourceError(
            f"Could not find header columns {sorted(wanted)} in sheet '{sheet_name}' "
            f"within the first {self.MAX_HEADER_SEARCH_ROWS} rows"
        )

    def _parse_employees(self, ws: Worksheet) -> Dict[str, Employee]:
        rows = list(ws.iter_rows(values_only=True))
        header_idx, cols = self._find_header(rows, EMPLOYEE_HEADERS, ws.title)

        employees: Dict[str, Employee] = {}
        for row in rows[header_idx + 1:]:
            employee_id = self._cell(row, cols["id"])
            if not employee_id:
                continue
            employees[employee_id] = Employee(
                employee_id=employee_id,
                name=self._cell(row, cols["name"]),
                email=self._cell(row, cols["email"]),
            )
        return employees

    def _parse_punches(self, ws: Worksheet) -> List[PunchEvent]:
        rows = list(ws.iter_rows(values_only=True))
        header_idx, cols = self._find_header(rows, PUNCH_HEADERS, ws.title)

        punches: List[PunchEvent] = []
        skipped_rows = 0
        for offset, row in enumerate(rows[header_idx + 1:], start=header_idx + 2):
            employee_id = self._cell(row, cols["employee_id"])
            if not employee_id:
                continue

            timestamp = self._extract_timestamp(
                row[cols["timestamp"]] if cols["timestamp"] < len(row) else None
            )
            if timestamp is None:
                skipped_rows += 1
                logger.warning(f"Sheet '{ws.title}' row {offset}: unreadable timestamp, skipped")
                continue

            punches.append(PunchEvent(
                punch_id=self._cell(row, cols["id"]) or f"row-{offset}",
                employee_id=employee_id,
                timestamp=timestamp,
            ))

        if skipped_rows > 0:
            logger.info(f"Sheet '{ws.title}': skipped {skipped_rows} rows")

        return punches

    @staticmethod
    def _cell(row: tuple, idx: int) -> str:
        if idx >= len(row) or row[idx] is None:
            return ""
        value = row[idx]
        # Numeric ids come back as floats from some exports
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return str(value).strip()

    @staticmethod
    def _extract_timestamp(value) -> Optional[datetime]:
        """Extract a datetime from a cell value, truncated to seconds."""
        if value is None:
            return None

        if isinstance(value, datetime):
            return value.replace(microsecond=0)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)

        str_val = str(value).strip()
        for fmt in TIMESTAMP_FORMATS:
            try:
                return datetime.strptime(str_val, fmt)
            except ValueError:
                continue

        logger.debug(f"Unrecognized timestamp format: '{value}'")
        return None
