"""
Excel Writer Module

Generates formatted Excel punch reports with styling.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import (
    Font, PatternFill, Alignment, Border, Side
)
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from domain.entities import MonthlyReport


class ExcelReportWriter:
    """
    Generates formatted Excel punch reports.

    Output format:
    - Row 1: Title with period
    - Row 2: Employee name
    - Row 4: Column headers
    - Row 5+: One row per day
    - Last row: Monthly total
    """

    extension = "xlsx"
    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    COLORS = {
        'header': PatternFill(start_color='F2F2F2', end_color='F2F2F2', fill_type='solid'),
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    COLUMN_HEADERS = ("Date", "Entry", "Lunch Out", "Lunch Return", "Exit", "Total Hours")
    COLUMN_WIDTHS = (14, 12, 12, 14, 12, 14)
    HEADER_ROW = 4

    def __init__(self, title: str = "Monthly Punch Record"):
        self.title = title
        self.wb: Optional[Workbook] = None

    def build(self, report: MonthlyReport) -> Workbook:
        """Create a workbook holding the report sheet."""
        self.wb = Workbook()
        ws = self.wb.active
        ws.title = report.period_label.replace("/", "-")
        self._write_sheet(ws, report)
        return self.wb

    def render_bytes(self, report: MonthlyReport) -> bytes:
        buffer = BytesIO()
        self.build(report).save(buffer)
        return buffer.getvalue()

    def write(self, report: MonthlyReport, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.build(report).save(output_path)
        return output_path

    def _write_sheet(self, ws: Worksheet, report: MonthlyReport) -> None:
        num_cols = len(self.COLUMN_HEADERS)

        # Title and employee
        ws.cell(1, 1, f"{self.title} {report.period_label}").font = Font(bold=True, size=14)
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=num_cols)
        ws.cell(1, 1).alignment = Alignment(horizontal='center')

        ws.cell(2, 1, "Employee:").font = Font(bold=True)
        ws.cell(2, 2, report.employee_name)

        # Header row
        for col, text in enumerate(self.COLUMN_HEADERS, start=1):
            cell = ws.cell(self.HEADER_ROW, col, text)
            cell.font = Font(bold=True)
            cell.fill = self.COLORS['header']
            cell.alignment = Alignment(horizontal='center')
            cell.border = self.BORDER

        # Data rows
        current_row = self.HEADER_ROW + 1
        for row in report.rows:
            values = (row.date, row.entry1, row.exit1, row.entry2, row.exit2, row.hours)
            for col, value in enumerate(values, start=1):
                cell = ws.cell(current_row, col, value)
                cell.alignment = Alignment(horizontal='center')
                cell.border = self.BORDER
            current_row += 1

        # Total row
        ws.cell(current_row, 1, "Monthly Total").font = Font(bold=True)
        ws.merge_cells(
            start_row=current_row, start_column=1,
            end_row=current_row, end_column=num_cols - 1
        )
        total_cell = ws.cell(current_row, num_cols, report.total_hours)
        total_cell.font = Font(bold=True)
        for col in range(1, num_cols + 1):
            ws.cell(current_row, col).border = self.BORDER
            ws.cell(current_row, col).alignment = Alignment(horizontal='center')

        for col, width in enumerate(self.COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width

        ws.freeze_panes = ws.cell(self.HEADER_ROW + 1, 1)
