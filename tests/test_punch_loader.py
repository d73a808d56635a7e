"""
Unit tests for WorkbookPunchSource.
"""

import pytest
import tempfile
from datetime import datetime
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from openpyxl import Workbook

from domain.entities import ReportPeriod
from domain.errors import DataSourceError
from infrastructure.punch_loader import WorkbookPunchSource


def write_workbook(path: Path, punches, with_title_row: bool = False) -> Path:
    wb = Workbook()
    employees = wb.active
    employees.title = "Employees"
    employees.append(["Id", "Name", "Email"])
    employees.append([42, "Maria Silva", "maria@example.com"])
    employees.append(["7", "Joao Souza", "joao@example.com"])

    ws = wb.create_sheet("Punches")
    if with_title_row:
        ws.append(["Punch export"])
    ws.append(["Id", "EmployeeId", "Timestamp"])
    for row in punches:
        ws.append(list(row))

    wb.save(path)
    return path


@pytest.fixture
def workbook_path():
    punches = [
        ("p3", 42, datetime(2024, 5, 6, 17, 0)),
        ("p1", 42, datetime(2024, 5, 6, 8, 0)),
        ("p2", 42, "2024-05-06 12:00:00"),
        ("p4", 42, datetime(2024, 4, 30, 8, 0)),
        ("p5", "7", datetime(2024, 5, 6, 9, 0)),
        ("p6", 42, "garbage"),
    ]
    with tempfile.TemporaryDirectory() as tmpdir:
        yield write_workbook(Path(tmpdir) / "punches.xlsx", punches)


class TestWorkbookPunchSource:
    """Tests for reading employees and punches from a workbook."""

    def test_find_employee(self, workbook_path):
        source = WorkbookPunchSource(workbook_path)
        employee = source.find_employee("42")

        assert employee.name == "Maria Silva"
        assert employee.email == "maria@example.com"

    def test_unknown_employee(self, workbook_path):
        assert WorkbookPunchSource(workbook_path).find_employee("999") is None

    def test_punches_filtered_and_sorted(self, workbook_path):
        punches = WorkbookPunchSource(workbook_path).load_punches("42", ReportPeriod(2024, 5))

        assert [p.punch_id for p in punches] == ["p1", "p2", "p3"]
        assert all(p.employee_id == "42" for p in punches)
        assert punches[1].timestamp == datetime(2024, 5, 6, 12, 0)

    def test_header_below_title_row(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_workbook(
                Path(tmpdir) / "punches.xlsx",
                [("p1", 42, datetime(2024, 5, 6, 8, 0))],
                with_title_row=True
            )
            punches = WorkbookPunchSource(path).load_punches("42", ReportPeriod(2024, 5))

        assert len(punches) == 1

    def test_missing_file(self):
        source = WorkbookPunchSource(Path("does-not-exist.xlsx"))
        with pytest.raises(DataSourceError):
            source.find_employee("42")

    def test_missing_sheet(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.xlsx"
            wb = Workbook()
            wb.active.title = "Employees"
            wb.active.append(["Id", "Name", "Email"])
            wb.save(path)

            with pytest.raises(DataSourceError, match="Punches"):
                WorkbookPunchSource(path).find_employee("42")

    def test_missing_sheet_fails_on_every_call(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.xlsx"
            wb = Workbook()
            wb.active.title = "Employees"
            wb.active.append(["Id", "Name", "Email"])
            wb.active.append(["42", "Maria Silva", "maria@example.com"])
            wb.save(path)

            source = WorkbookPunchSource(path)
            with pytest.raises(DataSourceError):
                source.find_employee("42")
            with pytest.raises(DataSourceError):
                source.find_employee("42")
            with pytest.raises(DataSourceError):
                source.load_punches("42", ReportPeriod(2024, 5))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
