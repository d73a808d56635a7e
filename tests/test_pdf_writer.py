"""
Unit tests for PdfReportWriter.
"""

import pytest
from datetime import date, datetime
from pathlib import Path
import tempfile

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import DailyShift, ReportPeriod
from domain.report_assembler import ReportAssembler
from infrastructure.pdf_writer import PdfReportWriter, PunchReportPdf, find_unicode_font


class TestFindUnicodeFont:
    """Tests for font lookup."""

    def test_missing_custom_font_falls_through(self):
        result = find_unicode_font("/nonexistent/font.ttf")
        assert result is None or result.exists()


class TestPunchReportPdf:
    """Tests for PunchReportPdf class."""

    def test_initialization(self):
        pdf = PunchReportPdf(title="Test Report")
        assert pdf.title_text == "Test Report"

    def test_font_family_name(self):
        pdf = PunchReportPdf(title="Test")

        # Should return either ReportFont or Helvetica
        assert pdf.font_family_name in ["ReportFont", "Helvetica"]


class TestPdfReportWriter:
    """Integration tests for PDF generation."""

    @pytest.fixture
    def report(self):
        shifts = []
        for day in range(1, 32):
            shift = DailyShift(
                date=date(2024, 5, day),
                entry1=datetime(2024, 5, day, 8, 0),
                exit1=datetime(2024, 5, day, 17, 0),
            )
            shift.close(9)
            shifts.append(shift)
        return ReportAssembler().assemble(
            "Test Employee", "test@example.com", ReportPeriod(2024, 5), shifts
        )

    def test_render_bytes(self, report):
        content = PdfReportWriter().render_bytes(report)

        assert content.startswith(b"%PDF")
        assert len(content) > 0

    def test_long_month_spans_pages(self, report):
        pdf = PdfReportWriter().build(report)
        assert pdf.page_no() >= 2

    def test_write_generates_file(self, report):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "output" / "test.pdf"

            PdfReportWriter().write(report, output_path)

            assert output_path.exists()
            assert output_path.stat().st_size > 0

    def test_empty_report(self):
        empty = ReportAssembler().assemble("", "", ReportPeriod(2024, 2), [])
        assert PdfReportWriter().render_bytes(empty).startswith(b"%PDF")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
