"""
PDF Writer Module

Generates formatted PDF punch reports using fpdf2.
Replicates the HTML report layout as a bordered table.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple, Dict

from fpdf import FPDF

from domain.entities import MonthlyReport, ReportRow
from infrastructure.logger import get_logger

logger = get_logger("PdfWriter")


# ==============================================================================
# Font Configuration
# ==============================================================================
WINDOWS_FONT_PATHS: List[Path] = [
    Path("C:/Windows/Fonts/arial.ttf"),
    Path("C:/Windows/Fonts/segoeui.ttf"),
]

MACOS_FONT_PATHS: List[Path] = [
    Path("/Library/Fonts/Arial Unicode.ttf"),
    Path("/System/Library/Fonts/Supplemental/Arial.ttf"),
]

LINUX_FONT_PATHS: List[Path] = [
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/TTF/DejaVuSans.ttf"),
    Path("/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf"),
]

FALLBACK_FONT = "Helvetica"


def find_unicode_font(custom_font_path: Optional[str] = None) -> Optional[Path]:
    """
    Search for a TrueType font able to render non Latin-1 employee names.
    """
    if custom_font_path:
        custom_path = Path(custom_font_path)
        if custom_path.exists():
            logger.info(f"Using custom font: {custom_path}")
            return custom_path
        else:
            logger.warning(f"Custom font path does not exist: {custom_path}")

    for font_path in _get_platform_fonts():
        if font_path.exists():
            logger.debug(f"Found system font: {font_path}")
            return font_path

    return None


def _get_platform_fonts() -> List[Path]:
    """Get the font search list for the current platform."""
    if sys.platform == 'win32':
        return WINDOWS_FONT_PATHS
    elif sys.platform == 'darwin':
        return MACOS_FONT_PATHS
    else:
        return LINUX_FONT_PATHS


# ==============================================================================
# PunchReportPdf Class (A4 Portrait)
# ==============================================================================
class PunchReportPdf(FPDF):
    """
    Custom FPDF class with unicode font support for A4 punch reports.
    """

    _font_family: str = FALLBACK_FONT
    _font_loaded: bool = False

    def __init__(self, title: str = "", custom_font_path: Optional[str] = None):
        super().__init__(orientation='P', unit='mm', format='A4')
        self.title_text = title
        self._setup_font(custom_font_path)

    def _setup_font(self, custom_font_path: Optional[str] = None) -> None:
        """Load a unicode font if available."""
        font_path = find_unicode_font(custom_font_path)

        if font_path:
            try:
                self.add_font("ReportFont", "", str(font_path))
                self._font_family = "ReportFont"
                self._font_loaded = True
                logger.debug(f"Loaded font: {font_path.name}")
            except Exception as e:
                logger.warning(f"Could not load font {font_path}: {e}")
                self._font_family = FALLBACK_FONT
                self._font_loaded = False
        else:
            logger.debug("No unicode font found, falling back to Helvetica")
            self._font_family = FALLBACK_FONT
            self._font_loaded = False

    @property
    def font_family_name(self) -> str:
        return self._font_family

    def header(self) -> None:
        """Draw page header with centered title."""
        self.set_font(self._font_family, '', 14)
        self.cell(0, 10, self.title_text, align='C', new_x='LMARGIN', new_y='NEXT')
        self.ln(3)

    def footer(self) -> None:
        """Draw page footer with page number."""
        self.set_y(-12)
        self.set_font(self._font_family, '', 8)
        self.cell(0, 10, f'Page {self.page_no()}/{{nb}}', align='C')


# ==============================================================================
# PdfReportWriter Class
# ==============================================================================
class PdfReportWriter:
    """
    Generates PDF punch reports.

    Layout:
    - Title with period, employee name below
    - One table row per day: date, four punch slots, hours
    - Bold monthly total row
    """

    extension = "pdf"
    media_type = "application/pdf"

    COLORS: Dict[str, Tuple[int, int, int]] = {
        'header': (242, 242, 242),
        'border': (221, 221, 221),
    }

    COLUMN_HEADERS = ("Date", "Entry", "Lunch Out", "Lunch Return", "Exit", "Total Hours")
    COLUMN_WIDTHS = (30, 30, 30, 34, 30, 36)
    ROW_HEIGHT = 8
    PAGE_BOTTOM_LIMIT = 270

    def __init__(
        self,
        title: str = "Monthly Punch Record",
        custom_font_path: Optional[str] = None
    ):
        self.title = title
        self._custom_font_path = custom_font_path

    def build(self, report: MonthlyReport) -> PunchReportPdf:
        """Lay out the report on a new PDF document."""
        pdf = PunchReportPdf(
            title=f"{self.title} {report.period_label}",
            custom_font_path=self._custom_font_path
        )
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=False)
        pdf.add_page()

        pdf.set_font(pdf.font_family_name, '', 11)
        pdf.cell(0, 8, f"Employee: {report.employee_name}", new_x='LMARGIN', new_y='NEXT')
        pdf.ln(2)

        self._draw_header_row(pdf)
        for row in report.rows:
            if pdf.get_y() + self.ROW_HEIGHT > self.PAGE_BOTTOM_LIMIT:
                pdf.add_page()
                self._draw_header_row(pdf)
            self._draw_row(pdf, row)

        self._draw_total_row(pdf, report.total_hours_label)
        return pdf

    def render_bytes(self, report: MonthlyReport) -> bytes:
        return bytes(self.build(report).output())

    def write(self, report: MonthlyReport, output_path: Path) -> Path:
        pdf = self.build(report)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF report saved: {output_path}")
        return output_path

    def _draw_header_row(self, pdf: PunchReportPdf) -> None:
        pdf.set_font(pdf.font_family_name, '', 9)
        pdf.set_fill_color(*self.COLORS['header'])
        pdf.set_draw_color(*self.COLORS['border'])
        for width, text in zip(self.COLUMN_WIDTHS, self.COLUMN_HEADERS):
            pdf.cell(width, self.ROW_HEIGHT, text, border=1, align='C', fill=True)
        pdf.ln(self.ROW_HEIGHT)

    def _draw_row(self, pdf: PunchReportPdf, row: ReportRow) -> None:
        pdf.set_font(pdf.font_family_name, '', 9)
        cells = (row.date, row.entry1, row.exit1, row.entry2, row.exit2, row.hours_label)
        for width, text in zip(self.COLUMN_WIDTHS, cells):
            pdf.cell(width, self.ROW_HEIGHT, text, border=1, align='C')
        pdf.ln(self.ROW_HEIGHT)

    def _draw_total_row(self, pdf: PunchReportPdf, total_label: str) -> None:
        label_width = sum(self.COLUMN_WIDTHS[:-1])
        style = 'B' if pdf.font_family_name == FALLBACK_FONT else ''
        pdf.set_font(pdf.font_family_name, style, 10)
        pdf.cell(label_width, self.ROW_HEIGHT, "Monthly Total", border=1, align='C')
        pdf.cell(self.COLUMN_WIDTHS[-1], self.ROW_HEIGHT, total_label, border=1, align='C')
        pdf.ln(self.ROW_HEIGHT)

