"""
Renderer Registry Module

Maps output format names to report renderers.
"""

from typing import Dict, Optional, Type, Union

from domain.errors import ConfigurationError
from infrastructure.excel_writer import ExcelReportWriter
from infrastructure.html_renderer import HtmlReportRenderer
from infrastructure.pdf_writer import PdfReportWriter

Renderer = Union[HtmlReportRenderer, PdfReportWriter, ExcelReportWriter]

RENDERERS: Dict[str, Type] = {
    "html": HtmlReportRenderer,
    "pdf": PdfReportWriter,
    "xlsx": ExcelReportWriter,
}


def normalize_format(fmt: str) -> str:
    """
    Canonical registry key of an output format name.

    Raises:
        ConfigurationError: If the format is not supported
    """
    key = str(fmt).strip().lower()
    if key not in RENDERERS:
        raise ConfigurationError(
            f"Unsupported output format '{fmt}', expected one of {sorted(RENDERERS)}"
        )
    return key


def get_renderer(
    fmt: str,
    title: str = "Monthly Punch Record",
    custom_font_path: Optional[str] = None
) -> Renderer:
    """
    Create the renderer for an output format.

    Raises:
        ConfigurationError: If the format is not supported (a ValueError)
    """
    key = normalize_format(fmt)
    if key == "pdf":
        return PdfReportWriter(title=title, custom_font_path=custom_font_path or None)
    return RENDERERS[key](title=title)
