"""
HTML Renderer Module

Renders a MonthlyReport into a standalone HTML document.
"""

from html import escape
from pathlib import Path

from domain.entities import MonthlyReport, ReportRow


STYLE = """
    body {
      font-family: Arial, sans-serif;
      margin: 0;
      padding: 0;
    }
    .container {
      width: 80%;
      margin: 20px auto;
    }
    h1 {
      text-align: center;
    }
    table {
      width: 100%;
      border-collapse: collapse;
    }
    th, td {
      border: 1px solid #ddd;
      padding: 8px;
      text-align: center;
    }
    th {
      background-color: #f2f2f2;
    }
    .total {
      font-weight: bold;
    }
"""

COLUMN_HEADERS = ("Date", "Entry", "Lunch Out", "Lunch Return", "Exit", "Total Hours")


class HtmlReportRenderer:
    """Renders the report table, one row per day plus a monthly total footer."""

    extension = "html"
    media_type = "text/html"

    def __init__(self, title: str = "Monthly Punch Record"):
        self.title = title

    def render(self, report: MonthlyReport) -> str:
        title = escape(f"{self.title} {report.period_label}")
        header_cells = "".join(f"<th>{escape(h)}</th>" for h in COLUMN_HEADERS)
        rows = "\n".join(self._render_row(row) for row in report.rows)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>{STYLE}  </style>
</head>
<body>
<div class="container">
  <h1>{title}</h1>
  <h2><b>Employee: </b>{escape(report.employee_name)}</h2>
  <table>
    <thead>
    <tr>{header_cells}</tr>
    </thead>
    <tbody>
{rows}
    </tbody>
    <tfoot>
    <tr class="total">
      <td colspan="{len(COLUMN_HEADERS) - 1}">Monthly Total</td>
      <td>{escape(report.total_hours_label)}</td>
    </tr>
    </tfoot>
  </table>
</div>
</body>
</html>
"""

    def _render_row(self, row: ReportRow) -> str:
        cells = (row.date, row.entry1, row.exit1, row.entry2, row.exit2, row.hours_label)
        return "    <tr>" + "".join(f"<td>{escape(c)}</td>" for c in cells) + "</tr>"

    def render_bytes(self, report: MonthlyReport) -> bytes:
        return self.render(report).encode("utf-8")

    def write(self, report: MonthlyReport, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(report), encoding="utf-8")
        return output_path
