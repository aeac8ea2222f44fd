"""Report rendering and the ``rpgscrape`` command-line interface."""

from rpgmaker_scraper.ui.render import (
    ConsoleReportWriter,
    color_allowed,
    render_json_report,
    render_text_report,
    report_lines,
)

__all__ = [
    "ConsoleReportWriter",
    "color_allowed",
    "render_json_report",
    "render_text_report",
    "report_lines",
]
