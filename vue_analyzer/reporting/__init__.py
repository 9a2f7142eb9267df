"""Console, JSON and HTML renderings of analysis results."""

from __future__ import annotations

from .console import format_report, format_result, truncate
from .html import ComponentRow, HtmlReportRenderer, ReportError, flatten_components
from .json_report import (
    load_json_report,
    render_json,
    result_from_dict,
    result_to_dict,
    write_json_report,
)

__all__ = [
    "ComponentRow",
    "HtmlReportRenderer",
    "ReportError",
    "flatten_components",
    "format_report",
    "format_result",
    "load_json_report",
    "render_json",
    "result_from_dict",
    "result_to_dict",
    "truncate",
    "write_json_report",
]
