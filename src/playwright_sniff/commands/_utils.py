"""Shared helpers for the results commands.

Row builders are plain functions over a ReportCollection so they can be used
(and tested) without the ReplKit2 app.

PUBLIC API:
  - table_error_response: Log a command failure and return an empty table
  - markdown_error_response: Error dict for markdown commands
  - summary_rows, show_stopper_rows, slow_request_rows, failure_rows: Table rows
"""

import logging
from typing import Any

from playwright_sniff.types import ReportCollection, RequestFailure
from playwright_sniff.utils import format_duration, truncate_url

logger = logging.getLogger(__name__)

_MISSING = "-"


def table_error_response(message: str) -> list[dict[str, Any]]:
    """Tables show nothing on error; the message goes to the log."""
    logger.warning(f"Command failed: {message}")
    return []


def markdown_error_response(message: str) -> dict[str, Any]:
    return {"elements": [{"type": "text", "content": f"Error: {message}"}], "frontmatter": {"status": "error"}}


def _ms(value: float | None) -> str:
    return format_duration(value) if value is not None else _MISSING


def summary_rows(collection: ReportCollection) -> list[dict[str, Any]]:
    rows = []
    for report in collection.reports:
        rows.append(
            {
                "Test": report.test_name or _MISSING,
                "Result": "passed" if report.passed else "failed",
                "Steps": len(report.page_load_steps),
                "Slow": sum(1 for s in report.page_load_steps if s.slow),
                "Avg Load": _ms(report.avg_load_time),
                "Avg Request": _ms(report.avg_request_time),
                "Failures": len(report.failures),
                "Showstoppers": len(report.show_stoppers),
            }
        )
    return rows


def show_stopper_rows(collection: ReportCollection, test: str | None = None) -> list[dict[str, Any]]:
    return [
        {
            "Test": report.test_name or _MISSING,
            "Label": s.label,
            "Error": s.critical_error,
            "Screenshot": s.screenshot_path or _MISSING,
        }
        for report in collection.reports
        if test is None or report.test_name == test
        for s in report.show_stoppers
    ]


def slow_request_rows(collection: ReportCollection, limit: int = 20, max_url: int = 80) -> list[dict[str, Any]]:
    """Slow requests across all tests, slowest first."""
    requests = [(report.test_name, r) for report in collection.reports for r in report.slow_requests]
    requests.sort(key=lambda item: item[1].duration_ms, reverse=True)

    return [
        {
            "Test": test_name or _MISSING,
            "Method": r.method,
            "URL": truncate_url(r.url, max_url),
            "Duration": format_duration(r.duration_ms),
        }
        for test_name, r in requests[:limit]
    ]


def failure_rows(collection: ReportCollection, kind: str | None = None, max_url: int = 60) -> list[dict[str, Any]]:
    rows = []
    for report in collection.reports:
        for f in report.failures:
            if kind and f.kind.value != kind:
                continue
            is_request = isinstance(f, RequestFailure)
            rows.append(
                {
                    "Test": report.test_name or _MISSING,
                    "Type": f.kind.value,
                    "Error": f.error,
                    "URL": truncate_url(f.request_url, max_url) if is_request else _MISSING,
                    "Method": f.request_method if is_request else _MISSING,
                    "Status": str(f.request_status) if is_request and f.request_status else _MISSING,
                }
            )
    return rows
