"""Results table commands.

PUBLIC API:
  - summary: One row per monitored test
  - showstoppers: Showstoppers of every (or one) test
  - slow: Slow requests across tests, slowest first
  - failures: Non-fatal failures, optionally of one kind
"""

from typing import Optional

from playwright_sniff.app import app
from playwright_sniff.commands._utils import (
    failure_rows,
    show_stopper_rows,
    slow_request_rows,
    summary_rows,
    table_error_response,
)
from playwright_sniff.errors import ReportError
from playwright_sniff.sinks import read_collection


@app.command(
    display="table",
    headers=["Test", "Result", "Steps", "Slow", "Avg Load", "Avg Request", "Failures", "Showstoppers"],
)
def summary(state, file: Optional[str] = None):
    """Summarize every test in the results file.

    Args:
        file: Results file (default: configured output_file)
    """
    try:
        collection = read_collection(state.resolve(file))
    except ReportError as e:
        return table_error_response(str(e))
    return summary_rows(collection)


@app.command(display="table", headers=["Test", "Label", "Error", "Screenshot"])
def showstoppers(state, test: Optional[str] = None, file: Optional[str] = None):
    """List showstoppers, optionally for a single test."""
    try:
        collection = read_collection(state.resolve(file))
    except ReportError as e:
        return table_error_response(str(e))
    return show_stopper_rows(collection, test=test)


@app.command(display="table", headers=["Test", "Method", "URL", "Duration"])
def slow(state, limit: int = 20, file: Optional[str] = None):
    """Show the slowest requests above each test's threshold.

    Args:
        limit: Max results (default: 20)
        file: Results file (default: configured output_file)
    """
    try:
        collection = read_collection(state.resolve(file))
    except ReportError as e:
        return table_error_response(str(e))
    return slow_request_rows(collection, limit=limit)


@app.command(display="table", headers=["Test", "Type", "Error", "URL", "Method", "Status"])
def failures(state, kind: Optional[str] = None, file: Optional[str] = None):
    """List non-fatal failures.

    Args:
        kind: Only "console", "request" or "custom" failures
        file: Results file (default: configured output_file)
    """
    try:
        collection = read_collection(state.resolve(file))
    except ReportError as e:
        return table_error_response(str(e))
    return failure_rows(collection, kind=kind)
