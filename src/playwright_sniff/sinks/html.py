"""HTML rendering of a report collection.

``render_html`` is a pure collection -> text function backed by the Jinja2
templates shipped in ``playwright_sniff/templates``.

PUBLIC API:
  - render_html: Render a collection to an HTML document
  - write_html: Render and write to a file
  - summarize: Cross-test figures shown at the top of the report
  - badness_percentage: How far an average exceeds the threshold (0-100)
"""

from dataclasses import dataclass
from datetime import datetime
import logging
from pathlib import Path

from jinja2 import Environment, PackageLoader, select_autoescape

from .. import __version__
from ..errors import ReportError
from ..types import RequestDetail, ReportCollection, ShowStopper, Failure
from ..utils import truncate_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Summary:
    """Figures aggregated across every report in a collection."""

    overall_passed: bool
    passed_tests: int
    failed_tests: int
    slow_threshold: float
    avg_load_time: float
    avg_request_time: float | None
    slow_requests: tuple[RequestDetail, ...]
    failures: tuple[Failure, ...]
    show_stoppers: tuple[tuple[str, ShowStopper], ...]
    fill_percentage: float
    gauge_class: str


def badness_percentage(
    actual: float, threshold: float, max_percentage: float = 100, bad_multiplier: float = 2
) -> float:
    """Percentage of the way from threshold to threshold * bad_multiplier.

    Returns 0 at or below the threshold and caps at max_percentage.
    """
    if actual <= threshold:
        return 0

    max_exceed = threshold * (bad_multiplier - 1)
    if max_exceed <= 0:
        return max_percentage

    percentage = min((actual - threshold) / max_exceed * max_percentage, max_percentage)
    return round(percentage, 2)


def gauge_class(percentage: float) -> str:
    if percentage <= 10:
        return "excellent"
    if percentage <= 30:
        return "good"
    if percentage <= 50:
        return "moderate"
    if percentage <= 70:
        return "slow"
    return "very-slow"


def duration_class(duration: float, threshold: float) -> str:
    """CSS class for a duration: critical past 1.5x threshold, warning past it."""
    if duration > threshold * 1.5:
        return "critical"
    if duration > threshold:
        return "warning"
    return "normal"


def status_class(status: int | None) -> str:
    return f"code-{status // 100}xx" if status else ""


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


def summarize(collection: ReportCollection) -> Summary:
    """Aggregate the per-test reports of a collection.

    Averages are means of the per-test averages, skipping tests without one.
    The threshold is taken from the first report.
    """
    reports = collection.reports
    passed_tests = sum(1 for r in reports if r.passed)
    slow_threshold = reports[0].slow_threshold if reports else 0

    avg_load_time = _mean([r.avg_load_time for r in reports if r.avg_load_time is not None]) or 0
    avg_request_time = _mean([r.avg_request_time for r in reports if r.avg_request_time is not None])
    fill = badness_percentage(avg_load_time, slow_threshold)

    return Summary(
        overall_passed=all(r.passed for r in reports),
        passed_tests=passed_tests,
        failed_tests=len(reports) - passed_tests,
        slow_threshold=slow_threshold,
        avg_load_time=avg_load_time,
        avg_request_time=avg_request_time,
        slow_requests=tuple(req for r in reports for req in r.slow_requests),
        failures=tuple(f for r in reports for f in r.failures),
        show_stoppers=tuple((r.test_name, s) for r in reports for s in r.show_stoppers),
        fill_percentage=fill,
        gauge_class=gauge_class(fill),
    )


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("playwright_sniff", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["truncate_url"] = truncate_url
    env.filters["duration_class"] = duration_class
    env.filters["status_class"] = status_class
    return env


def render_html(collection: ReportCollection, generated_at: datetime | None = None) -> str:
    """Render a collection to a standalone HTML document."""
    template = _environment().get_template("report.html")
    return template.render(
        reports=collection.reports,
        summary=summarize(collection),
        generated_at=(generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S"),
        version=__version__,
    )


def write_html(collection: ReportCollection, path: Path) -> str:
    """Render collection into path.

    Returns:
        "created" or "updated" depending on whether the file existed.

    Raises:
        ReportError: If the file cannot be written.
    """
    action = "updated" if path.exists() else "created"
    html = render_html(collection)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Error writing HTML report {path}: {e}") from e
    logger.debug(f"Rendered {len(collection.reports)} report(s) to {path}")
    return action
