"""Report aggregation.

PUBLIC API:
  - build_report: Project session state into an immutable SniffReport
  - select_slow_requests: Requests above threshold, slowest first
"""

from datetime import datetime
from typing import Iterable

from .session import SessionState
from .types import RequestDetail, SniffReport
from .utils import calculate_average


def select_slow_requests(details: Iterable[RequestDetail], slow_threshold: float) -> tuple[RequestDetail, ...]:
    """Requests slower than the threshold, sorted descending.

    ``sorted`` is stable, so equal durations keep their arrival order.
    """
    slow = [d for d in details if d.duration_ms > slow_threshold]
    return tuple(sorted(slow, key=lambda d: d.duration_ms, reverse=True))


def build_report(session: SessionState, slow_threshold: float, now: datetime | None = None) -> SniffReport:
    """Build a snapshot of the session without modifying it.

    Valid in every lifecycle state; an idle session yields an empty report
    with ``passed`` True and both averages None.

    Args:
        session: Session to project.
        slow_threshold: Threshold in ms recorded in the report and used for
            slow request selection.
        now: Report timestamp, defaults to the current local time.

    Returns:
        New SniffReport holding copies of the session collections.
    """
    successful = [t.duration_ms for t in session.timings if not t.failed]
    show_stoppers = tuple(session.show_stoppers)

    return SniffReport(
        timestamp=(now or datetime.now()).isoformat(sep=" ", timespec="seconds"),
        passed=len(show_stoppers) == 0,
        show_stoppers=show_stoppers,
        slow_threshold=slow_threshold,
        page_load_steps=tuple(session.timings),
        avg_load_time=calculate_average(successful),
        avg_request_time=calculate_average(session.request_durations),
        slow_requests=select_slow_requests(session.request_details, slow_threshold),
        failures=tuple(session.failures),
        test_name=session.test_name,
    )
