"""Session state for one monitored unit of work.

The session owns every collection the monitor accumulates. All mutations are
appends (plus a single key store for request start instants), so callbacks
interleaving on the event loop cannot leave a list half-written.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .types import ActionTiming, Failure, RequestDetail, SessionStatus, ShowStopper


@dataclass
class SessionState:
    """Lifecycle status and accumulated observations.

    Attributes:
        status: Current lifecycle state.
        test_name: Name of the monitored test.
        started_at: When the current run started, None before the first start.
        timings: Measured actions in call order.
        failures: Non-fatal observations.
        show_stoppers: Fatal observations.
        request_starts: URL -> start instant (monotonic seconds), last start wins.
        request_durations: Raw request durations in ms, for averaging.
        request_details: Completed requests with a known start.
    """

    status: SessionStatus = SessionStatus.IDLE
    test_name: str = ""
    started_at: datetime | None = None
    timings: list[ActionTiming] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)
    show_stoppers: list[ShowStopper] = field(default_factory=list)
    request_starts: dict[str, float] = field(default_factory=dict)
    request_durations: list[float] = field(default_factory=list)
    request_details: list[RequestDetail] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    def begin(self, test_name: str, started_at: datetime) -> None:
        """Clear previous observations and enter RUNNING."""
        self.timings = []
        self.failures = []
        self.show_stoppers = []
        self.request_starts = {}
        self.request_durations = []
        self.request_details = []
        self.test_name = test_name
        self.started_at = started_at
        self.status = SessionStatus.RUNNING

    def end(self) -> None:
        self.status = SessionStatus.STOPPED

    def record_timing(self, timing: ActionTiming) -> None:
        self.timings.append(timing)

    def record_failure(self, failure: Failure) -> None:
        self.failures.append(failure)

    def record_show_stopper(self, show_stopper: ShowStopper) -> None:
        self.show_stoppers.append(show_stopper)

    def mark_request_started(self, url: str, now: float) -> None:
        self.request_starts[url] = now

    def mark_request_finished(self, url: str, method: str, now: float) -> RequestDetail | None:
        """Record a finished request if its start was observed.

        Args:
            url: Request URL.
            method: HTTP method.
            now: Finish instant from the same clock as the start.

        Returns:
            The recorded detail, or None when the start was never seen.
        """
        started = self.request_starts.get(url)
        if started is None:
            return None

        duration_ms = round((now - started) * 1000, 2)
        detail = RequestDetail(url=url, duration_ms=duration_ms, method=method)
        self.request_durations.append(duration_ms)
        self.request_details.append(detail)
        return detail
