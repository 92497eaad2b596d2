"""Type definitions for playwright-sniff.

Records produced while a session runs are frozen dataclasses appended to the
session's lists. Failures are a closed set of variants, one per kind, so each
kind carries exactly the fields that make sense for it.
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Callable, ClassVar


class LogLevel(Enum):
    """Levels understood by the ``logger`` option."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level."""
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


type LogFn = Callable[[str, LogLevel], None]


class SessionStatus(Enum):
    """Monitoring lifecycle states."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class FailureKind(Enum):
    CONSOLE = "console"
    REQUEST = "request"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ActionTiming:
    """Timing of one measured action.

    Failed actions always carry ``duration_ms == 0`` and ``slow is False``.
    """

    label: str
    duration_ms: float
    slow: bool = False
    failed: bool = False

    @classmethod
    def succeeded(cls, label: str, duration_ms: float, slow_threshold: float) -> "ActionTiming":
        return cls(label=label, duration_ms=duration_ms, slow=duration_ms > slow_threshold, failed=False)

    @classmethod
    def failure(cls, label: str) -> "ActionTiming":
        return cls(label=label, duration_ms=0, slow=False, failed=True)

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "duration_ms": self.duration_ms, "slow": self.slow, "failed": self.failed}

    @classmethod
    def from_dict(cls, data: dict) -> "ActionTiming":
        return cls(
            label=data.get("label", ""),
            duration_ms=data.get("duration_ms", 0),
            slow=bool(data.get("slow", False)),
            failed=bool(data.get("failed", False)),
        )


@dataclass(frozen=True)
class ConsoleFailure:
    """Console message logged at error severity."""

    kind: ClassVar[FailureKind] = FailureKind.CONSOLE

    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "error": self.error}


@dataclass(frozen=True)
class RequestFailure:
    """Network request that failed to complete."""

    kind: ClassVar[FailureKind] = FailureKind.REQUEST

    error: str
    request_url: str
    request_method: str
    request_status: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "error": self.error,
            "request_url": self.request_url,
            "request_method": self.request_method,
            "request_status": self.request_status,
        }


@dataclass(frozen=True)
class CustomFailure:
    """Free-form note added by the test author."""

    kind: ClassVar[FailureKind] = FailureKind.CUSTOM

    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "error": self.error}


type Failure = ConsoleFailure | RequestFailure | CustomFailure


def failure_from_dict(data: dict) -> Failure:
    """Rebuild a failure variant from its serialized form.

    Args:
        data: Dict produced by a failure's ``to_dict``.

    Returns:
        The matching failure variant. Unknown kinds load as custom notes.
    """
    kind = data.get("kind", FailureKind.CUSTOM.value)
    error = data.get("error") or ""

    if kind == FailureKind.CONSOLE.value:
        return ConsoleFailure(error=error)
    if kind == FailureKind.REQUEST.value:
        return RequestFailure(
            error=error,
            request_url=data.get("request_url", ""),
            request_method=data.get("request_method", ""),
            request_status=data.get("request_status"),
        )
    return CustomFailure(error=error)


@dataclass(frozen=True)
class ShowStopper:
    """Fatal-class observation. One or more of these fails the session."""

    label: str
    critical_error: str
    screenshot_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"label": self.label, "critical_error": self.critical_error, "screenshot_path": self.screenshot_path}

    @classmethod
    def from_dict(cls, data: dict) -> "ShowStopper":
        return cls(
            label=data.get("label", ""),
            critical_error=data.get("critical_error", ""),
            screenshot_path=data.get("screenshot_path"),
        )


@dataclass(frozen=True)
class RequestDetail:
    url: str
    duration_ms: float
    method: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "duration_ms": self.duration_ms, "method": self.method}

    @classmethod
    def from_dict(cls, data: dict) -> "RequestDetail":
        return cls(url=data.get("url", ""), duration_ms=data.get("duration_ms", 0), method=data.get("method", ""))


@dataclass(frozen=True)
class SniffReport:
    """Immutable snapshot of one monitored test.

    Equality ignores ``timestamp`` so two snapshots of unchanged state compare
    equal regardless of when they were taken.

    Attributes:
        timestamp: When the snapshot was built (local time, ISO format).
        passed: True when no showstopper was recorded.
        show_stoppers: Fatal observations in arrival order.
        slow_threshold: Threshold in ms used for the slow flags.
        page_load_steps: Measured actions in call order.
        avg_load_time: Mean duration of successful actions, None if there are none.
        avg_request_time: Mean request duration, None if no request was timed.
        slow_requests: Requests over the threshold, slowest first.
        failures: Non-fatal observations in arrival order.
        test_name: Name of the monitored test.
    """

    timestamp: str = field(compare=False)
    passed: bool
    show_stoppers: tuple[ShowStopper, ...]
    slow_threshold: float
    page_load_steps: tuple[ActionTiming, ...]
    avg_load_time: float | None
    avg_request_time: float | None
    slow_requests: tuple[RequestDetail, ...]
    failures: tuple[Failure, ...]
    test_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "passed": self.passed,
            "show_stoppers": [s.to_dict() for s in self.show_stoppers],
            "slow_threshold": self.slow_threshold,
            "page_load_steps": [t.to_dict() for t in self.page_load_steps],
            "avg_load_time": self.avg_load_time,
            "avg_request_time": self.avg_request_time,
            "slow_requests": [r.to_dict() for r in self.slow_requests],
            "failures": [f.to_dict() for f in self.failures],
            "test_name": self.test_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SniffReport":
        show_stoppers = tuple(ShowStopper.from_dict(s) for s in data.get("show_stoppers", []))
        return cls(
            timestamp=data.get("timestamp", ""),
            passed=bool(data.get("passed", not show_stoppers)),
            show_stoppers=show_stoppers,
            slow_threshold=data.get("slow_threshold", 0),
            page_load_steps=tuple(ActionTiming.from_dict(t) for t in data.get("page_load_steps", [])),
            avg_load_time=data.get("avg_load_time"),
            avg_request_time=data.get("avg_request_time"),
            slow_requests=tuple(RequestDetail.from_dict(r) for r in data.get("slow_requests", [])),
            failures=tuple(failure_from_dict(f) for f in data.get("failures", [])),
            test_name=data.get("test_name", ""),
        )


@dataclass
class ReportCollection:
    """Reports accumulated in one results file.

    Attributes:
        reports: Snapshots in the order they were appended.
        test_runner_pid: Parent process id of the run that owns the file.
    """

    reports: list[SniffReport] = field(default_factory=list)
    test_runner_pid: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "report_data": [r.to_dict() for r in self.reports],
            "test_runner_pid": self.test_runner_pid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReportCollection":
        """Load a collection, rejecting payloads without a report list.

        Raises:
            ValueError: If ``report_data`` is missing or not a list.
        """
        reports = data.get("report_data") if isinstance(data, dict) else None
        if not isinstance(reports, list):
            raise ValueError("report_data must be a list")
        return cls(reports=[SniffReport.from_dict(r) for r in reports], test_runner_pid=data.get("test_runner_pid"))
