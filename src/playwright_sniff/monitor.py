"""PlaywrightSniff - monitoring facade for a Playwright page.

Ties the session, action timer, event bridge, aggregator and report sinks
together behind the start/measure/stop lifecycle used by tests.
"""

from datetime import datetime
import logging
from pathlib import Path
import time
from typing import Any, Callable

from .config import SniffOptions
from .errors import ReportError, ShowStopperError
from .listeners import EventBridge, PageLike
from .report import build_report
from .screenshots import capture_error_screenshot
from .session import SessionState
from .sinks import JsonReportStore, read_collection, write_html
from .timer import Action, ActionTimer
from .types import CustomFailure, Failure, LogLevel, ReportCollection, SessionStatus, ShowStopper, SniffReport

logger = logging.getLogger(__name__)


class PlaywrightSniff:
    """Monitors a page: times actions, classifies failures, writes reports.

    Mutating calls made while the session is not running are ignored with a
    warning, except measure_action which still runs the action untimed.

    Attributes:
        page: Monitored page.
        options: Resolved monitoring options.
        session: Lifecycle state and accumulated observations.
        timer: Times actions for the session.
        bridge: Page event subscriptions.
    """

    DEFAULT_OPTIONS = SniffOptions()

    def __init__(
        self,
        page: PageLike,
        options: SniffOptions | None = None,
        *,
        test_name: str = "",
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize monitor for a page.

        Args:
            page: Playwright async Page (or anything implementing PageLike).
            options: Monitoring options. Defaults to DEFAULT_OPTIONS.
            test_name: Name recorded in reports, can be changed before start().
            clock: Monotonic clock in seconds used for every duration.
        """
        self.page = page
        self.options = options or self.DEFAULT_OPTIONS
        self.session = SessionState(test_name=test_name)
        self.timer = ActionTimer(self.session, self.options, page, clock)
        self.bridge = EventBridge(self.session, page, self.add_show_stopper, clock)
        self._watched_locators: list[Any] = []

    def _log(self, message: str, level: LogLevel) -> None:
        self.options.logger(message, level)

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def is_monitoring(self) -> bool:
        return self.session.is_running

    async def start(self, test_name: str | None = None) -> None:
        """Start monitoring page actions.

        Clears everything recorded by a previous run. No-op with a warning
        if already running.
        """
        if self.session.is_running:
            self._log("Monitoring already started", LogLevel.WARN)
            return

        self.session.begin(test_name if test_name is not None else self.session.test_name, datetime.now())
        self.bridge.attach()
        self._log(f"Started monitoring Playwright actions for {self.session.test_name}", LogLevel.INFO)

    async def stop(self) -> None:
        """Stop monitoring, persist the report and fail on showstoppers.

        Raises:
            ShowStopperError: If any showstopper was recorded.
        """
        if not self.session.is_running:
            self._log("Monitoring not started", LogLevel.WARN)
            return

        self.bridge.detach()
        await self._remove_watchers()

        # Report errors are logged by the writers and must not block the stop
        try:
            self.save_report()
        except ReportError:
            pass
        try:
            self.generate_html_report()
        except ReportError:
            pass

        self.session.end()
        self._log(f"Stopped monitoring Playwright actions for {self.session.test_name}", LogLevel.INFO)

        if self.has_show_stoppers():
            raise ShowStopperError(self.session.show_stoppers, self.session.test_name)

    async def __aenter__(self) -> "PlaywrightSniff":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def measure_action(self, action: Action, label: str) -> Any:
        """Measure the execution time of an action.

        Exceptions raised by the action are recorded as showstoppers and
        swallowed while monitoring. Before start() the action simply runs.

        Args:
            action: Zero-argument callable returning an awaitable.
            label: Label to identify the action.
        """
        return await self.timer.measure(action, label)

    def add_failure(self, error: str | Failure) -> None:
        """Add a non-fatal failure.

        Args:
            error: Free text (recorded as a custom failure) or a failure record.
        """
        if not self.session.is_running:
            self._log("Monitoring not started", LogLevel.WARN)
            return

        failure = CustomFailure(error=error) if isinstance(error, str) else error
        self.session.record_failure(failure)
        self._log(f"Failure added: {failure.error}", LogLevel.WARN)

    async def add_show_stopper(self, label: str, critical_error: str) -> None:
        """Add a showstopper, with a screenshot when enabled."""
        if not self.session.is_running:
            self._log("Monitoring not started", LogLevel.WARN)
            return

        screenshot_path = None
        if self.options.capture_screenshots:
            screenshot_path = await capture_error_screenshot(self.page, self.options.screenshot_dir, label, self._log)

        self.session.record_show_stopper(ShowStopper(label, critical_error, screenshot_path))
        self._log(f"Showstopper added: {label} - {critical_error}", LogLevel.ERROR)

    async def watch_for(self, locator: Any, label: str = "Unexpected alert") -> None:
        """Turn a recurring UI element into a showstopper.

        Registers a Playwright locator handler; whenever the element shows up
        its text contents become a showstopper. The handler is removed on stop().

        Args:
            locator: Playwright Locator of the unexpected element.
            label: Showstopper label.
        """
        if not self.session.is_running:
            self._log("Monitoring not started", LogLevel.WARN)
            return

        async def handler(_locator: Any = None) -> None:
            texts = await locator.all_text_contents()
            await self.add_show_stopper(label, ", ".join(texts) if texts else "")

        try:
            await self.page.add_locator_handler(locator, handler)
            self._watched_locators.append(locator)
        except Exception as e:
            self._log(f"Could not set up alert handler: {e}", LogLevel.WARN)

    async def _remove_watchers(self) -> None:
        while self._watched_locators:
            locator = self._watched_locators.pop()
            try:
                await self.page.remove_locator_handler(locator)
            except Exception as e:
                logger.warning(f"Failed to remove locator handler: {e}")

    def get_results(self) -> SniffReport:
        """Current results as an immutable snapshot. Safe in any state."""
        return build_report(self.session, self.options.slow_threshold)

    def has_show_stoppers(self) -> bool:
        return len(self.session.show_stoppers) > 0

    def get_show_stoppers(self) -> tuple[ShowStopper, ...]:
        return tuple(self.session.show_stoppers)

    def set_test_name(self, name: str) -> None:
        self.session.test_name = name

    def save_report(self, output_file: Path | str | None = None) -> Path | None:
        """Append the current results to the JSON results file.

        Args:
            output_file: Override for options.output_file.

        Returns:
            Path written, or None when JSON output is disabled.

        Raises:
            ReportError: If the file cannot be written.
        """
        path = output_file or self.options.output_file
        if path is None:
            return None

        try:
            return JsonReportStore(path, self._log).append(self.get_results())
        except ReportError as e:
            self._log(str(e), LogLevel.ERROR)
            raise

    def generate_html_report(self, output_html: Path | str | None = None) -> Path | None:
        """Render the HTML report from the JSON results file.

        When JSON output is disabled the report covers the current results only.

        Args:
            output_html: Override for options.output_html.

        Returns:
            Path written, or None when HTML output is disabled.

        Raises:
            ReportError: If the results file is unreadable or the HTML cannot be written.
        """
        path = output_html or self.options.output_html
        if path is None:
            return None
        path = Path(path)

        try:
            if self.options.output_file is None:
                collection = ReportCollection(reports=[self.get_results()])
            else:
                collection = read_collection(Path(self.options.output_file))
            action = write_html(collection, path)
        except ReportError as e:
            self._log(str(e), LogLevel.ERROR)
            raise

        self._log(f"HTML Report {action} at {path}", LogLevel.INFO)
        return path
