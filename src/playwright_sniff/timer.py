"""Action timing.

Wraps an awaitable unit of work, measures its wall time and routes the
outcome into the session. A failing action is recorded as a showstopper and
never re-raised, so the remaining measured actions of a test still run.
"""

import logging
import time
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from .classify import clean_error_message
from .config import SniffOptions
from .screenshots import capture_error_screenshot
from .session import SessionState
from .types import ActionTiming, LogLevel, ShowStopper

if TYPE_CHECKING:
    from .listeners import PageLike

logger = logging.getLogger(__name__)

type Action = Callable[[], Awaitable[Any]]
type Clock = Callable[[], float]


class ActionTimer:
    """Measures actions for one session.

    Attributes:
        session: Session receiving timings and showstoppers.
        options: Monitor options (threshold, screenshots, log hook).
        page: Page used for error screenshots.
        clock: Monotonic clock returning seconds.
    """

    def __init__(self, session: SessionState, options: SniffOptions, page: "PageLike", clock: Clock = time.monotonic):
        self.session = session
        self.options = options
        self.page = page
        self.clock = clock

    async def measure(self, action: Action, label: str) -> Any:
        """Run action, timing it when the session is running.

        Args:
            action: Zero-argument callable returning an awaitable.
            label: Name shown for this step in the report.

        Returns:
            The action's result when the session is not running (pass-through),
            otherwise None.
        """
        log = self.options.logger

        if not self.session.is_running:
            log("Monitoring not started", LogLevel.WARN)
            return await action()

        start = self.clock()
        try:
            await action()
        except Exception as e:
            await self._record_failure(label, e)
            return None

        duration_ms = round((self.clock() - start) * 1000, 2)
        timing = ActionTiming.succeeded(label, duration_ms, self.options.slow_threshold)
        self.session.record_timing(timing)

        if timing.slow:
            log(
                f"Slow action detected: {label} took {duration_ms}ms (threshold: {self.options.slow_threshold}ms)",
                LogLevel.WARN,
            )
        else:
            logger.debug(f"{label} took {duration_ms}ms")
        return None

    async def _record_failure(self, label: str, error: Exception) -> None:
        message = clean_error_message(error)
        self.session.record_timing(ActionTiming.failure(label))

        screenshot_path = None
        if self.options.capture_screenshots:
            screenshot_path = await capture_error_screenshot(
                self.page, self.options.screenshot_dir, label, self.options.logger
            )

        self.session.record_show_stopper(ShowStopper(label=label, critical_error=message, screenshot_path=screenshot_path))
        self.options.logger(f'Showstopper detected during "{label}": {message}', LogLevel.ERROR)
