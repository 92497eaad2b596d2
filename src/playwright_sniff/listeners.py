"""Bridge between Playwright page events and the monitoring session.

The bridge subscribes to five page events, runs each observation through the
classifier and records the result. Every registration is kept as a
Subscription so stop() can remove exactly what start() added.

PUBLIC API:
  - PageLike: The subset of playwright.async_api.Page the monitor uses
  - Subscription: One registered event handler
  - EventBridge: Attaches/detaches the monitoring handlers
"""

from dataclasses import dataclass
import logging
import time
from typing import Any, Awaitable, Callable, Protocol

from .classify import classify_console, classify_request_failure, classify_server_error, is_server_error
from .session import SessionState

logger = logging.getLogger(__name__)

type Escalate = Callable[[str, str], Awaitable[None]]


class PageLike(Protocol):
    """Minimal page surface: event subscription, screenshots and locator handlers."""

    def on(self, event: str, f: Callable[..., Any]) -> None: ...

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None: ...

    async def screenshot(self, *, path: str) -> bytes: ...

    async def add_locator_handler(self, locator: Any, handler: Callable[..., Awaitable[Any]]) -> None: ...

    async def remove_locator_handler(self, locator: Any) -> None: ...


@dataclass(frozen=True)
class Subscription:
    """Handle for a handler registered on the page."""

    event: str
    handler: Callable[..., Any]


class EventBridge:
    """Forwards classified page events into a session.

    Attributes:
        session: Session receiving failures and request timings.
        page: Event source.
        escalate: Coroutine called with (label, critical_error) for server errors.
        clock: Monotonic clock returning seconds, shared with the action timer.
        subscriptions: Handlers currently registered on the page.
    """

    def __init__(
        self,
        session: SessionState,
        page: PageLike,
        escalate: Escalate,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session
        self.page = page
        self.escalate = escalate
        self.clock = clock
        self.subscriptions: list[Subscription] = []

    @property
    def attached(self) -> bool:
        return bool(self.subscriptions)

    def attach(self) -> None:
        """Register all handlers. Calling twice does not double-register."""
        if self.attached:
            logger.debug("Event bridge already attached")
            return

        for event, handler in (
            ("console", self._on_console),
            ("requestfailed", self._on_request_failed),
            ("request", self._on_request),
            ("requestfinished", self._on_request_finished),
            ("response", self._on_response),
        ):
            self.page.on(event, handler)
            self.subscriptions.append(Subscription(event, handler))

    def detach(self) -> None:
        """Remove every handler added by attach()."""
        while self.subscriptions:
            sub = self.subscriptions.pop()
            try:
                self.page.remove_listener(sub.event, sub.handler)
            except Exception as e:
                logger.warning(f"Failed to remove {sub.event} listener: {e}")

    def _on_console(self, msg) -> None:
        if not self.session.is_running:
            return
        failure = classify_console(msg.type, msg.text)
        if failure:
            self.session.record_failure(failure)

    async def _on_request_failed(self, request) -> None:
        if not self.session.is_running:
            return

        status = None
        try:
            response = await request.response()
            if response is not None:
                status = response.status
        except Exception as e:
            logger.debug(f"No response for failed request {request.url}: {e}")

        if not self.session.is_running:
            return
        self.session.record_failure(classify_request_failure(request.url, request.method, request.failure, status))

    def _on_request(self, request) -> None:
        if self.session.is_running:
            self.session.mark_request_started(request.url, self.clock())

    def _on_request_finished(self, request) -> None:
        if self.session.is_running:
            self.session.mark_request_finished(request.url, request.method, self.clock())

    async def _on_response(self, response) -> None:
        if not self.session.is_running or not is_server_error(response.status):
            return

        body = None
        try:
            body = await response.text()
        except Exception as e:
            logger.debug(f"Could not read body of {response.url}: {e}")

        show_stopper = classify_server_error(response.request.method, response.url, response.status, body)
        if show_stopper:
            await self.escalate(show_stopper.label, show_stopper.critical_error)
