"""Shared fixtures: a fake Playwright page and a manual clock.

The fakes implement only what the monitor touches, so the suite runs without
a browser.
"""

from collections import defaultdict
import inspect
from pathlib import Path

import pytest

from playwright_sniff import PlaywrightSniff, SniffOptions


class ManualClock:
    """Monotonic clock advanced by hand, in seconds."""

    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


class RecordingLogger:
    def __init__(self):
        self.records = []

    def __call__(self, message, level):
        self.records.append((message, level))

    def messages(self, level=None):
        return [m for m, lvl in self.records if level is None or lvl is level]


class FakeConsoleMessage:
    def __init__(self, type, text):
        self.type = type
        self.text = text


class FakeResponse:
    def __init__(self, url, status, body="", method="GET", body_error=None):
        self.url = url
        self.status = status
        self.request = FakeRequest(url, method)
        self._body = body
        self._body_error = body_error

    async def text(self):
        if self._body_error:
            raise self._body_error
        return self._body


class FakeRequest:
    def __init__(self, url, method="GET", failure=None, response=None):
        self.url = url
        self.method = method
        self.failure = failure
        self._response = response

    async def response(self):
        return self._response


class FakeLocator:
    def __init__(self, texts):
        self.texts = texts

    async def all_text_contents(self):
        return list(self.texts)


class FakePage:
    """Event emitter with the Page methods the monitor calls."""

    def __init__(self):
        self.listeners = defaultdict(list)
        self.screenshots = []
        self.screenshot_error = None
        self.locator_handlers = {}

    def on(self, event, f):
        self.listeners[event].append(f)

    def remove_listener(self, event, f):
        self.listeners[event].remove(f)

    def listener_count(self):
        return sum(len(handlers) for handlers in self.listeners.values())

    async def emit(self, event, payload):
        for handler in list(self.listeners[event]):
            result = handler(payload)
            if inspect.isawaitable(result):
                await result

    async def screenshot(self, *, path):
        if self.screenshot_error:
            raise self.screenshot_error
        Path(path).write_bytes(b"\x89PNG")
        self.screenshots.append(path)
        return b"\x89PNG"

    async def add_locator_handler(self, locator, handler):
        self.locator_handlers[id(locator)] = handler

    async def remove_locator_handler(self, locator):
        self.locator_handlers.pop(id(locator), None)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def page():
    return FakePage()


@pytest.fixture
def log():
    return RecordingLogger()


@pytest.fixture
def options(tmp_path, log):
    return SniffOptions(
        slow_threshold=2000,
        capture_screenshots=False,
        screenshot_dir=tmp_path / "screenshots",
        output_file=tmp_path / "sniffing-results.json",
        output_html=tmp_path / "sniffing-report.html",
        logger=log,
    )


@pytest.fixture
def sniff(page, options, clock):
    return PlaywrightSniff(page, options, test_name="checkout", clock=clock)


@pytest.fixture
async def running(sniff):
    await sniff.start()
    return sniff
