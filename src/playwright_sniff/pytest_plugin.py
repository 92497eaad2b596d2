"""pytest integration for playwright-sniff.

Registered through the ``pytest11`` entry point. Provides:

- ``sniff_options``: SniffOptions from sniff.toml, ini values and command
  line flags, in increasing priority.
- ``sniff``: a started PlaywrightSniff on the async ``page`` fixture, named
  after the test and stopped at teardown. A test with showstoppers errors
  in teardown through ShowStopperError.

The ``page`` fixture must come from an asyncio Playwright plugin such as
pytest-playwright-asyncio.
"""

from typing import Any

import pytest
import pytest_asyncio

from .config import load_options, SniffOptions
from .errors import ConfigError
from .monitor import PlaywrightSniff

_INI_OPTIONS = {
    "slow_threshold": "Milliseconds above which actions and requests are slow",
    "capture_screenshots": "Capture a screenshot for every showstopper",
    "screenshot_dir": "Directory for error screenshots",
    "output_file": "JSON results file",
    "output_html": "HTML report file",
}


def pytest_addoption(parser):
    group = parser.getgroup("sniff", "playwright-sniff monitoring")
    group.addoption(
        "--sniff-slow-threshold",
        action="store",
        type=float,
        default=None,
        dest="sniff_slow_threshold",
        help="Slow threshold in milliseconds (overrides ini and sniff.toml)",
    )
    group.addoption(
        "--sniff-no-screenshots",
        action="store_true",
        default=False,
        dest="sniff_no_screenshots",
        help="Disable error screenshots",
    )
    for name, help_text in _INI_OPTIONS.items():
        parser.addini(f"sniff_{name}", help_text, default="")


def _parse_ini(name: str, value: str) -> Any:
    if name == "slow_threshold":
        try:
            return float(value)
        except ValueError as e:
            raise ConfigError(f"sniff_slow_threshold must be a number, got {value!r}") from e
    if name == "capture_screenshots":
        return value.strip().lower() in ("1", "true", "yes", "on")
    return value


def options_from_pytest_config(config: Any) -> SniffOptions:
    """Resolve monitor options for a pytest run.

    Args:
        config: pytest Config (anything with getini/getoption).

    Returns:
        Options merged as sniff.toml < ini < command line.
    """
    overrides: dict[str, Any] = {}
    for name in _INI_OPTIONS:
        value = config.getini(f"sniff_{name}")
        if value in (None, "", []):
            continue
        overrides[name] = _parse_ini(name, value)

    threshold = config.getoption("sniff_slow_threshold", default=None)
    if threshold is not None:
        overrides["slow_threshold"] = threshold
    if config.getoption("sniff_no_screenshots", default=False):
        overrides["capture_screenshots"] = False

    return load_options(**overrides)


@pytest.fixture
def sniff_options(pytestconfig) -> SniffOptions:
    return options_from_pytest_config(pytestconfig)


@pytest_asyncio.fixture
async def sniff(page, sniff_options, request):
    monitor = PlaywrightSniff(page, sniff_options, test_name=request.node.name)
    await monitor.start()
    yield monitor
    await monitor.stop()
