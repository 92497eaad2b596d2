"""Tests for the pytest plugin: option resolution and the sniff fixture."""

import json
from pathlib import Path

import pytest

from playwright_sniff import ConfigError
from playwright_sniff.pytest_plugin import options_from_pytest_config


class FakeConfig:
    def __init__(self, ini=None, **options):
        self.ini = ini or {}
        self.options = options

    def getini(self, name):
        return self.ini.get(name, "")

    def getoption(self, name, default=None):
        return self.options.get(name, default)


@pytest.fixture(autouse=True)
def no_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_unset_values_keep_defaults():
    options = options_from_pytest_config(FakeConfig())
    assert options.slow_threshold == 2000
    assert options.capture_screenshots is True


def test_ini_values_are_parsed():
    options = options_from_pytest_config(
        FakeConfig(
            ini={
                "sniff_slow_threshold": "1500",
                "sniff_capture_screenshots": "false",
                "sniff_output_file": "reports/results.json",
            }
        )
    )
    assert options.slow_threshold == 1500
    assert options.capture_screenshots is False
    assert options.output_file == Path("reports/results.json")


def test_command_line_wins_over_ini():
    options = options_from_pytest_config(
        FakeConfig(
            ini={"sniff_slow_threshold": "1500", "sniff_capture_screenshots": "yes"},
            sniff_slow_threshold=800.0,
            sniff_no_screenshots=True,
        )
    )
    assert options.slow_threshold == 800
    assert options.capture_screenshots is False


def test_ini_wins_over_config_file(tmp_path):
    (tmp_path / "sniff.toml").write_text("[default]\nslow_threshold = 3000\nscreenshot_dir = 'shots'\n")
    options = options_from_pytest_config(FakeConfig(ini={"sniff_slow_threshold": "1000"}))
    assert options.slow_threshold == 1000
    assert options.screenshot_dir == Path("shots")


def test_bad_ini_threshold_is_a_config_error():
    with pytest.raises(ConfigError, match="sniff_slow_threshold"):
        options_from_pytest_config(FakeConfig(ini={"sniff_slow_threshold": "fast"}))


PAGE_CONFTEST = """
import pytest


class Page:
    def __init__(self):
        self.handlers = {}

    def on(self, event, f):
        self.handlers.setdefault(event, []).append(f)

    def remove_listener(self, event, f):
        self.handlers[event].remove(f)

    async def screenshot(self, *, path):
        return b""

    async def add_locator_handler(self, locator, handler):
        pass

    async def remove_locator_handler(self, locator):
        pass


@pytest.fixture
def page():
    return Page()
"""


def test_sniff_fixture_monitors_each_test(pytester):
    pytester.makeconftest(PAGE_CONFTEST)
    pytester.makeini("[pytest]\nsniff_capture_screenshots = false\n")
    pytester.makepyfile(
        """
        import pytest


        @pytest.mark.asyncio
        async def test_clean(sniff):
            assert sniff.is_monitoring
            assert sniff.get_results().test_name == "test_clean"

            async def open_page():
                return None

            await sniff.measure_action(open_page, "Open")


        @pytest.mark.asyncio
        async def test_broken(sniff):
            async def submit():
                raise RuntimeError("boom")

            await sniff.measure_action(submit, "Submit")
        """
    )

    result = pytester.runpytest()

    result.assert_outcomes(passed=2, errors=1)
    result.stdout.fnmatch_lines(["*ShowStopperError: Test 'test_broken' failed due to 1 showstopper(s)*"])

    data = json.loads((pytester.path / "sniffing-results.json").read_text())
    reports = {r["test_name"]: r for r in data["report_data"]}
    assert reports["test_clean"]["passed"] is True
    assert reports["test_broken"]["passed"] is False
    assert (pytester.path / "sniffing-report.html").exists()
