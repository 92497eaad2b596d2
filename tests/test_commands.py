"""Tests for the results browser commands and their row builders."""

import pytest

from playwright_sniff import (
    ActionTiming,
    ConsoleFailure,
    CustomFailure,
    ReportCollection,
    RequestDetail,
    RequestFailure,
    ShowStopper,
    SniffReport,
)
from playwright_sniff.app import SniffState
from playwright_sniff.commands._utils import (
    failure_rows,
    markdown_error_response,
    show_stopper_rows,
    slow_request_rows,
    summary_rows,
    table_error_response,
)
from playwright_sniff.commands.render import html
from playwright_sniff.commands.results import failures, showstoppers, slow, summary
from playwright_sniff.sinks import write_collection


def make_report(name, **kwargs):
    values = dict(
        timestamp="2025-01-31 14:05:09",
        passed=True,
        show_stoppers=(),
        slow_threshold=2000,
        page_load_steps=(),
        avg_load_time=None,
        avg_request_time=None,
        slow_requests=(),
        failures=(),
        test_name=name,
    )
    values.update(kwargs)
    return SniffReport(**values)


COLLECTION = ReportCollection(
    reports=[
        make_report(
            "login",
            page_load_steps=(ActionTiming("Open", 250), ActionTiming("Submit", 2500, slow=True)),
            avg_load_time=1380,
            avg_request_time=120.5,
            slow_requests=(RequestDetail("https://a.test/slow", 2100, "GET"),),
            failures=(ConsoleFailure(error="Uncaught TypeError"),),
        ),
        make_report(
            "checkout",
            passed=False,
            show_stoppers=(ShowStopper("GET - https://a.test/api", "Status: 503 - Body: down...", "shot.png"),),
            slow_requests=(RequestDetail("https://a.test/slower", 4000, "POST"),),
            failures=(
                RequestFailure(error="net::ERR_FAILED", request_url="https://a.test/img", request_method="GET"),
                CustomFailure(error="Banner missing"),
            ),
        ),
    ]
)


def test_summary_rows():
    login, checkout = summary_rows(COLLECTION)
    assert login == {
        "Test": "login",
        "Result": "passed",
        "Steps": 2,
        "Slow": 1,
        "Avg Load": "1.38s",
        "Avg Request": "120.5ms",
        "Failures": 1,
        "Showstoppers": 0,
    }
    assert checkout["Result"] == "failed"
    assert checkout["Avg Load"] == "-"
    assert checkout["Showstoppers"] == 1


def test_show_stopper_rows_filter_by_test():
    assert show_stopper_rows(COLLECTION, test="login") == []
    (row,) = show_stopper_rows(COLLECTION)
    assert row == {
        "Test": "checkout",
        "Label": "GET - https://a.test/api",
        "Error": "Status: 503 - Body: down...",
        "Screenshot": "shot.png",
    }


def test_slow_request_rows_sorted_across_tests():
    rows = slow_request_rows(COLLECTION)
    assert [r["URL"] for r in rows] == ["https://a.test/slower", "https://a.test/slow"]
    assert rows[0]["Duration"] == "4.00s"
    assert slow_request_rows(COLLECTION, limit=1) == rows[:1]


def test_failure_rows_by_kind():
    assert [r["Type"] for r in failure_rows(COLLECTION)] == ["console", "request", "custom"]
    (request,) = failure_rows(COLLECTION, kind="request")
    assert request["URL"] == "https://a.test/img"
    assert request["Method"] == "GET"
    assert request["Status"] == "-"


def test_error_responses():
    assert table_error_response("missing file") == []
    response = markdown_error_response("missing file")
    assert response["frontmatter"] == {"status": "error"}
    assert response["elements"][0]["content"] == "Error: missing file"


@pytest.fixture
def results_file(tmp_path):
    path = tmp_path / "results.json"
    write_collection(COLLECTION, path)
    return path


@pytest.fixture
def state(results_file):
    return SniffState(results_file=results_file)


def test_state_resolves_explicit_file(state, results_file, tmp_path):
    assert state.resolve(None) == results_file
    assert state.resolve(str(tmp_path / "other.json")) == tmp_path / "other.json"


def test_table_commands_read_results_file(state):
    assert [row["Test"] for row in summary(state)] == ["login", "checkout"]
    assert [row["Label"] for row in showstoppers(state, test="checkout")] == ["GET - https://a.test/api"]
    assert [row["Method"] for row in slow(state, limit=1)] == ["POST"]
    assert [row["Type"] for row in failures(state, kind="custom")] == ["custom"]


def test_table_commands_with_missing_file(state, tmp_path):
    missing = str(tmp_path / "missing.json")
    assert summary(state, file=missing) == []
    assert showstoppers(state, file=missing) == []
    assert slow(state, file=missing) == []
    assert failures(state, file=missing) == []


def test_html_command_writes_report(state, tmp_path):
    output = tmp_path / "report" / "index.html"

    response = html(state, output=str(output))

    assert "checkout" in output.read_text()
    assert response.get("frontmatter", {}).get("status") != "error"


def test_html_command_reports_unreadable_results(state, tmp_path):
    response = html(state, output=str(tmp_path / "index.html"), file=str(tmp_path / "missing.json"))

    assert response["frontmatter"] == {"status": "error"}
    assert response["elements"][0]["content"].startswith("Error: Error reading report")
    assert not (tmp_path / "index.html").exists()
