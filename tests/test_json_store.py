"""Tests for the JSON results file."""

import json
import os

import pytest

from playwright_sniff import LogLevel, ReportCollection, ReportError, ShowStopper, SniffReport
from playwright_sniff.sinks import JsonReportStore, read_collection, write_collection


def make_report(name="checkout", show_stoppers=()):
    return SniffReport(
        timestamp="2025-01-31 14:05:09",
        passed=not show_stoppers,
        show_stoppers=tuple(show_stoppers),
        slow_threshold=2000,
        page_load_steps=(),
        avg_load_time=None,
        avg_request_time=None,
        slow_requests=(),
        failures=(),
        test_name=name,
    )


def test_append_creates_file(tmp_path, log):
    path = tmp_path / "out" / "results.json"
    JsonReportStore(path, log, runner_pid="42").append(make_report())

    data = json.loads(path.read_text())
    assert data["test_runner_pid"] == "42"
    assert [r["test_name"] for r in data["report_data"]] == ["checkout"]
    assert f"Report created at {path}" in log.messages(LogLevel.INFO)


def test_same_run_accumulates(tmp_path, log):
    path = tmp_path / "results.json"
    JsonReportStore(path, log, runner_pid="42").append(make_report("a"))
    JsonReportStore(path, log, runner_pid="42").append(make_report("b"))

    assert [r.test_name for r in read_collection(path).reports] == ["a", "b"]
    assert f"Report updated at {path}" in log.messages(LogLevel.INFO)


def test_new_run_discards_old_reports(tmp_path, log):
    path = tmp_path / "results.json"
    JsonReportStore(path, log, runner_pid="42").append(make_report("old"))
    JsonReportStore(path, log, runner_pid="43").append(make_report("new"))

    collection = read_collection(path)
    assert collection.test_runner_pid == "43"
    assert [r.test_name for r in collection.reports] == ["new"]


def test_corrupt_file_starts_fresh(tmp_path, log):
    path = tmp_path / "results.json"
    path.write_text("{not json")

    JsonReportStore(path, log, runner_pid="42").append(make_report())

    assert len(read_collection(path).reports) == 1
    assert any(m.startswith("Error reading report") for m in log.messages(LogLevel.ERROR))


def test_default_runner_pid_is_parent_process(tmp_path):
    assert JsonReportStore(tmp_path / "r.json").runner_pid == str(os.getppid())


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(ReportError):
        read_collection(tmp_path / "missing.json")


def test_read_rejects_non_list_report_data(tmp_path):
    path = tmp_path / "results.json"
    path.write_text(json.dumps({"report_data": {"oops": 1}}))
    with pytest.raises(ReportError, match="report_data must be a list"):
        read_collection(path)


def test_collection_survives_write_and_read(tmp_path):
    report = make_report(show_stoppers=[ShowStopper("GET - https://a.test/", "Status: 500 - Body: x...")])
    path = tmp_path / "results.json"
    write_collection(ReportCollection(reports=[report], test_runner_pid="7"), path)

    loaded = read_collection(path)
    assert loaded.reports == [report]
    assert loaded.reports[0].passed is False
