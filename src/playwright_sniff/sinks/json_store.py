"""JSON results file shared by the tests of one run.

Each stop() appends its report to the file. The file remembers the parent
process id of the run that created it; a different id means a new test run,
so the old contents are discarded instead of accumulating forever. This is a
heuristic for "same run", not a multi-writer safe store.
"""

import json
import logging
import os
from pathlib import Path

from ..config import default_logger
from ..errors import ReportError
from ..types import LogFn, LogLevel, ReportCollection, SniffReport

logger = logging.getLogger(__name__)


def read_collection(path: Path) -> ReportCollection:
    """Read a results file strictly.

    Raises:
        ReportError: If the file is missing, unreadable or malformed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return ReportCollection.from_dict(json.load(f))
    except Exception as e:
        raise ReportError(f"Error reading report {path}: {e}") from e


def write_collection(collection: ReportCollection, path: Path) -> None:
    """Write a collection as indented JSON, creating parent directories.

    Raises:
        ReportError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(collection.to_dict(), f, indent=2)
    except OSError as e:
        raise ReportError(f"Error writing report {path}: {e}") from e


class JsonReportStore:
    """Appends reports to a results file keyed by the test runner's pid.

    Attributes:
        path: Results file.
        log: Monitor log hook.
        runner_pid: Identifier of the current run, the parent process id by default.
    """

    def __init__(self, path: Path | str, log: LogFn = default_logger, runner_pid: str | None = None):
        self.path = Path(path)
        self.log = log
        self.runner_pid = runner_pid if runner_pid is not None else str(os.getppid())

    def load(self) -> tuple[ReportCollection, bool]:
        """Load the current run's collection.

        Unreadable files fall back to an empty collection. A collection
        written by another run is discarded.

        Returns:
            Tuple of (collection, reset) where reset is True when a stale
            collection was discarded.
        """
        if not self.path.exists():
            return ReportCollection(test_runner_pid=self.runner_pid), False

        try:
            collection = read_collection(self.path)
        except ReportError as e:
            self.log(str(e), LogLevel.ERROR)
            return ReportCollection(test_runner_pid=self.runner_pid), False

        if collection.test_runner_pid and collection.test_runner_pid != self.runner_pid:
            logger.debug(f"Discarding results of run {collection.test_runner_pid} in {self.path}")
            return ReportCollection(test_runner_pid=self.runner_pid), True

        collection.test_runner_pid = self.runner_pid
        return collection, False

    def append(self, report: SniffReport) -> Path:
        """Append report to the results file.

        Returns:
            Path of the written file.

        Raises:
            ReportError: If the file cannot be written.
        """
        existed = self.path.exists()
        collection, reset = self.load()
        collection.reports.append(report)

        write_collection(collection, self.path)

        action = "updated" if existed and not reset else "created"
        self.log(f"Report {action} at {self.path}", LogLevel.INFO)
        return self.path
