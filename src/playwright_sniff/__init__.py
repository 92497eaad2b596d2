"""playwright-sniff - monitoring for Playwright tests.

Measures the time of user actions, records console errors and failed or slow
network requests, escalates action exceptions and server errors to
showstoppers, and writes JSON/HTML reports.

PUBLIC API:
  - PlaywrightSniff: Monitoring facade for a page
  - SniffOptions: Monitoring options
  - load_options: Options from sniff.toml merged with overrides
  - default_logger: Default log hook (stdlib logging)
  - LogLevel: Levels passed to the log hook
  - ActionTiming, ConsoleFailure, RequestFailure, CustomFailure, ShowStopper,
    RequestDetail, SniffReport, ReportCollection: Report records
  - SniffError, ShowStopperError, ReportError, ConfigError: Exceptions
  - calculate_average, calculate_percentile, clean_error_message,
    create_directory, format_date, format_duration, generate_timestamp: Helpers
  - __version__ / VERSION: Package version string
"""

from importlib.metadata import version

__version__ = version("playwright-sniff")
VERSION = __version__

from .classify import clean_error_message  # noqa: E402
from .config import SniffOptions, default_logger, load_options  # noqa: E402
from .errors import ConfigError, ReportError, ShowStopperError, SniffError  # noqa: E402
from .monitor import PlaywrightSniff  # noqa: E402
from .types import (  # noqa: E402
    ActionTiming,
    ConsoleFailure,
    CustomFailure,
    Failure,
    FailureKind,
    LogLevel,
    ReportCollection,
    RequestDetail,
    RequestFailure,
    SessionStatus,
    ShowStopper,
    SniffReport,
)
from .utils import (  # noqa: E402
    calculate_average,
    calculate_percentile,
    create_directory,
    format_date,
    format_duration,
    generate_timestamp,
)

__all__ = [
    "PlaywrightSniff",
    "SniffOptions",
    "load_options",
    "default_logger",
    "LogLevel",
    "SessionStatus",
    "FailureKind",
    "ActionTiming",
    "Failure",
    "ConsoleFailure",
    "RequestFailure",
    "CustomFailure",
    "ShowStopper",
    "RequestDetail",
    "SniffReport",
    "ReportCollection",
    "SniffError",
    "ShowStopperError",
    "ReportError",
    "ConfigError",
    "calculate_average",
    "calculate_percentile",
    "clean_error_message",
    "create_directory",
    "format_date",
    "format_duration",
    "generate_timestamp",
    "__version__",
    "VERSION",
]
