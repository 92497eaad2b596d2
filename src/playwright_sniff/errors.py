"""playwright-sniff exceptions.

PUBLIC API:
  - SniffError: Base exception for all playwright-sniff errors
  - ShowStopperError: Raised by stop() when showstoppers were recorded
  - ReportError: Report file could not be read or written
  - ConfigError: Invalid configuration value
"""

from .types import ShowStopper


class SniffError(Exception):
    """Base exception for all playwright-sniff errors."""

    pass


class ShowStopperError(SniffError):
    """Raised when a monitored session ends with showstoppers.

    Attributes:
        show_stoppers: The showstoppers recorded during the session.
    """

    def __init__(self, show_stoppers: list[ShowStopper] | tuple[ShowStopper, ...], test_name: str = ""):
        self.show_stoppers = tuple(show_stoppers)
        self.test_name = test_name
        subject = f" '{test_name}'" if test_name else ""
        lines = [f"Test{subject} failed due to {len(self.show_stoppers)} showstopper(s)"]
        lines.extend(f"  - {s.label}: {s.critical_error}" for s in self.show_stoppers)
        super().__init__("\n".join(lines))


class ReportError(SniffError):
    """Raised when a report file cannot be read or written."""

    pass


class ConfigError(SniffError):
    """Raised when configuration values are invalid."""

    pass
