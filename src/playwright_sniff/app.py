"""ReplKit2 application for browsing playwright-sniff results.

Provides REPL, CLI and MCP access to the JSON results file written by the
monitor: per-test summaries, showstoppers, slow requests, failures and HTML
rendering.
"""

from dataclasses import dataclass, field
from pathlib import Path

from replkit2 import App

from playwright_sniff.config import load_options

DEFAULT_RESULTS_FILE = Path("sniffing-results.json")


def _default_results_file() -> Path:
    return load_options().output_file or DEFAULT_RESULTS_FILE


@dataclass
class SniffState:
    """Application state for the results browser.

    Attributes:
        results_file: JSON results file read by every command unless a
            command is given an explicit file.
    """

    results_file: Path = field(default_factory=_default_results_file)

    def resolve(self, file: str | None) -> Path:
        return Path(file) if file else self.results_file


# Must be created before command imports for decorator registration
app = App(
    "playwright-sniff",
    SniffState,
    uri_scheme="sniff",
    fastmcp={
        "description": "Playwright monitoring report browser",
        "tags": {"playwright", "testing", "performance"},
    },
)


# Command imports trigger @app.command decorator registration
from playwright_sniff.commands import results  # noqa: E402, F401
from playwright_sniff.commands import render  # noqa: E402, F401
