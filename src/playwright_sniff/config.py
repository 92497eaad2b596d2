"""Configuration management for playwright-sniff.

Options are an explicit ``SniffOptions`` value handed to each monitor. Values
can come from the ``[default]`` table of a ``sniff.toml`` file, found in the
current directory or one of its parents, with keyword overrides on top.
"""

from dataclasses import dataclass, field, fields, replace
import logging
from pathlib import Path
from typing import Any, Optional
import tomllib

from .errors import ConfigError
from .types import LogFn, LogLevel

CONFIG_FILENAME = "sniff.toml"

_log = logging.getLogger("playwright_sniff")


def default_logger(message: str, level: LogLevel) -> None:
    """Forward a monitor message to the ``playwright_sniff`` logger."""
    _log.log(level.logging_level, message)


@dataclass(frozen=True)
class SniffOptions:
    """Options controlling a monitoring session.

    Attributes:
        slow_threshold: Milliseconds above which an action or request is slow.
        capture_screenshots: Take a screenshot when a showstopper is recorded.
        screenshot_dir: Where error screenshots are written.
        output_file: JSON results file, None to skip writing it.
        output_html: HTML report file, None to skip rendering it.
        logger: Callable receiving (message, level) for every monitor message.
    """

    slow_threshold: float = 2000
    capture_screenshots: bool = True
    screenshot_dir: Path = Path("screenshots")
    output_file: Path | None = Path("sniffing-results.json")
    output_html: Path | None = Path("sniffing-report.html")
    logger: LogFn = field(default=default_logger, compare=False)

    def __post_init__(self):
        if isinstance(self.slow_threshold, bool) or not isinstance(self.slow_threshold, (int, float)):
            raise ConfigError(f"slow_threshold must be a number, got {self.slow_threshold!r}")
        if self.slow_threshold < 0:
            raise ConfigError(f"slow_threshold must not be negative, got {self.slow_threshold}")
        # false or "" in sniff.toml disables an output
        for name in ("output_file", "output_html"):
            if getattr(self, name) in (False, ""):
                object.__setattr__(self, name, None)
        for name in ("screenshot_dir", "output_file", "output_html"):
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, Path(value))

    def merged(self, **overrides: Any) -> "SniffOptions":
        """Return a copy with every non-None override applied.

        Raises:
            ConfigError: If an override names an unknown option.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _find_config_file() -> Optional[Path]:
    """Find sniff.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_FILENAME
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {path}: {e}") from e


class ConfigManager:
    """Reads monitor defaults from sniff.toml."""

    def __init__(self, path: Optional[Path] = None):
        self.config_file = path if path is not None else _find_config_file()
        self.data = _load_config(self.config_file)
        self._default_config = self.data.get("default", {})

    def file_options(self) -> dict[str, Any]:
        """Options from the ``[default]`` table that SniffOptions understands.

        The ``logger`` option cannot be expressed in TOML and is ignored.
        """
        known = {f.name for f in fields(SniffOptions)} - {"logger"}
        options = {}
        for key, value in self._default_config.items():
            if key in known:
                options[key] = value
            else:
                _log.warning(f"Ignoring unknown option '{key}' in {self.config_file}")
        return options

    def options(self, **overrides: Any) -> SniffOptions:
        """Build options: defaults, then the config file, then overrides."""
        return SniffOptions().merged(**self.file_options()).merged(**overrides)


def load_options(path: Optional[Path] = None, **overrides: Any) -> SniffOptions:
    """Load options from sniff.toml (if any) merged with keyword overrides.

    Args:
        path: Explicit config file. Defaults to searching upward from cwd.
        **overrides: Option values that win over the file. None is ignored.

    Returns:
        Fully resolved SniffOptions.
    """
    return ConfigManager(path).options(**overrides)
