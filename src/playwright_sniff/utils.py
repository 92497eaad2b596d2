"""Small formatting and filesystem helpers shared across playwright-sniff.

PUBLIC API:
  - calculate_average: Mean rounded to 2 decimals, None for no values
  - calculate_percentile: Nearest-rank percentile
  - format_duration: Human readable milliseconds
  - format_date: "YYYY-MM-DD HH:MM:SS"
  - generate_timestamp: Filename-safe timestamp
  - create_directory: mkdir -p
  - safe_filename: Lowercase filename stem from a free-form label
  - truncate_url: Shorten a URL while keeping host and path tail
"""

import math
import re
from datetime import datetime
from pathlib import Path
from typing import Sequence
from urllib.parse import urlsplit


def calculate_average(values: Sequence[float]) -> float | None:
    """Average of values rounded to 2 decimals.

    Returns:
        None for an empty sequence, never 0 or NaN.
    """
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def calculate_percentile(values: Sequence[float], percentile: float) -> float:
    """Nearest-rank percentile, 0 for an empty sequence."""
    if not values:
        return 0

    ordered = sorted(values)
    index = math.ceil((percentile / 100) * len(ordered)) - 1
    return ordered[max(0, index)]


def format_duration(ms: float) -> str:
    if ms < 1000:
        return f"{ms:g}ms"
    return f"{ms / 1000:.2f}s"


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def generate_timestamp(value: datetime | None = None) -> str:
    """Timestamp usable in filenames, e.g. 2025-01-31_14-05-09-123."""
    value = value or datetime.now()
    return value.strftime("%Y-%m-%d_%H-%M-%S-") + f"{value.microsecond // 1000:03d}"


def create_directory(path: Path | str) -> Path:
    """Create a directory (and parents) if it doesn't exist."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def safe_filename(label: str) -> str:
    return re.sub(r"[^a-z0-9]", "_", label, flags=re.IGNORECASE).lower()


def truncate_url(url: str, max_length: int) -> str:
    """Shorten a URL to max_length, keeping the host and the end of the path.

    Args:
        url: URL to shorten.
        max_length: Maximum length of the result.

    Returns:
        The URL unchanged if short enough, else "host/...tail" or a plain
        truncation with "..." when the URL has no host.
    """
    if len(url) <= max_length:
        return url

    parts = urlsplit(url)
    domain = parts.hostname
    if not domain:
        return url[: max_length - 3] + "..."

    if len(domain) + 3 >= max_length:
        return domain[: max_length - 3] + "..."

    path = parts.path + (f"?{parts.query}" if parts.query else "")
    available = max_length - len(domain) - 4
    return f"{domain}/...{path[-available:] if available > 0 else ''}"
