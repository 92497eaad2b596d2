"""Best-effort error screenshots."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .types import LogFn, LogLevel
from .utils import create_directory, generate_timestamp, safe_filename

if TYPE_CHECKING:
    from .listeners import PageLike

logger = logging.getLogger(__name__)


async def capture_error_screenshot(page: "PageLike", directory: Path, label: str, log: LogFn) -> str | None:
    """Save a screenshot named after the failing label.

    Never raises: any problem creating the directory or capturing the page is
    reported through ``log`` at ERROR level.

    Args:
        page: Page to capture.
        directory: Screenshot directory, created if missing.
        label: Label of the action or showstopper.
        log: Monitor log hook.

    Returns:
        Path of the written file, or None if capture failed.
    """
    try:
        create_directory(directory)
        file_path = directory / f"error_{safe_filename(label)}_{generate_timestamp()}.png"
        await page.screenshot(path=str(file_path))
        logger.debug(f"Saved error screenshot to {file_path}")
        return str(file_path)
    except Exception as e:
        log(f"Failed to capture error screenshot: {e}", LogLevel.ERROR)
        return None
