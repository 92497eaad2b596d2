"""Classification of raw browser observations.

Pure functions mapping console messages, failed requests and responses to
failure and showstopper records. Nothing here touches session state.

PUBLIC API:
  - clean_error_message: Single-line, escape-free text of an exception
  - classify_console: Console message -> ConsoleFailure or None
  - classify_request_failure: Failed request -> RequestFailure
  - is_server_error: True for 5xx statuses
  - classify_server_error: 5xx response -> ShowStopper or None
"""

import re

from .types import ConsoleFailure, RequestFailure, ShowStopper

UNKNOWN_ERROR = "Unknown error"
UNREADABLE_BODY = "[body unreadable]"
BODY_PREVIEW_CHARS = 100

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def clean_error_message(raw: BaseException | object) -> str:
    """Reduce an error to its first line without terminal colour codes.

    Playwright assertion errors embed ANSI escapes and long call logs.

    Args:
        raw: Exception or any object describing the error.

    Returns:
        First non-blank line of the message with escape sequences removed.
        Exceptions without any text fall back to their type name.
    """
    stripped = _ANSI_ESCAPE.sub("", str(raw))
    for line in stripped.splitlines():
        if line.strip():
            return line.rstrip()

    return type(raw).__name__ if isinstance(raw, BaseException) else ""


def classify_console(msg_type: str, text: str) -> ConsoleFailure | None:
    """Console messages of error severity become failures."""
    if msg_type != "error":
        return None
    return ConsoleFailure(error=text)


def classify_request_failure(
    url: str, method: str, error_text: str | None, status: int | None = None
) -> RequestFailure:
    return RequestFailure(
        error=error_text or UNKNOWN_ERROR,
        request_url=url,
        request_method=method,
        request_status=status,
    )


def is_server_error(status: int) -> bool:
    return 500 <= status < 600


def classify_server_error(method: str, url: str, status: int, body: str | None) -> ShowStopper | None:
    """Escalate a server error response to a showstopper.

    Client errors (4xx) never escalate.

    Args:
        method: HTTP method of the originating request.
        url: Response URL.
        status: HTTP status code.
        body: Response body text, or None when it could not be read.

    Returns:
        ShowStopper labelled "METHOD - URL", or None for non-5xx statuses.
    """
    if not is_server_error(status):
        return None

    preview = (body if body is not None else UNREADABLE_BODY)[:BODY_PREVIEW_CHARS]
    return ShowStopper(
        label=f"{method} - {url}",
        critical_error=f"Status: {status} - Body: {preview}...",
    )
