"""Error presentation shared by the API and CLI adapters.

Domain errors serialize themselves through ``NewsSearchError.to_dict``;
anything else (client library bugs, programming errors) is given the same
shape here so callers never branch on the exception type.
"""

import json
import logging
import traceback
from pathlib import Path
from typing import Any

from ...core.domain.exceptions import NewsSearchError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_CODE = "PYTHON_ERR"

# Status for exceptions raised outside the domain hierarchy
_BUILTIN_STATUS: tuple[tuple[type[Exception] | tuple[type[Exception], ...], int], ...] = (
    (ValueError, 400),
    ((ConnectionError, TimeoutError), 503),
)


def _builtin_location(exc: Exception) -> dict[str, Any]:
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    if not frames:
        return {"class": "<unknown>", "method": "<unknown>", "file": "<unknown>", "line": 0}
    last = frames[-1]
    return {
        "class": "<unknown>",
        "method": last.name,
        "file": Path(last.filename).name,
        "line": last.lineno or 0,
    }


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Structured dictionary for any exception.

    Args:
        exc: Exception to describe.
        include_trace: Attach the stack trace lines.
        extra_context: Request-level context merged into ``context``.

    Returns:
        Dictionary with ``error`` and ``location`` keys, plus optional
        ``context`` and ``stack_trace``.
    """
    if isinstance(exc, NewsSearchError):
        data = exc.to_dict(include_trace=include_trace)
    else:
        data = {
            "error": {
                "type": type(exc).__name__,
                "code": UNKNOWN_ERROR_CODE,
                "message": str(exc),
            },
            "location": _builtin_location(exc),
        }
        if include_trace:
            lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
            data["stack_trace"] = [line.strip() for line in lines if line.strip()]

    if extra_context:
        data.setdefault("context", {}).update(extra_context)
    return data


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log ``exc`` as a single JSON message, stack trace included."""
    payload = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    (log or logger).log(
        level,
        json.dumps(payload, indent=2, ensure_ascii=False),
        extra={"error_code": get_error_code(exc)},
    )


def get_error_code(exc: Exception) -> str:
    """Error code such as "NS_BCK_002", or "PYTHON_ERR" for other exceptions."""
    return exc.error_code if isinstance(exc, NewsSearchError) else UNKNOWN_ERROR_CODE


def get_http_status_code(exc: Exception) -> int:
    """HTTP status the API answers with for ``exc``."""
    if isinstance(exc, NewsSearchError):
        return exc.http_status
    for types, status in _BUILTIN_STATUS:
        if isinstance(exc, types):
            return status
    return 500
