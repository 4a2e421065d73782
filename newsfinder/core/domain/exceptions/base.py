"""Root of the news search exception hierarchy.

Each exception records an error code, the HTTP status the API answers with,
where it was raised and what caused it. ``to_dict`` gives the JSON shape
shared by API error bodies, CLI output and structured logs.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from types import FrameType
from typing import Any


@dataclass
class ExceptionContext:
    """Raise site of an exception."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @classmethod
    def from_frame(cls, frame: FrameType | None) -> "ExceptionContext":
        if frame is None:
            return cls("<unknown>", "<unknown>", "<unknown>", 0)
        owner = frame.f_locals.get("self")
        return cls(
            class_name=type(owner).__name__ if owner is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=Path(frame.f_code.co_filename).name,
            line_number=frame.f_lineno,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class NewsSearchError(Exception):
    """Base exception for all news search errors.

    Adapters wrap client failures so the search cascade can treat every
    tier the same way:

        try:
            client.search(index="ai_news", query=query)
        except ConnectionError as e:
            raise BackendConnectionError(
                "Elasticsearch is unreachable", cause=e, context={"url": url}
            ) from e
    """

    error_code: str = "NS_ERR_001"
    http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = dict(context or {})
        self.location = self._raise_site()
        self.stack_trace = traceback.format_exc() if cause else None

    def _raise_site(self) -> ExceptionContext:
        frame = inspect.currentframe()
        # Walk out of this method and every __init__ up the subclass chain
        while frame is not None and frame.f_locals.get("self") is self:
            frame = frame.f_back
        return ExceptionContext.from_frame(frame)

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Structured form of the error.

        Args:
            include_trace: Add the captured stack trace when a cause exists.

        Returns:
            ``error``, ``location`` and, when present, ``context``,
            ``cause`` and ``stack_trace`` keys.
        """
        data: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            data["context"] = dict(self.extra_context)
        if self.cause is not None:
            data["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        if include_trace and self.stack_trace:
            data["stack_trace"] = [line for line in self.stack_trace.splitlines() if line.strip()]
        return data
