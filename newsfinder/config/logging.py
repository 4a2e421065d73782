"""Logging setup for the news search service."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

LOGGER_NAME = "newsfinder"

# Attributes passed through ``extra=`` that belong in structured output
SEARCH_FIELDS = ("tier", "query", "error_code", "index")

# Client libraries that log every HTTP round trip at INFO
NOISY_LOGGERS = ("elastic_transport", "urllib3", "httpx")


class JSONExceptionFormatter(logging.Formatter):
    """One JSON object per line, carrying search context when present.

    Cascade code attaches ``tier`` and ``error_code`` through ``extra=`` so
    aggregated logs show which tier failed for which query.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        search = {name: getattr(record, name) for name in SEARCH_FIELDS if hasattr(record, name)}
        if search:
            entry["search"] = search

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["exception"] = {
                "type": type(error).__name__,
                "code": getattr(error, "error_code", None),
                "message": str(error),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the ``newsfinder`` logger.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_file: Optional UTF-8 log file, parent directories are created.
        json_format: Emit JSON lines instead of the console format.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter: logging.Formatter
    if json_format:
        formatter = JSONExceptionFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-7s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
