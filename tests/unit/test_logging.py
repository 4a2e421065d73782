"""Tests for logging setup."""

import json
import logging
import sys

import pytest

from newsfinder.config.logging import LOGGER_NAME, JSONExceptionFormatter, setup_logging
from newsfinder.core.domain.exceptions import BackendConnectionError

pytestmark = pytest.mark.unit


def make_record(**extra):
    record = logging.LogRecord(
        name="newsfinder.core.services.search_service",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="primary tier failed for %r",
        args=("nvidia",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONExceptionFormatter:
    def test_search_context_is_grouped(self):
        record = make_record(tier="primary", error_code="NS_BCK_002")

        entry = json.loads(JSONExceptionFormatter().format(record))

        assert entry["message"] == "primary tier failed for 'nvidia'"
        assert entry["level"] == "WARNING"
        assert entry["search"] == {"tier": "primary", "error_code": "NS_BCK_002"}

    def test_plain_record_has_no_search_block(self):
        entry = json.loads(JSONExceptionFormatter().format(make_record()))
        assert "search" not in entry
        assert "exception" not in entry

    def test_exception_code_included(self):
        try:
            raise BackendConnectionError("refused")
        except BackendConnectionError:
            record = make_record()
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONExceptionFormatter().format(record))

        assert entry["exception"]["type"] == "BackendConnectionError"
        assert entry["exception"]["code"] == "NS_BCK_002"
        assert "refused" in entry["exception"]["message"]


class TestSetupLogging:
    def test_level_and_single_handler(self):
        logger = setup_logging(level="debug")
        setup_logging(level="debug")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging(level="chatty").level == logging.INFO

    def test_file_handler_created(self, tmp_path):
        log_file = tmp_path / "logs" / "search.log"

        logger = setup_logging(log_file=log_file, json_format=True)
        logger.warning("secondary tier failed")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])["message"] == (
            "secondary tier failed"
        )
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
