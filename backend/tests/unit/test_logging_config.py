"""
Unit tests for logging configuration.
"""

import json
import logging

from infrastructure.logging_config import JSONFormatter, RedactingFilter, redact


def _record(msg: str, args=(), **extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRedaction:
    def test_database_password(self):
        assert (
            redact("connect postgresql+asyncpg://app:hunter2@db/taskflow")
            == "connect postgresql+asyncpg://app:[REDACTED]@db/taskflow"
        )

    def test_bearer_token(self):
        assert redact("Authorization: Bearer abc.def") == "Authorization: Bearer [REDACTED]"

    def test_filter_scrubs_arguments(self):
        record = _record("login %s", ("password=letmein",))

        assert RedactingFilter().filter(record) is True
        assert record.getMessage() == "login password=[REDACTED]"

    def test_plain_text_untouched(self):
        assert redact("Restored task 1234") == "Restored task 1234"


class TestJSONFormatter:
    def test_includes_extra_fields(self):
        record = _record(
            "Restored %s %s",
            ("task", "abc"),
            item_id="abc",
            record_type="task",
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "Restored task abc"
        assert entry["level"] == "INFO"
        assert entry["item_id"] == "abc"
        assert entry["record_type"] == "task"
        assert "request_id" not in entry
