"""Tests for structured logging helpers."""

import logging

from story_doctor.core.logging import StructuredFormatter, get_logger, log_with_context


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 10, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_key_value_output(self):
        line = StructuredFormatter().format(make_record())

        assert "level=INFO" in line
        assert "message=hello" in line

    def test_context_fields_promoted(self):
        line = StructuredFormatter().format(
            make_record(session_id="s-1", work_id="hong-gil-dong", extra_data={"score": 80})
        )

        assert "session_id=s-1" in line
        assert "work_id=hong-gil-dong" in line
        assert "score=80" in line


class TestLogWithContext:
    def test_splits_identifiers_from_extra_data(self, caplog):
        logger = get_logger("story_doctor.tests.logging")
        logger.propagate = True

        with caplog.at_level(logging.INFO, logger="story_doctor.tests.logging"):
            log_with_context(logger, logging.INFO, "scored", session_id="s-1", score=42)

        record = caplog.records[-1]
        assert record.session_id == "s-1"
        assert record.extra_data == {"score": 42}

    def test_get_logger_configures_once(self):
        first = get_logger("story_doctor.tests.once")
        second = get_logger("story_doctor.tests.once")

        assert first is second
        assert len(first.handlers) == 1
