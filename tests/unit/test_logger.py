"""
Unit tests for src/common/logger.py
"""

import json
import logging
import sys

from src.common.logger import JobLogger, JsonFormatter, get_logger, setup_logging


class TestJobLogger:

    def test_message_without_context(self):
        log = get_logger("test.logger")
        assert log._format_message("hello") == "hello"

    def test_prefixes_operation_and_short_job_id(self):
        log = get_logger("test.logger", operation="update", job_id="65a1b2c3d4e5f60718293a4b")
        assert log._format_message("done") == "[op:update] [job:65a1b2c3] done"

    def test_bind_keeps_name_and_adds_context(self):
        base = get_logger("test.logger", operation="get")
        bound = base.bind(job_id="abc")
        assert isinstance(bound, JobLogger)
        assert bound.logger.name == "test.logger"
        assert bound._format_message("x") == "[op:get] [job:abc] x"

    def test_logs_through_stdlib(self, caplog):
        log = get_logger("test.logger", operation="delete")
        with caplog.at_level(logging.INFO, logger="test.logger"):
            log.info("Deleted job")
        assert "[op:delete] Deleted job" in caplog.text


class TestSetupLogging:

    def test_single_stdout_handler_at_level(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("DEBUG", "json")
            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

    def test_unknown_level_falls_back_to_info(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("NOPE")
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


class TestJsonFormatter:

    @staticmethod
    def _record(message, **extra):
        record = logging.LogRecord("test.logger", logging.INFO, __file__, 1, message, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_quotes_and_newlines_stay_valid_json(self):
        line = JsonFormatter().format(self._record('Company "Acme"\nrole'))
        data = json.loads(line)
        assert data["message"] == 'Company "Acme"\nrole'
        assert data["level"] == "INFO"
        assert data["name"] == "test.logger"

    def test_context_fields(self):
        data = json.loads(JsonFormatter().format(self._record("x", operation="update", job_id="abc")))
        assert (data["operation"], data["job_id"]) == ("update", "abc")

    def test_missing_context_left_out(self):
        data = json.loads(JsonFormatter().format(self._record("x", operation=None)))
        assert "operation" not in data
        assert "job_id" not in data

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord("t", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        data = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in data["exc_info"]

    def test_job_logger_context_reaches_record(self, caplog):
        log = get_logger("test.logger", operation="get", job_id="65a1b2c3d4e5f60718293a4b")
        with caplog.at_level(logging.INFO, logger="test.logger"):
            log.info("Job not found")
        record = caplog.records[-1]
        assert record.operation == "get"
        assert record.job_id == "65a1b2c3d4e5f60718293a4b"
        assert json.loads(JsonFormatter().format(record))["job_id"] == "65a1b2c3d4e5f60718293a4b"
