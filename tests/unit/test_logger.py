"""
utils/logger.py 單元測試

驗證 JsonFormatter 格式正確、logger 基本功能、測試名稱 adapter。
"""

import json
import logging
import sys

import pytest

from utils.logger import JsonFormatter, TestLogAdapter, for_test, logger


def _record(msg="hello", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="test", level=level, pathname="test.py",
        lineno=1, msg=msg, args=(), exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJsonFormatter:
    """JsonFormatter"""

    def test_format_produces_valid_json(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["message"] == "hello"
        assert parsed["level"] == "INFO"

    def test_format_contains_required_fields(self):
        parsed = json.loads(JsonFormatter().format(_record(level=logging.WARNING)))
        for field in ("timestamp", "level", "message", "logger", "module", "line"):
            assert field in parsed

    def test_format_with_exception(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()

        parsed = json.loads(JsonFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))
        assert "ValueError" in parsed["exception"]

    def test_format_includes_test_name(self):
        parsed = json.loads(JsonFormatter().format(_record(test_name="test_login")))
        assert parsed["test"] == "test_login"

    def test_format_without_test_name(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert "test" not in parsed

    def test_format_unicode(self):
        parsed = json.loads(JsonFormatter().format(_record(msg="視覺檢查: Login page")))
        assert parsed["message"] == "視覺檢查: Login page"


@pytest.mark.unit
class TestLoggerInstance:
    """logger 實例"""

    def test_logger_name(self):
        assert logger.name == "visual_test"

    def test_logger_has_handlers(self):
        assert len(logger.handlers) >= 2

    def test_logger_level(self):
        assert logger.level == logging.DEBUG


@pytest.mark.unit
class TestForTest:
    """for_test adapter"""

    def test_returns_adapter(self):
        adapter = for_test("test_login")
        assert isinstance(adapter, TestLogAdapter)
        assert adapter.logger is logger

    def test_prefixes_message_and_sets_extra(self):
        msg, kwargs = for_test("test_login").process("Eyes 已開啟", {})
        assert msg == "[test_login] Eyes 已開啟"
        assert kwargs["extra"]["test_name"] == "test_login"

    def test_keeps_existing_extra(self):
        _, kwargs = for_test("test_login").process("x", {"extra": {"step": 1}})
        assert kwargs["extra"] == {"step": 1, "test_name": "test_login"}
