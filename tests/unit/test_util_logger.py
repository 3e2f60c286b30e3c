"""
Structured logger tests.
"""

import json
import logging

import pytest

from util_logger import ComponentType, JSONFormatter, LogContext, LoggerFactory, log_exceptions


class TestJSONFormatter:

    def _record(self, message, **extra):
        record = logging.LogRecord("service.Test", logging.INFO, __file__, 10, message, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_custom_dimensions_emitted(self):
        record = self._record("hello", custom_dimensions={"tenant_id": "T1"})
        log_obj = json.loads(JSONFormatter().format(record))
        assert log_obj["message"] == "hello"
        assert log_obj["level"] == "INFO"
        assert log_obj["customDimensions"] == {"tenant_id": "T1"}

    def test_long_messages_truncated(self):
        record = self._record("x" * 50)
        log_obj = json.loads(JSONFormatter(max_message_length=10).format(record))
        assert log_obj["message"] == "x" * 10 + "...(truncated)"


class TestLoggerFactory:

    def test_component_dimensions_injected(self, caplog):
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "DimensionTest")
        with caplog.at_level(logging.INFO):
            logger.info("processing", extra={'custom_dimensions': {'blob_name': 'a.jpg'}})

        record = caplog.records[-1]
        assert record.custom_dimensions["component_type"] == "service"
        assert record.custom_dimensions["component_name"] == "DimensionTest"
        assert record.custom_dimensions["blob_name"] == "a.jpg"

    def test_single_json_handler(self):
        first = LoggerFactory.create_logger(ComponentType.ADAPTER, "HandlerTest")
        second = LoggerFactory.create_logger(ComponentType.ADAPTER, "HandlerTest")
        assert first is second
        assert sum(isinstance(h.formatter, JSONFormatter) for h in second.handlers) == 1

    def test_log_context_drops_empty_fields(self):
        context = LogContext(invocation_id="inv-1", tenant_id="T1")
        assert context.to_dict() == {"invocation_id": "inv-1", "tenant_id": "T1"}


class TestLogExceptions:

    def test_logs_and_reraises(self, caplog):
        @log_exceptions(ComponentType.TRIGGER, "DecoratorTest")
        def explode():
            raise ValueError("boom")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError, match="boom"):
                explode()

        record = caplog.records[-1]
        assert record.custom_dimensions["exception_type"] == "ValueError"
        assert record.custom_dimensions["function_name"] == "explode"

    def test_return_value_passed_through(self):
        @log_exceptions()
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
