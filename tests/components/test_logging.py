"""
Logging Tests

Tests for formatter and filter setup.
"""

import io
import json
import logging

from component_check.logging import (
    ComponentJSONFormatter,
    ComponentNameFilter,
    TraceContextFilter,
    setup_logging,
)


def make_record(message="hello", **extra):
    record = logging.LogRecord("component.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFilters:
    def test_component_name_from_record(self):
        record = make_record(component="hello-component")

        ComponentNameFilter("fallback").filter(record)

        assert record.component_name == "hello-component"

    def test_component_name_fallback(self):
        record = make_record()

        ComponentNameFilter("fallback").filter(record)

        assert record.component_name == "fallback"

    def test_trace_context_without_span(self):
        record = make_record()

        TraceContextFilter().filter(record)

        assert record.trace_id == "0" * 32
        assert record.span_id == "0" * 16


class TestJSONFormatter:
    def test_includes_extras(self):
        record = make_record(component_name="hello-component", payload={"audience": "world"})

        entry = json.loads(ComponentJSONFormatter(include_trace=False).format(record))

        assert entry["message"] == "hello"
        assert entry["component"] == "hello-component"
        assert entry["payload"] == {"audience": "world"}
        assert "trace_id" not in entry


class TestSetupLogging:
    def test_json_output(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging("hello-component", enable_json=True, stream=stream)

        logging.getLogger("component.loader").info("Loaded", extra={"shape": "factory"})

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["component"] == "hello-component"
        assert entry["shape"] == "factory"
        assert "trace_id" in entry

    def test_environment_overrides(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_FORMAT", "text")
        stream = io.StringIO()
        setup_logging("hello-component", stream=stream)

        logging.getLogger("component.loader").info("hidden")
        logging.getLogger("component.loader").warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "[hello-component]" in output
        assert "shown" in output

    def test_explicit_arguments_win_over_environment(self, restore_root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_FORMAT", "text")
        stream = io.StringIO()
        setup_logging("hello-component", log_level="DEBUG", enable_json=True, stream=stream)

        logging.getLogger("component.loader").debug("detail")

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["message"] == "detail"
        assert entry["level"] == "DEBUG"

    def test_off_level(self, restore_root_logger):
        stream = io.StringIO()
        setup_logging(log_level="OFF", stream=stream)

        logging.getLogger("component.loader").critical("silent")

        assert stream.getvalue() == ""

    def test_repeated_setup_replaces_handler(self, restore_root_logger):
        first = setup_logging(stream=io.StringIO())
        second = setup_logging(stream=io.StringIO())

        assert first not in restore_root_logger.handlers
        assert second in restore_root_logger.handlers
