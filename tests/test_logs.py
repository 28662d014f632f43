"""Tests for wren.logs and wren.server.terminal_errors."""

import io
import json
import logging

import pytest

from wren.errors import ConfigurationError
from wren.logs import configure_logging
from wren.server.terminal_errors import (
    format_compact_traceback,
    format_minimal_error,
    format_template_error,
    is_kida_error,
    log_error,
)


def _raised(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


class TestConfigureLogging:
    def test_text_format(self) -> None:
        stream = io.StringIO()
        configure_logging("info", "text", stream=stream)
        logging.getLogger("wren.server").info("starting server on %s", "http://x:1")
        line = stream.getvalue()
        assert "INFO" in line
        assert "wren.server" in line
        assert "starting server on http://x:1" in line

    def test_json_format(self) -> None:
        stream = io.StringIO()
        configure_logging("debug", "json", stream=stream)
        logging.getLogger("wren.templating").debug("registry built", extra={"templates": 4})
        record = json.loads(stream.getvalue())
        assert record["level"] == "debug"
        assert record["logger"] == "wren.templating"
        assert record["message"] == "registry built"
        assert record["templates"] == 4
        assert "time" in record

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        configure_logging("warning", "text", stream=stream)
        logging.getLogger("wren.app").info("hidden")
        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging("info", "text", stream=io.StringIO())
        logger = configure_logging("info", "json", stream=io.StringIO())
        assert len(logger.handlers) == 1

    def test_unknown_level(self) -> None:
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            configure_logging("verbose", "text")

    def test_unknown_format(self) -> None:
        with pytest.raises(ConfigurationError, match="LOG_FORMAT"):
            configure_logging("info", "xml")


class TestTerminalErrors:
    def test_is_kida_error(self) -> None:
        assert is_kida_error(ValueError("x")) is False

    def test_compact_traceback_names_error(self) -> None:
        text = format_compact_traceback(_raised(ValueError("bad value")))
        assert text.startswith("ValueError: bad value")
        assert "test_logs.py" in text

    def test_minimal_is_one_line(self) -> None:
        text = format_minimal_error(_raised(KeyError("k")))
        assert "\n" not in text
        assert text.startswith("KeyError at ")

    def test_template_error_banner(self) -> None:
        text = format_template_error(ValueError("undefined name"))
        assert text.startswith("-- Template Error ")
        assert "undefined name" in text

    @pytest.mark.parametrize("style", ["compact", "full", "minimal"])
    def test_log_error_styles(self, style, monkeypatch, caplog) -> None:
        monkeypatch.setenv("WREN_TRACEBACK", style)
        with caplog.at_level(logging.ERROR, logger="wren.server"):
            log_error(_raised(ValueError("styled")))
        assert "Server error" in caplog.text
        assert "styled" in caplog.text
