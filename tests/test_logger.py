"""Tests for loguru configuration."""

import io

import pytest
from loguru import logger

from cursefetch.logger import resolve_level, setup_logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


class TestResolveLevel:
    @pytest.mark.parametrize(
        "debug, level, environ, expected",
        [
            (False, None, {}, "INFO"),
            (True, None, {}, "DEBUG"),
            (False, None, {"CURSEFETCH_DEBUG": "1"}, "DEBUG"),
            (False, None, {"CURSEFETCH_DEBUG": "0"}, "INFO"),
            (True, "warning", {"CURSEFETCH_DEBUG": "1"}, "WARNING"),
        ],
    )
    def test_precedence(self, debug, level, environ, expected) -> None:
        assert resolve_level(debug, level, environ) == expected


class TestSetupLogger:
    def test_info_hides_debug_records(self, monkeypatch) -> None:
        monkeypatch.delenv("CURSEFETCH_DEBUG", raising=False)
        sink = io.StringIO()

        assert setup_logger(sink=sink, colorize=False) == "INFO"
        logger.debug("hidden request line")
        logger.info("shown")

        output = sink.getvalue()
        assert "hidden request line" not in output
        assert "| INFO     | shown" in output

    def test_debug_flag_shows_debug_records(self) -> None:
        sink = io.StringIO()

        assert setup_logger(debug=True, sink=sink, colorize=False) == "DEBUG"
        logger.debug("GET http://example.invalid/1")

        output = sink.getvalue()
        assert "DEBUG 模式已启用" in output
        assert "GET http://example.invalid/1" in output

    def test_reconfiguring_replaces_previous_sink(self) -> None:
        first, second = io.StringIO(), io.StringIO()

        setup_logger(sink=first, colorize=False)
        setup_logger(sink=second, colorize=False)
        logger.info("only once")

        assert first.getvalue() == ""
        assert "only once" in second.getvalue()
