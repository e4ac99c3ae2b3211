"""Unit tests for MoodleLogger."""

import io
import json

import pytest

from moodle_mcp.errors import NETWORK_ERROR, create_error
from moodle_mcp.logging import RESET, LogConfig, MoodleLogger
from moodle_mcp.types import LogFormat, LogLevel


@pytest.fixture
def stream():
    return io.StringIO()


def json_logger(stream, level=LogLevel.DEBUG, **kwargs) -> MoodleLogger:
    return MoodleLogger(LogConfig(level=level, format=LogFormat.JSON, output=stream, **kwargs))


def entries(stream) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestMoodleLogger:
    """Tests for level filtering and formats."""

    def test_json_line(self, stream):
        json_logger(stream).info("server", "started", tools=3)

        (entry,) = entries(stream)
        assert entry["level"] == "INFO"
        assert entry["component"] == "server"
        assert entry["message"] == "started"
        assert entry["tools"] == 3
        assert entry["timestamp"].endswith("Z")

    def test_level_filtering(self, stream):
        logger = json_logger(stream, level=LogLevel.WARN)

        logger.debug("server", "d")
        logger.info("server", "i")
        logger.warn("server", "w")
        logger.error("server", "e")

        assert [e["message"] for e in entries(stream)] == ["w", "e"]

    def test_disabled_component(self, stream):
        logger = json_logger(stream, components={"remote": False})

        logger.info("remote", "hidden")
        logger.info("server", "shown")

        assert [e["message"] for e in entries(stream)] == ["shown"]

    def test_colored_format(self, stream):
        logger = MoodleLogger(LogConfig(output=stream))

        logger.info("dispatch", "hello", a=1)

        line = stream.getvalue()
        assert "[DISPATCH]" in line
        assert "hello" in line
        assert RESET in line

    def test_colored_context_truncated(self, stream):
        logger = MoodleLogger(LogConfig(output=stream, truncate_at=10))

        logger.info("server", "msg", payload="x" * 100)

        assert "..." in stream.getvalue()
        assert "x" * 50 not in stream.getvalue()

    def test_configure_replaces_config(self, stream):
        logger = json_logger(io.StringIO())
        logger.configure(LogConfig(level=LogLevel.ERROR, format=LogFormat.JSON, output=stream))

        logger.info("server", "dropped")
        logger.error("server", "kept")

        assert [e["message"] for e in entries(stream)] == ["kept"]


class TestToolLogger:
    def test_started_logs_argument_names_only(self, stream):
        json_logger(stream).tool("create_user").started({"password": "hunter2", "username": "u"})

        (entry,) = entries(stream)
        assert entry["event"] == "tool_started"
        assert entry["arguments"] == ["password", "username"]
        assert "hunter2" not in stream.getvalue()

    def test_failed(self, stream):
        error = create_error(NETWORK_ERROR, message="Connection refused")

        json_logger(stream).tool("get_site_info").failed(error, 1500)

        (entry,) = entries(stream)
        assert entry["level"] == "ERROR"
        assert entry["exception"] == "network_error"
        assert "1.50s" in entry["message"]


class TestRemoteCallLogger:
    def test_calling_is_debug(self, stream):
        json_logger(stream, level=LogLevel.INFO).remote().calling("core_x", 3)

        assert stream.getvalue() == ""

    def test_fault(self, stream):
        error = create_error(NETWORK_ERROR, message="HTTP 502 Bad Gateway")

        json_logger(stream).remote().fault("core_x", error, 20)

        (entry,) = entries(stream)
        assert entry["event"] == "remote_fault"
        assert entry["function_name"] == "core_x"
        assert entry["errorcode"] == "network_error"
