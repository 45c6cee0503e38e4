"""Tests for request-scoped logging."""

import json
import logging
import sys

import pytest

from slack_aqi.core.models import CommandInvocation
from slack_aqi.core.router import CommandRouter
from slack_aqi.utils.logging import (
    PLAIN_FORMAT,
    RequestContextFilter,
    StructuredFormatter,
    command_var,
    configure_logging,
    get_command,
    get_request_id,
    request_id_var,
    set_command,
    set_request_id,
)


def make_record(message: str = "hello %s", args=("world",)) -> logging.LogRecord:
    return logging.LogRecord(
        name="slack_aqi.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=args,
        exc_info=None,
    )


@pytest.fixture
def clean_context():
    """Reset the request ID and command for the duration of a test."""
    request_token = request_id_var.set("")
    command_token = command_var.set("")
    yield
    command_var.reset(command_token)
    request_id_var.reset(request_token)


@pytest.mark.usefixtures("clean_context")
class TestStructuredFormatter:
    """Tests for StructuredFormatter JSON output."""

    def test_json_fields(self):
        """Test base fields are present and unset context keys are omitted."""
        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "slack_aqi.test"
        assert data["message"] == "hello world"
        assert "request_id" not in data
        assert "command" not in data

    def test_includes_request_id(self):
        """Test the request ID set for the context is emitted."""
        set_request_id("req-1")
        assert get_request_id() == "req-1"

        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["request_id"] == "req-1"

    def test_includes_command(self):
        """Test the slash command being handled is emitted."""
        set_request_id("req-2")
        set_command("/aqi")
        assert get_command() == "/aqi"

        data = json.loads(StructuredFormatter().format(make_record()))

        assert data["command"] == "/aqi"
        assert data["request_id"] == "req-2"

    def test_includes_exception(self):
        """Test a traceback is attached under the exception key."""
        try:
            raise ValueError("bad")
        except ValueError:
            record = make_record("failed", ())
            record.exc_info = sys.exc_info()

        data = json.loads(StructuredFormatter().format(record))
        assert "ValueError: bad" in data["exception"]


@pytest.mark.usefixtures("clean_context")
class TestPlainFormat:
    """Tests for plain-text output with RequestContextFilter."""

    def test_unset_context_renders_placeholders(self):
        """Test records outside a request still format."""
        record = make_record()
        assert RequestContextFilter().filter(record) is True

        line = logging.Formatter(PLAIN_FORMAT).format(record)

        assert line.endswith("[- -] hello world")

    def test_context_in_brackets(self):
        """Test the request ID and command prefix the message."""
        set_request_id("req-3")
        set_command("/covid-th")
        record = make_record()
        RequestContextFilter().filter(record)

        line = logging.Formatter(PLAIN_FORMAT).format(record)

        assert "[req-3 /covid-th] hello world" in line


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.parametrize("json_output", [True, False])
    def test_single_handler_with_filter(self, json_output):
        """Test one root handler is installed carrying the context filter."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging("debug", json_output=json_output)

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            handler = root.handlers[0]
            assert any(isinstance(f, RequestContextFilter) for f in handler.filters)
            assert isinstance(handler.formatter, StructuredFormatter) is json_output
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


@pytest.mark.usefixtures("clean_context")
class TestRouterSetsCommand:
    """The router records the normalized command for log records."""

    @pytest.mark.asyncio
    async def test_known_command(self):
        """Test a dispatched command is visible to the formatter."""
        router = CommandRouter()

        async def handler(invocation: CommandInvocation):
            return json.loads(StructuredFormatter().format(make_record()))

        router.register("/ping", handler)

        data = await router.handle(CommandInvocation(command_name=" /PING "))

        assert data["command"] == "/ping"

    @pytest.mark.asyncio
    async def test_unknown_command(self):
        """Test an unknown command is still recorded."""
        await CommandRouter().handle(CommandInvocation(command_name="/weather"))

        assert get_command() == "/weather"
