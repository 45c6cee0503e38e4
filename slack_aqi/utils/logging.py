# slack_aqi/utils/logging.py
"""Request-scoped logging for slash command handling.

Each webhook request carries two context values that are attached to every
log record emitted while it is handled:

- ``request_id``: correlation ID set by the API middleware
- ``command``: normalized slash command name set by the router

Records are rendered either as one JSON object per line
(``StructuredFormatter``) or as plain text with the context in brackets.
"""

import json
import logging
from contextvars import ContextVar
from typing import Any

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
command_var: ContextVar[str] = ContextVar("command", default="")

PLAIN_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(request_id)s %(command)s] %(message)s"
)


def set_request_id(request_id: str) -> None:
    """Set the correlation ID for the current request context."""
    request_id_var.set(request_id)


def get_request_id() -> str:
    return request_id_var.get()


def set_command(command: str) -> None:
    """Set the slash command being handled in the current request context."""
    command_var.set(command)


def get_command() -> str:
    return command_var.get()


class RequestContextFilter(logging.Filter):
    """Copies the request ID and command name onto each record.

    Unset values are rendered as ``-`` so the plain format always resolves.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.command = get_command() or "-"
        return True


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON.

    ``request_id`` and ``command`` keys are present only when set for the
    request being handled.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        command = get_command()
        if command:
            log_data["command"] = command

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(level: int | str = logging.INFO, json_output: bool = True) -> None:
    """Install a single stderr handler on the root logger.

    Handlers installed earlier (including uvicorn's defaults) are replaced.

    Args:
        level: Logging level or level name.
        json_output: JSON lines when True, plain text otherwise.
    """
    handler = logging.StreamHandler()
    handler.addFilter(RequestContextFilter())
    if json_output:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, handlers=[handler], force=True)
