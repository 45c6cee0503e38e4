# slack_aqi/core/router.py
"""Slash command routing.

Maps each command name to exactly one async handler. Unknown commands get a
fixed usage reply without any I/O.
"""

import logging
from collections.abc import Awaitable, Callable
from functools import partial

from slack_aqi.core.formatter import (
    format_air_quality,
    format_epidemiological,
    plain_reply,
)
from slack_aqi.core.models import CommandInvocation, CovidVariant, ReplyMessage
from slack_aqi.core.severity import classify
from slack_aqi.core.upstream import UpstreamClient
from slack_aqi.utils.logging import set_command

logger = logging.getLogger(__name__)

AQI_COMMAND = "/aqi"
COVID_COMMAND = "/covid-th"
COVID_TODAY_COMMAND = "/covid-th-today"

FALLBACK_TEXT = "Please use / to show command list"

CommandHandler = Callable[[CommandInvocation], Awaitable[ReplyMessage]]


def normalize_command_name(name: str) -> str:
    """Normalize a command name for lookup (trimmed, lowercase)."""
    return name.strip().lower()


class CommandRouter:
    """Dispatches slash command invocations to registered handlers.

    Example:
        >>> router = CommandRouter()
        >>> router.register("/ping", ping_handler)
        >>> reply = await router.handle(CommandInvocation(command_name="/ping"))
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}

    def register(self, name: str, handler: CommandHandler) -> None:
        """Register a handler for a command name.

        Raises:
            ValueError: If the name is empty or already registered.
        """
        key = normalize_command_name(name)
        if not key:
            raise ValueError("Command name must not be empty")
        if key in self._handlers:
            raise ValueError(f"Command '{key}' is already registered")
        self._handlers[key] = handler

    @property
    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def resolve(self, name: str) -> CommandHandler | None:
        return self._handlers.get(normalize_command_name(name))

    async def handle(self, invocation: CommandInvocation) -> ReplyMessage:
        """Run the handler for an invocation, or return the usage reply.

        Upstream and classification errors from the handler propagate.
        """
        set_command(normalize_command_name(invocation.command_name))
        handler = self.resolve(invocation.command_name)
        if handler is None:
            logger.info("Unknown command %r", invocation.command_name)
            return plain_reply(FALLBACK_TEXT)

        logger.info(
            "Handling %s for user %s in %s",
            invocation.command_name,
            invocation.user_id or "-",
            invocation.channel_id or "-",
        )
        return await handler(invocation)


async def handle_air_quality(
    invocation: CommandInvocation,
    upstream: UpstreamClient,
    location_name: str,
) -> ReplyMessage:
    """Fetch, classify and format the current air quality reading.

    Args:
        invocation: The ``/aqi`` invocation.
        upstream: Client for the WAQI feed.
        location_name: Label shown in the reply summary.

    Returns:
        Single-section reply colored by severity band.

    Raises:
        UpstreamFetchError: If the reading cannot be fetched or parsed.
        InvalidReadingError: If the reported AQI is not a non-negative integer.
    """
    reading = await upstream.fetch_air_quality()
    band = classify(reading.aqi)
    logger.info(
        "%s: AQI %s classified as %s", invocation.command_name, reading.aqi, band.name
    )
    return format_air_quality(reading, band, location_name=location_name)


async def handle_epidemiological(
    invocation: CommandInvocation,
    upstream: UpstreamClient,
    variant: CovidVariant,
) -> ReplyMessage:
    """Fetch today's COVID-19 statistics and format the requested variant.

    Raises:
        UpstreamFetchError: If the statistics cannot be fetched or parsed.
    """
    snapshot = await upstream.fetch_epidemiological()
    logger.info(
        "%s: COVID-19 %s snapshot from %s",
        invocation.command_name,
        variant.value,
        snapshot.update_date,
    )
    return format_epidemiological(
        snapshot, variant, source_url=upstream.covid_today_url
    )


def build_router(
    upstream: UpstreamClient, location_name: str = "Chiang Mai"
) -> CommandRouter:
    """Create a router with the built-in commands registered.

    Args:
        upstream: Client used by all handlers.
        location_name: Label shown in the ``/aqi`` summary.

    Returns:
        CommandRouter handling ``/aqi``, ``/covid-th`` and ``/covid-th-today``.
    """
    router = CommandRouter()
    router.register(
        AQI_COMMAND,
        partial(handle_air_quality, upstream=upstream, location_name=location_name),
    )
    router.register(
        COVID_COMMAND,
        partial(
            handle_epidemiological, upstream=upstream, variant=CovidVariant.CUMULATIVE
        ),
    )
    router.register(
        COVID_TODAY_COMMAND,
        partial(
            handle_epidemiological, upstream=upstream, variant=CovidVariant.NEW_TODAY
        ),
    )
    return router
