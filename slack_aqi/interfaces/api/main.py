# slack_aqi/interfaces/api/main.py
"""FastAPI application receiving Slack slash commands.

Endpoints:
- POST /slack/commands: slash command webhook (form-encoded)
- GET /: static greeting
- GET /health: health check with the registered commands

Entry point: ``slack-aqi`` (or ``python -m slack_aqi.interfaces.api.main``)
"""

import logging
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Annotated, Any

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from slack_aqi.config import Settings, load_settings
from slack_aqi.core.errors import SlackAqiError
from slack_aqi.core.formatter import render_slack_payload
from slack_aqi.core.router import CommandRouter, build_router
from slack_aqi.core.upstream import UpstreamClient
from slack_aqi.interfaces.api.schemas import (
    HealthResponse,
    RootResponse,
    SlashCommandForm,
)
from slack_aqi.interfaces.api.security import (
    build_signature_verifier,
    verify_slack_signature,
)
from slack_aqi.utils.logging import configure_logging, set_request_id
from slack_aqi.utils.observability import setup_logfire

logger = logging.getLogger(__name__)

ERROR_REPLY_TEXT = "Unable to fetch data right now, please try again"
GREETING = "Hi, this is air quality slack app."
REQUEST_ID_HEADER = "X-Request-ID"

SignedRequest = Annotated[None, Depends(verify_slack_signature)]


def get_router(request: Request) -> CommandRouter:
    return request.app.state.command_router


async def slack_error_handler(request: Request, exc: Exception) -> Response:
    """Turn any command failure into a single user-visible reply.

    Slack only renders the body of a 200 response, so the status stays 200.
    """
    logger.error(
        "Command failed with %s: %s", type(exc).__name__, exc, exc_info=exc
    )
    return PlainTextResponse(ERROR_REPLY_TEXT)


async def request_id_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Attach a correlation ID to the request's log records and response."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def create_app(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Validated settings (see ``load_settings``).
        http_client: Shared client for upstream requests. When omitted, one is
            created and closed on application shutdown.

    Returns:
        Configured FastAPI application.
    """
    owns_client = http_client is None
    http = http_client or httpx.AsyncClient(timeout=settings.upstream_timeout)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        commands = app.state.command_router.commands
        logger.info("Slash commands ready: %s", ", ".join(commands))

        yield

        if owns_client:
            await http.aclose()
        logger.info("Shutting down...")

    app = FastAPI(
        title="Slack AQI",
        description="Slack slash commands for air quality and COVID-19 statistics",
        version="1.0.0",
        lifespan=lifespan,
    )

    upstream = UpstreamClient(
        http,
        waqi_feed_url=settings.waqi_feed_url,
        aqi_token=settings.aqi_token,
        covid_today_url=settings.covid_today_url,
        timeout=settings.upstream_timeout,
    )
    app.state.settings = settings
    app.state.command_router = build_router(
        upstream, location_name=settings.aqi_location_name
    )
    app.state.signature_verifier = build_signature_verifier(
        settings.slack_signing_secret, enabled=settings.slack_verify_signatures
    )

    app.add_exception_handler(SlackAqiError, slack_error_handler)
    app.middleware("http")(request_id_middleware)

    app.add_api_route("/", root, methods=["GET"], response_model=RootResponse)
    app.add_api_route(
        "/health", health_check, methods=["GET"], response_model=HealthResponse
    )
    app.add_api_route("/slack/commands", slack_command, methods=["POST"])

    setup_logfire(settings, app)

    return app


async def root() -> RootResponse:
    """Liveness endpoint."""
    return RootResponse(message=GREETING)


async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint.

    Returns:
        HealthResponse with status and registered slash commands.
    """
    return HealthResponse(status="healthy", commands=get_router(request).commands)


async def slack_command(request: Request, _signed: SignedRequest) -> Response:
    """Handle a slash command invocation.

    Returns the message payload as JSON for recognized commands, or a plain
    text reply for unknown commands. Command failures are converted by
    ``slack_error_handler``.

    Raises:
        HTTPException: 400 if the form has no ``command`` field.
    """
    form = await request.form()
    try:
        command_form = SlashCommandForm.model_validate(dict(form))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing slash command.",
        ) from e

    reply = await get_router(request).handle(command_form.to_invocation())

    payload: dict[str, Any] | str = render_slack_payload(reply)
    if isinstance(payload, str):
        return PlainTextResponse(payload)
    return JSONResponse(payload)


def main() -> None:
    """Entry point: load settings, configure logging, and serve with uvicorn."""
    # Load environment variables from .env file
    load_dotenv()

    settings = load_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    app = create_app(settings)
    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
