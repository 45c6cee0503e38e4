"""Observability configuration with Pydantic Logfire."""

import logging

from fastapi import FastAPI

from slack_aqi.config import Settings

logger = logging.getLogger(__name__)


def setup_logfire(settings: Settings, app: FastAPI | None = None) -> bool:
    """Configure Logfire for observability.

    Only activates if LOGFIRE_TOKEN is set. Instruments outbound httpx
    requests and, when given, the FastAPI application.

    Returns:
        True if Logfire was configured.
    """
    if not settings.logfire_token:
        return False

    try:
        import logfire

        logfire.configure(token=settings.logfire_token, service_name="slack-aqi")
        logfire.instrument_httpx()
        if app is not None:
            logfire.instrument_fastapi(app)
    except Exception as e:
        # Log but don't fail - observability is optional
        logger.warning("Failed to configure Logfire: %s", str(e))
        return False

    return True
