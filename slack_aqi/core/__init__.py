"""Core slash command logic: routing, classification, formatting, upstream access.

This module provides:
- CommandRouter / build_router: dispatch by command name
- classify: AQI severity classification
- format_air_quality / format_epidemiological: reply assembly
- UpstreamClient: WAQI and COVID-19 API access
"""

from slack_aqi.core.errors import (
    ConfigurationError,
    InvalidReadingError,
    SlackAqiError,
    UpstreamFetchError,
    UpstreamPayloadShapeError,
    UpstreamTimeoutError,
)
from slack_aqi.core.formatter import (
    format_air_quality,
    format_epidemiological,
    render_slack_payload,
)
from slack_aqi.core.models import (
    AirQualityReading,
    CommandInvocation,
    CovidVariant,
    EpidemiologicalSnapshot,
    ReplyMessage,
    ReplySection,
    SeverityBand,
)
from slack_aqi.core.router import CommandRouter, build_router
from slack_aqi.core.severity import classify
from slack_aqi.core.upstream import UpstreamClient

__all__ = [
    "AirQualityReading",
    "CommandInvocation",
    "CommandRouter",
    "ConfigurationError",
    "CovidVariant",
    "EpidemiologicalSnapshot",
    "InvalidReadingError",
    "ReplyMessage",
    "ReplySection",
    "SeverityBand",
    "SlackAqiError",
    "UpstreamClient",
    "UpstreamFetchError",
    "UpstreamPayloadShapeError",
    "UpstreamTimeoutError",
    "build_router",
    "classify",
    "format_air_quality",
    "format_epidemiological",
    "render_slack_payload",
]
