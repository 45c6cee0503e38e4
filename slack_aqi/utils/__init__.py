"""Utility functions for the Slack AQI app."""

from slack_aqi.utils.logging import (
    configure_logging,
    get_command,
    get_request_id,
    set_command,
    set_request_id,
)

__all__ = [
    "configure_logging",
    "set_request_id",
    "get_request_id",
    "set_command",
    "get_command",
]
