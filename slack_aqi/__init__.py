"""Slack slash commands for air quality and COVID-19 statistics."""

__version__ = "1.0.0"
