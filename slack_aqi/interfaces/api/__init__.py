"""FastAPI interface for Slack slash commands.

Entry point: slack-aqi (slack_aqi.interfaces.api.main:main)
"""
