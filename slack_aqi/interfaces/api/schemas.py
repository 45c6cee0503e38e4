# slack_aqi/interfaces/api/schemas.py
"""Pydantic models for FastAPI request/response validation."""

from pydantic import BaseModel, ConfigDict, Field

from slack_aqi.core.models import CommandInvocation


class SlashCommandForm(BaseModel):
    """Form fields Slack sends with a slash command (the ones we use).

    Attributes:
        command: The slash command, e.g. ``/aqi``.
        text: Text typed after the command.
        user_id: Invoking user.
        channel_id: Channel the command was invoked in.
        team_id: Workspace identifier.
    """

    model_config = ConfigDict(extra="ignore")

    command: str = Field(..., description="Slash command name")
    text: str = Field("", description="Text after the command")
    user_id: str = Field("", description="Slack user ID")
    channel_id: str = Field("", description="Slack channel ID")
    team_id: str = Field("", description="Slack workspace ID")

    def to_invocation(self) -> CommandInvocation:
        return CommandInvocation(
            command_name=self.command,
            text=self.text,
            user_id=self.user_id,
            channel_id=self.channel_id,
            team_id=self.team_id,
        )


class RootResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str = Field(..., description="Service status")
    commands: list[str] = Field(
        default_factory=list, description="Registered slash commands"
    )
