# slack_aqi/core/models.py
"""Domain data models for slash command handling.

All values are created per request and never mutated, so every dataclass
here is frozen.
"""

from dataclasses import dataclass, field
from enum import Enum


class Visibility(str, Enum):
    """Who can see a reply in Slack."""

    IN_CHANNEL = "in_channel"


class CovidVariant(str, Enum):
    """Which subset of the epidemiological snapshot to display."""

    CUMULATIVE = "cumulative"
    NEW_TODAY = "new_today"


@dataclass(frozen=True)
class CommandInvocation:
    """A single slash command invocation.

    Attributes:
        command_name: The slash command, e.g. ``/aqi``.
        text: Free text typed after the command (unused by current commands).
        user_id: Slack user who invoked the command.
        channel_id: Slack channel the command was invoked in.
        team_id: Slack workspace identifier.
    """

    command_name: str
    text: str = ""
    user_id: str = ""
    channel_id: str = ""
    team_id: str = ""


@dataclass(frozen=True)
class AirQualityReading:
    """Air quality reading from the nearest monitoring station.

    Attributes:
        aqi: Air Quality Index value.
        city_name: Station/city name reported by the provider.
        observed_at: Observation timestamp string as reported by the provider.
    """

    aqi: int
    city_name: str
    observed_at: str


@dataclass(frozen=True)
class EpidemiologicalSnapshot:
    """Daily COVID-19 statistics for Thailand."""

    confirmed: int
    recovered: int
    hospitalized: int
    deaths: int
    new_confirmed: int
    new_recovered: int
    new_hospitalized: int
    new_deaths: int
    update_date: str


@dataclass(frozen=True)
class SeverityBand:
    """An AQI severity band.

    Attributes:
        name: Stable identifier, e.g. ``VeryUnhealthy``.
        label: Display label, e.g. ``Very Unhealthy``.
        emoji: Slack emoji token shown next to the label.
        description: One-sentence health impact description.
        color: Hex color (without ``#``) used for the swatch.
    """

    name: str
    label: str
    emoji: str
    description: str
    color: str


@dataclass(frozen=True)
class ReplySection:
    """One section block with an image accessory."""

    body_text: str
    accessory_image_url: str
    accessory_alt_text: str


@dataclass(frozen=True)
class ReplyMessage:
    """A reply to a slash command.

    A reply without sections is a plain-text reply and is rendered as a bare
    string body.

    Attributes:
        summary_text: Top-level message text.
        sections: Ordered section blocks; display order matters.
        visibility: Slack response type.
    """

    summary_text: str
    sections: tuple[ReplySection, ...] = field(default_factory=tuple)
    visibility: Visibility = Visibility.IN_CHANNEL

    @property
    def is_plain(self) -> bool:
        return not self.sections
