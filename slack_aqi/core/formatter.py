# slack_aqi/core/formatter.py
"""Build Slack replies for air quality and COVID-19 commands.

Replies are assembled as ``ReplyMessage`` values and rendered to Slack's
message payload by ``render_slack_payload``:

    {
        "response_type": "in_channel",
        "text": "<summary>",
        "attachments": [{"blocks": [<section>, ...]}]
    }

Each section is a mrkdwn ``section`` block with a color swatch image
accessory showing the section's number.
"""

from datetime import datetime, timezone
from typing import Any

from slack_aqi.core.errors import UpstreamPayloadShapeError
from slack_aqi.core.models import (
    AirQualityReading,
    CovidVariant,
    EpidemiologicalSnapshot,
    ReplyMessage,
    ReplySection,
    SeverityBand,
)
from slack_aqi.core.severity import swatch_url

AQI_REFERENCE_LINK = "<https://aqicn.org/|Reference : aqicn.org>"
AQI_ALT_TEXT = "AQI"
COVID_ALT_TEXT = "COVID-19"
DEFAULT_COVID_SOURCE_URL = "https://covid19.th-stat.com/api/open/today"
# Shorter digit strings are ISO basic dates (20200401), not epoch seconds
MIN_EPOCH_DIGITS = 9

# (snapshot field, label) per variant; order and colors are shared
COVID_SECTION_COLORS = ("7c3600", "009966", "ff9933", "cc0033")
COVID_FIELDS: dict[CovidVariant, tuple[tuple[str, str], ...]] = {
    CovidVariant.CUMULATIVE: (
        ("confirmed", "Confirmed cases in Thailand"),
        ("recovered", "Recovered cases in Thailand"),
        ("hospitalized", "Hospitalized cases in Thailand"),
        ("deaths", "Deaths cases in Thailand"),
    ),
    CovidVariant.NEW_TODAY: (
        ("new_confirmed", "New confirmed cases in Thailand today"),
        ("new_recovered", "New recovered cases in Thailand today"),
        ("new_hospitalized", "New hospitalized cases in Thailand today"),
        ("new_deaths", "New deaths cases in Thailand today"),
    ),
}


def format_observed_at(value: str) -> str:
    """Format a provider timestamp as ``DD/MM/YYYY, H:mm``.

    Accepts ISO 8601 local datetimes (``2020-04-01 14:00:00``, with or
    without a UTC offset), compact ISO dates (``20200401``) and epoch seconds
    given as a string of nine or more digits. The wall-clock time is shown as
    reported; offsets are not converted.

    Args:
        value: Timestamp string from the upstream payload.

    Returns:
        Display string, e.g. ``01/04/2020, 9:05``.

    Raises:
        UpstreamPayloadShapeError: If the timestamp cannot be parsed.
    """
    raw = value.strip()
    try:
        if raw.isdigit() and len(raw) >= MIN_EPOCH_DIGITS:
            observed = datetime.fromtimestamp(int(raw), tz=timezone.utc)
        else:
            observed = datetime.fromisoformat(raw)
    except (ValueError, OverflowError, OSError) as e:
        raise UpstreamPayloadShapeError(
            f"Unparseable observation time: {value!r}"
        ) from e

    return (
        f"{observed.day:02d}/{observed.month:02d}/{observed.year}, "
        f"{observed.hour}:{observed.minute:02d}"
    )


def format_air_quality(
    reading: AirQualityReading,
    band: SeverityBand,
    location_name: str = "Chiang Mai",
) -> ReplyMessage:
    """Build the ``/aqi`` reply.

    Args:
        reading: Current reading from the air quality provider.
        band: Severity band for ``reading.aqi``.
        location_name: Human label for the monitored area.

    Returns:
        Reply with a single band-colored section.
    """
    summary = (
        f"{location_name} AQI : {reading.aqi} From {reading.city_name} "
        f"Updated on {format_observed_at(reading.observed_at)}"
    )
    body = (
        f"*Level : {band.label}* {band.emoji} \n {band.description} \n "
        f"{AQI_REFERENCE_LINK}"
    )
    section = ReplySection(
        body_text=body,
        accessory_image_url=swatch_url(band.color, reading.aqi),
        accessory_alt_text=AQI_ALT_TEXT,
    )
    return ReplyMessage(summary_text=summary, sections=(section,))


def format_epidemiological(
    snapshot: EpidemiologicalSnapshot,
    variant: CovidVariant,
    source_url: str = DEFAULT_COVID_SOURCE_URL,
) -> ReplyMessage:
    """Build the ``/covid-th`` or ``/covid-th-today`` reply.

    Both variants produce four sections (confirmed, recovered, hospitalized,
    deaths) with the same color sequence; only the selected fields differ.
    """
    sections = tuple(
        ReplySection(
            body_text=f"{label} : {getattr(snapshot, field_name)}",
            accessory_image_url=swatch_url(color, getattr(snapshot, field_name)),
            accessory_alt_text=COVID_ALT_TEXT,
        )
        for (field_name, label), color in zip(
            COVID_FIELDS[variant], COVID_SECTION_COLORS
        )
    )
    summary = (
        f"Thailand COVID-19 : Ref {source_url} Updated on {snapshot.update_date}"
    )
    return ReplyMessage(summary_text=summary, sections=sections)


def plain_reply(text: str) -> ReplyMessage:
    """Build a text-only reply (rendered as a bare string)."""
    return ReplyMessage(summary_text=text)


def _section_block(section: ReplySection) -> dict[str, Any]:
    return {
        "type": "section",
        "text": {"type": "mrkdwn", "text": section.body_text},
        "accessory": {
            "type": "image",
            "image_url": section.accessory_image_url,
            "alt_text": section.accessory_alt_text,
        },
    }


def render_slack_payload(reply: ReplyMessage) -> dict[str, Any] | str:
    """Render a reply to the body Slack expects for a slash command response.

    Args:
        reply: Reply to render.

    Returns:
        The summary string for plain replies, otherwise the message payload dict.
    """
    if reply.is_plain:
        return reply.summary_text

    return {
        "response_type": reply.visibility.value,
        "text": reply.summary_text,
        "attachments": [
            {"blocks": [_section_block(section) for section in reply.sections]}
        ],
    }
