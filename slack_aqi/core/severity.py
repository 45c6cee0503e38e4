"""AQI severity classification.

Bands follow the US EPA AQI categories. Each range is inclusive on both ends
and bands are tested in ascending order of upper bound; anything above the
last bound is Hazardous.
"""

import math

from slack_aqi.core.errors import InvalidReadingError
from slack_aqi.core.models import SeverityBand

SWATCH_URL_TEMPLATE = "https://dummyimage.com/150x150/{color}/ffffff.png&text={text}"

GOOD = SeverityBand(
    name="Good",
    label="Good",
    emoji=":+1:",
    description=(
        "Air quality is considered satisfactory, and air pollution poses "
        "little or no risk"
    ),
    color="009966",
)
MODERATE = SeverityBand(
    name="Moderate",
    label="Moderate",
    emoji=":sweat_smile:",
    description=(
        "Air quality is acceptable; however, for some pollutants there may be "
        "a moderate health concern for a very small number of people who are "
        "unusually sensitive to air pollution"
    ),
    color="ffde33",
)
UNHEALTHY_FOR_SENSITIVE_GROUPS = SeverityBand(
    name="UnhealthyForSensitiveGroups",
    label="Unhealthy for Sensitive Groups",
    emoji=":expressionless:",
    description=(
        "Members of sensitive groups may experience health effects. "
        "The general public is not likely to be affected."
    ),
    color="ff9933",
)
UNHEALTHY = SeverityBand(
    name="Unhealthy",
    label="Unhealthy",
    emoji=":thinking_face:",
    description=(
        "Everyone may begin to experience health effects; members of sensitive "
        "groups may experience more serious health effects"
    ),
    color="cc0033",
)
VERY_UNHEALTHY = SeverityBand(
    name="VeryUnhealthy",
    label="Very Unhealthy",
    emoji=":fearful:",
    description=(
        "Health warnings of emergency conditions. "
        "The entire population is more likely to be affected."
    ),
    color="660099",
)
HAZARDOUS = SeverityBand(
    name="Hazardous",
    label="Hazardous",
    emoji=":scream:",
    description="Health alert: everyone may experience more serious health effects",
    color="7e0023",
)

# (inclusive upper bound, band), ascending
SEVERITY_TABLE: tuple[tuple[int, SeverityBand], ...] = (
    (50, GOOD),
    (100, MODERATE),
    (150, UNHEALTHY_FOR_SENSITIVE_GROUPS),
    (200, UNHEALTHY),
    (300, VERY_UNHEALTHY),
)

ALL_BANDS: tuple[SeverityBand, ...] = tuple(
    band for _, band in SEVERITY_TABLE
) + (HAZARDOUS,)


def validate_aqi(value: object) -> int:
    """Check that an AQI value is a non-negative finite integer.

    Integral floats (``42.0``) are accepted and converted; ``bool`` is not.

    Args:
        value: Candidate AQI value.

    Returns:
        The value as an int.

    Raises:
        InvalidReadingError: If the value is outside the classifier's domain.
    """
    if isinstance(value, bool):
        raise InvalidReadingError(f"AQI must be an integer, got {value!r}")

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidReadingError(f"AQI must be a finite integer, got {value!r}")
        value = int(value)

    if not isinstance(value, int):
        raise InvalidReadingError(f"AQI must be an integer, got {value!r}")

    if value < 0:
        raise InvalidReadingError(f"AQI must be non-negative, got {value}")

    return value


def classify(aqi: object) -> SeverityBand:
    """Map an AQI value to its severity band.

    Args:
        aqi: AQI value, a non-negative integer.

    Returns:
        The first band whose upper bound is >= aqi, or HAZARDOUS above 300.

    Raises:
        InvalidReadingError: If aqi is negative or not an integer.

    Examples:
        >>> classify(35).label
        'Good'
        >>> classify(275).label
        'Very Unhealthy'
        >>> classify(999).label
        'Hazardous'
    """
    value = validate_aqi(aqi)

    for upper_bound, band in SEVERITY_TABLE:
        if value <= upper_bound:
            return band

    return HAZARDOUS


def swatch_url(color: str, text: object) -> str:
    """Build a 150x150 color swatch image URL with ``text`` overlaid."""
    return SWATCH_URL_TEMPLATE.format(color=color, text=text)
