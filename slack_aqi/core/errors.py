"""Exception hierarchy for slash command handling.

Upstream and classification failures propagate to the HTTP boundary, which
turns any ``SlackAqiError`` into a single fallback reply. ``ConfigurationError``
is raised at startup only.
"""


class SlackAqiError(Exception):
    """Base class for all errors raised by this application."""


class ConfigurationError(SlackAqiError):
    """Required configuration is missing or invalid."""


class UpstreamFetchError(SlackAqiError):
    """An upstream API request failed (network error or non-success status).

    Attributes:
        url: The upstream URL that was requested, with secrets removed.
    """

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class UpstreamTimeoutError(UpstreamFetchError):
    """An upstream API request exceeded its time budget."""


class UpstreamPayloadShapeError(UpstreamFetchError):
    """An upstream API response is missing or has malformed expected fields."""


class InvalidReadingError(SlackAqiError):
    """An AQI value outside the classifier's domain (not a non-negative integer)."""
