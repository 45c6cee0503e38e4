# slack_aqi/config.py
"""Application configuration using pydantic-settings.

Provides the Settings class for all environment variables. Settings are
constructed once at process start by ``load_settings`` and passed to the
application explicitly.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from slack_aqi.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file and environment variables.
    Environment variables take precedence over .env file values.
    """

    # Slack Integration
    slack_signing_secret: str = ""
    slack_access_token: str = ""
    slack_verify_signatures: bool = True

    # World Air Quality Index (aqicn.org)
    aqi_token: str = ""
    waqi_base_url: str = "https://api.waqi.info"
    aqi_station_geo: str = "18.820616;98.963435"  # nearest sensor to Chiang Mai
    aqi_location_name: str = "Chiang Mai"

    # Thailand COVID-19 open data
    covid_today_url: str = "https://covid19.th-stat.com/api/open/today"

    # Upstream HTTP
    upstream_timeout: float = 8.0  # seconds

    # Server
    port: int = 3000

    # Logging / Observability
    log_level: str = "INFO"
    log_json: bool = True
    logfire_token: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        case_sensitive=False,  # Allow case-insensitive env var names
    )

    @property
    def waqi_feed_url(self) -> str:
        """WAQI geo feed URL for the configured station (without token)."""
        return f"{self.waqi_base_url.rstrip('/')}/feed/geo:{self.aqi_station_geo}/"


def load_settings(**overrides) -> Settings:
    """Build and validate the process settings.

    Args:
        **overrides: Explicit values taking precedence over the environment.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If the Slack signing secret or access token is missing.
    """
    settings = Settings(**overrides)

    missing = [
        name
        for name in ("slack_signing_secret", "slack_access_token")
        if not getattr(settings, name)
    ]
    if missing:
        raise ConfigurationError(
            "A Slack signing secret and access token are required to run this app "
            f"(missing: {', '.join(name.upper() for name in missing)})"
        )

    return settings
