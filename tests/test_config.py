"""Tests for settings loading and startup validation."""

import pytest

from slack_aqi.config import Settings, load_settings
from slack_aqi.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "SLACK_SIGNING_SECRET",
        "SLACK_ACCESS_TOKEN",
        "AQI_TOKEN",
        "PORT",
        "UPSTREAM_TIMEOUT",
        "AQI_STATION_GEO",
        "WAQI_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_reads_environment(self, monkeypatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("SLACK_SIGNING_SECRET", "secret")
        monkeypatch.setenv("SLACK_ACCESS_TOKEN", "xoxb-token")
        monkeypatch.setenv("AQI_TOKEN", "aqi")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("UPSTREAM_TIMEOUT", "5")

        settings = load_settings(_env_file=None)

        assert settings.slack_signing_secret == "secret"
        assert settings.slack_access_token == "xoxb-token"
        assert settings.aqi_token == "aqi"
        assert settings.port == 8080
        assert settings.upstream_timeout == 5.0

    def test_missing_signing_secret_is_fatal(self, monkeypatch):
        """Test startup fails without a signing secret."""
        monkeypatch.setenv("SLACK_ACCESS_TOKEN", "xoxb-token")

        with pytest.raises(ConfigurationError, match="SLACK_SIGNING_SECRET"):
            load_settings(_env_file=None)

    def test_missing_access_token_is_fatal(self, monkeypatch):
        """Test startup fails without an access token."""
        monkeypatch.setenv("SLACK_SIGNING_SECRET", "secret")

        with pytest.raises(ConfigurationError, match="SLACK_ACCESS_TOKEN"):
            load_settings(_env_file=None)

    def test_overrides(self):
        """Test keyword overrides satisfy the required secrets."""
        settings = load_settings(
            _env_file=None,
            slack_signing_secret="s",
            slack_access_token="t",
        )
        assert settings.slack_verify_signatures is True


class TestSettings:
    """Tests for Settings defaults and derived values."""

    def test_defaults(self):
        """Test the port, timeout and COVID URL defaults."""
        settings = Settings(_env_file=None)

        assert settings.port == 3000
        assert settings.upstream_timeout == 8.0
        assert settings.covid_today_url == "https://covid19.th-stat.com/api/open/today"

    def test_waqi_feed_url(self, monkeypatch):
        """Test the feed URL is built from base URL and station geo."""
        monkeypatch.setenv("WAQI_BASE_URL", "https://example.test/")
        monkeypatch.setenv("AQI_STATION_GEO", "13.75;100.5")

        settings = Settings(_env_file=None)

        assert settings.waqi_feed_url == "https://example.test/feed/geo:13.75;100.5/"
