"""Tests for Logfire setup."""

from unittest.mock import MagicMock, patch

from slack_aqi.utils.observability import setup_logfire


class TestSetupLogfire:
    """Tests for setup_logfire."""

    def test_disabled_without_token(self, settings):
        """Test Logfire stays off without a token."""
        settings.logfire_token = ""
        assert setup_logfire(settings) is False

    def test_configures_when_token_set(self, settings):
        """Test httpx and the app are instrumented when a token is set."""
        settings.logfire_token = "lf-token"
        app = MagicMock()

        with patch("logfire.configure") as configure, patch(
            "logfire.instrument_httpx"
        ) as instrument_httpx, patch("logfire.instrument_fastapi") as instrument_app:
            assert setup_logfire(settings, app) is True

        configure.assert_called_once()
        instrument_httpx.assert_called_once_with()
        instrument_app.assert_called_once_with(app)

    def test_failure_is_not_fatal(self, settings):
        """Test a Logfire failure is reported and not raised."""
        settings.logfire_token = "lf-token"

        with patch("logfire.configure", side_effect=RuntimeError("no network")):
            assert setup_logfire(settings) is False
