# slack_aqi/core/upstream.py
"""Clients for the upstream air quality and COVID-19 APIs.

A single ``httpx.AsyncClient`` is shared by all requests. Every fetch is
bounded by a timeout and performs exactly one GET; there are no retries.
Responses are validated into typed entities before use.
"""

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from slack_aqi.core.errors import (
    UpstreamFetchError,
    UpstreamPayloadShapeError,
    UpstreamTimeoutError,
)
from slack_aqi.core.models import AirQualityReading, EpidemiologicalSnapshot
from slack_aqi.core.schemas import CovidTodayResponse, WaqiFeedResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class UpstreamClient:
    """Fetches readings from the upstream providers.

    Attributes:
        http: Shared async HTTP client.
        waqi_feed_url: WAQI geo feed URL for the monitored station.
        aqi_token: WAQI API token (sent as the ``token`` query parameter).
        covid_today_url: Thailand COVID-19 daily statistics URL.
        timeout: Overall time budget per fetch in seconds.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     client = UpstreamClient(http, waqi_feed_url=url, aqi_token="...")
        ...     reading = await client.fetch_air_quality()
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        waqi_feed_url: str,
        aqi_token: str,
        covid_today_url: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.http = http
        self.waqi_feed_url = waqi_feed_url
        self.aqi_token = aqi_token
        self.covid_today_url = covid_today_url
        self.timeout = timeout

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            UpstreamTimeoutError: If the request exceeds ``self.timeout``.
            UpstreamFetchError: On connection errors or non-2xx status.
            UpstreamPayloadShapeError: If the body is not JSON.
        """
        try:
            # httpx timeouts apply per phase; the deadline caps the whole fetch
            async with asyncio.timeout(self.timeout):
                response = await self.http.get(
                    url, params=params, timeout=self.timeout
                )
            response.raise_for_status()
        except (TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError(
                f"Upstream request timed out after {self.timeout}s", url=url
            ) from e
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"Upstream returned HTTP {e.response.status_code}", url=url
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(
                f"Upstream request failed: {type(e).__name__}", url=url
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamPayloadShapeError(
                "Upstream response is not valid JSON", url=url
            ) from e

    @staticmethod
    def _parse(model: type[ModelT], payload: Any, url: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise UpstreamPayloadShapeError(
                f"Unexpected {model.__name__} payload: {e.error_count()} error(s)",
                url=url,
            ) from e

    async def fetch_air_quality(self) -> AirQualityReading:
        """Fetch the current reading for the configured station.

        Returns:
            AirQualityReading from the WAQI feed.

        Raises:
            UpstreamFetchError: On transport failure or a non-ok WAQI status.
            UpstreamTimeoutError: If the request times out.
            UpstreamPayloadShapeError: If expected fields are missing.
        """
        url = self.waqi_feed_url
        payload = await self._get_json(url, params={"token": self.aqi_token})
        feed = self._parse(WaqiFeedResponse, payload, url)

        # WAQI reports errors such as an invalid token with HTTP 200
        if feed.status != "ok":
            raise UpstreamFetchError(
                f"WAQI returned status {feed.status!r}: {feed.data!r}", url=url
            )

        reading = feed.to_reading()
        logger.info("Fetched AQI %s from %s", reading.aqi, reading.city_name)
        return reading

    async def fetch_epidemiological(self) -> EpidemiologicalSnapshot:
        """Fetch today's COVID-19 statistics for Thailand."""
        url = self.covid_today_url
        payload = await self._get_json(url)
        snapshot = self._parse(CovidTodayResponse, payload, url).to_snapshot()
        logger.info("Fetched COVID-19 snapshot updated %s", snapshot.update_date)
        return snapshot
