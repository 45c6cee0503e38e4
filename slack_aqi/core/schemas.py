# slack_aqi/core/schemas.py
"""Pydantic models for upstream API payloads.

Upstream JSON is validated against these models before any field is used,
then mapped to the domain dataclasses in ``slack_aqi.core.models``.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from slack_aqi.core.errors import UpstreamPayloadShapeError
from slack_aqi.core.models import AirQualityReading, EpidemiologicalSnapshot


class WaqiCity(BaseModel):
    name: str


class WaqiTime(BaseModel):
    s: str = Field(..., description="Local observation time, e.g. 2020-04-01 14:00:00")


class WaqiData(BaseModel):
    """The ``data`` object of a WAQI feed response (fields we use only)."""

    aqi: StrictInt  # rejects true and "42"
    city: WaqiCity
    time: WaqiTime


class WaqiFeedResponse(BaseModel):
    """WAQI ``/feed/geo:lat;lng/`` response.

    Attributes:
        status: ``ok`` on success, ``error`` otherwise.
        data: Station data on success; an error string otherwise.
    """

    status: str
    data: WaqiData | str

    def to_reading(self) -> AirQualityReading:
        """Map to an AirQualityReading.

        Raises:
            UpstreamPayloadShapeError: If ``data`` is not a station object.
        """
        if not isinstance(self.data, WaqiData):
            raise UpstreamPayloadShapeError(
                f"WAQI feed data is not a station object: {self.data!r}"
            )
        return AirQualityReading(
            aqi=self.data.aqi,
            city_name=self.data.city.name,
            observed_at=self.data.time.s,
        )


class CovidTodayResponse(BaseModel):
    """Thailand COVID-19 ``/api/open/today`` response."""

    model_config = ConfigDict(populate_by_name=True)

    confirmed: StrictInt = Field(..., alias="Confirmed")
    recovered: StrictInt = Field(..., alias="Recovered")
    hospitalized: StrictInt = Field(..., alias="Hospitalized")
    deaths: StrictInt = Field(..., alias="Deaths")
    new_confirmed: StrictInt = Field(..., alias="NewConfirmed")
    new_recovered: StrictInt = Field(..., alias="NewRecovered")
    new_hospitalized: StrictInt = Field(..., alias="NewHospitalized")
    new_deaths: StrictInt = Field(..., alias="NewDeaths")
    update_date: str = Field(..., alias="UpdateDate")

    def to_snapshot(self) -> EpidemiologicalSnapshot:
        return EpidemiologicalSnapshot(**self.model_dump())
