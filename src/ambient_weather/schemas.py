"""
Domain models for the Ambient Weather client.

Pydantic models for credentials and for the vendor's JSON payloads. Field names
follow the vendor's device-parameter list
(https://github.com/ambient-weather/api-docs/wiki/Device-Data-Specs); where the
vendor name is camelCase or not a valid identifier, the attribute is snake_case
and the vendor name is its alias.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Credentials
# =============================================================================


class Credentials(BaseModel):
    """Keys and device selection for one Ambient Weather account."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., repr=False, description="Account API key")
    app_key: str = Field(..., repr=False, description="Application key")
    device_id: int = Field(default=0, ge=0, description="Index into the account's device list")
    use_new_endpoint: bool = Field(
        default=False,
        description="Use the rt. host instead of api.; the rt. host is known to misbehave",
    )


# =============================================================================
# Weather readings
# =============================================================================


class WeatherData(BaseModel):
    """
    A single reading from a station.

    Every field is optional since each device model reports its own subset.
    Typing is strict: a number sent as a string is a validation error, not a
    coercion. Input is matched on vendor names only; the snake_case attribute
    names are not accepted as keys.
    """

    model_config = ConfigDict(strict=True, extra="ignore")

    # Time
    dateutc: int | None = Field(default=None, description="Epoch milliseconds, UTC")
    date: str | None = Field(default=None, description="ISO-8601 timestamp")
    tz: str | None = None

    # Outdoor / indoor conditions
    tempf: float | None = None
    tempinf: float | None = None
    humidity: float | None = None
    humidityin: float | None = None
    feels_like: float | None = Field(default=None, alias="feelsLike")
    dew_point: float | None = Field(default=None, alias="dewPoint")
    feels_like_in: float | None = Field(default=None, alias="feelsLikein")
    dew_point_in: float | None = Field(default=None, alias="dewPointin")

    # Pressure (inHg)
    baromrelin: float | None = None
    baromabsin: float | None = None

    # Wind
    windspeedmph: float | None = None
    windgustmph: float | None = None
    maxdailygust: float | None = None
    winddir: float | None = None
    windgustdir: float | None = None
    windspdmph_avg2m: float | None = None
    winddir_avg2m: float | None = None
    windspdmph_avg10m: float | None = None
    winddir_avg10m: float | None = None

    # Rain (inches)
    hourlyrainin: float | None = None
    eventrainin: float | None = None
    dailyrainin: float | None = None
    weeklyrainin: float | None = None
    monthlyrainin: float | None = None
    yearlyrainin: float | None = None
    totalrainin: float | None = None
    rain_24h_in: float | None = Field(default=None, alias="24hourrainin")
    last_rain: str | None = Field(default=None, alias="lastRain")

    # Sun
    uv: float | None = None
    solarradiation: float | None = None

    # Air quality
    co2: float | None = None
    pm25: float | None = None
    pm25_24h: float | None = None
    pm25_in: float | None = None
    pm25_in_24h: float | None = None
    aqi_pm25: float | None = None
    aqi_pm25_24h: float | None = None

    # Lightning
    lightning_day: int | None = None
    lightning_hour: int | None = None
    lightning_time: int | None = None
    lightning_distance: float | None = None

    # Extra sensor channels
    temp1f: float | None = None
    temp2f: float | None = None
    temp3f: float | None = None
    temp4f: float | None = None
    temp5f: float | None = None
    temp6f: float | None = None
    temp7f: float | None = None
    temp8f: float | None = None
    temp9f: float | None = None
    temp10f: float | None = None
    humidity1: float | None = None
    humidity2: float | None = None
    humidity3: float | None = None
    humidity4: float | None = None
    humidity5: float | None = None
    humidity6: float | None = None
    humidity7: float | None = None
    humidity8: float | None = None
    humidity9: float | None = None
    humidity10: float | None = None
    soiltemp1f: float | None = None
    soiltemp2f: float | None = None
    soiltemp3f: float | None = None
    soiltemp4f: float | None = None
    soilhum1: float | None = None
    soilhum2: float | None = None
    soilhum3: float | None = None
    soilhum4: float | None = None
    leak1: int | None = None
    leak2: int | None = None
    leak3: int | None = None
    leak4: int | None = None

    # Battery / signal (1 = OK, 0 = low)
    battout: int | None = None
    battin: int | None = None
    batt1: int | None = None
    batt2: int | None = None
    batt3: int | None = None
    batt4: int | None = None
    batt5: int | None = None
    batt6: int | None = None
    batt7: int | None = None
    batt8: int | None = None
    batt9: int | None = None
    batt10: int | None = None
    batt_co2: int | None = None
    batt_lightning: int | None = None
    battleak1: int | None = None
    battleak2: int | None = None
    battleak3: int | None = None
    battleak4: int | None = None

    @property
    def observed_at(self) -> datetime | None:
        """Reading time as an aware UTC datetime, from ``dateutc``."""
        if self.dateutc is None:
            return None
        return datetime.fromtimestamp(self.dateutc / 1000, tz=UTC)

    @property
    def is_empty(self) -> bool:
        """True when no field carries a value."""
        return all(value is None for value in self.model_dump().values())


# =============================================================================
# Devices
# =============================================================================


class DeviceInfo(BaseModel):
    """User-assigned station metadata."""

    name: str | None = None
    location: str | None = None


class Device(BaseModel):
    """One entry of the device listing."""

    model_config = ConfigDict(populate_by_name=True)

    mac_address: str = Field(..., alias="macAddress")
    last_data: dict[str, Any] | None = Field(default=None, alias="lastData")
    info: DeviceInfo | None = None
