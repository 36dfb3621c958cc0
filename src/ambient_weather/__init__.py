"""Ambient Weather - client for the ambientweather.net REST API.

Architecture::

    schemas.py     Credentials, WeatherData, Device (pydantic)
    client.py      URL builder, vendor constants, request rate limiter
    http.py        Shared requests.Session (timeout, no retries)
    devices.py     Two-step fetch: device listing -> history by MAC
    decoder.py     Raw JSON -> WeatherData, lenient or strict
    config.py      Environment settings for the CLI
    cli.py         ``ambient-weather`` command

Usage::

    from ambient_weather import Credentials, get_latest, get_historic

    creds = Credentials(api_key="...", app_key="...", device_id=0)
    print(get_latest(creds).tempf)
    for reading in get_historic(creds):
        print(reading.date, reading.tempf)
"""

__version__ = "0.4.0"

from ambient_weather.client import RateLimiter, build_url
from ambient_weather.decoder import Strictness, decode_many, decode_one
from ambient_weather.devices import fetch_device_data, get_historic, get_latest, list_devices
from ambient_weather.exceptions import (
    AmbientWeatherError,
    DecodeError,
    DeviceIndexError,
    RateLimitError,
    TransportError,
)
from ambient_weather.schemas import Credentials, Device, DeviceInfo, WeatherData

__all__ = [
    "AmbientWeatherError",
    "Credentials",
    "DecodeError",
    "Device",
    "DeviceIndexError",
    "DeviceInfo",
    "RateLimitError",
    "RateLimiter",
    "Strictness",
    "TransportError",
    "WeatherData",
    "__version__",
    "build_url",
    "decode_many",
    "decode_one",
    "fetch_device_data",
    "get_historic",
    "get_latest",
    "list_devices",
]
