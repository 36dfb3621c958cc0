"""Device data fetching: latest reading and history for one station.

The history endpoint is keyed by MAC address, which only the device listing
provides, so a history fetch is always two sequential requests::

    GET /v1/devices/?...            -> [{macAddress, lastData, info}, ...]
    GET /v1/devices/{macAddress}?...  -> [{...reading...}, ...]  newest first

Requests go through a ``RateLimiter`` so consecutive calls honour the vendor's
one-request-per-second cap.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import requests
from pydantic import ValidationError

from ambient_weather import http
from ambient_weather.client import RateLimiter, build_url, default_rate_limiter, redact_url
from ambient_weather.decoder import Strictness, decode_many, decode_one
from ambient_weather.exceptions import (
    DecodeError,
    DeviceIndexError,
    RateLimitError,
    TransportError,
)
from ambient_weather.schemas import Credentials, Device, WeatherData

logger = logging.getLogger(__name__)

# =============================================================================
# Transport
# =============================================================================


def _get_json(url: str, session: requests.Session, rate_limiter: RateLimiter) -> Any:
    """GET ``url`` under the rate limiter and return the parsed JSON body."""
    safe_url = redact_url(url)
    logger.info("API request: %s", safe_url)

    with rate_limiter.throttle():
        try:
            resp = session.get(url)
        except requests.exceptions.RequestException as err:
            logger.error("API request failed: %s (%s)", safe_url, type(err).__name__)
            raise TransportError(f"Request failed: {type(err).__name__}", url=safe_url) from err

    if resp.status_code == 429:
        logger.error("API rate limit exceeded: %s", safe_url)
        raise RateLimitError("Rate limit exceeded", url=safe_url, status_code=429)
    try:
        resp.raise_for_status()
    except requests.exceptions.HTTPError as err:
        logger.error("API request error %s: %s", resp.status_code, safe_url)
        raise TransportError("Request failed", url=safe_url, status_code=resp.status_code) from err

    try:
        return resp.json()
    except ValueError as err:
        raise DecodeError(f"Response from {safe_url} is not valid JSON") from err


# =============================================================================
# Parsing
# =============================================================================


def _select_device(devices: Any, device_id: int) -> dict[str, Any]:
    """Pick the device at ``device_id`` from the listing response."""
    if not isinstance(devices, list):
        raise DecodeError(f"Expected a device list, got {type(devices).__name__}")
    if not 0 <= device_id < len(devices):
        raise DeviceIndexError(device_id, len(devices))

    device = devices[device_id]
    if not isinstance(device, dict):
        raise DecodeError(f"Device {device_id} is not a JSON object")
    return device


def _mac_address(device: dict[str, Any]) -> str:
    mac = device.get("macAddress")
    if not isinstance(mac, str) or not mac:
        raise DecodeError("Device has no macAddress string")
    return mac


# =============================================================================
# API Fetching
# =============================================================================


def fetch_device_data(
    credentials: Credentials,
    retrieve_history: bool,
    *,
    limit: int | None = None,
    end_date: datetime | int | None = None,
    session: requests.Session | None = None,
    rate_limiter: RateLimiter | None = None,
) -> Any:
    """
    Fetch raw JSON for the device selected by ``credentials.device_id``.

    Args:
        credentials: Account keys and device index.
        retrieve_history: If False, return the device's ``lastData`` object.
            If True, fetch and return the history list for its MAC address.
        limit: Max history records (history only).
        end_date: Newest history record to return (history only).
        session: HTTP session (defaults to the shared module session).
        rate_limiter: Request spacing guard (defaults to the process-wide one).

    Returns:
        ``lastData`` dict (or None if the device has none), or the history list
        exactly as the vendor returned it.

    Raises:
        TransportError: Network failure or non-2xx status.
        DecodeError: Body is not JSON or has an unexpected shape.
        DeviceIndexError: ``device_id`` is out of range. No history request
            is made in that case.
    """
    session = session if session is not None else http.session
    rate_limiter = rate_limiter if rate_limiter is not None else default_rate_limiter

    devices = _get_json(build_url(credentials), session, rate_limiter)
    device = _select_device(devices, credentials.device_id)

    if not retrieve_history:
        return device.get("lastData")

    mac = _mac_address(device)
    history = _get_json(
        build_url(credentials, mac, limit=limit, end_date=end_date), session, rate_limiter
    )
    if not isinstance(history, list):
        raise DecodeError(f"Expected a history list, got {type(history).__name__}")

    logger.info("Fetched %d history records for device %d", len(history), credentials.device_id)
    return history


def list_devices(
    credentials: Credentials,
    *,
    session: requests.Session | None = None,
    rate_limiter: RateLimiter | None = None,
) -> list[Device]:
    """
    Fetch every device on the account, in vendor order.

    The position of a device in this list is the ``device_id`` to use with
    ``get_latest`` and ``get_historic``.
    """
    session = session if session is not None else http.session
    rate_limiter = rate_limiter if rate_limiter is not None else default_rate_limiter

    raw = _get_json(build_url(credentials), session, rate_limiter)
    if not isinstance(raw, list):
        raise DecodeError(f"Expected a device list, got {type(raw).__name__}")
    try:
        return [Device.model_validate(entry) for entry in raw]
    except ValidationError as err:
        raise DecodeError(f"Malformed device entry: {err}") from err


def get_latest(
    credentials: Credentials,
    *,
    strictness: Strictness | None = None,
    session: requests.Session | None = None,
    rate_limiter: RateLimiter | None = None,
) -> WeatherData:
    """
    Get the most recent reading for the selected device.

    Decoding is lenient unless ``strictness`` says otherwise: wrongly-typed
    fields are left unset, and a missing ``lastData`` gives an empty record.
    """
    raw = fetch_device_data(
        credentials, retrieve_history=False, session=session, rate_limiter=rate_limiter
    )
    return decode_one(raw, strictness if strictness is not None else Strictness.LENIENT)


def get_historic(
    credentials: Credentials,
    *,
    limit: int | None = None,
    end_date: datetime | int | None = None,
    strictness: Strictness | None = None,
    session: requests.Session | None = None,
    rate_limiter: RateLimiter | None = None,
) -> list[WeatherData]:
    """
    Get past readings for the selected device, newest first.

    Decoding is strict unless ``strictness`` says otherwise: one malformed
    record fails the whole call with ``DecodeError``.
    """
    raw = fetch_device_data(
        credentials,
        retrieve_history=True,
        limit=limit,
        end_date=end_date,
        session=session,
        rate_limiter=rate_limiter,
    )
    return decode_many(raw, strictness if strictness is not None else Strictness.STRICT)
