"""Ambient Weather REST API URLs, constants and rate limiting.

API docs:
  - REST: https://ambientweather.docs.apiary.io
  - Device parameters: https://github.com/ambient-weather/api-docs/wiki/Device-Data-Specs
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

if TYPE_CHECKING:
    from ambient_weather.schemas import Credentials

logger = logging.getLogger(__name__)

VENDOR_DOMAIN = "ambientweather.net"
STABLE_HOST = f"api.{VENDOR_DOMAIN}"
# Newer endpoint; has known vendor-side issues, so it's opt-in only.
ALTERNATE_HOST = f"rt.{VENDOR_DOMAIN}"
DEVICES_PATH = "/v1/devices"

# Vendor cap is one request per second per API key
MIN_REQUEST_INTERVAL = 1.0

_SECRET_PARAMS = ("apiKey", "applicationKey")


def build_url(
    credentials: Credentials,
    mac_address: str = "",
    *,
    limit: int | None = None,
    end_date: datetime | int | None = None,
) -> str:
    """Build the devices endpoint URL.

    An empty ``mac_address`` targets the device listing; a MAC targets that
    device's history. Keys are interpolated verbatim.

    Args:
        credentials: Account keys and host selection.
        mac_address: Device MAC, or "" for the listing.
        limit: Max history records to return (history only).
        end_date: Newest record to return, as a datetime or epoch milliseconds
            (history only).

    Returns:
        Fully-qualified HTTPS URL.
    """
    host = ALTERNATE_HOST if credentials.use_new_endpoint else STABLE_HOST
    url = (
        f"https://{host}{DEVICES_PATH}/{mac_address}"
        f"?applicationKey={credentials.app_key}&apiKey={credentials.api_key}"
    )
    if limit is not None:
        url += f"&limit={limit}"
    if end_date is not None:
        if isinstance(end_date, datetime):
            end_date = int(end_date.timestamp() * 1000)
        url += f"&endDate={end_date}"
    return url


def redact_url(url: str) -> str:
    """Replace API and application keys in ``url`` so it is safe to log."""
    parts = urlsplit(url)
    query = [
        (key, "***" if key in _SECRET_PARAMS else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe="*")))


class RateLimiter:
    """Keeps vendor requests at least ``min_interval`` seconds apart.

    The interval is measured from the end of one request to the start of the
    next. ``clock`` and ``sleep`` are injectable so tests don't wait on real
    time; ``min_interval=0`` disables the guard.
    """

    def __init__(
        self,
        min_interval: float = MIN_REQUEST_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_finished: float | None = None
        self._lock = threading.Lock()

    def remaining(self) -> float:
        """Seconds to wait before the next request may start."""
        if self._last_finished is None:
            return 0.0
        elapsed = self._clock() - self._last_finished
        return max(0.0, self.min_interval - elapsed)

    @contextmanager
    def throttle(self) -> Iterator[None]:
        """Wrap one request: wait for the interval, then record when it ends.

        Concurrent callers are serialized so spacing holds across threads.
        """
        with self._lock:
            delay = self.remaining()
            if delay > 0:
                logger.debug("Rate limit: sleeping %.3fs", delay)
                self._sleep(delay)
            try:
                yield
            finally:
                self._last_finished = self._clock()

    def reset(self) -> None:
        """Forget the last request time."""
        with self._lock:
            self._last_finished = None


#: Process-wide limiter used when a caller doesn't supply one.
default_rate_limiter = RateLimiter()
