"""
Shared HTTP session for talking to ambientweather.net.

Provides a pre-configured ``requests.Session`` with a default timeout and an
identifying User-Agent. Retries are off by default: a failed request fails the
whole fetch. Pass a ``urllib3`` ``Retry`` to ``create_session`` to opt in.

Usage::

    from ambient_weather.http import create_session

    s = create_session(timeout=10)
    data = get_latest(credentials, session=s)
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ambient_weather import __version__

#: No retries, no backoff. Rate-limit spacing is handled by ``RateLimiter``.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"ambient-weather/{__version__} (python-requests)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"

    # Inject the default timeout. Session.request passes ``timeout=None``
    # explicitly when unset, so None counts as missing.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session used when a caller doesn't supply one.
session: requests.Session = create_session()
