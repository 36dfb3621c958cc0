"""Tests for the shared HTTP session."""

from __future__ import annotations

from unittest.mock import patch

import requests
from urllib3.util.retry import Retry

from ambient_weather.http import DEFAULT_TIMEOUT, NO_RETRY, create_session, session


class TestNoRetry:
    """Verify failed requests are not retried by default."""

    def test_total_retries(self) -> None:
        assert NO_RETRY.total == 0


class TestCreateSession:
    """Verify session factory."""

    def test_returns_session(self) -> None:
        s = create_session()
        assert isinstance(s, requests.Session)

    def test_mounts_https_adapter(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://api.ambientweather.net")
        assert isinstance(adapter, requests.adapters.HTTPAdapter)

    def test_adapter_does_not_retry(self) -> None:
        s = create_session()
        adapter = s.get_adapter("https://api.ambientweather.net")
        assert adapter.max_retries.total == 0

    def test_custom_retry(self) -> None:
        custom = Retry(total=3, backoff_factor=1)
        s = create_session(retry=custom)
        adapter = s.get_adapter("https://api.ambientweather.net")
        assert adapter.max_retries.total == 3

    def test_headers(self) -> None:
        s = create_session()
        assert "ambient-weather" in s.headers["User-Agent"]
        assert s.headers["Accept"] == "application/json"

    def test_default_timeout_injected(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.ambientweather.net/v1/devices/").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 42

    def test_default_timeout_applies_through_get(self) -> None:
        s = create_session(timeout=42)
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.get("https://api.ambientweather.net/v1/devices/")
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 42

    def test_explicit_timeout_not_overridden(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.ambientweather.net/v1/devices/").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep, timeout=99)
            _, kwargs = mock_send.call_args
            assert kwargs.get("timeout") == 99


class TestModuleSession:
    """Verify the module-level singleton."""

    def test_session_is_configured(self) -> None:
        adapter = session.get_adapter("https://api.ambientweather.net")
        assert adapter.max_retries.total == 0

    def test_default_timeout(self) -> None:
        assert DEFAULT_TIMEOUT == 30
