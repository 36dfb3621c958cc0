"""Tests for URL building and request rate limiting."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlsplit

import pytest

from ambient_weather.client import (
    ALTERNATE_HOST,
    MIN_REQUEST_INTERVAL,
    STABLE_HOST,
    RateLimiter,
    build_url,
    default_rate_limiter,
    redact_url,
)
from ambient_weather.schemas import Credentials

if TYPE_CHECKING:
    from conftest import FakeClock


class TestBuildUrl:
    """Test the devices endpoint URL builder."""

    def test_listing_url_on_stable_host(self, credentials: Credentials) -> None:
        url = build_url(credentials)
        assert url == (
            "https://api.ambientweather.net/v1/devices/?applicationKey=APP456&apiKey=API123"
        )

    def test_history_url_embeds_mac(self, credentials: Credentials) -> None:
        url = build_url(credentials, "AA:BB:CC:DD:EE:FF")
        assert urlsplit(url).path == "/v1/devices/AA:BB:CC:DD:EE:FF"

    @pytest.mark.parametrize(
        ("use_new_endpoint", "host"),
        [(False, STABLE_HOST), (True, ALTERNATE_HOST)],
    )
    def test_host_follows_endpoint_flag(self, use_new_endpoint: bool, host: str) -> None:
        creds = Credentials(api_key="a", app_key="b", use_new_endpoint=use_new_endpoint)
        assert urlsplit(build_url(creds)).netloc == host

    def test_keys_passed_verbatim(self) -> None:
        creds = Credentials(api_key="key-one_2", app_key="APP.three")
        query = parse_qs(urlsplit(build_url(creds)).query)
        assert query["applicationKey"] == ["APP.three"]
        assert query["apiKey"] == ["key-one_2"]

    def test_surrounding_whitespace_kept(self) -> None:
        creds = Credentials(api_key=" key ", app_key=" app ")
        assert creds.api_key == " key "
        url = build_url(creds)
        assert "?applicationKey= app &" in url
        assert url.endswith("&apiKey= key ")

    def test_limit_and_end_date(self, credentials: Credentials) -> None:
        url = build_url(credentials, "AA:BB", limit=10, end_date=1700000000000)
        query = parse_qs(urlsplit(url).query)
        assert query["limit"] == ["10"]
        assert query["endDate"] == ["1700000000000"]

    def test_end_date_datetime_is_epoch_millis(self, credentials: Credentials) -> None:
        end = datetime(2024, 1, 1, tzinfo=UTC)
        url = build_url(credentials, "AA:BB", end_date=end)
        assert parse_qs(urlsplit(url).query)["endDate"] == ["1704067200000"]

    def test_no_extra_params_by_default(self, credentials: Credentials) -> None:
        query = parse_qs(urlsplit(build_url(credentials, "AA:BB")).query)
        assert set(query) == {"applicationKey", "apiKey"}


class TestRedactUrl:
    """Test key redaction for log output."""

    def test_hides_both_keys(self, credentials: Credentials) -> None:
        redacted = redact_url(build_url(credentials))
        assert "API123" not in redacted
        assert "APP456" not in redacted
        assert "apiKey=***" in redacted
        assert "applicationKey=***" in redacted

    def test_keeps_other_params(self, credentials: Credentials) -> None:
        redacted = redact_url(build_url(credentials, "AA:BB", limit=5))
        assert "limit=5" in redacted
        assert "/v1/devices/AA:BB" in redacted


class TestRateLimiter:
    """Test minimum-interval spacing without real sleeps."""

    def test_first_request_does_not_wait(self, limiter: RateLimiter, clock: FakeClock) -> None:
        with limiter.throttle():
            pass
        assert clock.sleeps == []

    def test_back_to_back_requests_wait_full_interval(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter.throttle():
            pass
        with limiter.throttle():
            pass
        assert clock.sleeps == [1.0]

    def test_waits_only_the_remainder(self, limiter: RateLimiter, clock: FakeClock) -> None:
        with limiter.throttle():
            pass
        clock.advance(0.75)
        assert limiter.remaining() == pytest.approx(0.25)
        with limiter.throttle():
            pass
        assert clock.sleeps == [pytest.approx(0.25)]

    def test_no_wait_after_interval_elapsed(self, limiter: RateLimiter, clock: FakeClock) -> None:
        with limiter.throttle():
            pass
        clock.advance(5.0)
        with limiter.throttle():
            pass
        assert clock.sleeps == []

    def test_interval_measured_from_request_end(
        self, limiter: RateLimiter, clock: FakeClock
    ) -> None:
        with limiter.throttle():
            clock.advance(3.0)  # slow response
        assert limiter.remaining() == 1.0

    def test_marks_time_when_request_raises(self, limiter: RateLimiter, clock: FakeClock) -> None:
        with pytest.raises(RuntimeError), limiter.throttle():
            raise RuntimeError("boom")
        assert limiter.remaining() == 1.0

    def test_zero_interval_disables_guard(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0, clock=clock, sleep=clock.sleep)
        for _ in range(3):
            with limiter.throttle():
                pass
        assert clock.sleeps == []

    def test_reset(self, limiter: RateLimiter, clock: FakeClock) -> None:
        with limiter.throttle():
            pass
        limiter.reset()
        assert limiter.remaining() == 0.0

    def test_default_limiter_uses_vendor_interval(self) -> None:
        assert default_rate_limiter.min_interval == MIN_REQUEST_INTERVAL == 1.0
