"""Shared fixtures: credentials, a fake clock and a session mock."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ambient_weather.client import RateLimiter
from ambient_weather.schemas import Credentials


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` is called or ``advance`` is used."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key="API123", app_key="APP456", device_id=0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(min_interval=1.0, clock=clock, sleep=clock.sleep)


@pytest.fixture
def session() -> MagicMock:
    """Session mock; set ``session.get.side_effect`` to a list of responses."""
    return MagicMock(spec=requests.Session)
