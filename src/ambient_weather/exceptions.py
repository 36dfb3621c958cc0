"""Errors raised by the Ambient Weather client.

Every failure surfaces as a subclass of :class:`AmbientWeatherError`, so callers
that only care whether a fetch worked can catch that one type.
"""

from __future__ import annotations


class AmbientWeatherError(Exception):
    """A fetch against the Ambient Weather API failed."""


class TransportError(AmbientWeatherError):
    """
    Network failure or non-2xx response from the vendor.

    Attributes:
        url: Request URL with API keys redacted.
        status_code: HTTP status, or None when no response was received.
    """

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.status_code is not None:
            parts.append(f"[HTTP {self.status_code}]")
        if self.url:
            parts.append(self.url)
        return " ".join(parts)


class RateLimitError(TransportError):
    """The vendor answered 429 Too Many Requests."""


class DecodeError(AmbientWeatherError):
    """Response body is not JSON or does not have the expected shape."""


class DeviceIndexError(AmbientWeatherError, IndexError):
    """``device_id`` does not index into the account's device list."""

    def __init__(self, device_id: int, device_count: int) -> None:
        super().__init__(
            f"device_id {device_id} is out of range; account has {device_count} device(s)"
        )
        self.device_id = device_id
        self.device_count = device_count
