from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_INPUT = "invalid_input"
    LOCATION_UNAVAILABLE = "location_unavailable"


FETCH_FAILED_MESSAGE = "Couldn't fetch weather. Check the location and API key, then try again."


class WeatherError(Exception):
    """Base class for every failure the pipeline reports to its caller."""

    kind: ErrorKind = ErrorKind.TRANSPORT
    user_message: str = FETCH_FAILED_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.user_message)


class ConfigurationError(WeatherError):
    kind = ErrorKind.CONFIGURATION
    user_message = "Missing API key. Set WEATHER_API_KEY and restart."


class TransportError(WeatherError):
    kind = ErrorKind.TRANSPORT

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(WeatherError):
    kind = ErrorKind.MALFORMED_RESPONSE


class InvalidInput(WeatherError):
    kind = ErrorKind.INVALID_INPUT
    user_message = "Enter a location to search."


class LocationUnavailable(WeatherError):
    kind = ErrorKind.LOCATION_UNAVAILABLE

    UNSUPPORTED = "unsupported"
    DENIED = "denied"
    TIMEOUT = "timeout"
    ERROR = "error"

    def __init__(self, reason: str, message: Optional[str] = None):
        self.reason = reason
        super().__init__(message or f"location unavailable ({reason})")

    @property
    def user_message(self) -> str:  # type: ignore[override]
        if self.reason == self.UNSUPPORTED:
            return "Geolocation not supported. Enter a location to search."
        return "Location permission denied. Enter a location to search."


class PositionDenied(Exception):
    """Raised by a geolocation provider when the user refuses to share a position."""
