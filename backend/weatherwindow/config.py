from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from weatherwindow.domain.formatting import UnitSystem

DEFAULT_BASE_URL = "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline/"
DEFAULT_GEOLOCATION_TIMEOUT = 8.0
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    credential: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    unit_system: UnitSystem = UnitSystem.METRIC
    geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    default_latitude: Optional[float] = None
    default_longitude: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.unit_system, UnitSystem):
            object.__setattr__(self, "unit_system", UnitSystem(self.unit_system))
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")
        if self.geolocation_timeout <= 0:
            raise ValueError("geolocation_timeout must be > 0")

    @property
    def has_credential(self) -> bool:
        return bool(self.credential and self.credential.strip())

    @property
    def default_position(self) -> Optional[tuple[float, float]]:
        if self.default_latitude is None or self.default_longitude is None:
            return None
        return self.default_latitude, self.default_longitude

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``WEATHER_*`` environment variables."""
        return cls(
            credential=os.getenv("WEATHER_API_KEY") or None,
            base_url=os.getenv("WEATHER_BASE_URL", DEFAULT_BASE_URL),
            unit_system=UnitSystem(os.getenv("WEATHER_UNIT_GROUP", UnitSystem.METRIC.value).lower()),
            geolocation_timeout=float(os.getenv("WEATHER_GEOLOCATION_TIMEOUT", DEFAULT_GEOLOCATION_TIMEOUT)),
            http_timeout=float(os.getenv("WEATHER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
            default_latitude=_optional_float(os.getenv("WEATHER_DEFAULT_LAT")),
            default_longitude=_optional_float(os.getenv("WEATHER_DEFAULT_LON")),
        )


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)
