from __future__ import annotations

from decimal import Decimal
from typing import Any
from urllib.parse import quote

from weatherwindow.config import Settings
from weatherwindow.domain.formatting import is_number
from weatherwindow.domain.models import RequestDescriptor
from weatherwindow.errors import ConfigurationError, InvalidInput

# Same safe set as JavaScript's encodeURIComponent
_SAFE_CHARS = "-_.!~*'()"


class QueryBuilder:
    INCLUDE = "days,hours,current"
    ELEMENTS = [
        "datetime",
        "datetimeEpoch",
        "temp",
        "windspeed",
        "precipprob",
        "conditions",
        "icon",
    ]
    RANGE_SUFFIX = "/yesterday/tomorrow"

    def __init__(self, settings: Settings):
        self.settings = settings

    def for_location(self, text: Any) -> RequestDescriptor:
        if not isinstance(text, str):
            raise InvalidInput("location must be a string")
        query = text.strip()
        if not query:
            raise InvalidInput("location is empty")
        return self._build(query)

    def for_coordinates(self, latitude: Any, longitude: Any) -> RequestDescriptor:
        for name, value in (("latitude", latitude), ("longitude", longitude)):
            if not is_number(value):
                raise InvalidInput(f"{name} must be a finite number, got {value!r}")
        return self._build(f"{_plain_decimal(latitude)},{_plain_decimal(longitude)}")

    def _build(self, location: str) -> RequestDescriptor:
        if not self.settings.has_credential:
            raise ConfigurationError("WEATHER_API_KEY is not configured")
        path = quote(location, safe=_SAFE_CHARS) + self.RANGE_SUFFIX
        params = {
            "key": self.settings.credential,
            "unitGroup": self.settings.unit_system.value,
            "include": self.INCLUDE,
            "elements": ",".join(self.ELEMENTS),
            "contentType": "json",
            "options": "nonulls",
        }
        return RequestDescriptor(
            base_url=self.settings.base_url,
            endpoint_path=path,
            parameters=params,
            location_label=location,
        )


def _plain_decimal(value: float) -> str:
    # repr() switches to exponent notation below 1e-4; the provider expects plain digits
    return format(Decimal(repr(value)), "f")
