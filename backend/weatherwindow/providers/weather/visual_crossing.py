from __future__ import annotations

from typing import Optional

from weatherwindow.domain.models import NormalizedResponse, RequestDescriptor
from weatherwindow.infra.weather.visual_crossing_client import VisualCrossingClient

from .base import WeatherProvider
from .normalizer import normalize_response


class VisualCrossingWeatherProvider(WeatherProvider):
    def __init__(self, client: Optional[VisualCrossingClient] = None):
        self.client = client or VisualCrossingClient()

    async def fetch_timeline(
        self,
        descriptor: RequestDescriptor,
        *,
        fallback_address: Optional[str] = None,
    ) -> NormalizedResponse:
        body = await self.client.fetch(descriptor)
        return normalize_response(body, fallback_address=fallback_address or descriptor.location_label)
