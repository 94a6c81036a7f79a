from __future__ import annotations

from typing import Optional, Protocol

from weatherwindow.domain.models import NormalizedResponse, RequestDescriptor


class WeatherProvider(Protocol):
    """Contract for timeline weather providers."""

    async def fetch_timeline(
        self,
        descriptor: RequestDescriptor,
        *,
        fallback_address: Optional[str] = None,
    ) -> NormalizedResponse:
        raise NotImplementedError
