from __future__ import annotations

from typing import Optional

import httpx

from weatherwindow.domain.models import Coordinates

from .base import GeolocationProvider


class IpGeolocationProvider(GeolocationProvider):
    """Approximate position of the host from its public IP address."""

    BASE_URL = "https://ipapi.co/json/"

    def __init__(self, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def current_position(self) -> Coordinates:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(self.BASE_URL)
            resp.raise_for_status()
            data = resp.json()
        if data.get("error"):
            raise RuntimeError(f"ip lookup failed: {data.get('reason') or data['error']}")
        try:
            lat = float(data["latitude"])
            lon = float(data["longitude"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RuntimeError("ip lookup returned no coordinates") from exc
        return Coordinates(latitude=lat, longitude=lon)
