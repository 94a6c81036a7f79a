from __future__ import annotations

from weatherwindow.domain.models import Coordinates

from .base import GeolocationProvider


class FixedPositionProvider(GeolocationProvider):
    def __init__(self, latitude: float, longitude: float):
        self.position = Coordinates(latitude=latitude, longitude=longitude)

    async def current_position(self) -> Coordinates:
        return self.position
