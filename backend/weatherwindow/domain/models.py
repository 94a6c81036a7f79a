from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Sample:
    epoch_seconds: Union[int, float]
    temperature: Optional[float] = None
    wind_speed: Optional[float] = None
    precip_probability: Optional[float] = None
    conditions_text: Optional[str] = None
    icon_code: Optional[str] = None
    datetime_label: Optional[str] = None


@dataclass(frozen=True)
class NormalizedResponse:
    timezone_name: str
    display_address: str
    anchor: Optional[Sample]
    samples: Tuple[Sample, ...] = ()


@dataclass(frozen=True)
class Window:
    """Half-open ``[start, end)`` interval in epoch seconds and the samples inside it."""

    start: Optional[Union[int, float]]
    end: Optional[Union[int, float]]
    samples: Tuple[Sample, ...] = ()

    def contains(self, epoch_seconds: float) -> bool:
        if self.start is None or self.end is None:
            return False
        return self.start <= epoch_seconds < self.end

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class WindowPair:
    previous: Window
    next: Window


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RequestDescriptor:
    base_url: str
    endpoint_path: str
    parameters: Mapping[str, str] = field(default_factory=dict)
    location_label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint_path}"
