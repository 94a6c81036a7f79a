from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from weatherwindow.domain.formatting import (
    UnitSystem,
    format_as_of,
    format_conditions,
    format_hour,
    format_precip_probability,
    format_temperature,
    format_wind_speed,
)
from weatherwindow.domain.icons import resolve_icon
from weatherwindow.domain.models import NormalizedResponse, Sample, Window
from weatherwindow.domain.windowing import extract_windows

EMPTY_WINDOW_MESSAGE = "No data available for this period."


@dataclass(frozen=True)
class HourRow:
    epoch_seconds: Union[int, float]
    time: str
    temperature: str
    wind_speed: str
    rain_chance: str
    icon: str
    conditions: str


@dataclass(frozen=True)
class HourTable:
    title: str
    start: Optional[Union[int, float]]
    end: Optional[Union[int, float]]
    rows: List[HourRow] = field(default_factory=list)

    @property
    def empty_message(self) -> Optional[str]:
        return None if self.rows else EMPTY_WINDOW_MESSAGE


@dataclass(frozen=True)
class CurrentConditions:
    as_of: str
    temperature: str
    wind_speed: str
    rain_chance: str
    icon: str
    conditions: str


@dataclass(frozen=True)
class WeatherView:
    address: str
    timezone: str
    current: Optional[CurrentConditions]
    previous: HourTable
    next: HourTable

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["previous"]["empty_message"] = self.previous.empty_message
        payload["next"]["empty_message"] = self.next.empty_message
        return payload


def build_view(
    response: NormalizedResponse,
    unit_system: UnitSystem,
    *,
    now: Optional[datetime] = None,
) -> WeatherView:
    tz = response.timezone_name
    windows = extract_windows(response)
    current = None
    if response.anchor is not None:
        cc = response.anchor
        current = CurrentConditions(
            as_of=f"As of {format_as_of(cc.epoch_seconds, tz, now=now)} ({tz})",
            temperature=format_temperature(cc.temperature, unit_system),
            wind_speed=format_wind_speed(cc.wind_speed, unit_system),
            rain_chance=format_precip_probability(cc.precip_probability),
            icon=resolve_icon(cc.icon_code),
            conditions=format_conditions(cc.conditions_text),
        )
    return WeatherView(
        address=response.display_address,
        timezone=tz,
        current=current,
        previous=_table("Previous 24 hours", windows.previous, tz, unit_system),
        next=_table("Next 24 hours", windows.next, tz, unit_system),
    )


def _table(title: str, window: Window, tz: str, unit_system: UnitSystem) -> HourTable:
    return HourTable(
        title=title,
        start=window.start,
        end=window.end,
        rows=[_row(sample, tz, unit_system) for sample in window.samples],
    )


def _row(sample: Sample, tz: str, unit_system: UnitSystem) -> HourRow:
    return HourRow(
        epoch_seconds=sample.epoch_seconds,
        time=format_hour(sample.epoch_seconds, tz),
        temperature=format_temperature(sample.temperature, unit_system),
        wind_speed=format_wind_speed(sample.wind_speed, unit_system),
        rain_chance=format_precip_probability(sample.precip_probability),
        icon=resolve_icon(sample.icon_code),
        conditions=format_conditions(sample.conditions_text),
    )
