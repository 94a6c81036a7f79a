from __future__ import annotations

from typing import Optional

# Visual Crossing "icons1" set
ICON_SYMBOLS = {
    "clear-day": "☀️",
    "clear-night": "🌙",
    "partly-cloudy-day": "⛅",
    "partly-cloudy-night": "☁️🌙",
    "cloudy": "☁️",
    "rain": "🌧️",
    "snow": "❄️",
    "wind": "💨",
    "fog": "🌫️",
    "thunder-rain": "⛈️",
    "thunder-showers-day": "⛈️",
    "thunder-showers-night": "⛈️",
    "showers-day": "🌦️",
    "showers-night": "🌧️",
}

DEFAULT_ICON = "⛅"


def resolve_icon(code: Optional[str]) -> str:
    if not isinstance(code, str):
        return DEFAULT_ICON
    return ICON_SYMBOLS.get(code, DEFAULT_ICON)
