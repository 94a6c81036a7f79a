from __future__ import annotations

import pytest

from weatherwindow.config import DEFAULT_BASE_URL, Settings
from weatherwindow.domain.formatting import UnitSystem


def test_from_env_defaults(monkeypatch):
    for name in (
        "WEATHER_API_KEY",
        "WEATHER_BASE_URL",
        "WEATHER_UNIT_GROUP",
        "WEATHER_GEOLOCATION_TIMEOUT",
        "WEATHER_HTTP_TIMEOUT",
        "WEATHER_DEFAULT_LAT",
        "WEATHER_DEFAULT_LON",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.credential is None
    assert not settings.has_credential
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.unit_system is UnitSystem.METRIC
    assert settings.geolocation_timeout == 8.0
    assert settings.default_position is None


def test_from_env_reads_values(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "abc")
    monkeypatch.setenv("WEATHER_BASE_URL", "https://example.test/timeline")
    monkeypatch.setenv("WEATHER_UNIT_GROUP", "US")
    monkeypatch.setenv("WEATHER_DEFAULT_LAT", "14.5995")
    monkeypatch.setenv("WEATHER_DEFAULT_LON", "120.9842")
    settings = Settings.from_env()
    assert settings.has_credential
    assert settings.base_url == "https://example.test/timeline/"
    assert settings.unit_system is UnitSystem.US
    assert settings.default_position == (14.5995, 120.9842)


def test_blank_credential_counts_as_missing():
    assert not Settings(credential="   ").has_credential


def test_unit_system_accepts_string_value():
    assert Settings(credential="k", unit_system="uk").unit_system is UnitSystem.UK


def test_invalid_unit_system_rejected():
    with pytest.raises(ValueError):
        Settings(credential="k", unit_system="imperial")
