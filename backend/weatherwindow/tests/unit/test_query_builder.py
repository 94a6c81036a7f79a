from __future__ import annotations

import math

import pytest

from weatherwindow.config import Settings
from weatherwindow.domain.formatting import UnitSystem
from weatherwindow.errors import ConfigurationError, InvalidInput
from weatherwindow.providers.weather.query_builder import QueryBuilder


def test_location_is_trimmed_and_percent_encoded(settings):
    descriptor = QueryBuilder(settings).for_location("  Manila, PH ")
    assert descriptor.endpoint_path == "Manila%2C%20PH/yesterday/tomorrow"
    assert descriptor.location_label == "Manila, PH"
    assert descriptor.url == "https://weather.example.test/timeline/Manila%2C%20PH/yesterday/tomorrow"


def test_encoding_keeps_encode_uri_component_safe_set(settings):
    descriptor = QueryBuilder(settings).for_location("St. John's (NL)~!*")
    assert descriptor.endpoint_path.startswith("St.%20John's%20(NL)~!*/")


def test_fixed_parameter_set(settings):
    params = QueryBuilder(settings).for_location("Paris").parameters
    assert dict(params) == {
        "key": "test-key",
        "unitGroup": "metric",
        "include": "days,hours,current",
        "elements": "datetime,datetimeEpoch,temp,windspeed,precipprob,conditions,icon",
        "contentType": "json",
        "options": "nonulls",
    }


def test_unit_group_follows_settings():
    settings = Settings(credential="k", unit_system=UnitSystem.US)
    assert QueryBuilder(settings).for_location("Boston").parameters["unitGroup"] == "us"


def test_coordinates_use_same_encoding_path(settings):
    builder = QueryBuilder(settings)
    from_coords = builder.for_coordinates(40.7128, -74.006)
    from_text = builder.for_location("40.7128,-74.006")
    assert from_coords.endpoint_path == "40.7128%2C-74.006/yesterday/tomorrow"
    assert from_coords.endpoint_path == from_text.endpoint_path
    assert from_coords.location_label == "40.7128,-74.006"


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_blank_location_rejected(settings, text):
    with pytest.raises(InvalidInput):
        QueryBuilder(settings).for_location(text)


def test_blank_location_rejected_before_credential_check(keyless_settings):
    with pytest.raises(InvalidInput):
        QueryBuilder(keyless_settings).for_location("  ")


@pytest.mark.parametrize(
    "lat,lon",
    [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0), ("40", "3"), (True, 1.0), (10**400, 0), (0.0, -(10**400))],
)
def test_non_finite_coordinates_rejected(settings, lat, lon):
    with pytest.raises(InvalidInput):
        QueryBuilder(settings).for_coordinates(lat, lon)


def test_missing_credential_short_circuits(keyless_settings):
    with pytest.raises(ConfigurationError):
        QueryBuilder(keyless_settings).for_location("Madrid")


def test_descriptor_parameters_are_read_only(settings):
    descriptor = QueryBuilder(settings).for_location("Lisbon")
    with pytest.raises(TypeError):
        descriptor.parameters["key"] = "other"  # type: ignore[index]


def test_small_coordinates_are_written_without_exponent(settings):
    descriptor = QueryBuilder(settings).for_coordinates(5e-05, -0.0001)
    assert descriptor.location_label == "0.00005,-0.0001"
    assert descriptor.endpoint_path == "0.00005%2C-0.0001/yesterday/tomorrow"
    assert "e-" not in descriptor.url
