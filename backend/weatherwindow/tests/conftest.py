from __future__ import annotations

import pytest

from weatherwindow.config import Settings


@pytest.fixture()
def settings():
    return Settings(credential="test-key", base_url="https://weather.example.test/timeline/")


@pytest.fixture()
def keyless_settings():
    return Settings(credential=None, base_url="https://weather.example.test/timeline/")
