from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

import app as app_module

START = datetime(2026, 10, 17, tzinfo=timezone.utc)


def make_item(
    when: datetime,
    temp: Any = 60.0,
    humidity: Any = 50,
    wind: Any = 5.0,
    main: str = "Clear",
    icon: str = "01d",
    description: str = "clear sky",
) -> dict[str, Any]:
    return {
        "dt": int(when.timestamp()),
        "main": {"temp": temp, "humidity": humidity},
        "weather": [{"main": main, "description": description, "icon": icon}],
        "wind": {"speed": wind},
    }


def make_forecast_payload(days: int = 6, offset_seconds: int = 0) -> dict[str, Any]:
    items = [
        make_item(START + timedelta(hours=3 * step), temp=50 + step)
        for step in range(days * 8)
    ]
    return {
        "city": {"name": "Salt Lake City", "country": "US", "timezone": offset_seconds},
        "list": items,
    }


def make_current_payload() -> dict[str, Any]:
    return {
        "name": "Salt Lake City",
        "timezone": 0,
        "sys": {
            "country": "US",
            "sunrise": int(datetime(2026, 10, 17, 13, 30, tzinfo=timezone.utc).timestamp()),
            "sunset": int(datetime(2026, 10, 18, 0, 45, tzinfo=timezone.utc).timestamp()),
        },
        "weather": [{"main": "Rain", "description": "light rain", "icon": "10n"}],
        "main": {"temp": 48.6, "feels_like": 45.2, "humidity": 81},
        "wind": {"speed": 7.5},
        "visibility": 10000,
    }


@pytest.fixture
def client(monkeypatch):
    app_module.app.config.update(
        TESTING=True,
        OPENWEATHER_API_KEY="test-key",
        OPENWEATHER_UNITS="imperial",
        DEFAULT_CITY="Salt Lake City",
        FORECAST_TIMEZONE="city",
    )
    return app_module.app.test_client()
