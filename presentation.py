"""View data for the weather pages.

Everything here takes plain values (API payloads, DailySummary records) and
returns dicts the templates render; no request or cookie state.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from forecast import DailySummary, round_half_up

ICON_URL = "https://openweathermap.org/img/wn/{icon}@{scale}x.png"
METERS_PER_MILE = 1609.34

# Weather condition -> page background class
WEATHER_BACKGROUNDS = {
    "Clear": {"day": "clear-day", "night": "clear-night"},
    "Clouds": {"day": "clouds", "night": "clouds"},
    "Rain": {"day": "rain", "night": "rain"},
    "Drizzle": {"day": "rain", "night": "rain"},
    "Thunderstorm": {"day": "thunderstorm", "night": "thunderstorm"},
    "Snow": {"day": "snow", "night": "snow"},
    "Mist": {"day": "mist", "night": "mist"},
    "Fog": {"day": "mist", "night": "mist"},
    "Haze": {"day": "mist", "night": "mist"},
}

UNIT_LABELS = {
    "imperial": {"temp": "°F", "wind": "mph"},
    "metric": {"temp": "°C", "wind": "m/s"},
    "standard": {"temp": "K", "wind": "m/s"},
}


def icon_url(icon: str, scale: int = 2) -> str:
    return ICON_URL.format(icon=icon, scale=scale)


def unit_labels(units: str) -> dict:
    return UNIT_LABELS.get(units, UNIT_LABELS["imperial"])


def background_class(condition: str, icon: str) -> str:
    backgrounds = WEATHER_BACKGROUNDS.get(condition, WEATHER_BACKGROUNDS["Clear"])
    return backgrounds["night"] if icon.endswith("n") else backgrounds["day"]


def offset_timezone(seconds) -> timezone:
    """UTC offset in seconds, as OpenWeatherMap reports it, to a tzinfo."""
    return timezone(timedelta(seconds=int(seconds or 0)))


def format_date(dt: datetime) -> str:
    # "Saturday, October 17, 2026"
    return f"{dt:%A}, {dt:%B} {dt.day}, {dt.year}"


def format_time(dt: datetime) -> str:
    # "6:42 AM"
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt:%M} {dt:%p}"


def forecast_card(summary: DailySummary, index: int) -> dict:
    day = date_label = ""
    if summary.date is not None:
        day = f"{summary.date:%a}"
        date_label = f"{summary.date:%b} {summary.date.day}"

    return {
        "day": day,
        "date": date_label,
        "icon_url": icon_url(summary.icon),
        "alt": summary.description,
        "condition": summary.condition,
        "high": summary.temp_high,
        "low": summary.temp_low,
        "humidity": summary.humidity,
        "wind": summary.wind_speed,
        "delay": f"{index * 0.1:.1f}s",
        "highlight": summary.condition == "Clear",
    }


def forecast_page(data: dict, summaries: list) -> dict:
    """Page data for a forecast response and its daily summaries."""
    city = data.get("city") or {}
    items = data.get("list") or []

    background = None
    if items:
        first = (items[0].get("weather") or [None])[0] or {}
        background = background_class(first.get("main") or "", first.get("icon") or "")

    return {
        "city": f"{city.get('name', '')}, {city.get('country', '')}",
        "background": background,
        "cards": [forecast_card(summary, i) for i, summary in enumerate(summaries)],
    }


def current_conditions(data: dict, now: Optional[datetime] = None) -> dict:
    tz = offset_timezone(data.get("timezone"))
    now = now or datetime.now(tz)
    weather = data["weather"][0]
    main = data["main"]
    sys = data.get("sys", {})

    conditions = {
        "city": f"{data.get('name')}, {sys.get('country')}",
        "date": format_date(now),
        "icon_url": icon_url(weather["icon"], scale=4),
        "desc": weather["description"],
        "temp": round_half_up(main["temp"]),
        "feels_like": round_half_up(main["feels_like"]),
        "humidity": main["humidity"],
        "wind": round_half_up(data["wind"]["speed"]),
        "visibility": None,
        "sunrise": None,
        "sunset": None,
        "background": background_class(weather["main"], weather["icon"]),
    }
    if "visibility" in data:
        conditions["visibility"] = round_half_up(data["visibility"] / METERS_PER_MILE)
    if sys.get("sunrise"):
        conditions["sunrise"] = format_time(datetime.fromtimestamp(sys["sunrise"], tz))
    if sys.get("sunset"):
        conditions["sunset"] = format_time(datetime.fromtimestamp(sys["sunset"], tz))
    return conditions
