import logging

import requests

log = logging.getLogger(__name__)

CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"

NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."
FAILED_MESSAGE = "Unable to fetch {what} data. Please try again later."


def _fetch(url: str, what: str, city: str, api_key: str, units: str, timeout: float):
    params = {"q": city, "appid": api_key, "units": units}
    try:
        r = requests.get(url, params=params, timeout=timeout)
        if r.status_code == 404:
            log.info("No %s for %r: city not found", what, city)
            return {"ok": False, "status": 404, "message": NOT_FOUND_MESSAGE}
        data = r.json()
    except requests.RequestException as exc:
        log.warning("Fetching %s for %r failed: %s", what, city, exc)
        return {"ok": False, "status": None, "message": FAILED_MESSAGE.format(what=what)}

    if r.status_code != 200:
        api_message = data.get("message", "Unknown error") if isinstance(data, dict) else "Unknown error"
        log.warning("Fetching %s for %r returned %s: %s", what, city, r.status_code, api_message)
        return {"ok": False, "status": r.status_code, "message": FAILED_MESSAGE.format(what=what)}

    return {"ok": True, "data": data}


def get_weather(city: str, api_key: str, units: str = "imperial", timeout: float = 10):
    return _fetch(CURRENT_URL, "weather", city, api_key, units, timeout)


def get_5_day_forecast(city: str, api_key: str, units: str = "imperial", timeout: float = 10):
    return _fetch(FORECAST_URL, "forecast", city, api_key, units, timeout)
