import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, make_response, render_template, request

from forecast import aggregate_daily, parse_forecast
from presentation import current_conditions, forecast_page, offset_timezone, unit_labels
from weather_api import get_5_day_forecast, get_weather

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = Flask(__name__)

app.config.update(
    OPENWEATHER_API_KEY=os.getenv("OPENWEATHER_API_KEY"),
    OPENWEATHER_UNITS=os.getenv("OPENWEATHER_UNITS", "imperial"),
    DEFAULT_CITY=os.getenv("DEFAULT_CITY", "Salt Lake City"),
    REQUEST_TIMEOUT=float(os.getenv("REQUEST_TIMEOUT", "10")),
    FORECAST_TIMEZONE=os.getenv("FORECAST_TIMEZONE", "city"),
)

LAST_CITY_COOKIE = "lastCity"
LAST_CITY_MAX_AGE = 60 * 60 * 24 * 365
EMPTY_CITY_MESSAGE = "Please enter a city name"


def _api_options():
    return {
        "api_key": app.config["OPENWEATHER_API_KEY"],
        "units": app.config["OPENWEATHER_UNITS"],
        "timeout": app.config["REQUEST_TIMEOUT"],
    }


def _requested_city():
    """Return (city, searched): the submitted city, else the saved one."""
    if request.method == "POST":
        return request.form.get("city", "").strip(), True
    return request.cookies.get(LAST_CITY_COOKIE) or app.config["DEFAULT_CITY"], False


def _remember(response, city: str):
    response.set_cookie(LAST_CITY_COOKIE, city, max_age=LAST_CITY_MAX_AGE)
    return response


def daily_forecast(data: dict):
    # Bucket by the city's own calendar unless configured for host-local days
    tz = None
    if app.config["FORECAST_TIMEZONE"] == "city":
        tz = offset_timezone((data.get("city") or {}).get("timezone"))
    return aggregate_daily(parse_forecast(data.get("list", [])), tz=tz)


@app.route("/", methods=["GET", "POST"])
def index():
    weather = None
    error = None
    city_value, searched = _requested_city()

    if not city_value:
        error = EMPTY_CITY_MESSAGE
    else:
        app.logger.info("Current weather requested for %r", city_value)
        current = get_weather(city_value, **_api_options())
        if not current["ok"]:
            error = current["message"]
        else:
            weather = current_conditions(current["data"])

    response = make_response(render_template(
        "index.html",
        weather=weather,
        error=error,
        city=city_value,
        units=unit_labels(app.config["OPENWEATHER_UNITS"]),
    ))
    if searched and city_value:
        _remember(response, city_value)
    return response


@app.route("/forecast", methods=["GET", "POST"])
def forecast():
    page = None
    error = None
    city_value, searched = _requested_city()

    if not city_value:
        error = EMPTY_CITY_MESSAGE
    else:
        app.logger.info("Forecast requested for %r", city_value)
        fc = get_5_day_forecast(city_value, **_api_options())
        if not fc["ok"]:
            error = fc["message"]
        else:
            page = forecast_page(fc["data"], daily_forecast(fc["data"]))

    response = make_response(render_template(
        "forecast.html",
        page=page,
        error=error,
        city=city_value,
        units=unit_labels(app.config["OPENWEATHER_UNITS"]),
    ))
    if searched and city_value:
        _remember(response, city_value)
    return response


@app.route("/api/forecast")
def forecast_json():
    city_value = request.args.get("city", "").strip()
    if not city_value:
        return jsonify({"error": EMPTY_CITY_MESSAGE}), 400

    fc = get_5_day_forecast(city_value, **_api_options())
    if not fc["ok"]:
        return jsonify({"error": fc["message"]}), fc["status"] or 502

    city = fc["data"].get("city") or {}
    return jsonify({
        "city": city.get("name"),
        "country": city.get("country"),
        "days": [day.to_dict() for day in daily_forecast(fc["data"])],
    })


if __name__ == "__main__":
    app.run(debug=True)
