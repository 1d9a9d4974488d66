"""Bucket 3-hour forecast samples into daily summaries."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Union

MAX_FORECAST_DAYS = 5

Number = Union[int, float]


def round_half_up(value: float) -> Number:
    """Round like the browser widget does: halves go up, NaN and infinities pass through."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def is_daytime(icon: str) -> bool:
    return icon.endswith("d")


def day_icon(icon: str) -> str:
    if icon.endswith("n"):
        return icon[:-1] + "d"
    return icon


def _number(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _json_number(value: Number) -> Optional[Number]:
    # JSON has no NaN or Infinity
    return value if math.isfinite(value) else None


def _max(values):
    if any(math.isnan(v) for v in values):
        return math.nan
    return max(values)


def _min(values):
    if any(math.isnan(v) for v in values):
        return math.nan
    return min(values)


def _mean(values):
    return sum(values) / len(values)


@dataclass(frozen=True)
class ForecastSample:
    timestamp: float
    temperature: float
    humidity: float
    wind_speed: float
    condition: str
    description: str
    icon: str

    @classmethod
    def from_api(cls, item: dict) -> "ForecastSample":
        # item looks like {"dt": 1760702400, "main": {...}, "weather": [{...}], "wind": {...}}
        main = item.get("main") or {}
        weather = (item.get("weather") or [None])[0] or {}
        wind = item.get("wind") or {}
        return cls(
            timestamp=_number(item.get("dt")),
            temperature=_number(main.get("temp")),
            humidity=_number(main.get("humidity")),
            wind_speed=_number(wind.get("speed")),
            condition=weather.get("main") or "",
            description=weather.get("description") or "",
            icon=weather.get("icon") or "",
        )

    def day(self, tz: Optional[tzinfo] = None) -> Optional[date]:
        """Calendar day of the sample, or None when the timestamp is unusable."""
        if not math.isfinite(self.timestamp):
            return None
        try:
            return datetime.fromtimestamp(self.timestamp, tz).date()
        except (OverflowError, OSError, ValueError):
            return None


@dataclass(frozen=True)
class DailySummary:
    date: Optional[date]
    temp_high: Number
    temp_low: Number
    condition: str
    description: str
    icon: str
    humidity: Number
    wind_speed: Number

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat() if self.date else None,
            "temp_high": _json_number(self.temp_high),
            "temp_low": _json_number(self.temp_low),
            "condition": self.condition,
            "description": self.description,
            "icon": self.icon,
            "humidity": _json_number(self.humidity),
            "wind_speed": _json_number(self.wind_speed),
        }


@dataclass
class _DayBucket:
    date: Optional[date]
    condition: str
    description: str
    icon: str
    temps: list = field(default_factory=list)
    humidity: list = field(default_factory=list)
    wind: list = field(default_factory=list)

    def add(self, sample: ForecastSample) -> None:
        self.temps.append(sample.temperature)
        self.humidity.append(sample.humidity)
        self.wind.append(sample.wind_speed)

        # A daytime reading describes the day better than a night one
        if is_daytime(sample.icon):
            self.condition = sample.condition
            self.description = sample.description
            self.icon = sample.icon

    def summarize(self) -> DailySummary:
        return DailySummary(
            date=self.date,
            temp_high=round_half_up(_max(self.temps)),
            temp_low=round_half_up(_min(self.temps)),
            condition=self.condition,
            description=self.description,
            icon=self.icon,
            humidity=round_half_up(_mean(self.humidity)),
            wind_speed=round_half_up(_mean(self.wind)),
        )


def parse_forecast(items: Iterable[dict]) -> list:
    return [ForecastSample.from_api(item) for item in items]


def aggregate_daily(
    samples: Iterable[ForecastSample],
    tz: Optional[tzinfo] = None,
    max_days: int = MAX_FORECAST_DAYS,
) -> list:
    """Group time-ordered samples by calendar day and summarize each day.

    ``tz`` picks the calendar used for the day key; ``None`` means the
    host's local time. Samples whose timestamp is missing or unusable all
    share one undated bucket. Days come back in order of first appearance,
    at most ``max_days`` of them.
    """
    days = {}

    for sample in samples:
        key = sample.day(tz)
        bucket = days.get(key)
        if bucket is None:
            bucket = _DayBucket(
                date=key,
                condition=sample.condition,
                description=sample.description,
                icon=day_icon(sample.icon),
            )
            days[key] = bucket
        bucket.add(sample)

    return [bucket.summarize() for bucket in days.values()][:max_days]
