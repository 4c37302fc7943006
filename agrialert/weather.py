"""
Weather interpretation
======================

The live forecast service is called by whoever embeds this package; this
module only turns what comes back into WeatherReading / WeatherSnapshot values.

- Weather codes are translated into condition text and an icon name.
- A forecast payload (`timelines.hourly` / `timelines.daily`) is reduced to
  the current hour plus a three-day outlook.
- When a reading cannot be obtained, the province's baseline reading is used
  with a fixed "unavailable" condition.
"""

from __future__ import annotations
import json
import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from .aggregate import round_half_up
from .fixtures import PROVINCES
from .models import Forecast, WeatherReading, WeatherSnapshot

log = logging.getLogger(__name__)

WEATHER_CODES: Dict[int, str] = {
    0: "Unknown",
    1000: "Clear",
    1100: "Mostly Clear",
    1101: "Partly Cloudy",
    1102: "Mostly Cloudy",
    2000: "Fog",
    2100: "Light Fog",
    4000: "Drizzle",
    4001: "Rain",
    4200: "Light Rain",
    4201: "Heavy Rain",
    8000: "Thunderstorm",
}

FALLBACK_CONDITION = "Weather API Temporarily Unavailable"
UNAVAILABLE = "Data unavailable"


class WeatherDataError(ValueError):
    """A forecast payload is missing the fields we need."""


def condition_for_code(code: int) -> str:
    # 0 maps to "Unknown"; codes we have never seen read as "Clear"
    return WEATHER_CODES.get(code) or "Clear"


def icon_for_code(code: int) -> str:
    if code in (1000, 1100):
        return "sunny"
    if 1001 <= code <= 1102:
        return "partly-cloudy"
    if 2000 <= code <= 2100:
        return "foggy"
    if 4000 <= code <= 4201:
        return "rainy"
    if code == 8000:
        return "stormy"
    return "clear"


def _round(x: float) -> int:
    return round_half_up(float(x))


def _day_text(day: Optional[Mapping[str, Any]], sep: str) -> str:
    if not day:
        return UNAVAILABLE
    values = day["values"]
    return f"{condition_for_code(int(values['weatherCode']))}{sep}{_round(values['temperatureAvg'])}°C"


def reading_from_forecast(payload: Mapping[str, Any]) -> WeatherReading:
    """Reduce a forecast payload to a WeatherReading.

    Wind arrives in m/s and is stored in km/h. Rainfall keeps one decimal.
    Raises WeatherDataError when the timelines are missing, empty or hold
    values that are not numbers.
    """
    timelines = payload.get("timelines") if isinstance(payload, Mapping) else None
    if not isinstance(timelines, Mapping) or not timelines.get("hourly") or not timelines.get("daily"):
        raise WeatherDataError("Invalid forecast payload: timelines.hourly/daily missing")

    hourly, daily = timelines["hourly"], timelines["daily"]
    try:
        now = hourly[0]["values"]
        code = int(now["weatherCode"])
        return WeatherReading(
            temperature=_round(now["temperature"]),
            condition=condition_for_code(code),
            humidity=_round(now["humidity"]),
            wind_speed=_round(now["windSpeed"] * 3.6),
            visibility=_round(now["visibility"]),
            rainfall=_round(now["precipitationIntensity"] * 10) / 10,
            icon=icon_for_code(code),
            forecast=Forecast(
                today=_day_text(daily[0], " with "),
                tomorrow=_day_text(daily[1] if len(daily) > 1 else None, ", "),
                day_after=_day_text(daily[2] if len(daily) > 2 else None, ", "),
            ),
        )
    except (KeyError, TypeError, IndexError) as e:
        raise WeatherDataError(f"Invalid forecast payload: missing {e}") from e
    except ValueError as e:
        raise WeatherDataError(f"Invalid forecast payload: {e}") from e


def fallback_reading(baseline: WeatherReading) -> WeatherReading:
    """Baseline reading marked as unavailable, with an explanatory outlook."""
    return replace(
        baseline,
        condition=FALLBACK_CONDITION,
        icon="clear",
        forecast=Forecast(
            today="API temporarily unavailable - please refresh",
            tomorrow="Check your internet connection",
            day_after="Weather data will update automatically",
        ),
    )


def _snapshot_from_entry(entry: Mapping[str, Any]) -> WeatherSnapshot:
    if "timelines" in entry:
        return reading_from_forecast(entry).snapshot()
    try:
        return WeatherSnapshot(
            temperature=entry["temperature"],
            condition=str(entry["condition"]),
            humidity=entry["humidity"],
            wind_speed=entry.get("wind_speed", entry.get("windSpeed")),
        )
    except KeyError as e:
        raise WeatherDataError(f"Weather entry missing {e}") from e


def load_weather_json(path: str) -> Dict[str, WeatherSnapshot]:
    """Read region -> weather from a JSON file.

    Each value is either a raw forecast payload or a flat snapshot
    ({temperature, condition, humidity, wind_speed|windSpeed}). Entries that
    cannot be read fall back to the province baseline, or are left out when
    the region has no baseline.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise WeatherDataError("Weather file must hold a JSON object keyed by region")

    baselines = {p.name: p.weather for p in PROVINCES}
    out: Dict[str, WeatherSnapshot] = {}
    for region, entry in raw.items():
        try:
            if not isinstance(entry, Mapping):
                raise WeatherDataError(f"expected an object, got {type(entry).__name__}")
            snap = _snapshot_from_entry(entry)
            if snap.wind_speed is None:
                raise WeatherDataError("wind speed missing")
            out[region] = snap
        except WeatherDataError as e:
            if region in baselines:
                log.warning("Weather for %s unusable (%s); using fallback reading", region, e)
                out[region] = fallback_reading(baselines[region]).snapshot()
            else:
                log.warning("Weather for %s unusable (%s); skipped", region, e)
    log.debug("Loaded weather for %d regions from %s", len(out), path)
    return out
