"""
Data model
==========

Incident records come from a fixture or an exported spreadsheet and are never
edited after loading. Region impacts are derived values: they are rebuilt from
scratch on every aggregation, so both types are frozen dataclasses.

Severity and status are closed sets and are modelled as enums. Category and
description stay free text.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def parse(cls, value) -> "Severity":
        """Accept an enum member or its (case-insensitive) text value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown severity {value!r}; expected one of {[s.value for s in cls]}") from None


class Status(str, Enum):
    PENDING = "pending"
    RESPONDING = "responding"
    RESOLVED = "resolved"

    @classmethod
    def parse(cls, value) -> "Status":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown status {value!r}; expected one of {[s.value for s in cls]}") from None


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


ORIGIN = Coordinates(0.0, 0.0)


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for one region, as shown next to its impact row."""
    temperature: float
    condition: str
    humidity: float
    wind_speed: float


DEFAULT_WEATHER = WeatherSnapshot(temperature=20, condition="Unknown", humidity=50, wind_speed=10)


@dataclass(frozen=True)
class IncidentRecord:
    """One reported emergency in one region."""
    id: str
    region: str
    category: str
    severity: Severity
    occurred_at: date
    coordinates: Coordinates
    affected_count: int
    # rand, not thousands
    damage_estimate: float
    response_hours: float
    status: Status
    description: str = ""

    def month_key(self) -> int:
        """Return an integer YYYYMM key for grouping by month."""
        return self.occurred_at.year * 100 + self.occurred_at.month


@dataclass(frozen=True)
class RegionImpact:
    """Aggregated totals for one region across all of its incidents."""
    region: str
    total_incidents: int
    total_affected: int
    total_damage: float
    average_response_hours: float
    coordinates: Coordinates
    recent_incidents: Tuple[IncidentRecord, ...]
    current_conditions: WeatherSnapshot


@dataclass(frozen=True)
class Forecast:
    today: str
    tomorrow: str
    day_after: str


@dataclass(frozen=True)
class WeatherReading:
    """Full weather record for a province (what the province card shows).

    `snapshot()` narrows it to the four fields carried on a RegionImpact.
    """
    temperature: float
    condition: str
    humidity: float
    wind_speed: float
    visibility: float
    rainfall: float
    icon: str
    forecast: Optional[Forecast] = None

    def snapshot(self) -> WeatherSnapshot:
        return WeatherSnapshot(
            temperature=self.temperature,
            condition=self.condition,
            humidity=self.humidity,
            wind_speed=self.wind_speed,
        )


@dataclass(frozen=True)
class Province:
    name: str
    coordinates: Coordinates
    weather: WeatherReading
