"""
Static tables and sample data
=============================

- REGION_COORDINATES: province -> map coordinates used on impact rows.
- PROVINCES: the nine provinces with their baseline weather, shown until a
  live reading replaces it.
- sample_incidents(): the incident dataset the analytics dashboard ships with.
"""

from __future__ import annotations
from datetime import date
from typing import Dict, Optional, Tuple

from .models import (
    Coordinates, IncidentRecord, Province, Severity, Status, WeatherReading, WeatherSnapshot,
)

REGION_COORDINATES: Dict[str, Coordinates] = {
    "Western Cape": Coordinates(-33.2277, 21.8569),
    "Eastern Cape": Coordinates(-32.2968, 26.4194),
    "Northern Cape": Coordinates(-29.0467, 21.8569),
    "Free State": Coordinates(-28.4541, 26.7968),
    "KwaZulu-Natal": Coordinates(-28.5305, 30.8958),
    "North West": Coordinates(-26.6638, 25.2837),
    "Gauteng": Coordinates(-26.2708, 28.1123),
    "Mpumalanga": Coordinates(-25.5653, 30.5279),
    "Limpopo": Coordinates(-23.4013, 29.4179),
}

LOADING = "Loading..."


def _province(name: str, temperature: float, humidity: float, wind_speed: float,
              visibility: float, rainfall: float, icon: str) -> Province:
    return Province(
        name=name,
        coordinates=REGION_COORDINATES[name],
        weather=WeatherReading(
            temperature=temperature,
            condition=LOADING,
            humidity=humidity,
            wind_speed=wind_speed,
            visibility=visibility,
            rainfall=rainfall,
            icon=icon,
        ),
    )


PROVINCES: Tuple[Province, ...] = (
    _province("Western Cape", 22, 65, 15, 10, 2.5, "partly-cloudy"),
    _province("Eastern Cape", 19, 78, 12, 8, 5.2, "cloudy"),
    _province("Northern Cape", 28, 35, 8, 15, 0, "sunny"),
    _province("Free State", 24, 82, 18, 6, 8.1, "rainy"),
    _province("KwaZulu-Natal", 26, 88, 22, 4, 15.3, "stormy"),
    _province("North West", 25, 45, 10, 12, 0.5, "clear"),
    _province("Gauteng", 23, 58, 14, 9, 1.2, "partly-cloudy"),
    _province("Mpumalanga", 21, 92, 6, 2, 3.8, "foggy"),
    _province("Limpopo", 29, 42, 11, 14, 0, "hot"),
)


def find_province(query: str) -> Optional[Province]:
    """First province whose name contains `query` (case-insensitive)."""
    q = query.strip().lower()
    if not q:
        return None
    return next((p for p in PROVINCES if q in p.name.lower()), None)


def baseline_weather() -> Dict[str, WeatherSnapshot]:
    """Region -> snapshot of the baseline readings in PROVINCES."""
    return {p.name: p.weather.snapshot() for p in PROVINCES}


def sample_incidents() -> Tuple[IncidentRecord, ...]:
    """The dashboard's sample incidents, newest first."""
    def rec(id, region, category, severity, day, lat, lng, affected, damage, response, status, description):
        return IncidentRecord(
            id=id,
            region=region,
            category=category,
            severity=Severity(severity),
            occurred_at=day,
            coordinates=Coordinates(lat, lng),
            affected_count=affected,
            damage_estimate=damage,
            response_hours=response,
            status=Status(status),
            description=description,
        )

    return (
        rec("1", "Western Cape", "Severe Drought", "critical", date(2024, 12, 15), -33.2277, 21.8569,
            25000, 4500000, 6, "responding",
            "Extended drought conditions affecting agricultural areas, linked to high temperatures and low rainfall"),
        rec("2", "KwaZulu-Natal", "Flash Flooding", "critical", date(2024, 12, 10), -29.8587, 31.0218,
            35000, 8000000, 2, "resolved",
            "Heavy rainfall causing flash floods in coastal areas, 88% humidity and 15.3mm rainfall recorded"),
        rec("3", "Free State", "Severe Hail Storm", "high", date(2024, 12, 8), -29.1217, 26.2041,
            12000, 2800000, 4, "resolved",
            "Destructive hail storm with 18 km/h winds causing crop damage in agricultural regions"),
        rec("4", "Gauteng", "Severe Thunderstorm", "high", date(2024, 12, 5), -26.2041, 28.0473,
            18000, 3200000, 3, "resolved",
            "Intense thunderstorm with damaging winds, 14 km/h sustained winds and 58% humidity"),
        rec("5", "Eastern Cape", "Wildfire Emergency", "critical", date(2024, 12, 1), -33.0117, 27.9116,
            8000, 5500000, 8, "responding",
            "Wildfire spreading under moderate winds, threatening agricultural areas"),
        rec("6", "Limpopo", "Heat Wave Alert", "high", date(2024, 11, 28), -23.4013, 29.4179,
            22000, 1800000, 5, "responding",
            "Extreme heat (29C+) with low humidity (42%) affecting livestock and crops"),
        rec("7", "Northern Cape", "Dust Storm", "medium", date(2024, 11, 25), -29.0467, 21.8569,
            5000, 800000, 6, "resolved",
            "Severe dust storm with high temperatures (28C) affecting visibility"),
        rec("8", "Mpumalanga", "Dense Fog Emergency", "medium", date(2024, 11, 20), -25.5653, 30.5279,
            7000, 600000, 4, "resolved",
            "Dense fog with 92% humidity and 2km visibility affecting transportation and agriculture"),
        rec("9", "North West", "Wind Storm", "medium", date(2024, 11, 18), -26.6638, 25.2837,
            9000, 1200000, 5, "resolved",
            "Strong sustained winds with moderate temperatures affecting structures"),
    )
