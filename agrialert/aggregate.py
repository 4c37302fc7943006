"""
Impact aggregation
==================

Folds a flat list of incident records into one summary per region:

1) Walk the records in input order, creating a region's accumulator the first
   time the region is seen (coordinates and weather are looked up once, here).
2) Add each record's affected count and damage, and remember the record.
3) Average the response hours per region.
4) Order regions by incident count, highest first. The sort is stable, so
   regions with the same count keep their first-seen order.

The function is pure: nothing is validated, cached or mutated, and an empty
input simply gives an empty result.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping

from .dsa import merge_sort
from .fixtures import REGION_COORDINATES
from .models import (
    DEFAULT_WEATHER, ORIGIN, Coordinates, IncidentRecord, RegionImpact, WeatherSnapshot,
)


@dataclass
class _Accumulator:
    region: str
    coordinates: Coordinates
    current_conditions: WeatherSnapshot
    total_incidents: int = 0
    total_affected: int = 0
    total_damage: float = 0
    incidents: List[IncidentRecord] = field(default_factory=list)


def round_half_up(value: float) -> float:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2).

    NaN and infinities are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def aggregate(
    records: Iterable[IncidentRecord],
    current_weather_by_region: Mapping[str, WeatherSnapshot],
    coordinates: Mapping[str, Coordinates] = REGION_COORDINATES,
) -> List[RegionImpact]:
    """Build per-region impact summaries, most incidents first."""
    by_region: Dict[str, _Accumulator] = {}

    for rec in records:
        acc = by_region.get(rec.region)
        if acc is None:
            acc = _Accumulator(
                region=rec.region,
                coordinates=coordinates.get(rec.region, ORIGIN),
                current_conditions=current_weather_by_region.get(rec.region, DEFAULT_WEATHER),
            )
            by_region[rec.region] = acc
        acc.total_incidents += 1
        acc.total_affected += rec.affected_count
        acc.total_damage += rec.damage_estimate
        acc.incidents.append(rec)

    impacts = [
        RegionImpact(
            region=acc.region,
            total_incidents=acc.total_incidents,
            total_affected=acc.total_affected,
            total_damage=acc.total_damage,
            average_response_hours=round_half_up(
                sum(r.response_hours for r in acc.incidents) / acc.total_incidents
            ),
            coordinates=acc.coordinates,
            recent_incidents=tuple(acc.incidents),
            current_conditions=acc.current_conditions,
        )
        for acc in by_region.values()
    ]
    return merge_sort(impacts, key=lambda p: p.total_incidents, reverse=True)
