"""
Dashboard statistics
====================

The headline numbers and chart series of the analytics dashboard, computed
from a list of incident records (normally the current selection):

- summary: incident count, people affected, damage, mean response time
- category / severity distributions (first-seen order, like the charts)
- monthly trends (chronological)
- display helpers for rand amounts and map links
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .aggregate import round_half_up
from .models import Coordinates, IncidentRecord, RegionImpact, Severity

SEVERITY_COLOURS: Dict[Severity, str] = {
    Severity.CRITICAL: "#dc2626",
    Severity.HIGH: "#ea580c",
    Severity.MEDIUM: "#d97706",
    Severity.LOW: "#65a30d",
}

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Summary:
    total_incidents: int
    total_affected: int
    total_damage: float
    average_response_hours: float


@dataclass(frozen=True)
class MonthlyTrend:
    year: int
    month: int
    label: str
    incidents: int
    affected: int


def summary(records: Sequence[IncidentRecord]) -> Summary:
    n = len(records)
    return Summary(
        total_incidents=n,
        total_affected=sum(r.affected_count for r in records),
        total_damage=sum(r.damage_estimate for r in records),
        average_response_hours=round_half_up(sum(r.response_hours for r in records) / (n or 1)),
    )


def category_distribution(records: Sequence[IncidentRecord]) -> List[Tuple[str, int]]:
    counts: Dict[str, int] = {}
    for r in records:
        counts[r.category] = counts.get(r.category, 0) + 1
    return list(counts.items())


def severity_distribution(records: Sequence[IncidentRecord]) -> List[Tuple[Severity, int, str]]:
    counts: Dict[Severity, int] = {}
    for r in records:
        counts[r.severity] = counts.get(r.severity, 0) + 1
    return [(sev, n, SEVERITY_COLOURS[sev]) for sev, n in counts.items()]


def monthly_trends(records: Sequence[IncidentRecord]) -> List[MonthlyTrend]:
    """Incidents and people affected per calendar month, oldest month first."""
    buckets: Dict[int, List[int]] = {}
    for r in records:
        b = buckets.setdefault(r.month_key(), [0, 0])
        b[0] += 1
        b[1] += r.affected_count
    out: List[MonthlyTrend] = []
    for key in sorted(buckets):
        year, month = divmod(key, 100)
        incidents, affected = buckets[key]
        out.append(MonthlyTrend(
            year=year,
            month=month,
            label=f"{MONTH_ABBR[month - 1]} {year % 100:02d}",
            incidents=incidents,
            affected=affected,
        ))
    return out


def top_regions(impacts: Sequence[RegionImpact], k: int = 5) -> List[RegionImpact]:
    return list(impacts[:k])


def format_rand_millions(amount: float) -> str:
    """4_500_000 -> 'R4.5 M'"""
    return f"R{amount / 1_000_000:.1f} M"


def map_link(coordinates: Coordinates) -> str:
    return f"https://www.google.com/maps/search/?api=1&query={coordinates.lat},{coordinates.lng}"
