"""
Indices (precomputed lookup tables)
===================================

Maps from a field value to the sorted list of record positions holding it,
so the engine can filter by intersecting ID lists instead of rescanning.

- `by_region["Gauteng"]` -> positions of Gauteng incidents
- `date_to_ids[date(2024, 12, 5)]` -> positions of incidents on that day
"""

from __future__ import annotations
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Sequence

from .models import IncidentRecord, Severity, Status


@dataclass
class Indices:
    by_region: Dict[str, List[int]]
    by_category: Dict[str, List[int]]
    by_severity: Dict[Severity, List[int]]
    by_status: Dict[Status, List[int]]
    date_to_ids: Dict[date, List[int]]
    dates_sorted: List[date]


def build_indices(records: Sequence[IncidentRecord]) -> Indices:
    by_region: Dict[str, List[int]] = {}
    by_category: Dict[str, List[int]] = {}
    by_severity: Dict[Severity, List[int]] = {}
    by_status: Dict[Status, List[int]] = {}
    date_to_ids: Dict[date, List[int]] = {}

    # Positions are visited in increasing order, so every list is already sorted
    for i, r in enumerate(records):
        by_region.setdefault(r.region, []).append(i)
        by_category.setdefault(r.category, []).append(i)
        by_severity.setdefault(r.severity, []).append(i)
        by_status.setdefault(r.status, []).append(i)
        date_to_ids.setdefault(r.occurred_at, []).append(i)

    return Indices(
        by_region=by_region,
        by_category=by_category,
        by_severity=by_severity,
        by_status=by_status,
        date_to_ids=date_to_ids,
        dates_sorted=sorted(date_to_ids),
    )


def date_range_ids(idx: Indices, d1: date, d2: date) -> List[int]:
    """Sorted positions of records that occurred in [d1, d2] (inclusive)."""
    lo = bisect_left(idx.dates_sorted, d1)
    hi = bisect_right(idx.dates_sorted, d2)
    out: List[int] = []
    for d in idx.dates_sorted[lo:hi]:
        out.extend(idx.date_to_ids[d])
    out.sort()
    return out
