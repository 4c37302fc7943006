"""
Working selection
=================

The engine keeps the loaded incidents untouched and works on a *selection*
of record positions:

1) Load records -> immutable IncidentRecord tuple
2) Build indices -> value -> sorted positions
3) Filters narrow the selection by intersecting position lists
4) Statistics, impacts, sorting and export all read the current selection

Every filter pushes the previous selection onto an undo stack.
"""

from __future__ import annotations
import csv
import heapq
import json
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .aggregate import aggregate
from .dsa import intersect_sorted, merge_sort
from .indices import Indices, build_indices, date_range_ids
from .models import IncidentRecord, RegionImpact, Severity, Status, WeatherSnapshot

EXPORT_COLUMNS = [
    "id", "region", "category", "severity", "occurred_at", "lat", "lng",
    "affected_count", "damage_estimate", "response_hours", "status", "description",
]


@dataclass
class Engine:
    """Filters, sorting and export over a fixed set of incident records."""
    records: Sequence[IncidentRecord]
    idx: Indices
    dataset_path: Optional[str] = None
    # Mutating commands, replayed in the report for reproducibility
    command_log: List[str] = field(default_factory=list)
    active_ids: List[int] = field(init=False)

    _undo: List[List[int]] = field(default_factory=list, init=False)
    _redo: List[List[int]] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.active_ids = list(range(len(self.records)))

    @classmethod
    def from_records(cls, records: Sequence[IncidentRecord], dataset_path: Optional[str] = None) -> "Engine":
        records = tuple(records)
        return cls(records=records, idx=build_indices(records), dataset_path=dataset_path)

    # ---------------- History ----------------
    def _push_history(self) -> None:
        self._undo.append(self.active_ids[:])
        self._redo.clear()

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self.active_ids[:])
        self.active_ids = self._undo.pop()
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self.active_ids[:])
        self.active_ids = self._redo.pop()
        return True

    # ---------------- Filters ----------------
    def reset(self) -> None:
        self._push_history()
        self.active_ids = list(range(len(self.records)))

    def _narrow(self, ids: List[int]) -> None:
        self._push_history()
        self.active_ids = intersect_sorted(self.active_ids, ids)

    def filter_region(self, region: str) -> None:
        self._narrow(self.idx.by_region.get(region, []))

    def filter_category(self, category: str) -> None:
        self._narrow(self.idx.by_category.get(category, []))

    def filter_severity(self, severity) -> None:
        self._narrow(self.idx.by_severity.get(Severity.parse(severity), []))

    def filter_status(self, status) -> None:
        self._narrow(self.idx.by_status.get(Status.parse(status), []))

    def filter_dates(self, d1: date, d2: date) -> None:
        if d1 > d2:
            raise ValueError(f"Start date {d1} is after end date {d2}")
        self._narrow(date_range_ids(self.idx, d1, d2))

    # ---------------- Reads ----------------
    def selected(self) -> List[IncidentRecord]:
        return [self.records[i] for i in self.active_ids]

    def impacts(self, weather: Mapping[str, WeatherSnapshot]) -> List[RegionImpact]:
        return aggregate(self.selected(), weather)

    def sort(self, field: str, reverse: bool = True) -> List[IncidentRecord]:
        return merge_sort(self.selected(), key=field_key(field), reverse=reverse)

    def topk(self, k: int, field: str) -> List[IncidentRecord]:
        key = field_key(field)
        if k <= 0:
            return []
        heap: List[tuple] = []
        for i in self.active_ids:
            v = key(self.records[i])
            # negative position keeps earlier records ahead on ties
            item = (v, -i)
            if len(heap) < k:
                heapq.heappush(heap, item)
            elif item > heap[0]:
                heapq.heapreplace(heap, item)
        heap.sort(reverse=True)
        return [self.records[-neg] for _, neg in heap]

    # ---------------- Export ----------------
    def export_csv(self, path: str) -> None:
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(EXPORT_COLUMNS)
            for r in self.selected():
                w.writerow([_row(r)[c] for c in EXPORT_COLUMNS])

    def export_json(self, path: str) -> None:
        payload = [_row(r) for r in self.selected()]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)


def _row(r: IncidentRecord) -> Dict[str, object]:
    return {
        "id": r.id,
        "region": r.region,
        "category": r.category,
        "severity": r.severity.value,
        "occurred_at": r.occurred_at.isoformat(),
        "lat": r.coordinates.lat,
        "lng": r.coordinates.lng,
        "affected_count": r.affected_count,
        "damage_estimate": r.damage_estimate,
        "response_hours": r.response_hours,
        "status": r.status.value,
        "description": r.description,
    }


def field_key(field: str) -> Callable[[IncidentRecord], object]:
    f = field.lower().strip()
    if f in ("affected", "affected_count"):
        return lambda r: r.affected_count
    if f in ("damage", "damage_estimate"):
        return lambda r: r.damage_estimate
    if f in ("response", "response_hours"):
        return lambda r: r.response_hours
    if f in ("date", "occurred_at"):
        return lambda r: r.occurred_at
    raise ValueError("field must be: affected, damage, response, date")
