"""
Dataset loader (CSV / Excel -> IncidentRecord list)
===================================================

Reads an exported incident sheet and converts each row into an
`IncidentRecord`.

- Column names are matched loosely ("Province", "province", "Region" ...).
- Blank numeric cells count as 0; blank coordinates fall back to the
  province table and then to (0, 0).
- Severity and status must be one of their known values; anything else is
  reported with the offending row number.
"""

from __future__ import annotations
import logging
import os
import re
from datetime import date
from typing import List, Mapping, Optional

import pandas as pd

from .fixtures import REGION_COORDINATES
from .models import ORIGIN, Coordinates, IncidentRecord, Severity, Status

log = logging.getLogger(__name__)


def _to_int(x) -> int:
    if pd.isna(x): return 0
    try: return int(float(x))
    except (TypeError, ValueError): return 0


def _to_float(x) -> float:
    if pd.isna(x): return 0.0
    try: return float(x)
    except (TypeError, ValueError): return 0.0


def _to_optional_float(x) -> Optional[float]:
    if pd.isna(x): return None
    try: return float(x)
    except (TypeError, ValueError): return None


def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()


def _to_date(x) -> date:
    ts = pd.to_datetime(x)
    if pd.isna(ts):
        raise ValueError("missing date")
    return ts.date()


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        if n in cols:
            return n
        if _norm(n) in norm_map:
            return norm_map[_norm(n)]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")


def _opt_col(df: pd.DataFrame, *names: str) -> Optional[str]:
    try:
        return _col(df, *names)
    except KeyError:
        return None


def read_frame(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext in (".xlsx", ".xlsm"):
        return pd.read_excel(path, engine="openpyxl")
    if ext == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"Unsupported incident file type {ext!r}; use .csv or .xlsx")


def load_incidents(path: str, coordinates: Mapping[str, Coordinates] = REGION_COORDINATES) -> List[IncidentRecord]:
    """Load incident records from a .csv or .xlsx export."""
    df = read_frame(path)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)

    id_col = _opt_col(df, "ID", "Incident ID")
    region_col = _col(df, "Province", "Region")
    category_col = _col(df, "Emergency Type", "Category", "Type")
    severity_col = _col(df, "Severity")
    date_col = _col(df, "Date", "Occurred At", "Occurred")
    affected_col = _col(df, "Affected People", "Affected Count", "Affected")
    damage_col = _col(df, "Damage Estimate", "Damage")
    response_col = _col(df, "Response Time", "Response Hours", "Response")
    status_col = _col(df, "Status")
    lat_col = _opt_col(df, "Lat", "Latitude")
    lng_col = _opt_col(df, "Lng", "Lon", "Longitude")
    desc_col = _opt_col(df, "Description")

    records: List[IncidentRecord] = []
    for i, row in df.iterrows():
        line = i + 2  # header is line 1
        region = _to_str(row[region_col])
        lat = _to_optional_float(row[lat_col]) if lat_col else None
        lng = _to_optional_float(row[lng_col]) if lng_col else None
        if lat is not None and lng is not None:
            where = Coordinates(lat, lng)
        else:
            where = coordinates.get(region, ORIGIN)
        try:
            severity = Severity.parse(row[severity_col])
            status = Status.parse(row[status_col])
            occurred = _to_date(row[date_col])
        except ValueError as e:
            raise ValueError(f"{path}: row {line}: {e}") from e

        records.append(IncidentRecord(
            id=_to_str(row[id_col]) if id_col else str(i + 1),
            region=region,
            category=_to_str(row[category_col]),
            severity=severity,
            occurred_at=occurred,
            coordinates=where,
            affected_count=_to_int(row[affected_col]),
            damage_estimate=_to_float(row[damage_col]),
            response_hours=_to_float(row[response_col]),
            status=status,
            description=_to_str(row[desc_col]) if desc_col else "",
        ))
    log.debug("Loaded %d incidents from %s", len(records), path)
    return records
