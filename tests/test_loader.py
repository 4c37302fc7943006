from datetime import date

import pandas as pd
import pytest

from agrialert.fixtures import REGION_COORDINATES
from agrialert.loader import load_incidents
from agrialert.models import ORIGIN, Coordinates, Severity, Status


def write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)
    return str(path)


def base_row(**overrides):
    row = {
        "ID": "a1",
        "Province": "Gauteng",
        "Emergency Type": "Severe Thunderstorm",
        "Severity": "High",
        "Date": "2024-12-05",
        "Affected People": 18000,
        "Damage Estimate": 3200000,
        "Response Time": 3,
        "Status": "resolved",
    }
    row.update(overrides)
    return row


def test_load_csv(tmp_path):
    path = write_csv(tmp_path / "inc.csv", [base_row(), base_row(ID="a2", Province="Atlantis")])
    records = load_incidents(path)
    assert len(records) == 2
    r = records[0]
    assert r.id == "a1"
    assert r.severity is Severity.HIGH
    assert r.status is Status.RESOLVED
    assert r.occurred_at == date(2024, 12, 5)
    assert r.affected_count == 18000
    assert r.coordinates == REGION_COORDINATES["Gauteng"]
    assert records[1].coordinates == ORIGIN


def test_alternative_headers_and_explicit_coordinates(tmp_path):
    row = {
        "region": "Limpopo",
        "category": "Heat Wave Alert",
        "severity": "high",
        "occurred at": "2024-11-28",
        "affected": "",
        "damage": 1800000,
        "response hours": 5,
        "status": "responding",
        "latitude": -23.9,
        "longitude": 29.5,
    }
    (r,) = load_incidents(write_csv(tmp_path / "inc.csv", [row]))
    assert r.id == "1"
    assert r.affected_count == 0
    assert r.coordinates == Coordinates(-23.9, 29.5)


def test_bad_severity_names_the_row(tmp_path):
    path = write_csv(tmp_path / "inc.csv", [base_row(), base_row(Severity="extreme")])
    with pytest.raises(ValueError, match="row 3"):
        load_incidents(path)


def test_missing_column(tmp_path):
    row = base_row()
    del row["Status"]
    with pytest.raises(KeyError):
        load_incidents(write_csv(tmp_path / "inc.csv", [row]))


def test_xlsx_roundtrip(tmp_path):
    path = tmp_path / "inc.xlsx"
    pd.DataFrame([base_row()]).to_excel(path, index=False, engine="openpyxl")
    (r,) = load_incidents(str(path))
    assert r.region == "Gauteng"


def test_unsupported_extension(tmp_path):
    with pytest.raises(ValueError):
        load_incidents(str(tmp_path / "inc.txt"))
