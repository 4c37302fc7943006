import csv
import json
from datetime import date

import pytest

from agrialert.engine import Engine
from agrialert.fixtures import baseline_weather, sample_incidents
from agrialert.models import Severity


@pytest.fixture
def engine():
    return Engine.from_records(sample_incidents())


def test_starts_with_everything_selected(engine):
    assert len(engine.selected()) == 9


def test_filters_combine(engine):
    engine.filter_severity("critical")
    assert {r.region for r in engine.selected()} == {"Western Cape", "KwaZulu-Natal", "Eastern Cape"}
    engine.filter_status("responding")
    assert [r.id for r in engine.selected()] == ["1", "5"]


def test_unknown_severity_is_rejected(engine):
    with pytest.raises(ValueError):
        engine.filter_severity("apocalyptic")


def test_region_and_category_filters(engine):
    engine.filter_category("Dust Storm")
    assert [r.region for r in engine.selected()] == ["Northern Cape"]
    engine.filter_region("Gauteng")
    assert engine.selected() == []


def test_date_range_is_inclusive(engine):
    engine.filter_dates(date(2024, 11, 20), date(2024, 12, 5))
    assert [r.id for r in engine.selected()] == ["4", "5", "6", "7", "8"]


def test_date_range_must_be_ordered(engine):
    with pytest.raises(ValueError):
        engine.filter_dates(date(2025, 1, 1), date(2024, 1, 1))


def test_undo_redo(engine):
    assert engine.undo() is False
    engine.filter_region("Limpopo")
    assert len(engine.active_ids) == 1
    assert engine.undo() is True
    assert len(engine.active_ids) == 9
    assert engine.redo() is True
    assert len(engine.active_ids) == 1
    assert engine.redo() is False
    engine.reset()
    assert len(engine.active_ids) == 9


def test_impacts_follow_selection(engine):
    engine.filter_severity(Severity.MEDIUM)
    impacts = engine.impacts(baseline_weather())
    assert [p.region for p in impacts] == ["Northern Cape", "Mpumalanga", "North West"]
    assert impacts[0].current_conditions.temperature == 28


def test_sort_and_topk(engine):
    by_damage = engine.sort("damage")
    assert by_damage[0].id == "2"
    assert engine.sort("date", reverse=False)[0].id == "9"
    # response 6 appears twice; the earlier record wins the tie
    assert [r.id for r in engine.topk(3, "response")] == ["5", "1", "7"]


def test_sort_unknown_field(engine):
    with pytest.raises(ValueError):
        engine.sort("colour")


def test_export_csv_and_json(engine, tmp_path):
    engine.filter_region("Gauteng")
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"
    engine.export_csv(str(csv_path))
    engine.export_json(str(json_path))

    with open(csv_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 1
    assert rows[0]["region"] == "Gauteng"
    assert rows[0]["severity"] == "high"

    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload[0]["occurred_at"] == "2024-12-05"
    assert payload[0]["affected_count"] == 18000
