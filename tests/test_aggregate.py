import math

from agrialert.aggregate import aggregate, round_half_up
from agrialert.fixtures import REGION_COORDINATES, baseline_weather, sample_incidents
from agrialert.models import DEFAULT_WEATHER, ORIGIN, WeatherSnapshot


def test_worked_example(record):
    records = [
        record(id="1", region="A", affected=10, damage=100, response=2),
        record(id="2", region="A", affected=5, damage=50, response=4),
        record(id="3", region="B", affected=1, damage=1, response=1),
    ]
    out = aggregate(records, {})
    assert [p.region for p in out] == ["A", "B"]
    a, b = out
    assert (a.total_incidents, a.total_affected, a.total_damage, a.average_response_hours) == (2, 15, 150, 3)
    assert (b.total_incidents, b.total_affected, b.total_damage, b.average_response_hours) == (1, 1, 1, 1)


def test_empty_input_gives_empty_result():
    assert aggregate([], {}) == []


def test_counts_add_up_and_match_incident_lists():
    records = sample_incidents()
    out = aggregate(records, baseline_weather())
    assert sum(p.total_incidents for p in out) == len(records)
    for p in out:
        assert p.total_incidents == len(p.recent_incidents)


def test_recent_incidents_keep_input_order(record):
    records = [record(id=str(i), region="AB"[i % 2]) for i in range(6)]
    out = aggregate(records, {})
    for p in out:
        ids = [int(r.id) for r in p.recent_incidents]
        assert ids == sorted(ids)


def test_sorted_descending_with_stable_ties(record):
    records = [
        record(id="1", region="C"),
        record(id="2", region="B"),
        record(id="3", region="A"),
        record(id="4", region="A"),
        record(id="5", region="B"),
        record(id="6", region="D"),
    ]
    out = aggregate(records, {})
    assert [p.region for p in out] == ["B", "A", "C", "D"]


def test_defaults_for_unknown_region_and_missing_weather(record):
    out = aggregate([record(region="Atlantis")], {})
    assert out[0].coordinates == ORIGIN
    assert out[0].current_conditions == DEFAULT_WEATHER
    assert DEFAULT_WEATHER == WeatherSnapshot(temperature=20, condition="Unknown", humidity=50, wind_speed=10)


def test_known_region_uses_table_and_supplied_weather(record):
    snap = WeatherSnapshot(31, "Clear", 20, 5)
    out = aggregate([record(region="Gauteng")], {"Gauteng": snap})
    assert out[0].coordinates == REGION_COORDINATES["Gauteng"]
    assert out[0].current_conditions is snap


def test_negative_and_non_finite_values_are_summed(record):
    records = [
        record(region="A", affected=-5, damage=float("inf"), response=float("nan")),
        record(region="A", affected=2, damage=1, response=1),
    ]
    (p,) = aggregate(records, {})
    assert p.total_affected == -3
    assert p.total_damage == float("inf")
    assert math.isnan(p.average_response_hours)


def test_average_rounds_half_up(record):
    records = [record(region="A", response=2), record(region="A", response=3)]
    assert aggregate(records, {})[0].average_response_hours == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.4) == 2


def test_sample_dataset_one_incident_per_province():
    out = aggregate(sample_incidents(), {})
    assert len(out) == 9
    # all ties, so input order survives
    assert [p.region for p in out] == [r.region for r in sample_incidents()]
    kzn = next(p for p in out if p.region == "KwaZulu-Natal")
    assert kzn.total_affected == 35000
    assert kzn.total_damage == 8000000
    assert kzn.average_response_hours == 2
