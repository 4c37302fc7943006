from datetime import date

from agrialert import analytics
from agrialert.fixtures import sample_incidents
from agrialert.models import Coordinates, Severity


def test_summary_of_sample_data():
    s = analytics.summary(sample_incidents())
    assert s.total_incidents == 9
    assert s.total_affected == 141000
    assert s.total_damage == 28400000
    # 43 hours over 9 incidents = 4.78
    assert s.average_response_hours == 5


def test_summary_of_nothing_is_zero():
    s = analytics.summary([])
    assert (s.total_incidents, s.total_affected, s.total_damage, s.average_response_hours) == (0, 0, 0, 0)


def test_category_distribution_first_seen_order(record):
    records = [record(category="Flood"), record(category="Fire"), record(category="Flood")]
    assert analytics.category_distribution(records) == [("Flood", 2), ("Fire", 1)]


def test_severity_distribution_colours():
    dist = analytics.severity_distribution(sample_incidents())
    assert dist[0] == (Severity.CRITICAL, 3, "#dc2626")
    assert {sev: n for sev, n, _ in dist} == {Severity.CRITICAL: 3, Severity.HIGH: 3, Severity.MEDIUM: 3}


def test_monthly_trends_are_chronological(record):
    records = [
        record(day=date(2025, 1, 3), affected=4),
        record(day=date(2024, 11, 20), affected=1),
        record(day=date(2024, 11, 2), affected=2),
    ]
    trends = analytics.monthly_trends(records)
    assert [t.label for t in trends] == ["Nov 24", "Jan 25"]
    assert (trends[0].incidents, trends[0].affected) == (2, 3)
    assert (trends[1].year, trends[1].month) == (2025, 1)


def test_display_helpers():
    assert analytics.format_rand_millions(4500000) == "R4.5 M"
    assert analytics.map_link(Coordinates(-26.2708, 28.1123)) == (
        "https://www.google.com/maps/search/?api=1&query=-26.2708,28.1123"
    )


def test_top_regions_limits():
    assert analytics.top_regions([1, 2, 3, 4, 5, 6, 7]) == [1, 2, 3, 4, 5]
    assert analytics.top_regions([1], k=3) == [1]
