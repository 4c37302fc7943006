from datetime import date

import pytest

from agrialert.models import Coordinates, IncidentRecord, Severity, Status


def make_record(id="1", region="A", affected=0, damage=0, response=0, category="Flood",
                severity="high", status="pending", day=date(2024, 12, 1)):
    return IncidentRecord(
        id=id,
        region=region,
        category=category,
        severity=Severity(severity),
        occurred_at=day,
        coordinates=Coordinates(0, 0),
        affected_count=affected,
        damage_estimate=damage,
        response_hours=response,
        status=Status(status),
    )


@pytest.fixture
def record():
    return make_record
