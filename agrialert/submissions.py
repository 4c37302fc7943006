"""
Emergency report log
====================

Reports submitted by users are appended to a JSON file, one list of objects.
A missing file is an empty log. A file that cannot be parsed is logged and
treated as empty so one bad write never blocks new reports.
"""

from __future__ import annotations
import json
import logging
import os
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .models import Severity

log = logging.getLogger(__name__)


class ReportStatus(str, Enum):
    PENDING = "pending"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"

    @classmethod
    def parse(cls, value) -> "ReportStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown report status {value!r}; expected one of {[s.value for s in cls]}") from None


@dataclass(frozen=True)
class Reporter:
    id: str
    name: str


@dataclass(frozen=True)
class EmergencyReport:
    id: str
    user_id: str
    user_name: str
    type: str
    severity: Severity
    description: str
    location: str
    timestamp: str
    status: ReportStatus = ReportStatus.PENDING

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "EmergencyReport":
        report = cls(**item)
        return replace(report, severity=Severity.parse(report.severity), status=ReportStatus.parse(report.status))

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["severity"] = self.severity.value
        out["status"] = self.status.value
        return out


class ReportLog:
    def __init__(self, path: str) -> None:
        self.path = path
        self._reports: List[EmergencyReport] = self.load()

    def load(self) -> List[EmergencyReport]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            return [EmergencyReport.from_dict(item) for item in raw]
        except (ValueError, TypeError) as e:
            log.error("Error parsing saved reports in %s: %s", self.path, e)
            return []

    def reports(self) -> List[EmergencyReport]:
        return list(self._reports)

    def submit(
        self,
        user: Reporter,
        type: str,
        severity,
        description: str,
        location: str,
        now: Optional[datetime] = None,
    ) -> EmergencyReport:
        """Record a new pending report and rewrite the log file."""
        fields = {"type": type, "severity": severity, "description": description, "location": location}
        missing = [k for k, v in fields.items() if not str(v).strip()]
        if missing:
            raise ValueError(f"Report is missing: {', '.join(missing)}")

        now = now or datetime.now()
        report = EmergencyReport(
            id=uuid.uuid4().hex,
            user_id=user.id,
            user_name=user.name,
            type=type.strip(),
            severity=Severity.parse(severity),
            description=description.strip(),
            location=location.strip(),
            timestamp=now.isoformat(timespec="seconds"),
        )
        self._reports.append(report)
        self._save()
        log.debug("Stored report %s (%s, %s)", report.id, report.type, report.location)
        return report

    def _save(self) -> None:
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in self._reports], f, ensure_ascii=False, indent=2)
