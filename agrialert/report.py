from __future__ import annotations

"""
Analytics report (DOCX)
-----------------------
Writes the analytics dashboard to a Word document: headline figures, the
four dashboard charts, and the per-province table with current weather.

- Report dependencies (python-docx, matplotlib) are imported lazily so the
  CLI works without them until `report` is used.
- Charts are rendered off-screen (Agg backend) into a temporary directory.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
import os
import tempfile

from . import analytics
from .models import IncidentRecord, RegionImpact


@dataclass
class ReportConfig:
    title: str = "Emergency Response Analytics"
    subtitle: str = "Statistics linked to prevailing weather conditions"
    dataset_name: str = "AgriAlert SA sample incidents"
    # How many provinces the comparison chart shows
    top_n: int = 5
    command_log: Optional[List[str]] = field(default=None)


def generate_docx_report(
    records: Sequence[IncidentRecord],
    impacts: Sequence[RegionImpact],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """Generate the analytics report for `records` and their province impacts."""
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    if not records:
        raise ValueError("No incidents to report on (selection is empty).")

    totals = analytics.summary(records)
    trends = analytics.monthly_trends(records)
    categories = analytics.category_distribution(records)
    severities = analytics.severity_distribution(records)
    top = analytics.top_regions(impacts, config.top_n)

    # -----------------------------
    # Charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="agrialert_report_")
    charts: List[Tuple[str, str]] = []

    def _save(title: str, filename: str) -> None:
        path = os.path.join(tmpdir, filename)
        plt.title(title)
        plt.tight_layout()
        plt.savefig(path, dpi=150)
        plt.close()
        charts.append((title, path))

    if trends:
        plt.figure()
        labels = [t.label for t in trends]
        plt.plot(labels, [t.incidents for t in trends], marker="o", color="#8884d8", label="Incidents")
        plt.ylabel("Incidents")
        ax2 = plt.gca().twinx()
        ax2.plot(labels, [t.affected for t in trends], marker="s", color="#82ca9d", label="People Affected")
        ax2.set_ylabel("People Affected")
        _save("Monthly Incident Trends", "trends.png")

    plt.figure()
    plt.bar([c for c, _ in categories], [n for _, n in categories])
    plt.xticks(rotation=45, ha="right")
    plt.ylabel("Incidents")
    _save("Emergency Types Distribution", "categories.png")

    plt.figure()
    plt.bar([s.value for s, _, _ in severities], [n for _, n, _ in severities],
            color=[colour for _, _, colour in severities])
    plt.ylabel("Incidents")
    _save("Incident Severity Levels", "severity.png")

    if top:
        plt.figure()
        x = np.arange(len(top))
        width = 0.4
        plt.bar(x - width / 2, [p.total_incidents for p in top], width, color="#8884d8", label="Incidents")
        plt.xticks(x, [p.region for p in top], rotation=45, ha="right")
        plt.ylabel("Incidents")
        ax2 = plt.gca().twinx()
        ax2.bar(x + width / 2, [p.total_affected for p in top], width, color="#82ca9d", label="People Affected")
        ax2.set_ylabel("People Affected")
        _save(f"Top {len(top)} Impacted Provinces", "top_provinces.png")

    # -----------------------------
    # Document
    # -----------------------------
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        t = doc.add_table(rows=1, cols=len(header))
        for cell, text in zip(t.rows[0].cells, header):
            cell.text = text
        for row in rows:
            for cell, text in zip(t.add_row().cells, row):
                cell.text = text

    _center(config.title, 22, bold=True)
    _center(config.subtitle, 12, italic=True)
    doc.add_paragraph(f"Dataset: {config.dataset_name}")

    doc.add_heading("Key figures", level=1)
    _table(["Metric", "Value"], [
        ("Total Incidents", str(totals.total_incidents)),
        ("People Affected", f"{totals.total_affected:,}"),
        ("Total Damage", analytics.format_rand_millions(totals.total_damage)),
        ("Avg Response Time", f"{totals.average_response_hours} h"),
    ])

    doc.add_heading("Charts", level=1)
    for title, path in charts:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.0))

    doc.add_heading("Province emergency details and current weather", level=1)
    _table(
        ["Province", "Current Weather", "Incidents", "Affected", "Damage (R)", "Avg Resp (h)", "Map"],
        [
            (
                p.region,
                f"{p.current_conditions.temperature}°C, {p.current_conditions.condition}, "
                f"{p.current_conditions.humidity}% humidity",
                str(p.total_incidents),
                f"{p.total_affected:,}",
                analytics.format_rand_millions(p.total_damage),
                str(p.average_response_hours),
                analytics.map_link(p.coordinates),
            )
            for p in impacts
        ],
    )

    if config.command_log:
        doc.add_heading("Command log", level=1)
        doc.add_paragraph("These commands produced the selection in this report:")
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    from . import __version__
    doc.add_heading("Reproducibility footer", level=1)
    doc.add_paragraph(f"agrialert version: {__version__}")
    doc.add_paragraph(f"Report generated at: {datetime.now().isoformat(timespec='seconds')}")
    doc.add_paragraph(f"Incidents in scope: {len(records)}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
