import pytest

pytest.importorskip("docx")
pytest.importorskip("matplotlib")

from docx import Document

from agrialert.aggregate import aggregate
from agrialert.fixtures import baseline_weather, sample_incidents
from agrialert.report import ReportConfig, generate_docx_report


def test_report_is_written(tmp_path):
    records = sample_incidents()
    out = tmp_path / "out" / "report.docx"
    cfg = ReportConfig(command_log=["filter severity critical"])
    generate_docx_report(records, aggregate(records, baseline_weather()), str(out), config=cfg)

    doc = Document(str(out))
    text = "\n".join(p.text for p in doc.paragraphs)
    assert "Emergency Response Analytics" in text
    assert "filter severity critical" in text
    province_table = doc.tables[1]
    assert province_table.rows[1].cells[0].text == "Western Cape"
    assert len(province_table.rows) == 10


def test_empty_selection_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        generate_docx_report([], [], str(tmp_path / "r.docx"))
