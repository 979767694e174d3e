import csv
import io
from datetime import date, datetime

from quidz.core.pdf import wrap_line
from quidz.modules.flashcards.exporter import export_csv, export_pdf
from quidz.modules.projects.portfolio_pdf import build_portfolio_pdf
from quidz.modules.reports.pdf_export import build_report_pdf


def test_flashcard_csv_has_bom_and_header():
    content = export_csv([
        {"front_text": "Frage; mit Semikolon", "back_text": "Antwort", "category_name": None,
         "is_public": True, "created_at": "2025-03-01T10:00:00"},
    ])
    assert content.startswith("\ufeff")
    parsed = list(csv.reader(io.StringIO(content[1:]), delimiter=";"))
    assert parsed[0] == ["question", "answer", "category", "public", "created"]
    assert parsed[1] == ["Frage; mit Semikolon", "Antwort", "No category", "yes", "2025-03-01"]


def test_flashcard_pdf():
    pdf = export_pdf([{"front_text": "Q", "back_text": "A" * 500, "category_name": "Allgemein"}],
                     exported_at=datetime(2025, 3, 1))
    assert pdf.startswith(b"%PDF")
    assert export_pdf([]).startswith(b"%PDF")


def test_portfolio_pdf():
    pdf = build_portfolio_pdf(
        {"full_name": "Pia Participant"},
        [{"title": "Excel", "category": "digital", "status": "validiert"}],
        [{"id": "p1", "title": "Website", "category": "digital", "tags": ["html"]}],
        {"p1": [{"title": "Excel"}]},
    )
    assert pdf.startswith(b"%PDF")


def test_report_pdf_handles_empty_summaries():
    report = {"period_start": date(2025, 3, 1), "period_end": date(2025, 3, 31), "program_type": "coaching"}
    assert build_report_pdf(report, None).startswith(b"%PDF")


def test_wrap_line():
    assert wrap_line("one two three", max_chars=8) == ["one two", "three"]
    assert wrap_line("abcdefghij", max_chars=4) == ["abcd", "efgh", "ij"]
    assert wrap_line("a\n\nb") == ["a", "", "b"]
