"""
Flashcard exports: a ';'-separated CSV with UTF-8 BOM (opens cleanly in spreadsheet tools)
and a printable PDF with one block per card.
"""
import csv
import io
from datetime import datetime
from typing import Dict, List, Optional

from quidz.core.pdf import PdfDocument

CSV_HEADER = ["question", "answer", "category", "public", "created"]


def _created(value) -> str:
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def export_csv(cards: List[Dict]) -> str:
    output = io.StringIO()
    writer = csv.writer(output, delimiter=";")
    writer.writerow(CSV_HEADER)
    for card in cards:
        writer.writerow([
            card.get("front_text", ""),
            card.get("back_text", ""),
            card.get("category_name") or "No category",
            "yes" if card.get("is_public") else "no",
            _created(card.get("created_at")),
        ])
    return "\ufeff" + output.getvalue()


def export_pdf(cards: List[Dict], title: str = "Flashcards", exported_at: Optional[datetime] = None) -> bytes:
    exported_at = exported_at or datetime.utcnow()
    doc = PdfDocument(title, f"Exported {exported_at:%Y-%m-%d}  |  {len(cards)} card(s)")
    for index, card in enumerate(cards, start=1):
        lines = []
        if card.get("category_name"):
            lines.append(f"Category: {card['category_name']}")
        lines.append(f"Question: {card.get('front_text', '')}")
        lines.append(f"Answer: {card.get('back_text', '')}")
        doc.section(f"Card {index}", lines)
    if not cards:
        doc.section("No cards", ["Nothing to export."])
    return doc.render()
