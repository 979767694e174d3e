import csv
import io
import json
from typing import Any, Dict, List, Optional, Tuple
import logging

from quidz.modules.flashcards.schemas import MAX_CARD_TEXT

logger = logging.getLogger(__name__)

FRONT_KEYS = ("front_text", "Frage", "frage", "vorderseite", "Vorderseite")
BACK_KEYS = ("back_text", "Antwort", "antwort", "rückseite", "Rückseite")
CATEGORY_KEYS = ("category", "Kategorie", "kategorie")
PUBLIC_KEYS = ("is_public", "öffentlich", "Öffentlich")

TRUE_VALUES = ("true", "1", "yes", "ja")


def _pick(row: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


class FlashcardImporter:
    """Parse flashcard batches from JSON arrays or ';'-separated CSV with a header row"""

    @staticmethod
    def parse(fmt: str, content: str) -> Tuple[List[Dict[str, Any]], List[str]]:
        """
        Returns (cards, errors). Each card has front_text, back_text, category (or None)
        and is_public (or None when the row does not say).
        """
        if not content or not content.strip():
            return [], [f"No {fmt.upper()} data given"]
        try:
            if fmt == "json":
                raw = json.loads(content)
                if not isinstance(raw, list):
                    return [], ["JSON must be an array of cards"]
            elif fmt == "csv":
                reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")), delimiter=";")
                raw = [row for row in reader if any((v or "").strip() for v in row.values() if isinstance(v, str))]
            else:
                return [], [f"Unsupported format: {fmt}"]
        except (ValueError, csv.Error) as e:
            return [], [f"Invalid {fmt.upper()}: {e}"]

        cards = []
        invalid = 0
        for row in raw:
            if not isinstance(row, dict):
                invalid += 1
                continue
            front = str(_pick(row, FRONT_KEYS) or "").strip()
            back = str(_pick(row, BACK_KEYS) or "").strip()
            if not front or not back:
                invalid += 1
                continue
            category = _pick(row, CATEGORY_KEYS)
            cards.append({
                "front_text": front[:MAX_CARD_TEXT],
                "back_text": back[:MAX_CARD_TEXT],
                "category": str(category).strip() if category else None,
                "is_public": _as_bool(_pick(row, PUBLIC_KEYS)),
            })

        if invalid:
            return [], [f"{invalid} card(s) have no valid front or back side"]
        if not cards:
            return [], ["No valid cards found"]
        return cards, []

    @staticmethod
    def missing_categories(cards: List[Dict[str, Any]], categories: List[Dict[str, Any]]) -> List[str]:
        """Category values that match neither an existing id nor (case-insensitively) a name"""
        known_ids = {c["id"] for c in categories}
        known_names = {c["name"].lower() for c in categories}
        missing: Dict[str, str] = {}
        for card in cards:
            value = card.get("category")
            if not value or value in known_ids or value.lower() in known_names:
                continue
            missing.setdefault(value.lower(), value)
        return list(missing.values())

    @staticmethod
    def build_rows(
        cards: List[Dict[str, Any]],
        categories: List[Dict[str, Any]],
        created_by: str,
        default_category_id: Optional[str] = None,
        default_is_public: bool = False,
    ) -> List[Dict[str, Any]]:
        """Resolve category by id or name, falling back to the batch defaults"""
        by_id = {c["id"] for c in categories}
        by_name = {c["name"].lower(): c["id"] for c in categories}
        result = []
        for card in cards:
            category_id = None
            value = card.get("category")
            if value:
                category_id = value if value in by_id else by_name.get(value.lower())
            result.append({
                "front_text": card["front_text"],
                "back_text": card["back_text"],
                "category_id": category_id or default_category_id,
                "is_public": card["is_public"] if card.get("is_public") is not None else default_is_public,
                "created_by": created_by,
            })
        return result
