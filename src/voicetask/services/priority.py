"""Urgency detection."""

import re
from enum import Enum
from functools import lru_cache

from voicetask.services.locales import PhraseView, is_spaced, phrases_for


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@lru_cache(maxsize=64)
def _keyword_pattern(view: PhraseView) -> re.Pattern:
    parts = []
    for keyword in view.get("priority_keywords"):
        body = r"\s+".join(re.escape(part) for part in keyword.split())
        # Words in spaced scripts must start a word ("acil" is not in "facility")
        parts.append(r"(?<!\w)" + body if is_spaced(keyword) else body)
    return re.compile("|".join(parts) or r"(?!)", re.IGNORECASE)


def detect_priority(text: str, view: PhraseView | None = None) -> Priority:
    """High when any urgency keyword appears in ``text``, else Medium.

    Keywords of the active locale are checked first, then every other
    locale's. A keyword may be the start of a longer word, so "URGENT:",
    "urgente" and "penting!" all count.
    """
    view = view or phrases_for()
    if _keyword_pattern(view).search(text):
        return Priority.HIGH
    return Priority.MEDIUM
