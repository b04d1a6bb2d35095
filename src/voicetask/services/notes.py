"""Split an utterance into task text and notes.

Rules, first one producing non-empty notes wins:

1. Trigger phrase ("jangan lupa", "don't forget"): after -> notes
2. Separator word ("catatan", "notes"): after -> notes
3. First comma, when the clause after it is longer than 3 characters
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from voicetask.services.locales import PhraseView, alternation, phrases_for
from voicetask.services.normalizer import strip_edges

MIN_COMMA_CLAUSE = 4

_COMMA = re.compile(r"[,，、،]")


@dataclass
class NotesSplit:
    """Notes and the working text left for the title."""

    notes: str = ""
    remaining: str = ""
    rule: str = ""  # "trigger", "separator", "comma" or "" when nothing split


@lru_cache(maxsize=64)
def _phrase_patterns(view: PhraseView) -> tuple[tuple[str, re.Pattern], ...]:
    return (
        ("trigger", re.compile(alternation(view.get("note_triggers")), re.IGNORECASE)),
        ("separator", re.compile(alternation(view.get("note_separators")), re.IGNORECASE)),
    )


def extract_notes(text: str, view: PhraseView | None = None) -> NotesSplit:
    """Split normalized ``text`` into ``(notes, remaining)``.

    When no rule applies, notes are empty and ``remaining`` is the whole text.
    """
    view = view or phrases_for()

    for rule, pattern in _phrase_patterns(view):
        match = pattern.search(text)
        if not match:
            continue
        notes = strip_edges(text[match.end() :])
        if notes:
            return NotesSplit(notes=notes, remaining=text[: match.start()].strip(), rule=rule)

    comma = _COMMA.search(text)
    if comma:
        clause = text[comma.end() :].strip()
        if len(clause) >= MIN_COMMA_CLAUSE:
            return NotesSplit(
                notes=clause, remaining=text[: comma.start()].strip(), rule="comma"
            )

    return NotesSplit(remaining=text)
