"""Title and notes cleanup.

The title is what remains of the working text once command prefixes, every
date/time phrase and the location phrase are gone. Removal reuses the
compiled date and time patterns, so anything the resolvers understood never
leaks into the title.
"""

import re
from functools import lru_cache

from voicetask.services.dates import date_patterns
from voicetask.services.locales import PhraseView, alternation, phrases_for
from voicetask.services.location import LocationMatch
from voicetask.services.normalizer import strip_edges
from voicetask.services.times import time_patterns

# Last resort when even the raw utterance is blank
DEFAULT_TITLE = "Task"

_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.;:!?，。、])")
_WHITESPACE = re.compile(r"\s+")


@lru_cache(maxsize=64)
def _prefix_pattern(view: PhraseView) -> re.Pattern:
    return re.compile(r"^\s*" + alternation(view.get("command_prefixes")) + r"\s*", re.IGNORECASE)


@lru_cache(maxsize=64)
def _dangling_pattern(view: PhraseView) -> re.Pattern:
    words = list(view.words("day_periods")) + list(view.get("time_markers"))
    return re.compile(r"(?:\W*" + alternation(words) + r")+\W*$", re.IGNORECASE)


@lru_cache(maxsize=64)
def _removable(view: PhraseView) -> tuple[re.Pattern, ...]:
    return tuple(date_patterns(view).all_patterns() + time_patterns(view).all_patterns())


def strip_command_prefixes(text: str, view: PhraseView | None = None) -> str:
    """Remove leading command phrases ("remind me to", "tolong"), repeatedly."""
    view = view or phrases_for()
    pattern = _prefix_pattern(view)
    while True:
        stripped = pattern.sub("", text, count=1)
        if stripped == text:
            return text
        text = stripped


def _tidy(text: str) -> str:
    text = _WHITESPACE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = strip_edges(text)
    return text[:1].upper() + text[1:]


def _remove_cues(text: str, location: LocationMatch | None, view: PhraseView) -> str:
    for pattern in _removable(view):
        text = pattern.sub(" ", text)

    if location and location.phrase:
        text = re.sub(re.escape(location.phrase), " ", text, count=1, flags=re.IGNORECASE)

    text = _dangling_pattern(view).sub("", strip_edges(text), count=1)
    return strip_edges(text)


def clean_title(
    working: str,
    raw: str,
    location: LocationMatch | None = None,
    view: PhraseView | None = None,
) -> str:
    """Build the task title from the working text.

    Falls back to the uncleaned working text, then to the raw utterance, so
    the result is never empty.
    """
    view = view or phrases_for()
    cleaned = _tidy(_remove_cues(strip_command_prefixes(working, view), location, view))
    if cleaned:
        return cleaned
    for fallback in (working, raw):
        fallback = _tidy(fallback)
        if fallback:
            return fallback
    return DEFAULT_TITLE


def clean_notes(
    notes: str,
    location: LocationMatch | None = None,
    view: PhraseView | None = None,
) -> str:
    """Remove date/time and location phrases from notes.

    Notes that consisted of nothing else come back empty.
    """
    if not notes:
        return ""
    view = view or phrases_for()
    return _tidy(_remove_cues(notes, location, view))
