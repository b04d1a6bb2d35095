"""Location extraction.

Two marking families are supported:

- Prefix markers ("at the office", "di Indomaret", "bei Aldi"): the marker is
  followed by a run of words, cut at the first date/time or function word.
- Suffix particles ("会社で", "회사에서"): a single word glued to a particle.

Prefix markers are tried first; the first candidate that survives the
filters wins.
"""

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass
from functools import lru_cache

from voicetask.services.locales import PhraseView, alternation, bare_alternation, phrases_for

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE

# A word: letters only, optionally joined by an apostrophe or hyphen
WORD = r"[^\W\d_]+(?:['’-][^\W\d_]+)*"
_WORD_RE = re.compile(WORD)

MIN_PREFIX_LENGTH = 3
MIN_SUFFIX_LENGTH = 2

# A particle glued to a further syllable is part of a longer one ("에" in "에게")
_HANGUL = r"[\uac00-\ud7a3]"

# Japanese topic and object particles after kanji or katakana; a place name
# never spans one
_KANA_PARTICLE = re.compile(r"(?<=[\u3005\u4e00-\u9fff\u30a0-\u30ff])(?:まで|は|を|の|が|と|も)")

# Categories whose phrases end a prefix-marked place name
_STOP_CATEGORIES = (
    "time_markers",
    "tomorrow",
    "day_after_tomorrow",
    "next_week",
    "location_prefixes",
    "note_triggers",
    "note_separators",
    "priority_keywords",
    "location_stop_words",
)

# Categories trimmed from the front of a suffix-marked place name
_LEADING_CATEGORIES = ("tomorrow", "day_after_tomorrow", "next_week", "non_location_words")


@dataclass
class LocationMatch:
    """Result of location extraction."""

    place: str = ""
    # The text the place was read from (marker and words, or word and
    # particle), removed from the title
    phrase: str = ""

    def __bool__(self) -> bool:
        return bool(self.place)


@dataclass(frozen=True)
class LocationRules:
    """Compiled location rules for one phrase view."""

    prefix: re.Pattern
    suffix: re.Pattern
    articles: frozenset
    elided_articles: tuple
    non_location: frozenset
    stop_phrases: tuple  # tuples of folded words, longest first
    leading: re.Pattern


def _fold(word: str) -> str:
    return word.casefold().replace("’", "'")


@lru_cache(maxsize=64)
def location_rules(view: PhraseView) -> LocationRules:
    articles = [_fold(a) for a in view.get("location_articles")]

    stops = set()
    for category in _STOP_CATEGORIES:
        stops.update(view.get(category))
    stops.update(view.words("weekdays"))
    stops.update(view.words("day_periods"))
    stop_phrases = sorted(
        {tuple(_fold(w) for w in phrase.split()) for phrase in stops if phrase.strip()},
        key=len,
        reverse=True,
    )

    leading = set(view.words("weekdays")) | set(view.words("day_periods"))
    for category in _LEADING_CATEGORIES:
        leading.update(view.get(category))

    return LocationRules(
        prefix=re.compile(alternation(view.get("location_prefixes")) + r"(?=\s)", _FLAGS),
        suffix=re.compile(
            r"(?<![^\W\d_])(?P<word>[^\W\d_]+)\s*(?P<particle>"
            + bare_alternation(view.get("location_suffixes"))
            + r")(?!" + _HANGUL + ")",
            _FLAGS,
        ),
        articles=frozenset(a for a in articles if not a.endswith("'")),
        elided_articles=tuple(a for a in articles if a.endswith("'")),
        non_location=frozenset(_fold(w) for w in view.get("non_location_words")),
        stop_phrases=tuple(stop_phrases),
        leading=re.compile("^(?:" + bare_alternation(leading) + r")\s*", _FLAGS),
    )


def _title_word(word: str) -> str:
    # Words that already carry capitals ("IKEA", "iPhone") are kept as spoken
    if any(ch.isupper() for ch in word):
        return word
    return word[:1].upper() + word[1:]


def _stop_index(rules: LocationRules, folded: list[str], start: int, end: int, head: str) -> int:
    """Index of the first stop phrase in folded[start:end], reading folded[start] as head."""
    for i in range(start, end):
        for phrase in rules.stop_phrases:
            if i + len(phrase) > end:
                continue
            words = folded[i : i + len(phrase)]
            if i == start:
                words = [head] + words[1:]
            if tuple(words) == phrase:
                return i
    return end


def _run_ends(text: str, tokens: list[re.Match]) -> list[int]:
    """For each token, the index just past the space-separated run it belongs to."""
    ends = [0] * len(tokens)
    end = len(tokens)
    for i in range(len(tokens) - 1, -1, -1):
        if i + 1 < len(tokens) and not text[tokens[i].end() : tokens[i + 1].start()].isspace():
            end = i + 1
        ends[i] = end
    return ends


def _from_prefix(rules: LocationRules, text: str) -> LocationMatch | None:
    tokens = list(_WORD_RE.finditer(text))
    starts = [t.start() for t in tokens]
    folded = [_fold(t.group(0)) for t in tokens]
    run_ends = _run_ends(text, tokens)

    for marker in rules.prefix.finditer(text):
        first = bisect_left(starts, marker.end())
        if first == len(tokens) or not text[marker.end() : starts[first]].isspace():
            continue
        end = run_ends[first]

        if folded[first] in rules.articles:
            first += 1
            if first == end:
                continue
        head = tokens[first].group(0)
        for article in rules.elided_articles:
            if folded[first].startswith(article) and len(head) > len(article):
                head = head[len(article) :]
                break

        cut = _stop_index(rules, folded, first, end, _fold(head))
        if cut == first:
            continue
        if _fold(head) in rules.non_location:
            continue
        words = [head] + [t.group(0) for t in tokens[first + 1 : cut]]
        place = " ".join(_title_word(w) for w in words)
        if len(place) < MIN_PREFIX_LENGTH:
            continue
        return LocationMatch(place=place, phrase=text[marker.start() : tokens[cut - 1].end()])
    return None


def _from_suffix(rules: LocationRules, text: str) -> LocationMatch | None:
    for match in rules.suffix.finditer(text):
        word = match.group("word")
        start = match.start("word")
        # Keep only what follows the last topic/object particle ("明日は会社" -> "会社").
        # The particle goes with the phrase so it leaves the title too.
        phrase_start = None
        particles = list(_KANA_PARTICLE.finditer(word))
        if particles:
            phrase_start = start + particles[-1].start()
            word = word[particles[-1].end() :]
            start += particles[-1].end()
        # Strip date/time words glued to the front ("明日会社で" -> "会社")
        while True:
            lead = rules.leading.match(word)
            if not lead or lead.end() == 0 or lead.end() >= len(word):
                break
            word = word[lead.end() :]
            start += lead.end()
        if len(word) < MIN_SUFFIX_LENGTH or _fold(word) in rules.non_location:
            continue
        if phrase_start is None:
            phrase_start = start
        return LocationMatch(place=word, phrase=text[phrase_start : match.end()])
    return None


def extract_location(text: str, view: PhraseView | None = None) -> LocationMatch:
    """Extract a place from a normalized utterance.

    Returns:
        LocationMatch; empty when no marker yields a plausible place.

    Examples:
        "Call John at 5pm at the office" -> "Office"
        "Beli susu di Indomaret" -> "Indomaret"
        "明日会社で会議" -> "会社"
    """
    view = view or phrases_for()
    rules = location_rules(view)
    found = _from_prefix(rules, text) or _from_suffix(rules, text)
    if found is None:
        return LocationMatch()
    logger.debug(f"Location {found.place!r} from {found.phrase!r}")
    return found
