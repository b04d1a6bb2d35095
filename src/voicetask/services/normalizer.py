"""Text normalization ahead of pattern matching.

Recognizers emit numbers in whatever script the locale writes them in:
full-width digits from Japanese keyboards, CJK numerals ("三時"), or time
separators other than a colon ("11.15", "3 30"). Everything downstream only
has to handle ASCII digits and ``H:MM``.
"""

import re
import unicodedata

# Full-width, Arabic-Indic, Extended Arabic-Indic, Devanagari and Thai digits
_DIGITS = str.maketrans(
    "０１２３４５６７８９"
    "٠١٢٣٤٥٦٧٨٩"
    "۰۱۲۳۴۵۶۷۸۹"
    "०१२३४५६७८९"
    "๐๑๒๓๔๕๖๗๘๙",
    "0123456789" * 5,
)

_CJK_VALUES = {
    "〇": 0, "零": 0, "一": 1, "二": 2, "两": 2, "兩": 2, "三": 3, "四": 4,
    "五": 5, "六": 6, "七": 7, "八": 8, "九": 9,
}

# Only numerals directly counting something are rewritten, so that weekday
# names like 星期一 and words like 一緒 stay intact.
_COUNTER = r"(?=\s*(?:[時点點分日号號月个個天半]|小时|小時))"

_CJK_COMPOUND = re.compile(r"([一二三四五六七八九])?十([一二三四五六七八九])?" + _COUNTER)
_CJK_SINGLE = re.compile(r"([〇零一二两兩三四五六七八九])" + _COUNTER)

_TIME_SEPARATOR = re.compile(r"(?<![\d:])(\d{1,2})[.,。．：\s](\d{2})(?![\d:])")


def _compound_value(match: re.Match) -> str:
    tens = _CJK_VALUES[match.group(1)] if match.group(1) else 1
    units = _CJK_VALUES[match.group(2)] if match.group(2) else 0
    return str(tens * 10 + units)


def normalize(text: str) -> str:
    """Return ``text`` with canonical ASCII digits and ``H:MM`` times.

    Applying it twice gives the same result as applying it once.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFC", text)
    text = text.translate(_DIGITS)
    text = _CJK_COMPOUND.sub(_compound_value, text)
    text = _CJK_SINGLE.sub(lambda m: str(_CJK_VALUES[m.group(1)]), text)
    text = _TIME_SEPARATOR.sub(r"\1:\2", text)
    return text.strip()


def strip_edges(text: str) -> str:
    """Trim whitespace and punctuation from both ends of ``text``."""
    start, end = 0, len(text)
    while start < end and _is_edge(text[start]):
        start += 1
    while end > start and _is_edge(text[end - 1]):
        end -= 1
    return text[start:end]


def _is_edge(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch).startswith("P")
