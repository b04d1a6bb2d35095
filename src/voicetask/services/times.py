"""Time-of-day resolution.

Four pattern families are tried in order; the first to yield a valid
hour/minute wins:

1. Marker-prefixed: "at 3pm", "jam 3 sore", "um 15 Uhr", "lúc 3 giờ chiều"
2. Unit-suffixed: "3pm", "15h30", "दोपहर 3 बजे", "บ่าย 3 โมง"
3. CJK counter: "午後3時", "下午3点半", "오후 3시 30분"
4. Bare "15:30"

A candidate whose hour exceeds 23 or minute exceeds 59 is rejected and the
search moves on to the next family.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from voicetask.config import settings
from voicetask.services.locales import (
    DayPeriod,
    PhraseView,
    alternation,
    bare_alternation,
    is_spaced,
    phrases_for,
    suffix_alternation,
)
from voicetask.services.timezone import TimezoneService, service_for

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE

CJK_COUNTERS = ("時", "点", "點", "시")
CJK_MINUTES = ("分", "분")
CJK_HALF = ("半", "반")
CJK_PARTICLES = ("から", "まで", "부터", "に", "へ", "에")

_BARE_TIME = re.compile(r"(?<![\d:])(\d{1,2})[:.](\d{2})(?!\d)")


@dataclass
class TimeMatch:
    """A resolved time of day and where it came from."""

    hour: int
    minute: int
    matched_text: str
    family: str  # "marker", "suffix", "cjk" or "bare"


@dataclass(frozen=True)
class TimePatterns:
    """Compiled time families for one phrase view."""

    marker: re.Pattern
    suffix: re.Pattern
    cjk: re.Pattern
    bare: re.Pattern
    periods: dict

    def all_patterns(self) -> list[re.Pattern]:
        return [self.marker, self.suffix, self.cjk, self.bare]


@lru_cache(maxsize=64)
def time_patterns(view: PhraseView) -> TimePatterns:
    day_periods = view.get("day_periods")
    period_words = [word for word, _ in day_periods]
    units = view.get("time_units")

    leading_qualifier = alternation(period_words)
    trailing_qualifier = suffix_alternation(period_words)
    unit = suffix_alternation(units)
    unit_or_qualifier = suffix_alternation(list(units) + period_words)

    marker = (
        alternation(view.get("time_markers"))
        + r"\s*(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?"
        + rf"(?:\s*{unit}(?P<unit_minute>\d{{2}})?)?"
        + rf"(?:\s*(?P<trailing>{trailing_qualifier}))?"
        + r"(?!\d)"
    )
    suffix = (
        rf"(?:(?P<leading>{leading_qualifier})\s*)?"
        + r"(?<![\d:])(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?"
        + rf"\s*(?P<unit>{unit_or_qualifier})(?P<unit_minute>\d{{2}}(?!\d))?"
        + rf"(?:\s*(?P<trailing>{trailing_qualifier}))?"
    )
    cjk_qualifier = bare_alternation(w for w in period_words if not is_spaced(w))
    cjk = (
        rf"(?:(?P<leading>{cjk_qualifier})\s*)?"
        + r"(?<!\d)(?P<hour>\d{1,2})\s*"
        + bare_alternation(CJK_COUNTERS)
        + r"(?:\s*(?P<minute>\d{1,2})\s*"
        + bare_alternation(CJK_MINUTES)
        + r"|\s*(?P<half>"
        + bare_alternation(CJK_HALF)
        + r"))?"
        + r"(?:\s*"
        + bare_alternation(CJK_PARTICLES)
        + r")?"
    )
    return TimePatterns(
        marker=re.compile(marker, _FLAGS),
        suffix=re.compile(suffix, _FLAGS),
        cjk=re.compile(cjk, _FLAGS),
        bare=_BARE_TIME,
        periods={_fold(word): period for word, period in day_periods},
    )


def _fold(phrase: str) -> str:
    return " ".join(phrase.casefold().split())


def apply_day_period(hour: int, period: DayPeriod | None, noon_cutoff: int | None = None) -> int:
    """Convert a spoken hour to 24h using its time-of-day word.

    Examples:
        apply_day_period(3, DayPeriod.PM) -> 15
        apply_day_period(12, DayPeriod.AM) -> 0
        apply_day_period(12, DayPeriod.NIGHT) -> 0
        apply_day_period(2, DayPeriod.NOON) -> 14
        apply_day_period(11, DayPeriod.NOON) -> 11
    """
    if period is None:
        return hour
    if period == DayPeriod.AM:
        return 0 if hour == 12 else hour
    if period == DayPeriod.PM:
        return hour + 12 if hour < 12 else hour
    if period == DayPeriod.NIGHT:
        if hour == 12:
            return 0
        return hour + 12 if hour < 12 else hour
    if noon_cutoff is None:
        noon_cutoff = settings.siang_pm_before_hour
    return hour + 12 if hour < noon_cutoff else hour


def _period(patterns: TimePatterns, match: re.Match, *groups: str) -> DayPeriod | None:
    """First group naming a known time-of-day word, in priority order."""
    for name in groups:
        word = match.groupdict().get(name)
        if word:
            period = patterns.periods.get(_fold(word))
            if period is not None:
                return period
    return None


def _candidates(patterns: TimePatterns, text: str):
    for match in patterns.marker.finditer(text):
        minute = match.group("minute") or match.group("unit_minute") or 0
        period = _period(patterns, match, "trailing")
        yield match, int(match.group("hour")), int(minute), period, "marker"

    for match in patterns.suffix.finditer(text):
        minute = match.group("minute") or match.group("unit_minute") or 0
        period = _period(patterns, match, "unit", "trailing", "leading")
        yield match, int(match.group("hour")), int(minute), period, "suffix"

    for match in patterns.cjk.finditer(text):
        if match.group("half"):
            minute = 30
        else:
            minute = int(match.group("minute") or 0)
        period = _period(patterns, match, "leading")
        yield match, int(match.group("hour")), minute, period, "cjk"

    for match in patterns.bare.finditer(text):
        yield match, int(match.group(1)), int(match.group(2)), None, "bare"


def find_time(
    text: str,
    view: PhraseView | None = None,
    noon_cutoff: int | None = None,
) -> TimeMatch | None:
    """Locate the first valid time of day in ``text``."""
    view = view or phrases_for()
    patterns = time_patterns(view)
    for match, hour, minute, period, family in _candidates(patterns, text):
        hour = apply_day_period(hour, period, noon_cutoff)
        if hour > 23 or minute > 59:
            logger.debug(f"Rejecting out-of-range time {match.group(0)!r}")
            continue
        return TimeMatch(hour=hour, minute=minute, matched_text=match.group(0), family=family)
    return None


def resolve_time(
    text: str,
    base: datetime,
    view: PhraseView | None = None,
    tz: TimezoneService | None = None,
    noon_cutoff: int | None = None,
) -> datetime:
    """Set the wall-clock time of ``base`` from the time named in ``text``.

    Args:
        text: Normalized utterance
        base: Date from the date resolver, timezone-aware
        view: Locale phrases to match. Defaults to the configured locale.
        tz: Zone for wall-clock construction. Defaults to the zone of ``base``.
        noon_cutoff: Overrides settings.siang_pm_before_hour

    Returns:
        ``base`` at the resolved hour and minute, or ``base`` unchanged when
        no time is found.
    """
    found = find_time(text, view, noon_cutoff)
    if found is None:
        return base
    tz = tz or service_for(base)
    return tz.at_wall_clock(base.date(), found.hour, found.minute)
