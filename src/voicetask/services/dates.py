"""Due-date resolution from relative-date phrases.

Rules are tried in order and the first match wins:

1. Relative offsets ("in 5 minutes", "2 jam lagi", "3分後"): an exact instant
2. Named relative days (tomorrow, day after tomorrow, next week)
3. Next named weekday ("next monday", "senin depan")
4. Explicit day of month ("tanggal 12", "12日", "the 12th")
5. Today
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import lru_cache

from voicetask.services.locales import (
    OffsetRule,
    PhraseView,
    alternation,
    phrase_regex,
    phrases_for,
)
from voicetask.services.timezone import TimezoneService, service_for

logger = logging.getLogger(__name__)

_FLAGS = re.IGNORECASE

# (category, rule name, days ahead). "day after tomorrow" runs before
# "tomorrow" because several languages build it from the word for tomorrow.
_NAMED_DAYS = (
    ("day_after_tomorrow", "day_after_tomorrow", 2),
    ("tomorrow", "tomorrow", 1),
    ("next_week", "next_week", 7),
)

_UNITS = {"minutes": "minutes", "hours": "hours", "days": "days"}


@dataclass
class ResolvedDate:
    """Result of date resolution."""

    value: datetime
    rule: str = "today"
    matched_text: str = ""
    # True when ``value`` is a full instant (relative offset); time resolution
    # must not touch it
    is_exact: bool = False


@dataclass(frozen=True)
class DatePatterns:
    """Compiled date rules for one phrase view."""

    offsets: tuple[tuple[re.Pattern, OffsetRule], ...]
    named: tuple[tuple[re.Pattern, str, int], ...]
    next_weekday: tuple[re.Pattern, ...]
    weekday_numbers: dict
    day_of_month: tuple[re.Pattern, ...]

    def all_patterns(self) -> list[re.Pattern]:
        """Every date pattern, for removing date phrases from a title."""
        patterns = [p for p, _ in self.offsets]
        patterns.extend(p for p, _, _ in self.named)
        patterns.extend(self.next_weekday)
        patterns.extend(self.day_of_month)
        return patterns


def _template_regex(template: str, day_alternation: str) -> str:
    """Regex for a next-weekday template such as "next {day}" or "{day}หน้า"."""
    left, _, right = template.partition("{day}")
    parts = []
    if left.strip():
        parts.append(phrase_regex(left.strip()))
        parts.append(r"\s+" if left.endswith(" ") else r"\s*")
    parts.append(f"({day_alternation})")
    if right.strip():
        parts.append(r"\s+" if right.startswith(" ") else r"\s*")
        parts.append(phrase_regex(right.strip()))
    return "".join(parts)


@lru_cache(maxsize=64)
def date_patterns(view: PhraseView) -> DatePatterns:
    weekdays = view.get("weekdays")
    day_alternation = alternation(name for name, _ in weekdays)
    return DatePatterns(
        offsets=tuple((re.compile(rule.pattern, _FLAGS), rule) for rule in view.get("offsets")),
        named=tuple(
            (re.compile(alternation(view.get(category)), _FLAGS), rule, days)
            for category, rule, days in _NAMED_DAYS
        ),
        next_weekday=tuple(
            re.compile(_template_regex(t, day_alternation), _FLAGS)
            for t in view.get("next_weekday")
        ),
        weekday_numbers={_fold(name): iso for name, iso in weekdays},
        day_of_month=tuple(re.compile(p, _FLAGS) for p in view.get("day_of_month")),
    )


def _fold(phrase: str) -> str:
    return " ".join(phrase.casefold().split())


def _earliest(patterns, text: str) -> re.Match | None:
    matches = [m for m in (p.search(text) for p in patterns) if m]
    if not matches:
        return None
    return min(matches, key=lambda m: m.start())


def next_weekday(today: date, iso_weekday: int) -> date:
    """Next date strictly after ``today`` falling on ``iso_weekday`` (1=Monday)."""
    days_ahead = (iso_weekday - today.isoweekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def day_of_month_date(today: date, day: int) -> date | None:
    """Date for "the ``day``th": this month if still ahead, else the next month that has it."""
    if not 1 <= day <= 31:
        return None
    year, month = today.year, today.month
    if day > today.day and day <= calendar.monthrange(year, month)[1]:
        return date(year, month, day)
    for _ in range(12):
        month += 1
        if month > 12:
            year, month = year + 1, 1
        if day <= calendar.monthrange(year, month)[1]:
            return date(year, month, day)
    return None


def resolve_date(
    text: str,
    now: datetime,
    view: PhraseView | None = None,
    tz: TimezoneService | None = None,
) -> ResolvedDate:
    """Resolve the due date implied by ``text``, relative to ``now``.

    Args:
        text: Normalized utterance
        now: Current time, timezone-aware
        view: Locale phrases to match. Defaults to the configured locale.
        tz: Zone used for wall-clock arithmetic. Defaults to the zone of ``now``.

    Returns:
        ResolvedDate. Named days keep the wall-clock time of ``now``.
    """
    view = view or phrases_for()
    tz = tz or service_for(now)
    patterns = date_patterns(view)

    for pattern, rule in patterns.offsets:
        match = pattern.search(text)
        if not match:
            continue
        try:
            amount = rule.amount if rule.amount is not None else int(match.group(1))
            value = tz.shift(now, timedelta(**{_UNITS[rule.unit]: amount}))
        except (OverflowError, ValueError):
            logger.debug(f"Ignoring out-of-range offset {match.group(0)!r}")
            continue
        return ResolvedDate(
            value=value,
            rule="offset",
            matched_text=match.group(0),
            is_exact=True,
        )

    for pattern, rule, days in patterns.named:
        match = pattern.search(text)
        if match:
            return ResolvedDate(
                value=tz.with_date(now, now.date() + timedelta(days=days)),
                rule=rule,
                matched_text=match.group(0),
            )

    match = _earliest(patterns.next_weekday, text)
    if match:
        iso = patterns.weekday_numbers.get(_fold(match.group(1)))
        if iso:
            return ResolvedDate(
                value=tz.with_date(now, next_weekday(now.date(), iso)),
                rule="next_weekday",
                matched_text=match.group(0),
            )

    for pattern in patterns.day_of_month:
        match = pattern.search(text)
        if not match:
            continue
        target = day_of_month_date(now.date(), int(match.group(1)))
        if target is None:
            logger.debug(f"Ignoring impossible day of month in {match.group(0)!r}")
            continue
        return ResolvedDate(
            value=tz.with_date(now, target),
            rule="day_of_month",
            matched_text=match.group(0),
        )

    return ResolvedDate(value=now)
