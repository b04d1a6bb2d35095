"""Voice-command interpreter.

Turns one transcribed utterance into a ``ParsedCommand``. Stages run in a
fixed order over a single normalized snapshot of the text:

normalize -> priority -> date -> time (skipped for exact offsets)
-> location + notes -> title

No stage performs I/O or raises; every stage has a defined fallback.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from voicetask.config import settings
from voicetask.services.dates import resolve_date
from voicetask.services.locales import AUTO_LOCALE, PhraseView, phrases_for, store
from voicetask.services.location import extract_location
from voicetask.services.normalizer import normalize
from voicetask.services.notes import extract_notes
from voicetask.services.priority import Priority, detect_priority
from voicetask.services.timezone import TimezoneService
from voicetask.services.times import resolve_time
from voicetask.services.title import clean_notes, clean_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawUtterance:
    """Finalized text from the speech recognizer and the locale it ran in."""

    text: str
    locale: str = AUTO_LOCALE


@dataclass
class ParsedCommand:
    """Structured task produced from an utterance."""

    title: str
    due_at: datetime
    priority: Priority = Priority.MEDIUM
    notes: str = ""
    location: str = ""
    raw_text: str = ""
    locale: str = ""
    due_timezone: str = "UTC"

    @property
    def has_location(self) -> bool:
        return bool(self.location)

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation with an ISO 8601 ``due_at``."""
        return {
            "title": self.title,
            "notes": self.notes,
            "location": self.location,
            "due_at": self.due_at.isoformat(),
            "due_timezone": self.due_timezone,
            "priority": self.priority.value,
            "locale": self.locale,
            "raw_text": self.raw_text,
        }


class VoiceCommandParser:
    """Interprets utterances for one user timezone.

    Args:
        timezone: IANA timezone name. Defaults to settings.user_timezone.
        default_locale: What ``Auto`` resolves to. Defaults to settings.default_locale.
        search_all_locales: Also match other locales' phrases after the
            active one. Defaults to settings.search_all_locales.
        noon_cutoff: Overrides settings.siang_pm_before_hour.
    """

    def __init__(
        self,
        timezone: str | None = None,
        default_locale: str | None = None,
        search_all_locales: bool | None = None,
        noon_cutoff: int | None = None,
    ):
        self.tz = TimezoneService(timezone)
        self.default_locale = default_locale or settings.default_locale
        self.search_all_locales = (
            settings.search_all_locales if search_all_locales is None else search_all_locales
        )
        self.noon_cutoff = noon_cutoff

    def _view(self, locale: str | None) -> PhraseView:
        locale_id = store.resolve_id(locale, auto_locale=self.default_locale)
        return phrases_for(locale_id, self.search_all_locales)

    def parse(self, utterance: RawUtterance | str, now: datetime | None = None) -> ParsedCommand:
        """Interpret one utterance.

        Args:
            utterance: Recognizer output, or bare text in the ``Auto`` locale
            now: Reference time. Defaults to the current time in the user's
                timezone; naive values are read as wall-clock time there.

        Returns:
            ParsedCommand with a non-empty title and a timezone-aware due_at
        """
        if isinstance(utterance, str):
            utterance = RawUtterance(utterance)
        now = self.tz.now() if now is None else self.tz.localize(now)
        view = self._view(utterance.locale)

        text = normalize(utterance.text)
        priority = detect_priority(text, view)

        resolved = resolve_date(text, now, view, self.tz)
        due_at = resolved.value
        if not resolved.is_exact:
            due_at = resolve_time(text, due_at, view, self.tz, self.noon_cutoff)

        location = extract_location(text, view)
        split = extract_notes(text, view)

        title = clean_title(split.remaining, utterance.text, location, view)
        notes = clean_notes(split.notes, location, view)

        command = ParsedCommand(
            title=title,
            due_at=due_at,
            priority=priority,
            notes=notes,
            location=location.place,
            raw_text=utterance.text,
            locale=view.locale_id,
            due_timezone=self.tz.default_timezone,
        )
        logger.debug(
            f"Parsed {utterance.text!r} [{view.locale_id}] -> title={title!r} "
            f"due={due_at.isoformat()} date_rule={resolved.rule} "
            f"priority={priority.value} location={location.place!r} notes={notes!r}"
        )
        return command


_parser: VoiceCommandParser | None = None


def get_parser() -> VoiceCommandParser:
    """Get the global parser instance."""
    global _parser
    if _parser is None:
        _parser = VoiceCommandParser()
    return _parser


def reset_parser() -> None:
    """Reset the global parser (for testing)."""
    global _parser
    _parser = None


def parse_command(
    text: str,
    locale: str = AUTO_LOCALE,
    now: datetime | None = None,
) -> ParsedCommand:
    """Interpret ``text`` with the global parser."""
    return get_parser().parse(RawUtterance(text, locale), now=now)
