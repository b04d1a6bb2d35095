"""voicetask services module.

Pipeline stages of the voice-command interpreter and the orchestrator that
runs them. Imports are lazy so that importing one stage does not compile the
pattern tables of every other stage.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS: dict[str, tuple[str, str]] = {
    # Locales
    "DayPeriod": ("voicetask.services.locales", "DayPeriod"),
    "LocaleProfile": ("voicetask.services.locales", "LocaleProfile"),
    "LocaleStore": ("voicetask.services.locales", "LocaleStore"),
    "OffsetRule": ("voicetask.services.locales", "OffsetRule"),
    "PhraseView": ("voicetask.services.locales", "PhraseView"),
    "phrases_for": ("voicetask.services.locales", "phrases_for"),
    # Normalizer
    "normalize": ("voicetask.services.normalizer", "normalize"),
    # Priority
    "Priority": ("voicetask.services.priority", "Priority"),
    "detect_priority": ("voicetask.services.priority", "detect_priority"),
    # Dates
    "ResolvedDate": ("voicetask.services.dates", "ResolvedDate"),
    "resolve_date": ("voicetask.services.dates", "resolve_date"),
    # Times
    "TimeMatch": ("voicetask.services.times", "TimeMatch"),
    "apply_day_period": ("voicetask.services.times", "apply_day_period"),
    "find_time": ("voicetask.services.times", "find_time"),
    "resolve_time": ("voicetask.services.times", "resolve_time"),
    # Location
    "LocationMatch": ("voicetask.services.location", "LocationMatch"),
    "extract_location": ("voicetask.services.location", "extract_location"),
    # Notes
    "NotesSplit": ("voicetask.services.notes", "NotesSplit"),
    "extract_notes": ("voicetask.services.notes", "extract_notes"),
    # Title
    "clean_notes": ("voicetask.services.title", "clean_notes"),
    "clean_title": ("voicetask.services.title", "clean_title"),
    # Timezone
    "TimezoneService": ("voicetask.services.timezone", "TimezoneService"),
    "get_timezone_service": ("voicetask.services.timezone", "get_timezone_service"),
    "reset_timezone_service": ("voicetask.services.timezone", "reset_timezone_service"),
    # Parser
    "ParsedCommand": ("voicetask.services.parser", "ParsedCommand"),
    "RawUtterance": ("voicetask.services.parser", "RawUtterance"),
    "VoiceCommandParser": ("voicetask.services.parser", "VoiceCommandParser"),
    "get_parser": ("voicetask.services.parser", "get_parser"),
    "parse_command": ("voicetask.services.parser", "parse_command"),
    "reset_parser": ("voicetask.services.parser", "reset_parser"),
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = _EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))
