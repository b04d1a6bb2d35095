"""Tests for the voice-command interpreter end to end."""

import json
import logging
from datetime import datetime, timedelta

import pytest
import pytz

from voicetask.services.locales import PROFILES
from voicetask.services.parser import (
    ParsedCommand,
    RawUtterance,
    VoiceCommandParser,
    get_parser,
    parse_command,
    reset_parser,
)
from voicetask.services.priority import Priority

JAKARTA = pytz.timezone("Asia/Jakarta")


def jakarta(*args) -> datetime:
    return JAKARTA.localize(datetime(*args))


class TestParseExamples:
    """Reference utterances."""

    def setup_method(self):
        self.parser = VoiceCommandParser(
            timezone="Asia/Jakarta",
            default_locale="en-US",
            search_all_locales=True,
            noon_cutoff=11,
        )
        self.now = jakarta(2025, 10, 20, 9, 30)  # Monday

    def parse(self, text: str, locale: str = "Auto") -> ParsedCommand:
        return self.parser.parse(RawUtterance(text, locale), now=self.now)

    def test_meeting_tomorrow_at_3pm(self):
        result = self.parse("Meeting tomorrow at 3pm", "en-US")
        assert result.title == "Meeting"
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)
        assert result.priority == Priority.MEDIUM
        assert result.location == ""
        assert result.notes == ""

    def test_rapat_besok(self):
        result = self.parse("Rapat besok jam 3 sore", "id-ID")
        assert result.title == "Rapat"
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)

    def test_japanese(self):
        result = self.parse("明日午後3時に会議", "ja-JP")
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)
        assert result.location == ""
        assert result.title == "会議"

    def test_full_width_japanese(self):
        result = self.parse("明日午後３時に会議", "ja-JP")
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)

    def test_urgent_with_location(self):
        result = self.parse("Urgent: call John at 5pm at the office", "en-US")
        assert result.priority == Priority.HIGH
        assert result.due_at == jakarta(2025, 10, 20, 17, 0)
        assert result.location == "Office"
        assert result.title == "Urgent: call John"

    def test_jangan_lupa(self):
        text = "Jangan lupa beli susu besok jam 8 pagi di Indomaret"
        result = self.parse(text, "id-ID")
        assert result.due_at == jakarta(2025, 10, 21, 8, 0)
        assert result.location == "Indomaret"
        assert result.notes == "Beli susu"
        assert result.title == text

    def test_next_monday_on_a_monday(self):
        result = self.parse("Standup next Monday at 9am", "en-US")
        assert result.due_at == jakarta(2025, 10, 27, 9, 0)
        assert result.title == "Standup"

    def test_relative_offset_is_exact(self):
        now = jakarta(2025, 10, 20, 9, 30, 45)
        result = self.parser.parse(RawUtterance("Angkat jemuran 10 menit lagi", "id-ID"), now=now)
        assert result.due_at == now + timedelta(minutes=10)
        assert result.title == "Angkat jemuran"

    def test_separator_normalized(self):
        result = self.parse("Rapat besok jam 3.30 sore", "id-ID")
        assert result.due_at == jakarta(2025, 10, 21, 15, 30)

    def test_no_cues_due_now(self):
        result = self.parse("Buy milk", "en-US")
        assert result.due_at == self.now
        assert result.title == "Buy milk"

    def test_notes_by_comma(self):
        result = self.parse("Buy groceries tomorrow, eggs and bread", "en-US")
        assert result.title == "Buy groceries"
        assert result.notes == "Eggs and bread"
        assert result.due_at.date() == jakarta(2025, 10, 21, 0, 0).date()

    def test_raw_text_and_locale_recorded(self):
        result = self.parse("Rapat besok jam 3 sore", "id_ID")
        assert result.raw_text == "Rapat besok jam 3 sore"
        assert result.locale == "id-ID"
        assert result.due_timezone == "Asia/Jakarta"

    def test_auto_locale_uses_default(self):
        result = self.parse("Meeting tomorrow at 3pm")
        assert result.locale == "en-US"

    def test_particles_stay_out_of_title_and_place(self):
        result = self.parse("친구에게 전화하기", "ko-KR")
        assert result.location == ""
        assert result.title == "친구에게 전화하기"
        result = self.parse("明日は会社で会議", "ja-JP")
        assert result.location == "会社"
        assert result.title == "会議"
        assert result.due_at == jakarta(2025, 10, 21, 9, 30)

    def test_bare_string_accepted(self):
        result = self.parser.parse("Meeting tomorrow at 3pm", now=self.now)
        assert result.title == "Meeting"


class TestInvariants:
    """Properties that hold for every input."""

    def setup_method(self):
        self.parser = VoiceCommandParser(timezone="Asia/Jakarta", search_all_locales=True)
        self.now = jakarta(2025, 10, 20, 9, 30)

    @pytest.mark.parametrize("profile", PROFILES, ids=lambda p: p.locale_id)
    def test_locale_examples(self, profile):
        """Every locale's help example is understood as tomorrow at 15:00."""
        result = self.parser.parse(RawUtterance(profile.example, profile.locale_id), now=self.now)
        assert result.title
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)
        assert result.locale == profile.locale_id

    @pytest.mark.parametrize("text", ["", "   ", "?!", "tomorrow", "jam 3", "明日"])
    def test_title_never_empty(self, text):
        result = self.parser.parse(RawUtterance(text, "Auto"), now=self.now)
        assert result.title

    @pytest.mark.parametrize(
        "text", ["Buy milk", "Urgent buy milk", "Rapat penting", "low priority chores"]
    )
    def test_priority_never_low(self, text):
        result = self.parser.parse(text, now=self.now)
        assert result.priority in (Priority.MEDIUM, Priority.HIGH)

    @pytest.mark.parametrize(
        "text,locale",
        [
            ("Renew passport in 99999999 days", "en-US"),
            ("Rapat 9999999999999 menit lagi", "id-ID"),
        ],
    )
    def test_huge_offset_still_parses(self, text, locale):
        result = self.parser.parse(RawUtterance(text, locale), now=self.now)
        assert result.title
        assert result.due_at.date() == self.now.date()

    def test_due_at_timezone_aware(self):
        result = self.parser.parse("Buy milk", now=datetime(2025, 10, 20, 9, 30))
        assert result.due_at.tzinfo is not None
        assert result.due_at == self.now

    def test_due_at_defaults_to_now(self):
        before = datetime.now(pytz.utc)
        result = self.parser.parse("Buy milk")
        after = datetime.now(pytz.utc)
        assert before <= result.due_at <= after


class TestStrictLocale:
    """With cross-locale search off, only the active locale and en-US apply."""

    def test_other_locale_phrases_ignored(self):
        parser = VoiceCommandParser(timezone="Asia/Jakarta", search_all_locales=False)
        now = jakarta(2025, 10, 20, 9, 30)
        result = parser.parse(RawUtterance("Rapat besok jam 3 sore", "en-US"), now=now)
        assert result.due_at == now

    def test_active_locale_still_matches(self):
        parser = VoiceCommandParser(timezone="Asia/Jakarta", search_all_locales=False)
        now = jakarta(2025, 10, 20, 9, 30)
        result = parser.parse(RawUtterance("Rapat besok jam 3 sore", "id-ID"), now=now)
        assert result.due_at == jakarta(2025, 10, 21, 15, 0)


class TestParsedCommand:
    """Serialization for task creation and previews."""

    def test_to_dict(self):
        command = ParsedCommand(
            title="Meeting",
            due_at=jakarta(2025, 10, 21, 15, 0),
            priority=Priority.HIGH,
            location="Office",
            raw_text="Meeting tomorrow at 3pm at the office",
            locale="en-US",
            due_timezone="Asia/Jakarta",
        )
        data = command.to_dict()
        assert data["due_at"] == "2025-10-21T15:00:00+07:00"
        assert data["priority"] == "High"
        assert data["location"] == "Office"
        assert data["notes"] == ""
        json.dumps(data)

    def test_flags(self):
        command = ParsedCommand(title="x", due_at=jakarta(2025, 10, 21, 15, 0))
        assert not command.has_location
        assert not command.has_notes


class TestGlobalParser:
    """Module-level helpers."""

    def setup_method(self):
        reset_parser()

    def teardown_method(self):
        reset_parser()

    def test_singleton(self):
        assert get_parser() is get_parser()

    def test_reset(self):
        first = get_parser()
        reset_parser()
        assert get_parser() is not first

    def test_parse_command(self):
        now = datetime(2025, 10, 20, 9, 30)
        result = parse_command("Rapat besok jam 3 sore", locale="id-ID", now=now)
        assert result.title == "Rapat"
        assert (result.due_at.day, result.due_at.hour) == (21, 15)

    def test_debug_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="voicetask.services.parser"):
            parse_command("Buy milk", locale="en-US")
        assert any("Buy milk" in record.getMessage() for record in caplog.records)
