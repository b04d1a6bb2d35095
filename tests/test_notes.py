"""Tests for splitting notes from the task text."""

from voicetask.services.locales import phrases_for
from voicetask.services.notes import extract_notes


class TestTriggerPhrases:
    """Text after a trigger phrase becomes notes."""

    def setup_method(self):
        self.view = phrases_for("id-ID", search_all=True)

    def test_trigger_at_start(self):
        split = extract_notes("Jangan lupa beli susu besok jam 8 pagi di Indomaret", self.view)
        assert split.rule == "trigger"
        assert split.notes == "beli susu besok jam 8 pagi di Indomaret"
        assert split.remaining == ""

    def test_trigger_mid_sentence(self):
        split = extract_notes("Rapat besok, jangan lupa bawa laptop", self.view)
        assert split.notes == "bawa laptop"
        assert split.remaining == "Rapat besok,"

    def test_case_insensitive_keeps_spoken_case(self):
        split = extract_notes("Dentist DON'T FORGET Insurance Card", self.view)
        assert split.notes == "Insurance Card"
        assert split.remaining == "Dentist"

    def test_empty_after_trigger_falls_through(self):
        """A trigger with nothing after it does not produce notes."""
        split = extract_notes("Beli susu jangan lupa", self.view)
        assert split.notes == ""
        assert split.remaining == "Beli susu jangan lupa"


class TestSeparators:
    """Separator words split like triggers."""

    def setup_method(self):
        self.view = phrases_for("id-ID", search_all=True)

    def test_dengan_catatan(self):
        split = extract_notes("Rapat besok dengan catatan bawa proposal", self.view)
        assert split.rule == "separator"
        assert split.notes == "bawa proposal"
        assert split.remaining == "Rapat besok"

    def test_english_note(self):
        split = extract_notes("Call the bank note: ask about fees", self.view)
        assert split.notes == "ask about fees"
        assert split.remaining == "Call the bank"


class TestCommaFallback:
    """First comma splits when the clause after it is long enough."""

    def setup_method(self):
        self.view = phrases_for("en-US", search_all=True)

    def test_comma(self):
        split = extract_notes("Buy groceries, eggs and bread", self.view)
        assert split.rule == "comma"
        assert split.notes == "eggs and bread"
        assert split.remaining == "Buy groceries"

    def test_short_clause_ignored(self):
        split = extract_notes("Call mom, ok", self.view)
        assert split.notes == ""
        assert split.remaining == "Call mom, ok"

    def test_ideographic_comma(self):
        split = extract_notes("买菜，鸡蛋和面包", self.view)
        assert split.notes == "鸡蛋和面包"
        assert split.remaining == "买菜"

    def test_nothing_to_split(self):
        split = extract_notes("Meeting tomorrow at 3pm", self.view)
        assert split.notes == ""
        assert split.rule == ""
        assert split.remaining == "Meeting tomorrow at 3pm"
