"""Tests for text normalization."""

import pytest

from voicetask.services.normalizer import normalize, strip_edges


class TestDigits:
    """Locale digit forms become ASCII."""

    def test_full_width_digits(self):
        """Full-width digits from Japanese input become ASCII."""
        assert normalize("明日午後３時に会議") == "明日午後3時に会議"

    def test_full_width_colon_time(self):
        """Full-width digits and colon give an H:MM time."""
        assert normalize("１５：３０") == "15:30"

    def test_other_digit_scripts(self):
        """Arabic-Indic, Devanagari and Thai digits become ASCII."""
        assert normalize("الساعة ٣") == "الساعة 3"
        assert normalize("३ बजे") == "3 बजे"
        assert normalize("บ่าย ๓ โมง") == "บ่าย 3 โมง"


class TestCJKNumerals:
    """CJK numerals counting something become digits."""

    def test_single_numeral(self):
        assert normalize("下午三点") == "下午3点"

    def test_ten(self):
        assert normalize("十時") == "10時"

    def test_eleven_and_twelve(self):
        """十一 and 十二 are read as whole numbers, not digit by digit."""
        assert normalize("午前十一時") == "午前11時"
        assert normalize("十二点") == "12点"

    def test_tens(self):
        assert normalize("二十分") == "20分"
        assert normalize("三十分") == "30分"

    def test_compound_with_minutes(self):
        assert normalize("三点十五分") == "3点15分"

    def test_weekday_names_untouched(self):
        """Numerals inside weekday names are not rewritten."""
        assert normalize("星期一开会") == "星期一开会"
        assert normalize("周三") == "周三"


class TestTimeSeparators:
    """Separators between hour and minute groups become a colon."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("jam 11.15", "jam 11:15"),
            ("at 3,30", "at 3:30"),
            ("15。30", "15:30"),
            ("15．30", "15:30"),
            ("jam 3 30", "jam 3:30"),
        ],
    )
    def test_separator_rewritten(self, text, expected):
        assert normalize(text) == expected

    def test_long_numbers_untouched(self):
        """Digit groups that are not H and MM are left alone."""
        assert normalize("Pay 1,000 invoice") == "Pay 1,000 invoice"
        assert normalize("Version 1.2.3") == "Version 1.2.3"

    def test_existing_colon_untouched(self):
        assert normalize("at 10:30") == "at 10:30"


class TestIdempotence:
    """Normalizing twice equals normalizing once."""

    @pytest.mark.parametrize(
        "text",
        [
            "明日午後３時に会議",
            "jam 11.15 besok",
            "三点十五分",
            "1.23.45",
            "  Meeting tomorrow at 3pm  ",
            "１２．３０",
            "",
        ],
    )
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestStripEdges:
    """Whitespace and punctuation are trimmed from both ends."""

    def test_strips_punctuation(self):
        assert strip_edges("  ...Beli susu!, ") == "Beli susu"

    def test_keeps_inner_punctuation(self):
        assert strip_edges("Urgent: call John") == "Urgent: call John"

    def test_cjk_punctuation(self):
        assert strip_edges("「会議」。") == "会議"

    def test_empty(self):
        assert strip_edges(" , ") == ""
