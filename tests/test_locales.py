"""Tests for locale profiles and phrase lookup."""

import re
from unittest.mock import patch

import pytest

from voicetask.services.locales import (
    AUTO_LOCALE,
    CATEGORIES,
    OPTIONAL_DEFAULT_CATEGORIES,
    PROFILES,
    DayPeriod,
    LocaleStore,
    PhraseView,
    alternation,
    phrase_regex,
    phrases_for,
    store,
)


class TestProfileTable:
    """The static profile table is complete and well formed."""

    def test_nineteen_locales(self):
        assert len(PROFILES) == 19
        assert len({p.locale_id for p in PROFILES}) == 19

    def test_expected_locales_present(self):
        ids = {p.locale_id for p in PROFILES}
        for locale_id in ["id-ID", "en-US", "en-GB", "ja-JP", "ko-KR", "zh-CN", "zh-TW",
                          "es-ES", "fr-FR", "de-DE", "pt-BR", "ar-SA", "hi-IN", "th-TH",
                          "vi-VN", "ms-MY", "it-IT", "ru-RU", "tr-TR"]:
            assert locale_id in ids

    def test_identity_fields(self):
        """Every profile has a flag, a display name and an example utterance."""
        for profile in PROFILES:
            assert profile.flag
            assert profile.name
            assert profile.example

    def test_categories_populated_or_inherited(self):
        """Each category is a non-empty collection or None (inherits en-US)."""
        for profile in PROFILES:
            for category in CATEGORIES:
                value = getattr(profile, category)
                if profile is store.default and category in OPTIONAL_DEFAULT_CATEGORIES:
                    continue
                assert value is None or len(value) > 0, (profile.locale_id, category)

    def test_default_fully_populated(self):
        default = store.default
        assert default.locale_id == "en-US"
        for category in CATEGORIES:
            value = getattr(default, category)
            assert value is not None, category
            if category not in OPTIONAL_DEFAULT_CATEGORIES:
                assert value, category

    def test_weekdays_cover_the_week(self):
        """Every profile's weekday names map onto all seven ISO weekdays."""
        for profile in PROFILES:
            weekdays = store.category(profile, "weekdays")
            assert {iso for _, iso in weekdays} == set(range(1, 8)), profile.locale_id

    def test_next_weekday_templates_have_placeholder(self):
        for profile in PROFILES:
            for template in store.category(profile, "next_weekday"):
                assert "{day}" in template

    def test_day_of_month_patterns_have_one_group(self):
        for profile in PROFILES:
            for pattern in store.category(profile, "day_of_month"):
                assert re.compile(pattern).groups == 1

    def test_offset_rules_have_amount_or_group(self):
        for profile in PROFILES:
            for rule in store.category(profile, "offsets"):
                groups = re.compile(rule.pattern).groups
                assert (rule.amount is None and groups == 1) or (rule.amount and groups == 0)
                assert rule.unit in ("minutes", "hours", "days")

    def test_day_periods_are_enum_values(self):
        for profile in PROFILES:
            for _, period in store.category(profile, "day_periods"):
                assert isinstance(period, DayPeriod)


class TestResolveId:
    """Locale identifiers resolve leniently."""

    def setup_method(self):
        self.store = LocaleStore()

    def test_exact(self):
        assert self.store.resolve_id("ja-JP") == "ja-JP"

    def test_case_and_underscore(self):
        assert self.store.resolve_id("ja_JP") == "ja-JP"
        assert self.store.resolve_id("JA-jp") == "ja-JP"

    def test_bare_language(self):
        assert self.store.resolve_id("ko") == "ko-KR"

    def test_auto_uses_given_default(self):
        assert self.store.resolve_id(AUTO_LOCALE, auto_locale="id-ID") == "id-ID"
        assert self.store.resolve_id(None, auto_locale="id-ID") == "id-ID"

    def test_auto_uses_settings(self):
        with patch("voicetask.services.locales.settings") as mock_settings:
            mock_settings.default_locale = "de-DE"
            assert self.store.resolve_id(AUTO_LOCALE) == "de-DE"

    def test_unknown_falls_back_to_auto(self):
        assert self.store.resolve_id("xx-XX", auto_locale="fr-FR") == "fr-FR"

    def test_unknown_default_falls_back_to_en_us(self):
        assert self.store.resolve_id(AUTO_LOCALE, auto_locale="xx-XX") == "en-US"


class TestMerged:
    """Active profile first, then the rest."""

    def setup_method(self):
        self.store = LocaleStore()

    def test_active_locale_first(self):
        keywords = self.store.merged("priority_keywords", "id-ID")
        assert keywords[0] == "penting"
        assert "urgent" in keywords
        assert "緊急" in keywords

    def test_strict_mode_adds_only_default(self):
        keywords = self.store.merged("priority_keywords", "id-ID", search_all=False)
        assert "penting" in keywords
        assert "urgent" in keywords
        assert "緊急" not in keywords

    def test_inherited_category(self):
        """en-GB inherits every category from en-US."""
        assert self.store.merged("tomorrow", "en-GB", search_all=False) == ("tomorrow",)

    def test_no_duplicates(self):
        words = self.store.merged("tomorrow", "ms-MY")
        assert len(words) == len(set(words))

    def test_pairs_deduplicated_by_phrase(self):
        """A shared phrase keeps the meaning of the first profile offering it."""
        periods = dict(self.store.merged("day_periods", "id-ID"))
        assert periods["sore"] == DayPeriod.PM
        assert periods["siang"] == DayPeriod.NOON


class TestPhraseView:
    """Views are hashable and read merged phrases."""

    def test_hashable(self):
        assert hash(PhraseView("en-US", True)) == hash(PhraseView("en-US", True))

    def test_phrases_for_resolves_locale(self):
        view = phrases_for("ja", search_all=False)
        assert view == PhraseView("ja-JP", False)
        assert "明日" in view.get("tomorrow")

    def test_words_of_pairs(self):
        view = phrases_for("en-US", search_all=False)
        assert "monday" in view.words("weekdays")


class TestPatternHelpers:
    """Regex helpers guard Latin words but not CJK phrases."""

    def test_latin_phrase_word_bounded(self):
        pattern = re.compile(phrase_regex("at"))
        assert pattern.search("meet at noon")
        assert not pattern.search("cat food")

    def test_cjk_phrase_unbounded(self):
        pattern = re.compile(phrase_regex("明日"))
        assert pattern.search("明日午後3時")

    def test_multiword_flexible_space(self):
        assert re.search(phrase_regex("next week"), "next   week")

    def test_alternation_longest_first(self):
        match = re.search(alternation(["ingatkan", "ingatkan saya"]), "ingatkan saya beli")
        assert match.group(0) == "ingatkan saya"

    def test_empty_alternation_never_matches(self):
        assert not re.search(alternation([]), "anything")

    @pytest.mark.parametrize("phrase", ["a.m.", "(x)", "l'", "[?]"])
    def test_escaped(self, phrase):
        re.compile(phrase_regex(phrase))
