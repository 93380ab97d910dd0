"""Tests for script-aware normalization and search term extraction."""

import pytest

from iconmatch.normalizer import (
    ENGLISH,
    HEBREW,
    LanguageProfile,
    extract_search_terms,
    get_profile,
    normalize,
    strip_prefixes,
    tokenize,
)


class TestNormalize:
    def test_lowercase_and_collapse(self):
        assert normalize("  Hello,   WORLD!\t\n") == "hello world"

    def test_punctuation_becomes_space(self):
        assert normalize("rock'n'roll") == "rock n roll"

    def test_keeps_digits_and_underscore(self):
        assert normalize("Track_01: Intro") == "track_01 intro"

    def test_non_string(self):
        assert normalize(None) == ""
        assert normalize(123) == ""

    def test_empty(self):
        assert normalize("") == ""
        assert normalize("?!...") == ""

    def test_hebrew_points_kept_with_profile(self):
        word = "שָׁלוֹם"
        assert normalize(word, HEBREW) == word

    def test_hebrew_points_kept_by_default(self):
        word = "שָׁלוֹם"
        assert normalize(word) == word
        assert normalize(word, ENGLISH) == word

    def test_marks_split_without_extended_range(self):
        latin_only = LanguageProfile(name="latin")
        assert normalize("שָׁלוֹם", latin_only) != "שָׁלוֹם"

    @pytest.mark.parametrize("text", [
        "The Lion King",
        "  MIXED   case\t\nText!! ",
        "İstanbul",
        "הַצִּפּוֹר - שיר ערש",
        "Ünïcödé_under_score (live)",
        "",
    ])
    @pytest.mark.parametrize("profile", [ENGLISH, HEBREW])
    def test_idempotent(self, text, profile):
        once = normalize(text, profile)
        assert normalize(once, profile) == once


class TestTokenize:
    def test_drops_single_characters(self):
        assert tokenize("a big dog") == ["big", "dog"]

    def test_empty(self):
        assert tokenize("") == []


class TestStripPrefixes:
    def test_definite_article(self):
        assert strip_prefixes("הציפור", HEBREW) == ["ציפור"]

    def test_conjunction_and_combined(self):
        assert strip_prefixes("והדובי", HEBREW) == ["הדובי", "דובי"]

    def test_combined_needs_three_remaining(self):
        # ו applies (הדב), וה would leave only two letters
        assert strip_prefixes("והדב", HEBREW) == ["הדב"]

    def test_article_needs_two_remaining(self):
        assert strip_prefixes("הדב", HEBREW) == ["דב"]
        assert strip_prefixes("הי", HEBREW) == []

    def test_no_rules_for_english(self):
        assert strip_prefixes("hello", ENGLISH) == []

    def test_custom_rules(self):
        profile = LanguageProfile(name="test", prefix_rules=(("un", 3),))
        assert strip_prefixes("undo", profile) == []
        assert strip_prefixes("unlock", profile) == ["lock"]


class TestExtractSearchTerms:
    def test_full_string_then_tokens(self):
        assert extract_search_terms("The Lion King") == [
            "the lion king", "the", "lion", "king",
        ]

    def test_single_word_repeats(self):
        assert extract_search_terms("Dog") == ["dog", "dog"]

    def test_empty_title(self):
        assert extract_search_terms("") == []
        assert extract_search_terms("!!!") == []
        assert extract_search_terms(None) == []

    def test_hebrew_prefix_variants(self):
        terms = extract_search_terms("הציפור ששכחה לעוף", HEBREW)
        assert terms[0] == "הציפור ששכחה לעוף"
        assert terms[1:4] == ["הציפור", "ששכחה", "לעוף"]
        assert "ציפור" in terms

    def test_variants_only_for_extended_tokens(self):
        profile = LanguageProfile(
            name="test", extended_range=(0x0590, 0x05FF), prefix_rules=(("h", 2),),
        )
        assert extract_search_terms("house", profile) == ["house", "house"]

    def test_hebrew_variants_by_default(self):
        assert "ציפור" in extract_search_terms("הציפור")
        assert "ציפור" in extract_search_terms("הציפור", ENGLISH)

    def test_no_variants_without_rules(self):
        assert extract_search_terms("הציפור", LanguageProfile(name="latin")) == [
            "הציפור", "הציפור",
        ]

    def test_tokens_match_tokenize(self):
        title = "A Lion & the Mouse"
        assert extract_search_terms(title)[1:] == tokenize(title)


class TestGetProfile:
    def test_known(self):
        assert get_profile("hebrew") is HEBREW
        assert get_profile("Hebrew") is HEBREW
        assert get_profile("english") is ENGLISH

    def test_unknown_falls_back(self):
        assert get_profile("klingon") is ENGLISH
        assert get_profile(None) is ENGLISH
