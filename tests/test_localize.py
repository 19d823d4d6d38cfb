"""
Tests for core/content/localize.py.

- resolve() over plain, language and address values
- localized_value() strict/falsy fallback split
- locale-aware path helpers
"""

import sys
from pathlib import Path

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from core.content.localize import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    build_localized_path,
    coerce_language,
    get_hreflang_alternates,
    get_locale_from_path,
    get_text_value,
    localized_value,
    resolve,
    t,
)


# ---------------------------------------------------------------------------
# resolve: plain values
# ---------------------------------------------------------------------------

class TestResolvePlain:

    @pytest.mark.parametrize("lang", LANGUAGES)
    def test_none_is_empty(self, lang):
        assert resolve(None, lang) == ""

    @pytest.mark.parametrize("lang", LANGUAGES)
    def test_empty_string_is_empty(self, lang):
        assert resolve("", lang) == ""

    @pytest.mark.parametrize("lang", LANGUAGES)
    def test_string_passes_through(self, lang):
        assert resolve("Ciao", lang) == "Ciao"

    def test_numbers_use_string_form(self):
        assert resolve(42) == "42"
        assert resolve(3.5) == "3.5"
        assert resolve(0) == "0"

    def test_booleans_are_not_display_values(self):
        assert resolve(True) == ""
        assert resolve(False) == ""

    def test_unexpected_shapes_degrade(self):
        assert resolve([1, 2, 3]) == ""
        assert resolve({"foo": "bar"}) == ""
        assert resolve(object()) == ""

    def test_default_language_is_italian(self):
        assert DEFAULT_LANGUAGE == "it"
        assert resolve({"it": "Prodotti", "en": "Products"}) == "Prodotti"


# ---------------------------------------------------------------------------
# resolve: language objects
# ---------------------------------------------------------------------------

class TestResolveLanguageMap:

    def test_requested_language_wins(self):
        value = {"it": "Ciao", "en": "Hello", "es": "Hola"}
        assert resolve(value, "en") == "Hello"
        assert resolve(value, "es") == "Hola"

    def test_falls_back_to_italian(self):
        assert resolve({"it": "Ciao", "en": "Hello"}, "es") == "Ciao"

    def test_falls_back_to_english_then_spanish(self):
        assert resolve({"en": "Hello", "es": "Hola"}, "it") == "Hello"
        assert resolve({"es": "Hola"}, "en") == "Hola"

    def test_empty_values_are_skipped(self):
        assert resolve({"it": "", "en": None, "es": "Hola"}, "it") == "Hola"

    def test_all_empty_is_empty(self):
        assert resolve({"it": "", "en": None, "es": ""}, "en") == ""

    def test_zero_is_skipped_in_fallback_chain(self):
        assert resolve({"it": 0, "en": 7}, "it") == "7"

    @pytest.mark.parametrize("lang", LANGUAGES)
    @pytest.mark.parametrize("value", [
        {"it": "A"},
        {"en": "B"},
        {"es": "C"},
        {"it": "", "en": "B", "es": "C"},
        {"it": "A", "en": "B", "es": "C"},
    ])
    def test_any_non_empty_value_resolves(self, value, lang):
        result = resolve(value, lang)
        assert result != ""
        if value.get(lang):
            assert result == value[lang]

    def test_aliases(self):
        value = {"it": "Uno", "en": "One"}
        assert get_text_value(value, "en") == "One"
        assert t(value) == "Uno"


# ---------------------------------------------------------------------------
# resolve: addresses
# ---------------------------------------------------------------------------

class TestResolveAddress:

    def test_street_and_city(self):
        assert resolve({"street": "Via Roma", "city": "Milano"}, "en") == "Via Roma, Milano"

    def test_missing_street_has_no_leading_separator(self):
        assert resolve({"city": "Milano"}, "it") == "Milano"

    def test_full_address_order(self):
        address = {
            "country": "Italia",
            "postalCode": "20100",
            "province": "MI",
            "city": "Milano",
            "street": "Via Roma 1",
        }
        assert resolve(address) == "Via Roma 1, Milano, MI, 20100, Italia"

    def test_empty_fields_skipped(self):
        assert resolve({"street": "", "city": "Milano", "province": None, "country": "Italia"}) == "Milano, Italia"


# ---------------------------------------------------------------------------
# localized_value
# ---------------------------------------------------------------------------

class TestLocalizedValue:

    def test_absent_object(self):
        assert localized_value(None) is None
        assert localized_value({}) is None

    def test_returns_raw_value(self):
        items = [{"label": "a"}]
        assert localized_value({"it": items}) is items

    def test_zero_is_kept_for_requested_language(self):
        assert localized_value({"it": 5, "en": 0}, "en") == 0

    def test_empty_string_falls_through(self):
        assert localized_value({"it": "Ciao", "en": ""}, "en") == "Ciao"

    def test_spanish_is_last_resort(self):
        assert localized_value({"es": "Hola"}, "en") == "Hola"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

class TestLocalePaths:

    def test_coerce_language(self):
        assert coerce_language("en") == "en"
        assert coerce_language("fr") == "it"
        assert coerce_language(None) == "it"

    def test_locale_from_path(self):
        assert get_locale_from_path("/en/prodotti") == "en"
        assert get_locale_from_path("/es") == "es"
        assert get_locale_from_path("/prodotti") == "it"
        assert get_locale_from_path("/") == "it"

    def test_locale_needs_full_segment(self):
        assert get_locale_from_path("/english") == "it"
        assert build_localized_path("/english", "es") == "/es/english"

    def test_default_language_has_no_prefix(self):
        assert build_localized_path("/en/prodotti", "it") == "/prodotti"
        assert build_localized_path("/en", "it") == "/"

    def test_prefixed_languages(self):
        assert build_localized_path("/prodotti", "en") == "/en/prodotti"
        assert build_localized_path("/en/prodotti", "es") == "/es/prodotti"
        assert build_localized_path("/", "en") == "/en"

    def test_hreflang_alternates(self):
        assert get_hreflang_alternates("/en/faq") == [
            {"lang": "it", "url": "/faq"},
            {"lang": "en", "url": "/en/faq"},
            {"lang": "es", "url": "/es/faq"},
        ]
