# =============================================================================
# GLOS-SITE Localized Values
# =============================================================================
"""
Localized value resolution.

CMS fields arrive in three shapes:
- a plain string (or number)
- a per-language object {"it": ..., "en": ..., "es": ...}
- an address object {"street", "city", "province", "postalCode", "country"}

resolve() turns any of them into a display string for a language. It never
raises: unexpected shapes degrade to "".

Fallback order for language objects: requested -> it -> en -> es.
Language values are tested for truthiness, so 0 / False / "" are skipped in
favor of the next language. Fields that legitimately hold 0 are
indistinguishable from missing ones. A bare number (0 included) resolves to
its string form.
"""

from typing import Any, Optional

# =============================================================================
# Languages
# =============================================================================

LANGUAGES = ("it", "en", "es")
DEFAULT_LANGUAGE = "it"

LOCALE_NAMES = {
    "it": "Italiano",
    "en": "English",
    "es": "Espanol",
}

# OpenGraph locale per language
OG_LOCALES = {
    "it": "it_IT",
    "en": "en_US",
    "es": "es_ES",
}

ADDRESS_FIELDS = ("street", "city", "province", "postalCode", "country")


def coerce_language(value: Any) -> str:
    """Return value if it is a supported language, else the default."""
    if isinstance(value, str) and value in LANGUAGES:
        return value
    return DEFAULT_LANGUAGE


def _is_language_map(value: dict) -> bool:
    return any(lang in value for lang in LANGUAGES)


def _is_address(value: dict) -> bool:
    return "street" in value or "city" in value


# =============================================================================
# Resolution
# =============================================================================


def resolve(value: Any, language: str = DEFAULT_LANGUAGE) -> str:
    """
    Resolve a localizable CMS value to a display string.

    Args:
        value: str, number, language object, address object or None
        language: requested language code

    Returns:
        Display string, "" when nothing usable is present.
    """
    if value is None:
        return ""

    # bool is an int subclass but is not a display value
    if isinstance(value, bool):
        return ""

    if isinstance(value, str):
        return value

    if isinstance(value, (int, float)):
        return str(value)

    if isinstance(value, dict):
        if _is_language_map(value):
            result = (
                value.get(language)
                or value.get("it")
                or value.get("en")
                or value.get("es")
                or ""
            )
            return str(result)

        if _is_address(value):
            parts = [value.get(field) for field in ADDRESS_FIELDS]
            return ", ".join(str(part) for part in parts if part)

    return ""


# Short alias used by the page layer; language defaults to Italian
def get_text_value(value: Any, language: str = DEFAULT_LANGUAGE) -> str:
    return resolve(value, language)


t = get_text_value


def _present(value: Any) -> bool:
    return value is not None and value != ""


def localized_value(obj: Optional[dict], language: str = DEFAULT_LANGUAGE) -> Any:
    """
    Return the raw (non-stringified) value of a language object.

    Unlike resolve(), a requested/it/en value of 0 or False is returned as is;
    only None and "" count as missing. The last resort is the first truthy of
    it, en, es.
    """
    if not obj:
        return None

    for lang in (language, "it", "en"):
        if _present(obj.get(lang)):
            return obj[lang]

    return obj.get("it") or obj.get("en") or obj.get("es")


# =============================================================================
# Locale-aware paths
# =============================================================================


def _strip_locale(path: str) -> str:
    segments = path.split("/")
    # "/en/prodotti" -> ["", "en", "prodotti"]
    if len(segments) > 1 and segments[1] in LANGUAGES:
        return "/" + "/".join(segments[2:]) if len(segments) > 2 else ""
    return path


def get_locale_from_path(path: str) -> str:
    """First path segment if it is a language code, else the default."""
    segments = [s for s in path.split("/") if s]
    if segments and segments[0] in LANGUAGES:
        return segments[0]
    return DEFAULT_LANGUAGE


def build_localized_path(path: str, language: str) -> str:
    """
    Build the path of a page for a language.

    The default language has no prefix: ("/en/prodotti", "it") -> "/prodotti".
    """
    clean_path = _strip_locale(path)

    if language == DEFAULT_LANGUAGE:
        return clean_path or "/"

    if clean_path in ("", "/"):
        return f"/{language}"
    return f"/{language}{clean_path}"


def get_hreflang_alternates(path: str) -> list[dict[str, str]]:
    """hreflang alternates for every language of a page."""
    return [
        {"lang": lang, "url": build_localized_path(path, lang)}
        for lang in LANGUAGES
    ]
