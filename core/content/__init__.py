# =============================================================================
# GLOS-SITE Content Helpers
# =============================================================================
"""
Pure helpers that turn CMS documents into display values.

Nothing in this package performs I/O except the dealer geocoder.
"""

from core.content.localize import (
    DEFAULT_LANGUAGE,
    LANGUAGES,
    get_text_value,
    localized_value,
    resolve,
)
from core.content.stega import clean_stega, stega_lookup

__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGES",
    "clean_stega",
    "get_text_value",
    "localized_value",
    "resolve",
    "stega_lookup",
]
