# =============================================================================
# GLOS-SITE Stega-Safe Lookups
# =============================================================================
"""
Lookups that survive Sanity stega encoding.

In draft/preview mode the CMS embeds invisible zero-width characters in string
values for click-to-edit attribution. "gray-light" then arrives as
"gray-light" followed by invisible markers and exact dict lookups miss.

- Production (no stega): exact match, a single dict lookup.
- Draft mode: fall back to the longest table key contained in the value.
"""

import re
from typing import Any, Mapping, Optional

# Zero-width space, non-joiner, joiner and byte-order mark
STEGA_CHARS = re.compile("[\u200B-\u200D\uFEFF]")


def stega_lookup(table: Mapping[str, Any], key: Optional[str], fallback_key: str) -> Any:
    """
    Look up a style option, tolerating stega-contaminated keys.

    Args:
        table: option key -> value; must contain fallback_key
        key: option key from the CMS, possibly contaminated
        fallback_key: key used when key is missing or nothing matches

    Returns:
        The matching table value, or table[fallback_key].
    """
    if not key:
        return table[fallback_key]

    # Fast path: exact match
    if key in table:
        return table[key]

    # Longest first so "sm" cannot shadow "small-2xl"
    for candidate in sorted(table, key=len, reverse=True):
        if candidate and candidate in key:
            return table[candidate]

    return table[fallback_key]


def clean_stega(value: Optional[str]) -> str:
    """Strip stega characters for exact comparisons. None -> ""."""
    if value is None:
        return ""
    return STEGA_CHARS.sub("", value)
