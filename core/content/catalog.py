# =============================================================================
# GLOS-SITE Catalog Helpers
# =============================================================================
"""
Product listing and price list helpers.

- format_price: Italian EUR formatting, 0 means "price on request"
- group_products_by_category: product listing layout (blender shown apart)
- select_price_list_pdf: per-language PDF fallback for the price list download
"""

from typing import Any, Optional

from core.content.localize import get_text_value

PRICE_ON_REQUEST = "Su richiesta"

# Category families in listing order, matched by substring of the category name
CATEGORY_ORDER = ["policut", "fiber", "termo", "wash", "taglierine", "accessori"]

BLENDER_KEYWORD = "blender"

# Requested language -> PDF language fallback chain
PRICE_LIST_FALLBACKS = {
    "it": ("it", "en", "es"),
    "en": ("en", "it", "es"),
    "es": ("es", "en", "it"),
}
DEFAULT_PRICE_LIST_FALLBACK = ("en", "it", "es")

PRICE_LIST_FIELDS = {
    "it": "pdfIt",
    "en": "pdfEn",
    "es": "pdfEs",
}


def format_price(price: float) -> str:
    """
    Format a list price as Italian euros.

    >>> format_price(1299)
    '1.299,00 €'
    """
    if not price:
        return PRICE_ON_REQUEST

    # 1,299.00 -> 1.299,00
    formatted = f"{price:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{formatted} €"


def _category_rank(name: str) -> int:
    for index, keyword in enumerate(CATEGORY_ORDER):
        if keyword in name:
            return index
    return len(CATEGORY_ORDER)


def find_blender_product(products: list[dict]) -> Optional[dict]:
    """The blender is the headline product of the listing page."""
    for product in products:
        slug = ((product.get("slug") or {}).get("current") or "").lower()
        name = get_text_value(product.get("name")).lower()
        if BLENDER_KEYWORD in slug or BLENDER_KEYWORD in name:
            return product
    return None


def group_products_by_category(products: list[dict], categories: list[dict]) -> list[dict[str, Any]]:
    """
    Group products under their category for the listing page.

    Blender categories are skipped (rendered separately), empty groups are
    dropped and groups follow CATEGORY_ORDER with unknown families last.

    Returns:
        [{"category": category, "products": [...]}, ...]
    """
    groups = []
    for category in categories:
        name = get_text_value(category.get("name")).lower()
        if BLENDER_KEYWORD in name:
            continue

        category_id = category.get("_id")
        members = [
            p for p in products
            if (p.get("category") or {}).get("_id") == category_id
        ]
        if members:
            groups.append({"category": category, "products": members})

    # sorted() is stable: categories of the same family keep CMS order
    return sorted(
        groups,
        key=lambda g: _category_rank(get_text_value(g["category"].get("name")).lower()),
    )


def select_price_list_pdf(data: Optional[dict], lang: str) -> Optional[str]:
    """
    Pick the price list PDF URL for a language.

    Args:
        data: {"pdfIt": url, "pdfEn": url, "pdfEs": url} from site settings
        lang: requested language (unknown languages prefer English)

    Returns:
        URL or None when no PDF is available.
    """
    if not data:
        return None

    chain = PRICE_LIST_FALLBACKS.get(lang, DEFAULT_PRICE_LIST_FALLBACK)
    for code in chain:
        url = data.get(PRICE_LIST_FIELDS[code])
        if url:
            return url
    return None
