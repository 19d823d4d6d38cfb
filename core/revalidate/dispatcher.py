# =============================================================================
# GLOS-SITE Revalidation Dispatcher
# =============================================================================
"""
Maps a CMS document-change webhook to the cached paths and tags that are stale.

Routing table (document type -> paths):

    page             /<slug>, plus / when slug == "home"
    product          /prodotti, /prodotti/<slug>, /   (home shows featured products)
    productCategory  /prodotti, /categorie
    dealer           /rivenditori
    testimonial      /
    faq              /faq
    siteSettings     ALL_PAGES (header/footer/branding on every page)
    navigation       ALL_PAGES
    anything else    /

Cache tags mirror the tags declared by core.cms.fetch.

Both mapping functions are pure and total: unknown types hit the default
branch, never an error.
"""

from dataclasses import dataclass
from typing import Any, Optional

# Sentinel path meaning "every cached page"
ALL_PAGES = "/*"

ROOT = "/"
PRODUCTS_PATH = "/prodotti"
CATEGORIES_PATH = "/categorie"
DEALERS_PATH = "/rivenditori"
FAQ_PATH = "/faq"

HOME_SLUG = "home"

# Locale prefixes served besides the default language
LOCALE_PREFIXES = ("/en", "/es")

GLOBAL_LAYOUT_TYPES = {"siteSettings", "navigation"}


class InvalidPayload(ValueError):
    """Webhook body without a document type."""
    pass


@dataclass(frozen=True)
class RevalidationRequest:
    """One document-change notification."""

    document_type: str
    slug: Optional[str] = None
    document_id: Optional[str] = None

    @classmethod
    def from_payload(cls, body: Any) -> "RevalidationRequest":
        """
        Parse the webhook body {"_type": str, "_id"?: str, "slug"?: {"current": str}}.

        Raises:
            InvalidPayload: body is not an object or _type is missing/empty
        """
        if not isinstance(body, dict) or not body.get("_type"):
            raise InvalidPayload("Invalid body - missing _type")

        slug = body.get("slug")
        current = slug.get("current") if isinstance(slug, dict) else None

        return cls(
            document_type=str(body["_type"]),
            slug=current or None,
            document_id=body.get("_id"),
        )


# =============================================================================
# Paths
# =============================================================================


def paths_to_invalidate(request: RevalidationRequest) -> list[str]:
    """Cached render paths made stale by a document change."""
    doc_type = request.document_type
    slug = request.slug

    if doc_type == "page":
        paths = []
        if slug:
            paths.append(f"/{slug}")
        if slug == HOME_SLUG:
            paths.append(ROOT)
        return paths

    if doc_type == "product":
        paths = [PRODUCTS_PATH]
        if slug:
            paths.append(f"{PRODUCTS_PATH}/{slug}")
        paths.append(ROOT)
        return paths

    if doc_type == "productCategory":
        return [PRODUCTS_PATH, CATEGORIES_PATH]

    if doc_type == "dealer":
        return [DEALERS_PATH]

    if doc_type == "testimonial":
        return [ROOT]

    if doc_type == "faq":
        return [FAQ_PATH]

    if doc_type in GLOBAL_LAYOUT_TYPES:
        return [ALL_PAGES]

    return [ROOT]


def localized_variants(paths: list[str]) -> list[str]:
    """
    /en and /es copies of concrete paths.

    ALL_PAGES already covers every locale and is not expanded.
    """
    variants = []
    for path in paths:
        if path == ALL_PAGES:
            continue
        for prefix in LOCALE_PREFIXES:
            variants.append(prefix if path == ROOT else f"{prefix}{path}")
    return variants


# =============================================================================
# Cache tags
# =============================================================================


def tags_to_invalidate(request: RevalidationRequest) -> list[str]:
    """Cache tags of the CMS queries that read the changed document."""
    doc_type = request.document_type
    slug = request.slug

    if doc_type == "page":
        return ([f"page-{slug}"] if slug else []) + ["pages"]

    if doc_type == "product":
        return ([f"product-{slug}"] if slug else []) + ["products"]

    if doc_type == "productCategory":
        # Product queries embed their category
        return ([f"category-{slug}"] if slug else []) + ["categories", "products"]

    if doc_type == "dealer":
        return ["dealers"]

    if doc_type == "testimonial":
        return ["testimonials"]

    if doc_type == "faq":
        return ["faqs"]

    if doc_type == "siteSettings":
        return ["settings"]

    if doc_type == "navigation":
        return ["navigation"]

    return []
