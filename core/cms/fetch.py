# =============================================================================
# GLOS-SITE Content Fetching
# =============================================================================
"""
Tagged content reads.

Every fetch declares cache tags; published results are cached in memory under
those tags and evicted by invalidate_tags() when the revalidation webhook
reports a change. Tags MUST match core.revalidate.dispatcher.tags_to_invalidate:

    settings, navigation          global layout
    pages, page-<slug>            pages
    products, product-<slug>      products
    categories, category-<slug>   categories
    dealers, testimonials, faqs

Preview (draft) reads are never cached. The cache holds at most max_entries
results; the oldest is dropped first.
"""

import json
from typing import Any, Optional

from core.cms import queries
from core.cms.client import SanityClient

MAX_CACHE_ENTRIES = 500


class ContentFetcher:
    """Query wrapper with tag-based caching for published content."""

    def __init__(self, client: SanityClient, preview: bool = False, max_entries: int = MAX_CACHE_ENTRIES):
        self.client = client
        self.preview = preview
        self.max_entries = max_entries
        self._cache: dict[str, tuple[list[str], Any]] = {}

    def _fetch(self, query: str, params: Optional[dict], tags: list[str]) -> Any:
        params = params or {}
        if self.preview:
            return self.client.query(query, params, preview=True)

        key = query + json.dumps(params, sort_keys=True)
        if key in self._cache:
            return self._cache[key][1]

        result = self.client.query(query, params)
        self._cache[key] = (tags, result)
        while len(self._cache) > self.max_entries:
            del self._cache[next(iter(self._cache))]
        return result

    def _fetch_list(self, query: str, params: Optional[dict], tags: list[str]) -> list:
        return self._fetch(query, params, tags) or []

    def invalidate_tags(self, tags: list[str]) -> int:
        """Evict cached results carrying any of tags. Returns eviction count."""
        stale = set(tags)
        keys = [key for key, (entry_tags, _) in self._cache.items() if stale.intersection(entry_tags)]
        for key in keys:
            del self._cache[key]
        return len(keys)

    def clear(self):
        self._cache.clear()

    # -------------------------------------------------------------------------
    # Settings & navigation
    # -------------------------------------------------------------------------

    def site_settings(self) -> Optional[dict]:
        return self._fetch(queries.SITE_SETTINGS_QUERY, None, ["settings"])

    def price_list_pdfs(self) -> Optional[dict]:
        return self._fetch(queries.PRICE_LIST_QUERY, None, ["settings"])

    def navigation(self) -> Optional[dict]:
        return self._fetch(queries.NAVIGATION_QUERY, None, ["navigation"])

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def page_by_slug(self, slug: str) -> Optional[dict]:
        return self._fetch(queries.PAGE_BY_SLUG_QUERY, {"slug": slug}, ["pages", f"page-{slug}"])

    def all_pages(self) -> list[dict]:
        return self._fetch_list(queries.ALL_PAGES_QUERY, None, ["pages"])

    def page_slugs(self) -> list[str]:
        return self._fetch_list(queries.PAGE_SLUGS_QUERY, None, ["pages"])

    # -------------------------------------------------------------------------
    # Products & categories
    # -------------------------------------------------------------------------

    def all_products(self) -> list[dict]:
        return self._fetch_list(queries.ALL_PRODUCTS_QUERY, None, ["products"])

    def product_by_slug(self, slug: str) -> Optional[dict]:
        return self._fetch(queries.PRODUCT_BY_SLUG_QUERY, {"slug": slug}, ["products", f"product-{slug}"])

    def featured_products(self) -> list[dict]:
        return self._fetch_list(queries.FEATURED_PRODUCTS_QUERY, None, ["products"])

    def products_by_category(self, category_id: str) -> list[dict]:
        return self._fetch_list(
            queries.PRODUCTS_BY_CATEGORY_QUERY,
            {"categoryId": category_id},
            ["products", "categories"],
        )

    def product_slugs(self) -> list[str]:
        return self._fetch_list(queries.PRODUCT_SLUGS_QUERY, None, ["products"])

    def all_categories(self) -> list[dict]:
        return self._fetch_list(queries.ALL_CATEGORIES_QUERY, None, ["categories"])

    def category_by_slug(self, slug: str) -> Optional[dict]:
        return self._fetch(queries.CATEGORY_BY_SLUG_QUERY, {"slug": slug}, ["categories", f"category-{slug}"])

    # -------------------------------------------------------------------------
    # Dealers, testimonials, FAQ
    # -------------------------------------------------------------------------

    def all_dealers(self) -> list[dict]:
        return self._fetch_list(queries.ALL_DEALERS_QUERY, None, ["dealers"])

    def dealers_by_region(self, region: str) -> list[dict]:
        return self._fetch_list(queries.DEALERS_BY_REGION_QUERY, {"region": region}, ["dealers"])

    def all_testimonials(self) -> list[dict]:
        return self._fetch_list(queries.ALL_TESTIMONIALS_QUERY, None, ["testimonials"])

    def featured_testimonials(self) -> list[dict]:
        return self._fetch_list(queries.FEATURED_TESTIMONIALS_QUERY, None, ["testimonials"])

    def all_faqs(self) -> list[dict]:
        return self._fetch_list(queries.ALL_FAQS_QUERY, None, ["faqs"])

    def faqs_by_category(self, category: str) -> list[dict]:
        return self._fetch_list(queries.FAQS_BY_CATEGORY_QUERY, {"category": category}, ["faqs"])
