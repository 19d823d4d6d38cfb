#!/usr/bin/env python3
"""
SEO Metadata

PURPOSE:
    Build the metadata dictionaries (title, description, canonical, OpenGraph,
    Twitter card, robots) rendered into page heads.

INPUTS:
    - Page / product / site settings documents as returned by core.cms.fetch
    - SITE_URL from .env (defaults to the production host)

OUTPUTS:
    - Plain dicts; the page host serializes them into <meta> tags.

Image URL building is handled by the page host. Images are accepted here as
either a URL string or a dereferenced asset ({"asset": {"url": ...}}).
"""

import os
from typing import Any, Optional

from core.cms.client import load_env
from core.content.localize import DEFAULT_LANGUAGE, OG_LOCALES, get_text_value

load_env()

# =============================================================================
# CONFIGURATION
# =============================================================================

SITE_URL = os.getenv("SITE_URL", "https://glositaly.vercel.app").rstrip("/")
SITE_NAME = "GLOS Italy"
DEFAULT_LOCALE = "it_IT"
DEFAULT_SLOGAN = "Prodotti di qualita Made in Italy"

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630

SITE_KEYWORDS = [
    "GLOS Italy",
    "macchinari vernici",
    "blender vernici",
    "taglierine",
    "made in Italy",
    "precision machinery",
    "paint machinery",
]

NOT_FOUND_ROBOTS = {"index": False, "follow": False}


def image_url(image: Any) -> Optional[str]:
    """URL of an image field, or None when it has no usable asset."""
    if isinstance(image, str) and image.startswith("http"):
        return image
    if isinstance(image, dict):
        asset = image.get("asset") or {}
        url = asset.get("url") if isinstance(asset, dict) else None
        if url:
            return url
    return None


def _og_images(url: Optional[str], alt: str) -> Optional[list[dict]]:
    if not url:
        return None
    return [{"url": url, "width": OG_IMAGE_WIDTH, "height": OG_IMAGE_HEIGHT, "alt": alt}]


def _social(title: str, description: str, url: Optional[str], image: Optional[str], alt: str, locale: str) -> dict:
    open_graph = {
        "title": title,
        "description": description or None,
        "siteName": SITE_NAME,
        "locale": locale,
        "type": "website",
        "images": _og_images(image, alt),
    }
    if url:
        open_graph["url"] = url

    return {
        "openGraph": open_graph,
        "twitter": {
            "card": "summary_large_image",
            "title": title,
            "description": description or None,
            "images": [image] if image else None,
        },
    }


# =============================================================================
# URL HELPERS
# =============================================================================


def get_canonical_url(path: str, site_url: str = SITE_URL) -> str:
    """Absolute URL for a site path."""
    return f"{site_url}/{path.lstrip('/')}"


def absolute_url(url: str, site_url: str = SITE_URL) -> str:
    return url if url.startswith("http") else f"{site_url}{url}"


def generate_breadcrumb_items(items: list[dict], site_url: str = SITE_URL) -> list[dict]:
    """ListItem entries for a BreadcrumbList, positions starting at 1."""
    return [
        {
            "@type": "ListItem",
            "position": index,
            "name": item["name"],
            "item": absolute_url(item["url"], site_url),
        }
        for index, item in enumerate(items, start=1)
    ]


# =============================================================================
# METADATA GENERATION
# =============================================================================


def generate_page_metadata(page: Optional[dict], lang: str = DEFAULT_LANGUAGE) -> dict:
    """Metadata for a CMS page; not-found metadata when page is None."""
    if not page:
        return {"title": "Pagina non trovata", "robots": NOT_FOUND_ROBOTS}

    seo = page.get("seo") or {}
    title = (
        page.get("seoTitle")
        or seo.get("metaTitle")
        or get_text_value(page.get("title"), lang)
        or SITE_NAME
    )
    description = (
        page.get("seoDescription")
        or seo.get("metaDescription")
        or get_text_value(page.get("description"), lang)
    )
    slug = (page.get("slug") or {}).get("current") or ""
    canonical_url = get_canonical_url(slug)
    og_image = image_url(page.get("ogImage") or seo.get("ogImage"))

    metadata = {
        "title": title,
        "description": description or None,
        "alternates": {"canonical": canonical_url},
    }
    metadata.update(_social(title, description, canonical_url, og_image, title, OG_LOCALES.get(lang, DEFAULT_LOCALE)))

    if page.get("noIndex") or seo.get("noIndex"):
        metadata["robots"] = {"index": False, "follow": True}

    return metadata


def generate_product_metadata(product: Optional[dict], lang: str = DEFAULT_LANGUAGE) -> dict:
    """Metadata for a product detail page; the category name is appended to the title."""
    if not product:
        return {"title": "Prodotto non trovato", "robots": NOT_FOUND_ROBOTS}

    seo = product.get("seo") or {}
    name = seo.get("metaTitle") or get_text_value(product.get("name"), lang) or "Prodotto"
    description = seo.get("metaDescription") or get_text_value(product.get("shortDescription"), lang)
    category_name = get_text_value((product.get("category") or {}).get("name"), lang)
    title = f"{name} - {category_name}" if category_name else name

    metadata = {
        "title": title,
        "description": description or None,
    }

    slug = (product.get("slug") or {}).get("current")
    canonical_url = get_canonical_url(f"prodotti/{slug}") if slug else None
    if canonical_url:
        metadata["alternates"] = {"canonical": canonical_url}

    metadata.update(
        _social(title, description, canonical_url, image_url(product.get("mainImage")), name, OG_LOCALES.get(lang, DEFAULT_LOCALE))
    )
    return metadata


def generate_site_metadata(settings: Optional[dict]) -> dict:
    """Base metadata for the site layout."""
    settings = settings or {}
    company_name = get_text_value(settings.get("companyName")) or SITE_NAME
    slogan = get_text_value(settings.get("slogan")) or DEFAULT_SLOGAN
    logo = image_url(settings.get("logo"))

    metadata = {
        "metadataBase": SITE_URL,
        "title": {
            "default": company_name,
            "template": f"%s | {SITE_NAME}",
        },
        "description": slogan,
        "keywords": SITE_KEYWORDS,
        "authors": [{"name": company_name}],
        "creator": company_name,
        "publisher": company_name,
        "formatDetection": {"email": True, "address": True, "telephone": True},
        "robots": {
            "index": True,
            "follow": True,
            "googleBot": {
                "index": True,
                "follow": True,
                "max-video-preview": -1,
                "max-image-preview": "large",
                "max-snippet": -1,
            },
        },
    }
    metadata.update(_social(company_name, slogan, None, logo, company_name, DEFAULT_LOCALE))
    metadata["openGraph"]["siteName"] = company_name
    metadata["openGraph"]["alternateLocale"] = ["en_US", "es_ES"]
    return metadata
