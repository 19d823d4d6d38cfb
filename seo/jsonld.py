#!/usr/bin/env python3
"""
JSON-LD Structured Data

PURPOSE:
    Build schema.org documents for rich results: Organization, Product,
    LocalBusiness (dealers), BreadcrumbList, FAQPage, WebSite, WebPage.

OUTPUTS:
    - dicts with empty fields removed
    - render_script() wraps a document in <script type="application/ld+json">
"""

import json
from typing import Any, Optional

from core.content.localize import DEFAULT_LANGUAGE, get_text_value
from seo.metadata import SITE_NAME, SITE_URL, absolute_url, generate_breadcrumb_items, image_url

SCHEMA_CONTEXT = "https://schema.org"
ORGANIZATION_ID = f"{SITE_URL}/#organization"
CURRENCY = "EUR"

KNOWS_ABOUT = [
    "Paint machinery",
    "Blender machines",
    "Cutting machines",
    "Precision machinery",
]


def clean_schema(value: Any) -> Any:
    """Recursively drop None values, empty strings and empty containers."""
    if isinstance(value, dict):
        cleaned = {k: clean_schema(v) for k, v in value.items()}
        return {k: v for k, v in cleaned.items() if v not in (None, "", [], {})}
    if isinstance(value, list):
        return [clean_schema(v) for v in value if v is not None]
    return value


def render_script(schema: Optional[dict]) -> str:
    """<script> tag for a schema; "" for None."""
    if not schema:
        return ""
    # "</" would close the script element early
    payload = json.dumps(schema, ensure_ascii=False).replace("</", "<\\/")
    return f'<script type="application/ld+json">{payload}</script>'


def _publisher() -> dict:
    return {"@type": "Organization", "name": SITE_NAME, "@id": ORGANIZATION_ID}


# =============================================================================
# SCHEMAS
# =============================================================================


def organization_schema(data: dict, lang: str = DEFAULT_LANGUAGE) -> dict:
    name = get_text_value(data.get("name"), lang) or SITE_NAME
    address = data.get("address")

    return clean_schema({
        "@context": SCHEMA_CONTEXT,
        "@type": "Organization",
        "@id": ORGANIZATION_ID,
        "name": name,
        "legalName": name,
        "url": SITE_URL,
        "logo": image_url(data.get("logo")),
        "email": data.get("email"),
        "telephone": data.get("phone"),
        "address": {
            "@type": "PostalAddress",
            "streetAddress": get_text_value(address, lang),
            "addressCountry": "IT",
        } if address else None,
        "sameAs": [url for url in (data.get("facebook"), data.get("instagram"), data.get("linkedin")) if url],
        "foundingCountry": "IT",
        "knowsAbout": KNOWS_ABOUT,
    })


def product_schema(data: dict, url: str, lang: str = DEFAULT_LANGUAGE) -> dict:
    price = data.get("price")

    return clean_schema({
        "@context": SCHEMA_CONTEXT,
        "@type": "Product",
        "name": get_text_value(data.get("name"), lang) or "Product",
        "description": get_text_value(data.get("description"), lang),
        "image": image_url(data.get("image")),
        "url": absolute_url(url),
        "category": get_text_value((data.get("category") or {}).get("name"), lang),
        "sku": data.get("sku"),
        "brand": {"@type": "Brand", "name": data.get("brand") or SITE_NAME},
        "manufacturer": {"@type": "Organization", "name": SITE_NAME, "url": SITE_URL},
        # price 0 means "on request": no offer
        "offers": {
            "@type": "Offer",
            "price": price,
            "priceCurrency": CURRENCY,
            "availability": "https://schema.org/InStock",
            "seller": {"@type": "Organization", "name": SITE_NAME},
        } if price else None,
    })


def local_business_schema(data: dict, lang: str = DEFAULT_LANGUAGE) -> dict:
    """Dealer as a LocalBusiness under the manufacturer."""
    location = data.get("location") or {}

    return clean_schema({
        "@context": SCHEMA_CONTEXT,
        "@type": "LocalBusiness",
        "name": get_text_value(data.get("name"), lang) or "Dealer",
        "description": get_text_value(data.get("description"), lang),
        "image": image_url(data.get("logo")),
        "telephone": data.get("phone"),
        "email": data.get("email"),
        "address": {
            "@type": "PostalAddress",
            "streetAddress": get_text_value(data.get("address"), lang),
            "addressLocality": get_text_value(data.get("city"), lang),
            "addressCountry": data.get("country") or "IT",
        },
        "geo": {
            "@type": "GeoCoordinates",
            "latitude": location["lat"],
            "longitude": location["lng"],
        } if location.get("lat") is not None and location.get("lng") is not None else None,
        "openingHours": data.get("openingHours"),
        "parentOrganization": {"@type": "Organization", "name": SITE_NAME, "url": SITE_URL},
    })


def breadcrumb_schema(items: list[dict]) -> Optional[dict]:
    if not items:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": generate_breadcrumb_items(items),
    }


def faq_schema(items: list[dict], lang: str = DEFAULT_LANGUAGE) -> Optional[dict]:
    if not items:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": get_text_value(item.get("question"), lang),
                "acceptedAnswer": {
                    "@type": "Answer",
                    "text": get_text_value(item.get("answer"), lang),
                },
            }
            for item in items
        ],
    }


def website_schema(name: Optional[str] = None, description: Optional[str] = None) -> dict:
    return clean_schema({
        "@context": SCHEMA_CONTEXT,
        "@type": "WebSite",
        "name": name or SITE_NAME,
        "url": SITE_URL,
        "description": description,
        "publisher": {"@type": "Organization", "name": name or SITE_NAME, "@id": ORGANIZATION_ID},
        "potentialAction": {
            "@type": "SearchAction",
            "target": {
                "@type": "EntryPoint",
                "urlTemplate": f"{SITE_URL}/prodotti?q={{search_term_string}}",
            },
            "query-input": "required name=search_term_string",
        },
    })


def webpage_schema(
    title: str,
    url: str,
    description: Optional[str] = None,
    date_published: Optional[str] = None,
    date_modified: Optional[str] = None,
) -> dict:
    return clean_schema({
        "@context": SCHEMA_CONTEXT,
        "@type": "WebPage",
        "name": title,
        "description": description,
        "url": absolute_url(url),
        "datePublished": date_published,
        "dateModified": date_modified,
        "isPartOf": {"@type": "WebSite", "name": SITE_NAME, "url": SITE_URL},
        "publisher": _publisher(),
    })
