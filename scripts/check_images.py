#!/usr/bin/env python3
"""
List product image references (read-only).

PURPOSE:
    Spot products without a main image or with an empty gallery before
    a catalog goes live.

INPUTS:
    SANITY_PROJECT_ID, SANITY_DATASET (token optional).

OUTPUTS:
    Console table only. No writes.

Usage:
    scripts/check_images.py
    scripts/check_images.py --missing-only
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.cms.client import CMSError, client_from_env
from core.content.localize import resolve

PRODUCT_IMAGES_QUERY = """*[_type == "product"] | order(name.it asc) {
  _id,
  name,
  "mainImageRef": mainImage.asset._ref,
  "galleryCount": count(gallery)
}"""


def summarize(products: list[dict]) -> list[dict]:
    """One row per product with its image state."""
    rows = []
    for product in products:
        rows.append({
            "id": product.get("_id"),
            "name": resolve(product.get("name")) or "(senza nome)",
            "main_image": product.get("mainImageRef"),
            "gallery": product.get("galleryCount") or 0,
        })
    return rows


def main(argv=None):
    parser = argparse.ArgumentParser(description="List product image references")
    parser.add_argument("--missing-only", action="store_true", help="Only products without a main image")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("PRODUCT IMAGES")
    print("=" * 70)

    try:
        client = client_from_env()
        rows = summarize(client.query(PRODUCT_IMAGES_QUERY) or [])
    except CMSError as e:
        print(f"ERROR: {e}")
        return 1

    missing = [r for r in rows if not r["main_image"]]
    shown = missing if args.missing_only else rows

    for row in shown:
        marker = "MISSING" if not row["main_image"] else row["main_image"]
        print(f"  {row['name'][:40]:<40} main={marker:<50} gallery={row['gallery']}")

    print()
    print(f"Products: {len(rows)}  Missing main image: {len(missing)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
