#!/usr/bin/env python3
"""
Migrate rich text fields to plain localized strings.

PURPOSE:
    Page sections and FAQs created before the schema change hold
    Portable Text arrays in fields that now expect strings. This script
    rewrites them as {"it": "...", "en": "...", "es": "..."}.

INPUTS:
    SANITY_PROJECT_ID, SANITY_DATASET, SANITY_API_TOKEN from the environment.

OUTPUTS:
    reports/cms/<run_id>.results.json
    reports/cms/<run_id>.results.md

Usage:
    scripts/migrate_rich_text.py            # DRY_RUN (default)
    scripts/migrate_rich_text.py --execute  # LIVE WRITES
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.cms.audit import AbortException, ResultsWriter, finalize, new_run, record_operation
from core.cms.client import CMSError, client_from_env
from core.cms.richtext import convert_faq, convert_page

PAGES_QUERY = '*[_type == "page"]{_id, title, sections}'
FAQS_QUERY = '*[_type == "faq"]{_id, question, answer}'


def migrate_documents(client, execute: bool, results: dict) -> None:
    """Convert every page and FAQ that still holds block arrays."""
    dry_run = not execute
    ok_status = "SUCCESS" if execute else "DRY_RUN_OK"

    print("[Migrate] Fetching pages...")
    pages = client.query(PAGES_QUERY) or []
    print(f"[Migrate] {len(pages)} pages")

    for page in pages:
        sections, changed = convert_page(page)
        if sections is None:
            continue
        before = {"sections": page.get("sections")}
        print(f"  {page['_id']}: {len(changed)} fields")
        for path in changed:
            print(f"    - {path}")
        try:
            client.patch_set(page["_id"], {"sections": sections}, dry_run=dry_run)
            record_operation(results, page["_id"], ok_status, before=before, after={path: True for path in changed})
        except CMSError as e:
            record_operation(results, page["_id"], "FAILED", before=before, error=str(e))

    print("[Migrate] Fetching FAQs...")
    faqs = client.query(FAQS_QUERY) or []
    print(f"[Migrate] {len(faqs)} FAQs")

    for faq in faqs:
        updates = convert_faq(faq)
        if not updates:
            continue
        print(f"  {faq['_id']}: {', '.join(updates)}")
        before = {field: faq.get(field) for field in updates}
        try:
            client.patch_set(faq["_id"], updates, dry_run=dry_run)
            record_operation(results, faq["_id"], ok_status, before=before, after=updates)
        except CMSError as e:
            record_operation(results, faq["_id"], "FAILED", before=before, error=str(e))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert rich text fields to localized strings")
    parser.add_argument("--execute", action="store_true", help="Commit the mutations (LIVE WRITES)")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("RICH TEXT MIGRATION")
    print("=" * 70)
    print()

    if args.execute:
        print("WARNING: EXECUTE MODE - LIVE CMS WRITES ENABLED")
    else:
        print("Running in DRY_RUN mode (no actual changes)")
    print()

    results = new_run("migrate_rich_text", dry_run=not args.execute)

    try:
        client = client_from_env(require_token=True)
        migrate_documents(client, args.execute, results)
    except (AbortException, CMSError) as e:
        results["aborted"] = True
        results["abort_reason"] = str(e)

    finalize(results)
    json_path, md_path = ResultsWriter().write_results(results)

    print()
    print("=" * 70)
    print("MIGRATION SUMMARY")
    print("=" * 70)
    print(f"Documents updated: {results['summary']['total_operations']}")
    for status, count in results["summary"]["by_status"].items():
        print(f"  {status}: {count}")
    print(f"  JSON: {json_path}")
    print(f"  Markdown: {md_path}")

    if results["aborted"]:
        print()
        print(f"ABORTED: {results['abort_reason']}")
        return 1
    return 1 if results["summary"]["by_status"].get("FAILED") else 0


if __name__ == "__main__":
    sys.exit(main())
