#!/usr/bin/env python3
"""
Set fields on a CMS document.

PURPOSE:
    Targeted content fixes (copy corrections, missing translations) without
    opening the studio. Default behavior is DRY_RUN: the mutation is sent
    with the API's dryRun flag and nothing is committed.

INPUTS:
    SANITY_PROJECT_ID, SANITY_DATASET, SANITY_API_TOKEN from the environment.
    The token is never accepted on the command line.

OUTPUTS:
    reports/cms/<run_id>.results.json (before/after values for rollback)
    reports/cms/<run_id>.results.md

Usage:
    scripts/cms_set_fields.py --doc siteSettings --set "phone=+39 0123 456"
    scripts/cms_set_fields.py --doc siteSettings --set "postalCode=20100"
    scripts/cms_set_fields.py --doc <id> --json --set 'title={"it":"Ciao","en":"Hi"}' --execute

Values are strings unless --json is given, in which case every value must
be valid JSON (objects, numbers, booleans, quoted strings).
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.cms.audit import AbortException, ResultsWriter, finalize, new_run, record_operation
from core.cms.client import CMSError, client_from_env

DOCUMENT_QUERY = "*[_id == $id][0]"


def parse_assignment(raw: str, as_json: bool = False) -> tuple[str, object]:
    """
    Parse key=value. The value is kept as a string unless as_json is set.

    Dotted keys (seo.metaTitle) are passed through as Sanity patch paths.
    """
    if "=" not in raw:
        raise AbortException(f"Invalid assignment (expected key=value): {raw}")

    key, value = raw.split("=", 1)
    key = key.strip()
    if not key:
        raise AbortException(f"Invalid assignment (empty key): {raw}")

    if not as_json:
        return key, value

    try:
        return key, json.loads(value)
    except json.JSONDecodeError as e:
        raise AbortException(f"Invalid JSON value for {key}: {e}") from e


def current_values(document: dict, keys: list[str]) -> dict:
    """Values of the given (possibly dotted) keys in a fetched document."""
    before = {}
    for key in keys:
        value = document
        for part in key.split("."):
            value = value.get(part) if isinstance(value, dict) else None
        before[key] = value
    return before


def set_fields(client, doc_id: str, fields: dict, execute: bool, results: dict) -> dict:
    """Fetch, patch and record one document update."""
    document = client.query(DOCUMENT_QUERY, {"id": doc_id})
    if not document:
        raise AbortException(f"Document not found: {doc_id}")

    before = current_values(document, list(fields))

    try:
        client.patch_set(doc_id, fields, dry_run=not execute)
    except CMSError as e:
        return record_operation(results, doc_id, "FAILED", before=before, after=fields, error=str(e))

    status = "SUCCESS" if execute else "DRY_RUN_OK"
    return record_operation(results, doc_id, status, before=before, after=fields)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Set fields on a CMS document")
    parser.add_argument("--doc", required=True, help="Document _id")
    parser.add_argument("--set", action="append", default=[], dest="assignments",
                        metavar="KEY=VALUE", help="Field assignment (repeatable)")
    parser.add_argument("--json", action="store_true", dest="as_json",
                        help="Parse every VALUE as JSON (default: plain string)")
    parser.add_argument("--execute", action="store_true", help="Commit the mutation (LIVE WRITE)")
    args = parser.parse_args(argv)

    print("=" * 70)
    print("CMS SET FIELDS")
    print("=" * 70)
    print()

    if args.execute:
        print("WARNING: EXECUTE MODE - LIVE CMS WRITES ENABLED")
    else:
        print("Running in DRY_RUN mode (no actual changes)")
    print()

    results = new_run("cms_set_fields", dry_run=not args.execute)

    try:
        if not args.assignments:
            raise AbortException("At least one --set KEY=VALUE is required")
        fields = dict(parse_assignment(a, args.as_json) for a in args.assignments)
        client = client_from_env(require_token=True)
        entry = set_fields(client, args.doc, fields, args.execute, results)
        print(f"  {args.doc}: {entry['status']}")
        for key, value in fields.items():
            print(f"    {key}: {json.dumps(entry['before'].get(key), ensure_ascii=False)} -> "
                  f"{json.dumps(value, ensure_ascii=False)}")
    except (AbortException, CMSError) as e:
        results["aborted"] = True
        results["abort_reason"] = str(e)

    finalize(results)
    json_path, md_path = ResultsWriter().write_results(results)
    print()
    print(f"  JSON: {json_path}")
    print(f"  Markdown: {md_path}")

    if results["aborted"]:
        print()
        print(f"ABORTED: {results['abort_reason']}")
        return 1

    failed = results["summary"]["by_status"].get("FAILED", 0)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
