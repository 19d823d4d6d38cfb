# =============================================================================
# GLOS-SITE Core
# =============================================================================
"""
Content services for the GLOS Italy catalog site.

Subpackages:
- content: localized values, stega-safe lookups, catalog and dealer helpers
- revalidate: webhook payload -> stale paths and cache tags
- cms: Sanity HTTP API client, query catalog and maintenance tooling support
- web: HTTP service (revalidation webhook, contact form, price list)
"""
