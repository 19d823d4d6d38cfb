# =============================================================================
# GLOS-SITE Revalidation
# =============================================================================
"""
Webhook-driven cache invalidation.

- dispatcher: document change -> stale paths and cache tags
- signature: Sanity webhook signature check
- invalidator: applies invalidations and keeps a history
- page_host: forwards stale paths and tags to the page host
"""

from core.revalidate.dispatcher import (
    ALL_PAGES,
    InvalidPayload,
    RevalidationRequest,
    localized_variants,
    paths_to_invalidate,
    tags_to_invalidate,
)
from core.revalidate.invalidator import Invalidator
from core.revalidate.page_host import PageHostClient, PageHostError, page_host_from_env
from core.revalidate.signature import SIGNATURE_HEADER, verify_signature

__all__ = [
    "ALL_PAGES",
    "InvalidPayload",
    "Invalidator",
    "PageHostClient",
    "PageHostError",
    "RevalidationRequest",
    "SIGNATURE_HEADER",
    "localized_variants",
    "page_host_from_env",
    "paths_to_invalidate",
    "tags_to_invalidate",
    "verify_signature",
]
