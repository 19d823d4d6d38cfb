# =============================================================================
# GLOS-SITE CMS Access
# =============================================================================
"""
Sanity HTTP API access: client, query catalog and tagged fetch helpers.
"""

from core.cms.client import CMSError, SanityClient, client_from_env, load_env
from core.cms.fetch import ContentFetcher

__all__ = ["CMSError", "ContentFetcher", "SanityClient", "client_from_env", "load_env"]
