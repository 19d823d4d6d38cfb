# =============================================================================
# GLOS-SITE Page Host Revalidation
# =============================================================================
"""
Forwards stale paths and tags to the page host's revalidation endpoint.

The page host owns the render cache. It receives

    POST <PAGE_HOST_REVALIDATE_URL>
    Authorization: Bearer <PAGE_HOST_REVALIDATE_SECRET>
    {"paths": [...], "tags": [...]}

and purges each path (ALL_PAGES = "/*" meaning the whole layout) and tag.
"""

import os
from typing import Optional

import requests

from core.cms.client import load_env

REQUEST_TIMEOUT = 10


class PageHostError(Exception):
    """Raised when the page host rejects or misses a revalidation."""
    pass


class PageHostClient:
    """Client for the page host revalidation endpoint."""

    def __init__(self, url: str, secret: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: float = REQUEST_TIMEOUT):
        self.url = url
        self.secret = secret
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.secret:
            headers["Authorization"] = f"Bearer {self.secret}"
        return headers

    def revalidate(self, paths: list[str], tags: list[str]) -> dict:
        """Purge paths and tags on the page host. Returns its JSON answer."""
        try:
            response = self.session.post(
                self.url,
                json={"paths": paths, "tags": tags},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PageHostError(f"Page host unreachable: {e}") from e

        if response.status_code >= 400:
            raise PageHostError(f"Page host revalidation failed {response.status_code}: {response.text}")

        try:
            return response.json()
        except ValueError:
            return {}


def page_host_from_env() -> Optional[PageHostClient]:
    """Client from PAGE_HOST_REVALIDATE_URL, or None when it is not set."""
    load_env()

    url = os.getenv("PAGE_HOST_REVALIDATE_URL")
    if not url:
        return None
    return PageHostClient(url, secret=os.getenv("PAGE_HOST_REVALIDATE_SECRET"))
