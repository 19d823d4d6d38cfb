# =============================================================================
# GLOS-SITE Invalidator
# =============================================================================
"""
Applies dispatcher output to the render cache.

Paths and tags go to the page host through a PageHostClient. Without one the
invalidation is only recorded. Every call leaves an event in a bounded
history for the webhook response and the health endpoint.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from core.revalidate.page_host import PageHostClient

HISTORY_LIMIT = 100


class Invalidator:
    """Forwards invalidations to the page host and keeps a bounded history."""

    def __init__(self, page_host: Optional[PageHostClient] = None):
        self.page_host = page_host
        self.history: list[dict] = []

    def invalidate(self, paths: Iterable[str], tags: Iterable[str] = ()) -> dict:
        """
        Purge paths and tags on the page host.

        Duplicate paths are sent once. PageHostError propagates to the caller.

        Returns:
            Event dict: paths, tags, forwarded, timestamp.
        """
        paths = list(dict.fromkeys(paths))
        tags = list(dict.fromkeys(tags))

        forwarded = False
        if self.page_host is not None:
            self.page_host.revalidate(paths, tags)
            forwarded = True
        else:
            print("[Revalidate] No page host configured; invalidation recorded only")

        event = {
            "paths": paths,
            "tags": tags,
            "forwarded": forwarded,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.history.append(event)
        del self.history[:-HISTORY_LIMIT]
        return event
