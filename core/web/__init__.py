# =============================================================================
# GLOS-SITE Web Module
# =============================================================================
"""
HTTP service exposing the revalidation webhook, contact form, price list
download and draft-mode toggles.

The server module is not imported here so that `python -m core.web.server`
runs without a double import.
"""

from core.web.contact import validate_contact

__all__ = ["validate_contact"]
