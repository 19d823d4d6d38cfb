# =============================================================================
# GLOS-SITE Webhook Signature
# =============================================================================
"""
Sanity webhook signature verification.

Header format:

    sanity-webhook-signature: t=<unix ms>,v1=<signature>

where signature is the base64url (unpadded) HMAC-SHA256 of "<t>.<raw body>"
keyed with the webhook secret.
"""

import base64
import hashlib
import hmac
import time
from typing import Optional

SIGNATURE_HEADER = "sanity-webhook-signature"

# Reject signatures older than this (ms); 0 disables the check
DEFAULT_TOLERANCE_MS = 5 * 60 * 1000


def sign_payload(body: bytes, secret: str, timestamp_ms: int) -> str:
    """Header value for a body, as the CMS would send it."""
    message = f"{timestamp_ms}.".encode("utf-8") + body
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()
    signature = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return f"t={timestamp_ms},v1={signature}"


def parse_signature_header(header: str) -> tuple[Optional[int], Optional[str]]:
    """Split "t=...,v1=..." into (timestamp_ms, signature)."""
    timestamp, signature = None, None
    for part in header.split(","):
        key, _, value = part.strip().partition("=")
        if key == "t" and value.isdigit():
            timestamp = int(value)
        elif key == "v1" and value:
            signature = value
    return timestamp, signature


def verify_signature(
    body: bytes,
    header: Optional[str],
    secret: str,
    tolerance_ms: int = DEFAULT_TOLERANCE_MS,
    now_ms: Optional[int] = None,
) -> bool:
    """True when header carries a valid, fresh signature for body."""
    if not header or not secret:
        return False

    timestamp, signature = parse_signature_header(header)
    if timestamp is None or signature is None:
        return False

    if tolerance_ms:
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        if abs(now_ms - timestamp) > tolerance_ms:
            return False

    expected = sign_payload(body, secret, timestamp)
    return hmac.compare_digest(expected, f"t={timestamp},v1={signature}")
