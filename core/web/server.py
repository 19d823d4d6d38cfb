#!/usr/bin/env python3
# =============================================================================
# GLOS-SITE Web Service
# =============================================================================
"""
HTTP service for the GLOS Italy site backend.

Endpoints:
- GET  /                      Service info
- GET  /health                Health check (+ last revalidation)
- GET  /api/revalidate        Webhook endpoint health
- POST /api/revalidate        Sanity webhook: invalidate stale paths and tags
- POST /api/contact           Contact form submission
- GET  /api/download-listino  Redirect to the price list PDF (?lang=it|en|es)
- GET  /api/draft             Enable draft mode, redirect to the previewed page
- GET  /api/disable-draft     Disable draft mode

Usage:
    python -m core.web.server
"""

import json
import os
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional
from urllib.parse import parse_qs, urlparse

from core.cms.client import CMSError, client_from_env, load_env
from core.cms.fetch import ContentFetcher
from core.content.catalog import select_price_list_pdf
from core.revalidate.dispatcher import (
    InvalidPayload,
    RevalidationRequest,
    localized_variants,
    paths_to_invalidate,
    tags_to_invalidate,
)
from core.revalidate.invalidator import Invalidator
from core.revalidate.page_host import PageHostError, page_host_from_env
from core.revalidate.signature import SIGNATURE_HEADER, verify_signature
from core.web.contact import SUCCESS_MESSAGE, validate_contact

# =============================================================================
# Configuration
# =============================================================================

load_env()

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "8080"))
STUDIO_URL = os.getenv("SANITY_STUDIO_URL", "https://glositalystudio.vercel.app")

SERVICE_NAME = "glos-site"
SERVICE_VERSION = "1.0"

DRAFT_COOKIE = "glos_draft"
MAX_BODY_BYTES = 1024 * 1024


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RequestBodyError(Exception):
    """Raised for a request body that cannot be read."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


def _safe_redirect_target(target: Optional[str]) -> str:
    """Only same-site absolute paths are followed."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return "/"
    return target


# =============================================================================
# Service
# =============================================================================


class SiteService:
    """
    Request handling independent of the HTTP layer.

    Handlers return (status_code, payload) or, for redirects,
    (status_code, payload, location).
    """

    def __init__(
        self,
        revalidate_secret: Optional[str],
        fetcher: Optional[ContentFetcher] = None,
        invalidator: Optional[Invalidator] = None,
        preview_secret: Optional[str] = None,
    ):
        self.revalidate_secret = revalidate_secret
        self.fetcher = fetcher
        self.invalidator = invalidator or Invalidator()
        self.preview_secret = preview_secret

    # -------------------------------------------------------------------------
    # Revalidation webhook
    # -------------------------------------------------------------------------

    def revalidate(self, raw_body: bytes, signature: Optional[str]) -> tuple[int, dict]:
        if not self.revalidate_secret:
            print("[Revalidate] SANITY_REVALIDATE_SECRET not configured")
            return 500, {"error": "Webhook secret not configured"}

        if not verify_signature(raw_body, signature, self.revalidate_secret):
            print("[Revalidate] Invalid webhook signature received")
            return 401, {"error": "Invalid signature"}

        try:
            body = json.loads(raw_body.decode("utf-8")) if raw_body else None
            request = RevalidationRequest.from_payload(body)
        except (ValueError, InvalidPayload):
            # JSONDecodeError and UnicodeDecodeError are ValueErrors
            print("[Revalidate] Invalid webhook body - missing _type")
            return 400, {"error": "Invalid body"}

        print(f"[Revalidate] Processing {request.document_type} change (id={request.document_id}, slug={request.slug})")

        paths = paths_to_invalidate(request)
        tags = tags_to_invalidate(request)

        if self.fetcher is not None:
            self.fetcher.invalidate_tags(tags)

        try:
            event = self.invalidator.invalidate(paths + localized_variants(paths), tags)
        except PageHostError as e:
            print(f"[Revalidate] Error processing webhook: {e}")
            return 500, {"error": "Revalidation failed", "message": str(e)}

        print(f"[Revalidate] Success: paths={paths} tags={tags}")
        return 200, {
            "revalidated": True,
            "type": request.document_type,
            "slug": request.slug,
            "paths": paths,
            "tags": tags,
            "forwarded": event["forwarded"],
            "timestamp": _now(),
        }

    # -------------------------------------------------------------------------
    # Contact form
    # -------------------------------------------------------------------------

    def contact(self, raw_body: bytes) -> tuple[int, dict]:
        try:
            body = json.loads(raw_body.decode("utf-8")) if raw_body else {}
        except ValueError as e:
            return 400, {"error": f"Invalid JSON: {e}"}

        error = validate_contact(body)
        if error:
            return 400, {"error": error}

        print(f"[Contact] Submission from {body['name']} <{body['email']}> subject={body.get('subject') or '-'}")
        return 200, {"success": True, "message": SUCCESS_MESSAGE}

    # -------------------------------------------------------------------------
    # Price list download
    # -------------------------------------------------------------------------

    def price_list(self, lang: str) -> tuple[int, dict, Optional[str]]:
        if self.fetcher is None:
            return 500, {"error": "CMS non configurato"}, None

        try:
            data = self.fetcher.price_list_pdfs()
        except CMSError as e:
            print(f"[Listino] Error fetching price list: {e}")
            return 500, {"error": "Errore nel recupero del listino"}, None

        if not data:
            return 404, {"error": "Impostazioni sito non trovate"}, None

        url = select_price_list_pdf(data, lang)
        if not url:
            return 404, {"error": "Nessun listino PDF disponibile"}, None

        return 302, {"redirect": url}, url

    # -------------------------------------------------------------------------
    # Draft mode
    # -------------------------------------------------------------------------

    def enable_draft(self, params: dict) -> tuple[int, dict, Optional[str]]:
        if self.preview_secret and params.get("secret") != self.preview_secret:
            return 401, {"error": "Invalid preview secret"}, None

        target = _safe_redirect_target(params.get("sanity-preview-pathname") or params.get("redirect"))
        return 307, {"draft": True, "redirect": target}, target

    def disable_draft(self) -> tuple[int, dict, Optional[str]]:
        return 307, {"draft": False, "redirect": "/"}, "/"

    # -------------------------------------------------------------------------
    # Info
    # -------------------------------------------------------------------------

    def health(self) -> dict:
        history = self.invalidator.history
        return {
            "status": "OK",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "cms_configured": self.fetcher is not None,
            "last_revalidation": history[-1] if history else None,
            "timestamp": _now(),
        }


def service_from_env() -> SiteService:
    """Build the service from environment variables."""
    fetcher = None
    try:
        fetcher = ContentFetcher(client_from_env())
    except CMSError as e:
        print(f"WARNING: CMS client not configured ({e}); price list endpoint disabled")

    page_host = page_host_from_env()
    if page_host is None:
        print("WARNING: PAGE_HOST_REVALIDATE_URL not set; revalidations are recorded only")

    return SiteService(
        revalidate_secret=os.getenv("SANITY_REVALIDATE_SECRET"),
        fetcher=fetcher,
        invalidator=Invalidator(page_host),
        preview_secret=os.getenv("SANITY_PREVIEW_SECRET"),
    )


# =============================================================================
# HTTP Request Handler
# =============================================================================


class SiteRequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler; `service` is bound by make_server()."""

    service: SiteService = None

    def _send_headers(self, status_code: int, content_type: str = "application/json"):
        self.send_response(status_code)
        self.send_header("Content-Type", content_type)
        # Allow the studio's presentation tool to frame the site
        self.send_header("Content-Security-Policy", f"frame-ancestors 'self' https://*.sanity.studio {STUDIO_URL}")

    def _send_json_response(self, data: dict, status_code: int = 200):
        """Send a JSON response."""
        body = json.dumps(data, indent=2, default=str).encode("utf-8")
        self._send_headers(status_code)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_error_response(self, message: str, status_code: int = 400):
        """Send an error response."""
        self._send_json_response(
            {
                "status": "ERROR",
                "error": message,
                "timestamp": _now(),
            },
            status_code,
        )

    def _send_result(self, status_code: int, payload: dict, location: Optional[str] = None, cookie: Optional[str] = None):
        if location is None:
            self._send_json_response(payload, status_code)
            return

        self._send_headers(status_code)
        self.send_header("Location", location)
        if cookie:
            self.send_header("Set-Cookie", cookie)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def _read_body(self) -> bytes:
        """Raw request body. Raises RequestBodyError on a bad Content-Length."""
        try:
            content_length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            raise RequestBodyError("Invalid Content-Length", 400)

        if content_length < 0:
            raise RequestBodyError("Invalid Content-Length", 400)
        if content_length > MAX_BODY_BYTES:
            raise RequestBodyError("Request body too large", 413)
        return self.rfile.read(content_length) if content_length else b""

    def do_GET(self):
        """Handle GET requests."""
        parsed = urlparse(self.path)
        path = parsed.path
        params = {k: v[0] for k, v in parse_qs(parsed.query).items()}

        if path == "/health":
            self._send_json_response(self.service.health())
            return

        if path == "/api/revalidate":
            self._send_json_response(
                {
                    "status": "ok",
                    "message": "Revalidation webhook endpoint is active",
                    "timestamp": _now(),
                }
            )
            return

        if path == "/api/download-listino":
            status, payload, location = self.service.price_list(params.get("lang") or "it")
            self._send_result(status, payload, location)
            return

        if path in ("/api/draft", "/api/draft-mode/enable"):
            status, payload, location = self.service.enable_draft(params)
            cookie = f"{DRAFT_COOKIE}=1; Path=/; HttpOnly; Secure; SameSite=None" if location else None
            self._send_result(status, payload, location, cookie)
            return

        if path in ("/api/disable-draft", "/api/draft-mode/disable"):
            status, payload, location = self.service.disable_draft()
            cookie = f"{DRAFT_COOKIE}=; Path=/; Max-Age=0; HttpOnly; Secure; SameSite=None"
            self._send_result(status, payload, location, cookie)
            return

        if path == "/":
            self._send_json_response(
                {
                    "status": "OK",
                    "service": "GLOS-SITE Web Service",
                    "version": SERVICE_VERSION,
                    "endpoints": {
                        "GET /health": "Health check",
                        "GET /api/revalidate": "Webhook endpoint health",
                        "POST /api/revalidate": "CMS revalidation webhook",
                        "POST /api/contact": "Contact form",
                        "GET /api/download-listino": "Price list PDF redirect",
                        "GET /api/draft": "Enable draft mode",
                        "GET /api/disable-draft": "Disable draft mode",
                    },
                    "timestamp": _now(),
                }
            )
            return

        self._send_error_response(f"Unknown endpoint: {path}", 404)

    def do_POST(self):
        """Handle POST requests."""
        path = urlparse(self.path).path

        try:
            body = self._read_body()
        except RequestBodyError as e:
            self._send_error_response(str(e), e.status_code)
            return

        if path == "/api/revalidate":
            status, payload = self.service.revalidate(body, self.headers.get(SIGNATURE_HEADER))
            self._send_json_response(payload, status)
            return

        if path == "/api/contact":
            status, payload = self.service.contact(body)
            self._send_json_response(payload, status)
            return

        if path == "/api/draft":
            self.do_GET()
            return

        self._send_error_response(f"Unknown endpoint: {path}", 404)

    def log_message(self, format: str, *args):
        """Custom log format."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        print(f"[{timestamp}] {self.address_string()} - {format % args}")


# =============================================================================
# Server Startup
# =============================================================================


def make_server(service: SiteService, host: str = SERVER_HOST, port: int = SERVER_PORT) -> HTTPServer:
    """HTTP server bound to a service instance."""
    handler = type("BoundSiteRequestHandler", (SiteRequestHandler,), {"service": service})
    return HTTPServer((host, port), handler)


def run_server():
    """Start the web service."""
    service = service_from_env()
    httpd = make_server(service)

    print("=" * 70)
    print("GLOS-SITE Web Service")
    print("=" * 70)
    print()
    print(f"Server running on http://{SERVER_HOST}:{SERVER_PORT}")
    print(f"Revalidate secret: {'configured' if service.revalidate_secret else 'MISSING'}")
    print(f"CMS client: {'configured' if service.fetcher else 'MISSING'}")
    print(f"Page host: {service.invalidator.page_host.url if service.invalidator.page_host else 'MISSING'}")
    print()
    print("Endpoints:")
    print("  GET  /                      - Service info")
    print("  GET  /health                - Health check")
    print("  POST /api/revalidate        - CMS revalidation webhook")
    print("  POST /api/contact           - Contact form")
    print("  GET  /api/download-listino  - Price list PDF")
    print("  GET  /api/draft             - Enable draft mode")
    print("  GET  /api/disable-draft     - Disable draft mode")
    print()
    print("Press Ctrl+C to stop")
    print("=" * 70)

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down...")
        httpd.shutdown()


if __name__ == "__main__":
    run_server()
