# =============================================================================
# GLOS-SITE Sanity Client
# =============================================================================
"""
Minimal Sanity HTTP API client (query + mutate).

Published reads use perspective=published; preview reads use the drafts
perspective and require a token. Writes go through mutate() and support the
API's own dryRun flag so tooling can validate mutations without committing.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

import requests
from dotenv import load_dotenv

# =============================================================================
# CONFIGURATION
# =============================================================================

CMS_DIR = Path(__file__).parent
CORE_DIR = CMS_DIR.parent
PROJECT_ROOT = CORE_DIR.parent

DEFAULT_DATASET = "production"
DEFAULT_API_VERSION = "2024-01-01"
REQUEST_TIMEOUT = 30


def load_env():
    """Load environment variables from .env file."""
    env_paths = [
        PROJECT_ROOT / ".env",
        PROJECT_ROOT / ".env.local",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            return True
    return False


class CMSError(Exception):
    """Raised when the CMS API answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# =============================================================================
# SANITY API CLIENT
# =============================================================================


class SanityClient:
    """Sanity content lake client for queries and mutations."""

    def __init__(
        self,
        project_id: str,
        dataset: str = DEFAULT_DATASET,
        api_version: str = DEFAULT_API_VERSION,
        token: Optional[str] = None,
        use_cdn: bool = False,
        session: Optional[requests.Session] = None,
    ):
        if not project_id:
            raise CMSError("Missing SANITY_PROJECT_ID")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.token = token
        self.use_cdn = use_cdn
        self.session = session or requests.Session()

    def _base_url(self, cdn: bool = False) -> str:
        host = "apicdn.sanity.io" if cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}/data"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def query(self, groq: str, params: Optional[dict] = None, preview: bool = False) -> Any:
        """
        Run a GROQ query and return its result.

        Args:
            groq: query string
            params: query parameters, sent as $name=<json>
            preview: read drafts (no CDN, token required)
        """
        if preview and not self.token:
            print("[CMS] Preview requested but SANITY_API_TOKEN is not set; drafts may be missing")

        url = f"{self._base_url(cdn=self.use_cdn and not preview)}/query/{self.dataset}"
        query_params = {
            "query": groq,
            "perspective": "drafts" if preview else "published",
        }
        for name, value in (params or {}).items():
            query_params[f"${name}"] = json.dumps(value)

        response = self.session.get(url, params=query_params, headers=self._headers(), timeout=REQUEST_TIMEOUT)

        if response.status_code != 200:
            raise CMSError(
                f"Query failed {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json().get("result")

    def mutate(self, mutations: list[dict], dry_run: bool = False) -> dict:
        """
        Submit mutations in a single transaction.

        With dry_run the API validates the transaction without committing it.
        """
        if not self.token:
            raise CMSError("Mutations require SANITY_API_TOKEN")

        url = f"{self._base_url()}/mutate/{self.dataset}"
        query_params = {"returnIds": "true"}
        if dry_run:
            query_params["dryRun"] = "true"

        response = self.session.post(
            url,
            params=query_params,
            headers=self._headers(),
            json={"mutations": mutations},
            timeout=REQUEST_TIMEOUT,
        )

        if response.status_code != 200:
            raise CMSError(
                f"Mutation failed {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return response.json()

    def patch_set(self, doc_id: str, fields: dict, dry_run: bool = False) -> dict:
        """Set fields on one document."""
        return self.mutate([{"patch": {"id": doc_id, "set": fields}}], dry_run=dry_run)


def client_from_env(require_token: bool = False) -> SanityClient:
    """Build a client from SANITY_* environment variables."""
    load_env()

    token = os.getenv("SANITY_API_TOKEN")
    if require_token and not token:
        raise CMSError("SANITY_API_TOKEN environment variable is required")

    return SanityClient(
        project_id=os.getenv("SANITY_PROJECT_ID", ""),
        dataset=os.getenv("SANITY_DATASET", DEFAULT_DATASET),
        api_version=os.getenv("SANITY_API_VERSION", DEFAULT_API_VERSION),
        token=token,
        use_cdn=os.getenv("SANITY_USE_CDN", "false").lower() == "true",
    )
