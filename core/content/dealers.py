# =============================================================================
# GLOS-SITE Dealer Locator
# =============================================================================
"""
Dealer locator helpers.

Dealers come from the CMS with optional coordinates. Those without coordinates
but with a city are geocoded through OpenStreetMap Nominatim; results
(including misses) are cached per cleaned address for the process lifetime.
"""

import re
from typing import Optional

import requests

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
GEOCODER_USER_AGENT = "GLOSItaly/1.0 (https://glositaly.vercel.app)"
DEFAULT_COUNTRY = "Italia"

DEALER_TYPES = ("distributore", "rivenditore", "agente")

# Stega markers plus word joiner and no-break space
INVISIBLE_CHARS = re.compile("[\u200B-\u200D\uFEFF\u2060\u00A0]")
WHITESPACE = re.compile(r"\s+")

YOUTUBE_ID = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\s]+)")


def clean_text(text: Optional[str]) -> str:
    """Drop invisible characters and collapse whitespace."""
    if not text:
        return ""
    text = INVISIBLE_CHARS.sub("", text)
    return WHITESPACE.sub(" ", text).strip()


def youtube_id(url: Optional[str]) -> Optional[str]:
    """Video id from a watch / youtu.be / embed URL."""
    if not url:
        return None
    match = YOUTUBE_ID.search(url)
    return match.group(1) if match else None


def group_dealers_by_type(dealers: list[dict]) -> dict[str, list[dict]]:
    """Split dealers into distributors, resellers and agents (others dropped)."""
    groups = {dealer_type: [] for dealer_type in DEALER_TYPES}
    for dealer in dealers:
        dealer_type = dealer.get("type")
        if dealer_type in groups:
            groups[dealer_type].append(dealer)
    return groups


def has_location(dealer: dict) -> bool:
    location = dealer.get("location") or {}
    return bool(location.get("lat") and location.get("lng"))


def split_by_location(dealers: list[dict], geocoded: Optional[dict] = None) -> tuple[list[dict], list[dict]]:
    """
    Partition dealers into (placeable, missing) for the map.

    A dealer is placeable when it has stored coordinates or an entry in
    geocoded (dealer _id -> {"lat", "lng"}).
    """
    geocoded = geocoded or {}
    placeable, missing = [], []
    for dealer in dealers:
        if has_location(dealer) or dealer.get("_id") in geocoded:
            placeable.append(dealer)
        else:
            missing.append(dealer)
    return placeable, missing


class Geocoder:
    """Nominatim geocoder with an in-memory cache."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.cache: dict[str, Optional[dict]] = {}

    def geocode(self, address: str, city: str, country: Optional[str] = None) -> Optional[dict]:
        """Coordinates {"lat", "lng"} for an address, or None."""
        parts = [clean_text(address), clean_text(city), clean_text(country or DEFAULT_COUNTRY)]
        full_address = ", ".join(p for p in parts if p)

        if full_address in self.cache:
            return self.cache[full_address]

        result = None
        try:
            response = self.session.get(
                NOMINATIM_URL,
                params={"format": "json", "q": full_address, "limit": 1},
                headers={"User-Agent": GEOCODER_USER_AGENT},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            if data and data[0].get("lat") and data[0].get("lon"):
                result = {"lat": float(data[0]["lat"]), "lng": float(data[0]["lon"])}
        except (requests.RequestException, ValueError) as e:
            print(f"[Geocode] Failed for '{full_address}': {e}")

        self.cache[full_address] = result
        return result

    def geocode_missing(self, dealers: list[dict]) -> dict[str, dict]:
        """Geocode every dealer without coordinates that has a city."""
        results = {}
        for dealer in dealers:
            if has_location(dealer) or not dealer.get("city"):
                continue
            coords = self.geocode(dealer.get("address") or "", dealer["city"], dealer.get("country"))
            if coords:
                results[dealer["_id"]] = coords
        return results
