# maps_api.py
from __future__ import annotations
from typing import Any
from urllib.parse import quote

# --- Google endpoints ---------------------------------------------------------
GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/"


def build_maps_search_url(location: Any) -> str:
    """
    Maps search link for a free-text address. An empty address still gives a
    valid (empty) search URL.
    """
    text = location if isinstance(location, str) else ""
    return f"{GOOGLE_MAPS_SEARCH_URL}?api=1&query={quote(text, safe='')}"
