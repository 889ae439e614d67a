# utils/query_codec.py
from __future__ import annotations
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit
import logging

from b_types.invitation_types import (
    INVITATION_FIELDS,
    InvitationData,
    ThemeStyle,
    make_invitation,
)

logger = logging.getLogger(__name__)

# Path marker for the guest entry point (pages/view.py)
VIEW_PATH = "view"


def _field_text(invitation: InvitationData, key: str) -> str:
    value = invitation.get(key)  # type: ignore[misc]
    if isinstance(value, ThemeStyle):
        return value.value
    if value is None:
        return ""
    return str(value)


def encode(invitation: InvitationData) -> str:
    """
    Serialize an invitation into a query string (no leading '?').
    Empty fields are left out to keep links short; order is fixed.
    """
    pairs: List[Tuple[str, str]] = []
    for key in INVITATION_FIELDS:
        text = _field_text(invitation, key)
        if text:
            pairs.append((key, text))
    return urlencode(pairs, encoding="utf-8")


def decode(query: Any) -> InvitationData:
    """
    Best-effort inverse of `encode`. Never raises: missing keys become "",
    an unknown theme becomes the default and unknown keys are ignored.
    """
    if not isinstance(query, str):
        return make_invitation()

    raw = query.strip()
    if raw.startswith("?"):
        raw = raw[1:]

    found: Dict[str, str] = {}
    try:
        for k, v in parse_qsl(raw, keep_blank_values=True, encoding="utf-8", errors="replace"):
            # first occurrence wins
            if k in INVITATION_FIELDS and k not in found:
                found[k] = v
    except Exception as e:
        logger.warning("query decode failed, falling back to empty invitation: %s", e)
        return make_invitation()

    theme_raw = found.get("theme")
    if theme_raw and ThemeStyle.parse(theme_raw).value != theme_raw:
        logger.debug("unknown theme %r, using default", theme_raw)

    return make_invitation(
        name=found.get("name", ""),
        age=found.get("age", ""),
        date=found.get("date", ""),
        time=found.get("time", ""),
        location=found.get("location", ""),
        theme=theme_raw,
        customMessage=found.get("customMessage", ""),
    )


def build_share_url(invitation: InvitationData, base_url: str) -> str:
    """base address + view marker + encoded query."""
    base = (base_url or "").rstrip("/")
    return f"{base}/{VIEW_PATH}?{encode(invitation)}"


def _query_part(url: str) -> str:
    # Hash-routed links put the query inside the fragment: base/#/view?name=...
    if "#" in url:
        fragment = url.split("#", 1)[1]
        if "?" in fragment:
            return fragment.split("?", 1)[1]
    try:
        return urlsplit(url).query
    except ValueError:
        _, _, tail = url.partition("?")
        return tail


def decode_share_url(url: Any) -> InvitationData:
    """Recover the invitation from a full share link; never raises."""
    if not isinstance(url, str) or not url.strip():
        return make_invitation()
    return decode(_query_part(url.strip()))


def query_from_params(params: Any) -> str:
    """
    Rebuild the wire query from an already-decoded multi-value mapping such
    as `st.query_params` (needs `keys()` and `get_all(key)`). Every value of
    a repeated key is kept, in order, so `decode` picks the first one.
    """
    pairs: List[Tuple[str, str]] = []
    try:
        for key in params.keys():
            for value in params.get_all(key):
                pairs.append((key, value))
    except Exception as e:
        logger.warning("could not read query params: %s", e)
        return ""
    return urlencode(pairs, encoding="utf-8")
