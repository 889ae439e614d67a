# utils/calendar_links.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Tuple
from urllib.parse import urlencode
import logging

from b_types.invitation_types import InvitationData
from config import settings

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_URL = "https://www.google.com/calendar/render"

# Sentinel for "calendar link unavailable"; callers render the control disabled.
DISABLED_LINK = "#"

PARTY_DURATION = timedelta(hours=4)
ATTRIBUTION_TEMPLATE = "Invitation created with {app_name}"


def is_disabled_link(url: Optional[str]) -> bool:
    return not url or url == DISABLED_LINK


def _format_utc(dt: datetime) -> str:
    """Compact UTC basic format, e.g. 20240601T180000Z."""
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def party_window(date: str, time: str, tz: Optional[tzinfo] = None) -> Optional[Tuple[datetime, datetime]]:
    """
    (start, end) as aware datetimes, or None when date/time is missing or
    does not parse. `tz=None` reads the wall clock in the process-local zone.
    """
    if not date or not time:
        return None
    try:
        start = datetime.fromisoformat(f"{date.strip()}T{time.strip()}")
    except (TypeError, ValueError):
        return None
    if start.tzinfo is None:
        start = start.replace(tzinfo=tz) if tz is not None else start.astimezone()
    # 4 h of absolute time, also across a DST change
    start = start.astimezone(timezone.utc)
    return start, start + PARTY_DURATION


def build_calendar_link(
    invitation: InvitationData,
    tz: Optional[tzinfo] = None,
    attribution: Optional[str] = None,
) -> str:
    if attribution is None:
        attribution = ATTRIBUTION_TEMPLATE.format(app_name=settings.APP_NAME)
    try:
        window = party_window(invitation.get("date", ""), invitation.get("time", ""), tz)
        if window is None:
            logger.debug("calendar link disabled: date/time missing or invalid")
            return DISABLED_LINK
        start, end = window

        name = invitation.get("name", "")
        message = invitation.get("customMessage", "")
        params = {
            "action": "TEMPLATE",
            "text": f"{name}'s Birthday 🎂",
            "details": f"{message}\n\n{attribution}",
            "location": invitation.get("location", ""),
            "dates": f"{_format_utc(start)}/{_format_utc(end)}",
        }
        return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"
    except Exception as e:
        # Out-of-range datetimes (e.g. year 9999 + 4h) end up here
        logger.warning("calendar link generation failed: %s", e)
        return DISABLED_LINK
