# utils/card.py
from __future__ import annotations
from datetime import date as _date, time as _time
from html import escape
from typing import Dict

from b_types.invitation_types import InvitationData, ThemeStyle

# background, text, accent, font
_THEME_STYLES: Dict[ThemeStyle, Dict[str, str]] = {
    ThemeStyle.FUN: {
        "bg": "linear-gradient(135deg, #ff9a9e 0%, #fecfef 50%, #a1c4fd 100%)",
        "fg": "#3b0764", "accent": "#db2777", "font": "'Comic Sans MS', cursive", "emoji": "🎉",
    },
    ThemeStyle.ELEGANT: {
        "bg": "linear-gradient(135deg, #1c1917 0%, #44403c 100%)",
        "fg": "#fef3c7", "accent": "#d4af37", "font": "Georgia, serif", "emoji": "✨",
    },
    ThemeStyle.MINIMAL: {
        "bg": "#ffffff",
        "fg": "#111827", "accent": "#6b7280", "font": "Helvetica, Arial, sans-serif", "emoji": "○",
    },
    ThemeStyle.SPACE: {
        "bg": "radial-gradient(circle at top, #312e81 0%, #0f172a 70%)",
        "fg": "#e0e7ff", "accent": "#38bdf8", "font": "'Trebuchet MS', sans-serif", "emoji": "🚀",
    },
    ThemeStyle.NATURE: {
        "bg": "linear-gradient(135deg, #d9f99d 0%, #86efac 100%)",
        "fg": "#14532d", "accent": "#15803d", "font": "Palatino, serif", "emoji": "🌿",
    },
}


def format_party_date(value: str) -> str:
    """'2024-06-01' -> 'Saturday, June 1, 2024'; anything unparseable is returned as-is."""
    try:
        d = _date.fromisoformat(value)
    except (TypeError, ValueError):
        return value or ""
    return f"{d.strftime('%A, %B')} {d.day}, {d.year}"


def format_party_time(value: str) -> str:
    try:
        t = _time.fromisoformat(value)
    except (TypeError, ValueError):
        return value or ""
    return t.strftime("%H:%M")


def render_card_html(invitation: InvitationData) -> str:
    """Self-contained HTML for the invitation card. All user text is escaped."""
    style = _THEME_STYLES[ThemeStyle.parse(invitation.get("theme"))]
    name = escape(invitation.get("name") or "Your name")
    age = escape(invitation.get("age") or "")
    when = " · ".join(
        p for p in (
            escape(format_party_date(invitation.get("date", ""))),
            escape(format_party_time(invitation.get("time", ""))),
        ) if p
    )
    where = escape(invitation.get("location") or "")
    message = escape(invitation.get("customMessage") or "").replace("\n", "<br/>")

    age_line = f"<div style='font-size:1.1rem;color:{style['accent']}'>is turning <b>{age}</b>!</div>" if age else ""
    when_line = f"<div style='margin-top:1rem'>📅 {when}</div>" if when else ""
    where_line = f"<div>📍 {where}</div>" if where else ""
    message_line = f"<p style='margin-top:1.2rem;font-style:italic'>{message}</p>" if message else ""

    return (
        f"<div style=\"background:{style['bg']};color:{style['fg']};font-family:{style['font']};"
        "border-radius:24px;padding:2.5rem 2rem;text-align:center;max-width:420px;margin:auto;"
        "box-shadow:0 10px 30px rgba(0,0,0,.15)\">"
        f"<div style='font-size:2.5rem'>{style['emoji']}</div>"
        f"<div style='letter-spacing:.2em;text-transform:uppercase;font-size:.8rem;color:{style['accent']}'>"
        "You're invited to</div>"
        f"<h1 style='margin:.3rem 0;color:{style['fg']};font-family:{style['font']}'>{name}'s Birthday</h1>"
        f"{age_line}{when_line}{where_line}{message_line}"
        "</div>"
    )
