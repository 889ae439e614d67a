from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TypedDict


class ThemeStyle(str, Enum):
    FUN = "fun"
    ELEGANT = "elegant"
    MINIMAL = "minimal"
    SPACE = "space"
    NATURE = "nature"

    @classmethod
    def default(cls) -> "ThemeStyle":
        return cls.FUN

    @classmethod
    def parse(cls, raw: Any) -> "ThemeStyle":
        """
        Map a wire value (or member name, any case) to a theme.
        Anything unrecognized falls back to the default theme.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.default()
        key = raw.strip()
        for theme in cls:
            if key == theme.value or key.upper() == theme.name:
                return theme
        return cls.default()


# Select-box labels shown while composing
THEME_LABELS: Dict[ThemeStyle, str] = {
    ThemeStyle.FUN: "🎉 Fun & Colorful",
    ThemeStyle.ELEGANT: "✨ Elegant & Gold",
    ThemeStyle.MINIMAL: "⚪ Minimal",
    ThemeStyle.SPACE: "🚀 Space",
    ThemeStyle.NATURE: "🌿 Nature",
}


class InvitationData(TypedDict):
    name: str           # empty means "no invitation loaded"
    age: str            # kept as text, e.g. "5"
    date: str           # "YYYY-MM-DD" or ""
    time: str           # "HH:MM" or ""
    location: str
    theme: ThemeStyle
    customMessage: str


# Wire order for the query string
INVITATION_FIELDS: Tuple[str, ...] = (
    "name",
    "age",
    "date",
    "time",
    "location",
    "theme",
    "customMessage",
)


def make_invitation(
    *,
    name: str = "",
    age: str = "",
    date: str = "",
    time: str = "",
    location: str = "",
    theme: Optional[Any] = None,
    customMessage: str = "",
) -> InvitationData:
    return InvitationData(
        name=name or "",
        age=age or "",
        date=date or "",
        time=time or "",
        location=location or "",
        theme=ThemeStyle.parse(theme),
        customMessage=customMessage or "",
    )


def is_usable(invitation: Optional[InvitationData]) -> bool:
    """An invitation without a name is treated as "nothing loaded"."""
    if not invitation:
        return False
    name = invitation.get("name")
    return isinstance(name, str) and bool(name)
