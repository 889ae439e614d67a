# streamlit_app.py
from __future__ import annotations

from datetime import date, time
from typing import Optional

import streamlit as st

from config import configure_logging, settings
from b_types.invitation_types import THEME_LABELS, ThemeStyle
from utils.card import render_card_html
from utils.composer import (
    CompositionError,
    InvitationComposer,
    MissingDetailsError,
    SharePayload,
)

configure_logging()

# Widget keys, one per invitation field
_TEXT_FIELDS = ("name", "age", "location", "customMessage")
_KEY = {f: f"f_{f}" for f in ("name", "age", "date", "time", "location", "theme", "customMessage")}


# ───────────────────────── Agents ─────────────────────────
@st.cache_resource(show_spinner=False)
def get_message_agent():
    from agents.message_agent import MessageAgent
    return MessageAgent()


def generate_message(name: str, age: str, theme: ThemeStyle, tone: str) -> str:
    # Agent construction fails without GOOGLE_API_KEY; the composer reports it.
    return get_message_agent().generate(name, age, theme, tone)


# ───────────────────────── Session state ─────────────────────────
def get_composer() -> InvitationComposer:
    if "composer" not in st.session_state:
        st.session_state["composer"] = InvitationComposer(
            base_url=settings.APP_BASE_URL,
            generator=generate_message,
        )
    return st.session_state["composer"]


def go(screen: str) -> None:
    st.session_state["screen"] = screen


def start_over() -> None:
    get_composer().reset()
    for key in _KEY.values():
        st.session_state.pop(key, None)
    st.session_state.pop("copied", None)
    go("create")


def _sync_from_widgets(composer: InvitationComposer) -> None:
    for field in _TEXT_FIELDS:
        if _KEY[field] in st.session_state:
            composer.update_field(field, st.session_state[_KEY[field]] or "")
    if _KEY["theme"] in st.session_state:
        composer.update_field("theme", st.session_state[_KEY["theme"]])
    d: Optional[date] = st.session_state.get(_KEY["date"])
    composer.update_field("date", d.isoformat() if d else "")
    t: Optional[time] = st.session_state.get(_KEY["time"])
    composer.update_field("time", t.strftime("%H:%M") if t else "")


def _seed_widgets(composer: InvitationComposer) -> None:
    # Streamlit drops widget state for widgets not drawn on the last run
    inv = composer.invitation
    for field in _TEXT_FIELDS:
        st.session_state.setdefault(_KEY[field], inv[field])
    st.session_state.setdefault(_KEY["theme"], inv["theme"])
    if _KEY["date"] not in st.session_state:
        try:
            st.session_state[_KEY["date"]] = date.fromisoformat(inv["date"]) if inv["date"] else None
        except ValueError:
            st.session_state[_KEY["date"]] = None
    if _KEY["time"] not in st.session_state:
        try:
            st.session_state[_KEY["time"]] = time.fromisoformat(inv["time"]) if inv["time"] else None
        except ValueError:
            st.session_state[_KEY["time"]] = None


def _on_generate() -> None:
    composer = get_composer()
    _sync_from_widgets(composer)
    try:
        text = composer.request_ai_message()
        st.session_state[_KEY["customMessage"]] = text
    except MissingDetailsError as e:
        st.session_state["flash"] = ("warning", str(e))
    except CompositionError as e:
        st.session_state["flash"] = ("error", f"{e} Please try again.")


def _show_flash() -> None:
    flash = st.session_state.pop("flash", None)
    if not flash:
        return
    kind, msg = flash
    (st.warning if kind == "warning" else st.error)(msg)


# ───────────────────────── Share target ─────────────────────────
class StreamlitShareTarget:
    """Streamlit has no native share sheet; the link is shown in a copyable code box."""

    def attempt_native_share(self, payload: SharePayload) -> bool:
        return False

    def copy_to_clipboard(self, text: str) -> None:
        st.session_state["copied"] = text


# ───────────────────────── Screens ─────────────────────────
def render_home() -> None:
    st.markdown("<div style='text-align:center;font-size:4rem'>🎂</div>", unsafe_allow_html=True)
    st.markdown(f"<h1 style='text-align:center'>{settings.APP_NAME}</h1>", unsafe_allow_html=True)
    st.markdown(
        "<p style='text-align:center'>Create digital birthday invitations and share the link "
        "with your friends. Powered by AI.</p>",
        unsafe_allow_html=True,
    )
    st.button("✨ Create a free invitation", type="primary", use_container_width=True,
              on_click=go, args=("create",))


def render_create() -> None:
    composer = get_composer()
    _seed_widgets(composer)
    st.button("← Back", on_click=go, args=("home",))
    st.subheader("Party details")
    st.caption("Fill in the details to build your invitation.")
    _show_flash()

    col_form, col_preview = st.columns([1, 1])
    with col_form:
        col_name, col_age = st.columns(2)
        with col_name:
            st.text_input("Name", key=_KEY["name"], placeholder="e.g. Maria")
        with col_age:
            st.text_input("Age", key=_KEY["age"], placeholder="e.g. 5")

        themes = list(ThemeStyle)
        st.selectbox("Theme", themes, key=_KEY["theme"], format_func=lambda t: THEME_LABELS[t])

        col_date, col_time = st.columns(2)
        with col_date:
            st.date_input("Date", key=_KEY["date"])
        with col_time:
            st.time_input("Time", key=_KEY["time"], step=900)

        st.text_input("Full address", key=_KEY["location"], placeholder="e.g. 123 Flower St")
        st.text_area("Invitation message", key=_KEY["customMessage"], height=120,
                     placeholder="Type a message or generate one with AI...")
        st.button(
            "⏳ Writing..." if composer.is_generating else "🪄 Generate text with AI",
            on_click=_on_generate,
            disabled=composer.is_generating,
        )

    _sync_from_widgets(composer)

    with col_form:
        st.button("View invitation", type="primary", use_container_width=True,
                  disabled=not composer.can_preview(), on_click=go, args=("preview",))
    with col_preview:
        st.markdown(render_card_html(composer.invitation), unsafe_allow_html=True)
        st.caption("✨ Live preview")


def render_preview() -> None:
    composer = get_composer()
    if not composer.invitation["name"]:
        go("create")
        st.rerun()

    col_card, col_actions = st.columns([1, 1])
    with col_card:
        st.markdown(render_card_html(composer.invitation), unsafe_allow_html=True)
    with col_actions:
        st.subheader("Invitation ready! 🎉")
        st.write("Share the link below with your guests.")
        share_url = composer.share_url()
        st.text_input("Invitation link", value=share_url, disabled=True)
        if st.button("🔗 Share link", type="primary", use_container_width=True):
            composer.share(StreamlitShareTarget())
        if st.session_state.get("copied"):
            st.code(st.session_state["copied"], language=None)
            st.caption("Use the copy button on the box above.")
        st.link_button("Open guest view", share_url, use_container_width=True)
        st.button("← Edit details", use_container_width=True, on_click=go, args=("create",))
        st.button("Start over", use_container_width=True, on_click=start_over)


# ───────────────────────── Main ─────────────────────────
st.set_page_config(page_title=settings.APP_NAME, page_icon="🎂", layout="wide")

screen = st.session_state.get("screen", "home")
if screen == "create":
    render_create()
elif screen == "preview":
    render_preview()
else:
    render_home()
