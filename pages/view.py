# pages/view.py
from __future__ import annotations

import streamlit as st

from config import configure_logging, invite_timezone, settings
from b_types.invitation_types import is_usable
from utils.calendar_links import build_calendar_link, is_disabled_link
from utils.card import render_card_html
from utils.maps_api import build_maps_search_url
from utils.query_codec import decode, query_from_params

configure_logging()

st.set_page_config(page_title=f"{settings.APP_NAME} · Invitation", page_icon="🎈", layout="centered")

# st.query_params is already percent-decoded; re-encode so decode() sees the wire format
data = decode(query_from_params(st.query_params))

if not is_usable(data):
    st.info("This invitation link is invalid or incomplete.")
    st.page_link("streamlit_app.py", label="Create my own invitation", icon="✨")
    st.stop()

st.markdown(render_card_html(data), unsafe_allow_html=True)
st.write("")

calendar_link = build_calendar_link(data, tz=invite_timezone())
maps_link = build_maps_search_url(data["location"])

col_map, col_cal = st.columns(2)
with col_map:
    st.link_button("📍 View map", maps_link, use_container_width=True)
with col_cal:
    if is_disabled_link(calendar_link):
        st.button("📅 Add to calendar", disabled=True, use_container_width=True,
                  help="The invitation has no date/time.")
    else:
        st.link_button("📅 Add to calendar", calendar_link, use_container_width=True)

st.divider()
st.caption("Liked this invitation?")
st.page_link("streamlit_app.py", label="Create yours with AI for free", icon="✨")
