from b_types.invitation_types import make_invitation
from utils.card import format_party_date, format_party_time, render_card_html


def test_format_party_date():
    assert format_party_date("2024-06-01") == "Saturday, June 1, 2024"
    assert format_party_date("next friday") == "next friday"
    assert format_party_date("") == ""


def test_format_party_time():
    assert format_party_time("15:00") == "15:00"
    assert format_party_time("3pm") == "3pm"


def test_card_escapes_user_text():
    html = render_card_html(make_invitation(name="<script>alert(1)</script>", customMessage="a & b"))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a &amp; b" in html


def test_card_skips_empty_sections():
    html = render_card_html(make_invitation(name="Maria"))
    assert "Maria's Birthday" in html
    assert "📅" not in html
    assert "📍" not in html
