from concurrent.futures import ThreadPoolExecutor
import threading

import pytest

from b_types.invitation_types import ThemeStyle, is_usable
from utils.composer import (
    GenerationInProgressError,
    InvitationComposer,
    MessageGenerationError,
    MissingDetailsError,
    SharePayload,
    UnknownFieldError,
)
from utils.query_codec import decode_share_url

BASE_URL = "https://festa.example.com"


def _composer(generator=None, **fields):
    composer = InvitationComposer(base_url=BASE_URL, generator=generator)
    for k, v in fields.items():
        composer.update_field(k, v)
    return composer


class RecordingGenerator:
    def __init__(self, reply="Come party with Maria! 🎉"):
        self.reply = reply
        self.calls = []

    def __call__(self, name, age, theme, tone):
        self.calls.append((name, age, theme, tone))
        return self.reply


# ---- field updates ----------------------------------------------------------
def test_new_composer_starts_empty():
    composer = _composer()
    assert not is_usable(composer.invitation)
    assert composer.invitation["theme"] is ThemeStyle.FUN
    assert not composer.is_generating


def test_update_field_replaces_whole_value():
    composer = _composer(name="Maria")
    composer.update_field("name", "Mariana")
    assert composer.invitation["name"] == "Mariana"
    composer.update_field("age", 6)
    assert composer.invitation["age"] == "6"
    composer.update_field("location", None)
    assert composer.invitation["location"] == ""


def test_update_theme_is_normalized():
    composer = _composer()
    composer.update_field("theme", "elegant")
    assert composer.invitation["theme"] is ThemeStyle.ELEGANT
    composer.update_field("theme", "disco")
    assert composer.invitation["theme"] is ThemeStyle.FUN


def test_update_unknown_field_raises():
    with pytest.raises(UnknownFieldError):
        _composer().update_field("dress_code", "black tie")


def test_can_preview_needs_name_date_and_location():
    composer = _composer(name="Maria", date="2024-06-01")
    assert not composer.can_preview()
    composer.update_field("location", "Rua A, 123")
    assert composer.can_preview()


def test_reset_starts_a_fresh_invitation():
    composer = _composer(name="Maria", theme="space")
    composer.reset()
    assert composer.invitation["name"] == ""
    assert composer.invitation["theme"] is ThemeStyle.FUN


# ---- AI message -------------------------------------------------------------
def test_request_ai_message_requires_name():
    gen = RecordingGenerator()
    composer = _composer(gen, age="5", customMessage="keep me")
    with pytest.raises(MissingDetailsError):
        composer.request_ai_message()
    assert composer.invitation["customMessage"] == "keep me"
    assert gen.calls == []
    assert not composer.is_generating


def test_request_ai_message_requires_age():
    composer = _composer(RecordingGenerator(), name="Maria")
    with pytest.raises(MissingDetailsError):
        composer.request_ai_message()


def test_request_ai_message_replaces_custom_message():
    gen = RecordingGenerator()
    composer = _composer(gen, name="Maria", age="5", theme="space", customMessage="old")
    text = composer.request_ai_message()
    assert text == "Come party with Maria! 🎉"
    assert composer.invitation["customMessage"] == text
    assert gen.calls == [("Maria", "5", ThemeStyle.SPACE, "excited")]
    assert not composer.is_generating


def test_generator_failure_keeps_message_and_clears_flag():
    def boom(*args):
        raise TimeoutError("gemini timed out")

    composer = _composer(boom, name="Maria", age="5", customMessage="old")
    with pytest.raises(MessageGenerationError) as exc:
        composer.request_ai_message()
    assert isinstance(exc.value.__cause__, TimeoutError)
    assert composer.invitation["customMessage"] == "old"
    assert not composer.is_generating
    # retry is allowed after a failure
    with pytest.raises(MessageGenerationError):
        composer.request_ai_message()


def test_empty_reply_is_a_failure():
    composer = _composer(RecordingGenerator(reply="   "), name="Maria", age="5", customMessage="old")
    with pytest.raises(MessageGenerationError):
        composer.request_ai_message()
    assert composer.invitation["customMessage"] == "old"


def test_missing_generator_is_a_failure():
    composer = _composer(None, name="Maria", age="5")
    with pytest.raises(MessageGenerationError):
        composer.request_ai_message()
    assert not composer.is_generating


def test_second_request_while_in_flight_is_rejected():
    seen = {}

    def reentrant(name, age, theme, tone):
        seen["flag"] = composer.is_generating
        with pytest.raises(GenerationInProgressError):
            composer.request_ai_message()
        return "first one wins"

    composer = _composer(reentrant, name="Maria", age="5")
    assert composer.request_ai_message() == "first one wins"
    assert seen["flag"] is True
    assert not composer.is_generating


def test_submit_ai_message_settles_future_and_callback():
    release = threading.Event()

    def slow(name, age, theme, tone):
        release.wait(5)
        return "async hello"

    settled = []
    composer = _composer(slow, name="Maria", age="5")
    with ThreadPoolExecutor(max_workers=2) as pool:
        fut = composer.submit_ai_message(pool, on_settled=settled.append)
        assert composer.is_generating
        with pytest.raises(GenerationInProgressError):
            composer.submit_ai_message(pool)
        release.set()
        assert fut.result(timeout=5) == "async hello"
    assert settled == [fut]
    assert composer.invitation["customMessage"] == "async hello"
    assert not composer.is_generating


def test_submit_ai_message_precondition_raises_immediately():
    composer = _composer(RecordingGenerator(), age="5")
    with ThreadPoolExecutor(max_workers=1) as pool:
        with pytest.raises(MissingDetailsError):
            composer.submit_ai_message(pool)


def test_submit_ai_message_failure_settles_with_error():
    def boom(*args):
        raise RuntimeError("quota exceeded")

    composer = _composer(boom, name="Maria", age="5", customMessage="old")
    with ThreadPoolExecutor(max_workers=1) as pool:
        fut = composer.submit_ai_message(pool)
        assert isinstance(fut.exception(timeout=5), MessageGenerationError)
    assert composer.invitation["customMessage"] == "old"
    assert not composer.is_generating


# ---- sharing ----------------------------------------------------------------
def test_share_url_decodes_back_to_the_invitation():
    composer = _composer(name="Maria", age="5", date="2024-06-01", time="15:00",
                         location="Rua A, 123", theme="nature", customMessage="Olá! 🌿")
    url = composer.share_url()
    assert url.startswith(BASE_URL + "/view?")
    assert decode_share_url(url) == composer.invitation


def test_share_url_of_empty_invitation_is_not_usable():
    assert not is_usable(decode_share_url(_composer().share_url()))


class FakeTarget:
    def __init__(self, native=False, fail=False):
        self.native = native
        self.fail = fail
        self.shared = []
        self.copied = []

    def attempt_native_share(self, payload):
        if self.fail:
            raise OSError("share sheet dismissed")
        self.shared.append(payload)
        return self.native

    def copy_to_clipboard(self, text):
        self.copied.append(text)


def test_share_uses_native_share_when_handled():
    composer = _composer(name="Maria")
    target = FakeTarget(native=True)
    assert composer.share(target) == "native"
    assert target.shared == [SharePayload(
        title="Maria's Birthday Invitation",
        text="🎈 You're invited to Maria's birthday party!",
        url=composer.share_url(),
    )]
    assert target.copied == []


def test_share_falls_back_to_clipboard():
    composer = _composer(name="Maria")
    for target in (FakeTarget(native=False), FakeTarget(fail=True)):
        assert composer.share(target) == "clipboard"
        assert target.copied == [composer.share_url()]
