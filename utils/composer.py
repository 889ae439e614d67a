# utils/composer.py
"""
Authoring-session state for one invitation.

The composer owns a single mutable `InvitationData`, applies field edits,
asks the message agent for a text (at most one request in flight) and turns
the result into a share link.
"""
from __future__ import annotations
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol
import logging
import threading

from b_types.invitation_types import (
    INVITATION_FIELDS,
    InvitationData,
    ThemeStyle,
    make_invitation,
)
from utils.query_codec import build_share_url

logger = logging.getLogger(__name__)

# (name, age, theme, tone) -> message text; may raise
MessageGenerator = Callable[[str, str, ThemeStyle, str], str]

DEFAULT_TONE = "excited"


# ───────────────────────── Errors ─────────────────────────
class CompositionError(Exception):
    """Base class for recoverable authoring errors."""


class UnknownFieldError(CompositionError):
    pass


class MissingDetailsError(CompositionError):
    pass


class GenerationInProgressError(CompositionError):
    pass


class MessageGenerationError(CompositionError):
    pass


# ───────────────────────── Share capability ─────────────────────────
@dataclass(frozen=True)
class SharePayload:
    title: str
    text: str
    url: str


class ShareTarget(Protocol):
    def attempt_native_share(self, payload: SharePayload) -> bool:
        ...

    def copy_to_clipboard(self, text: str) -> None:
        ...


# ───────────────────────── Composer ─────────────────────────
class InvitationComposer:
    def __init__(
        self,
        base_url: str,
        generator: Optional[MessageGenerator] = None,
        invitation: Optional[InvitationData] = None,
    ) -> None:
        self.base_url = base_url
        self._generator = generator
        self._invitation: InvitationData = invitation if invitation is not None else make_invitation()
        self._lock = threading.Lock()
        self._in_flight = False

    @property
    def invitation(self) -> InvitationData:
        return self._invitation

    @property
    def is_generating(self) -> bool:
        return self._in_flight

    def update_field(self, name: str, value: Any) -> None:
        """Replace one field with a new value."""
        if name not in INVITATION_FIELDS:
            raise UnknownFieldError(f"Unknown invitation field: {name!r}")
        if name == "theme":
            self._invitation["theme"] = ThemeStyle.parse(value)
        else:
            self._invitation[name] = "" if value is None else str(value)  # type: ignore[literal-required]

    def reset(self) -> None:
        self._invitation = make_invitation()

    def can_preview(self) -> bool:
        inv = self._invitation
        return bool(inv["name"] and inv["date"] and inv["location"])

    # ---- AI message ---------------------------------------------------------
    def _claim(self) -> InvitationData:
        inv = self._invitation
        if not inv["name"] or not inv["age"]:
            raise MissingDetailsError("Please fill in the name and age first.")
        if self._generator is None:
            raise MessageGenerationError("Message generation is not configured.")
        with self._lock:
            if self._in_flight:
                raise GenerationInProgressError("A message is already being generated.")
            self._in_flight = True
        return inv

    def _settle(self, inv: InvitationData) -> str:
        try:
            text = self._generator(inv["name"], inv["age"], inv["theme"], DEFAULT_TONE)  # type: ignore[misc]
        except Exception as e:
            logger.warning("message generation failed: %s", e)
            raise MessageGenerationError(f"Could not generate a message: {e}") from e
        finally:
            with self._lock:
                self._in_flight = False

        text = (text or "").strip() if isinstance(text, str) else ""
        if not text:
            raise MessageGenerationError("The generator returned an empty message.")
        inv["customMessage"] = text
        return text

    def request_ai_message(self) -> str:
        """
        Generate `customMessage` for the current name/age/theme.
        On any failure the previous message is kept and an error is raised.
        """
        return self._settle(self._claim())

    def submit_ai_message(
        self,
        executor: Executor,
        on_settled: Optional[Callable[["Future[str]"], None]] = None,
    ) -> "Future[str]":
        """
        Same as `request_ai_message` but runs on `executor`. Precondition and
        in-flight errors are raised here; generation errors settle the future.
        """
        inv = self._claim()
        try:
            fut = executor.submit(self._settle, inv)
        except Exception:
            with self._lock:
                self._in_flight = False
            raise
        if on_settled is not None:
            fut.add_done_callback(on_settled)
        return fut

    # ---- Sharing ------------------------------------------------------------
    def share_url(self) -> str:
        return build_share_url(self._invitation, self.base_url)

    def share_payload(self) -> SharePayload:
        name = self._invitation["name"]
        return SharePayload(
            title=f"{name}'s Birthday Invitation",
            text=f"🎈 You're invited to {name}'s birthday party!",
            url=self.share_url(),
        )

    def share(self, target: ShareTarget) -> str:
        """Native share when the target handles it, otherwise copy the link."""
        payload = self.share_payload()
        try:
            if target.attempt_native_share(payload):
                return "native"
        except Exception as e:
            logger.info("native share failed, copying link instead: %s", e)
        target.copy_to_clipboard(payload.url)
        return "clipboard"
