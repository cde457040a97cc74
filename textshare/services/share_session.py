# textshare/services/share_session.py
# Session context: editor text, generated link, notifications and history
# wired around the link router and the history store

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from textshare.constants import (
    MSG_COPIED,
    MSG_COPY_FAILED,
    MSG_EMPTY_INPUT,
    MSG_INVALID_LINK,
    MSG_LINK_GENERATED,
    MSG_ENCODE_FAILED,
)
from textshare.errors import EncodeFailure
from textshare.observability.metrics import LINKS_GENERATED
from textshare.repositories.history_repository import HistoryStore
from textshare.schemas.share import HistoryEntry
from textshare.services.link_router import LinkRouter, Mode, RouterState
from textshare.utils import codec
from textshare.utils.links import build_link, build_qr_url
from textshare.utils.text_stats import calculate_stats

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Transient message for the user; dismissal timing belongs to the UI."""
    message: str
    kind: str = SUCCESS


@dataclass(frozen=True)
class ClipboardRequest:
    """Ask the UI to write content to the clipboard."""
    content: str
    label: str


class ShareSession:
    """
    One user's session: authoring text in Create mode, reading it in View mode.

    The UI layer forwards fragment changes, text input and button presses
    here and renders `mode`, `text`, `generated_link` and the notifications.
    The history store is expected to be loaded by its owner at startup.
    """

    def __init__(
        self,
        history: HistoryStore,
        origin: str,
        path: str = "/",
        initial_fragment: str = "",
        qr_service_url: str = "https://api.qrserver.com/v1/create-qr-code/",
        qr_size: int = 200,
        clock_ms: Callable[[], int] | None = None,
        on_fragment_cleared: Callable[[], None] | None = None,
    ):
        self.history = history
        self.origin = origin
        self.path = path
        self.qr_service_url = qr_service_url
        self.qr_size = qr_size
        self._clock_ms = clock_ms
        self.generated_link = ""
        self.generated_entry: Optional[HistoryEntry] = None
        self._notifications: List[Notification] = []
        self._draft = ""
        self.router = LinkRouter(on_fragment_cleared=on_fragment_cleared)
        self.on_fragment_change(initial_fragment)

    # --- state exposed to the UI ---

    @property
    def mode(self) -> Mode:
        return self.router.mode

    @property
    def text(self) -> str:
        if self.router.mode is Mode.VIEW:
            return self.router.text
        return self._draft

    @property
    def stats(self) -> dict:
        return calculate_stats(self.text)

    def drain_notifications(self) -> List[Notification]:
        """Return pending notifications, oldest first, and forget them."""
        pending, self._notifications = self._notifications, []
        return pending

    def _notify(self, message: str, kind: str = SUCCESS) -> None:
        self._notifications.append(Notification(message=message, kind=kind))

    # --- incoming navigation ---

    def on_fragment_change(self, fragment: str) -> RouterState:
        state = self.router.on_fragment_change(fragment)
        if state.error is not None:
            self._notify(MSG_INVALID_LINK, ERROR)
        # leaving or entering a link both start from an empty editor
        self._draft = ""
        return state

    def reset(self) -> RouterState:
        """'Create New': drop the viewed text and the generated link."""
        self._draft = ""
        self.generated_link = ""
        self.generated_entry = None
        return self.router.on_reset()

    # --- authoring ---

    def set_text(self, text: str) -> bool:
        """Editor input; the viewer is read-only."""
        if self.router.mode is not Mode.CREATE:
            return False
        self._draft = text
        return True

    def clear_text(self) -> None:
        if self.router.mode is Mode.CREATE:
            self._draft = ""

    def generate_link(self) -> Optional[str]:
        """
        Encode the draft into a link and record it in history.
        Blank drafts are rejected before reaching the codec.
        """
        text = self._draft
        if not text.strip():
            self._notify(MSG_EMPTY_INPUT, ERROR)
            return None

        try:
            token = codec.encode(text)
        except EncodeFailure:
            logger.warning("draft of %d chars could not be encoded", len(text))
            self._notify(MSG_ENCODE_FAILED, ERROR)
            return None

        link = build_link(self.origin, self.path, token)
        self.generated_link = link
        now_ms = self._clock_ms() if self._clock_ms is not None else None
        self.generated_entry = self.history.record(text, link, now_ms=now_ms)
        LINKS_GENERATED.inc()
        self._notify(MSG_LINK_GENERATED)
        return link

    def qr_code_url(self) -> Optional[str]:
        if not self.generated_link:
            return None
        return build_qr_url(self.qr_service_url, self.generated_link, self.qr_size)

    # --- clipboard ---

    def copy_link(self) -> Optional[ClipboardRequest]:
        if not self.generated_link:
            return None
        return ClipboardRequest(content=self.generated_link, label="Link")

    def copy_text(self) -> ClipboardRequest:
        return ClipboardRequest(content=self.text, label="Text")

    def copy_history_link(self, entry: HistoryEntry) -> ClipboardRequest:
        return ClipboardRequest(content=entry.link, label="Link")

    def clipboard_result(self, request: ClipboardRequest, succeeded: bool) -> None:
        """Completion callback of a clipboard write."""
        if succeeded:
            self._notify(MSG_COPIED.format(label=request.label))
        else:
            self._notify(MSG_COPY_FAILED, ERROR)
