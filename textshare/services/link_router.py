# textshare/services/link_router.py
# Link-driven mode state machine: the URL fragment decides Create vs View

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from textshare.errors import DecodeFailure
from textshare.observability.metrics import record_decode
from textshare.utils import codec
from textshare.utils.links import fragment_of, strip_hash

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Whether the session is authoring or displaying shared text."""
    CREATE = "create"
    VIEW = "view"


@dataclass(frozen=True)
class RouterState:
    """Snapshot of the router after the last transition."""
    mode: Mode
    text: str
    fragment: str
    error: Optional[DecodeFailure] = None


class LinkRouter:
    """
    Derives mode and text from fragment changes.

    Every call is synchronous; feeding the same fragment twice produces the
    same mode and text. A bad fragment is cleared, so `fragment` always
    holds either "" or a token that decoded successfully.
    """

    def __init__(
        self,
        initial_fragment: str = "",
        on_fragment_cleared: Callable[[], None] | None = None,
    ):
        self._on_fragment_cleared = on_fragment_cleared
        self._state = RouterState(mode=Mode.CREATE, text="", fragment="")
        # initial state uses the same logic as a later fragment change
        self.on_fragment_change(initial_fragment)

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def fragment(self) -> str:
        return self._state.fragment

    @property
    def error(self) -> Optional[DecodeFailure]:
        return self._state.error

    def on_fragment_change(self, fragment: str) -> RouterState:
        fragment = strip_hash(fragment or "")
        if not fragment:
            self._state = RouterState(mode=Mode.CREATE, text="", fragment="")
            return self._state

        try:
            text = codec.decode(fragment)
        except DecodeFailure as e:
            record_decode(False)
            logger.info("rejected link fragment (%d chars): %s", len(fragment), e.details.get("reason"))
            self._clear_fragment()
            self._state = RouterState(mode=Mode.CREATE, text="", fragment="", error=e)
            return self._state

        record_decode(True)
        self._state = RouterState(mode=Mode.VIEW, text=text, fragment=fragment)
        return self._state

    def on_url_change(self, url: str) -> RouterState:
        """Convenience for callers observing full URLs instead of fragments."""
        return self.on_fragment_change(fragment_of(url))

    def on_reset(self) -> RouterState:
        """Clear the fragment and force Create mode."""
        self._clear_fragment()
        self._state = RouterState(mode=Mode.CREATE, text="", fragment="")
        return self._state

    reset = on_reset

    def _clear_fragment(self) -> None:
        if self._on_fragment_cleared is not None:
            self._on_fragment_cleared()
