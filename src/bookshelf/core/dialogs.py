"""
Bookshelf - Dialog lifecycle.

One DialogSlot per dialog kind. States:
- CLOSED: no dialog instance (nothing loaded, or destroyed)
- LOADING: presenter.load() in flight
- OPEN: loaded and shown; a confirm handler may start
- COMMITTING: a confirm handler is waiting on the remote call

CLOSED -> LOADING -> OPEN -> COMMITTING -> CLOSED, or OPEN -> CLOSED on
cancel. Closing always destroys the instance, so every open loads a fresh
one.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from bookshelf.core.protocols import DialogPresenter

logger = logging.getLogger(__name__)


ADD_AUTHOR_DIALOG = "AddAuthorDialog"
EDIT_AUTHOR_DIALOG = "EditAuthorDialog"
ADD_BOOK_DIALOG = "AddBookDialog"
EDIT_BOOK_DIALOG = "EditBookDialog"


class DialogKind(Enum):
    AUTHOR = "author"
    BOOK = "book"


class DialogState(Enum):
    CLOSED = "closed"
    LOADING = "loading"
    OPEN = "open"
    COMMITTING = "committing"


class DialogStateError(RuntimeError):
    """Illegal dialog transition. Indicates a host or workflow defect."""


@dataclass
class DialogSlot:
    """Lifecycle of the single dialog instance of one kind."""

    kind: DialogKind
    presenter: DialogPresenter
    state: DialogState = DialogState.CLOSED
    handle: Any = None
    name: str | None = None
    load_count: int = 0

    @property
    def is_idle(self) -> bool:
        return self.state is DialogState.CLOSED

    async def open(self, name: str, prefill: Callable[[Any], None] | None = None) -> Any:
        """
        Load, prefill, and show the dialog.

        Raises DialogStateError if a dialog of this kind is not CLOSED.
        Returns None if the slot was closed while the load was in flight;
        the late instance is destroyed instead of shown.
        """
        if self.state is not DialogState.CLOSED:
            raise DialogStateError(
                f"Cannot open {name}: {self.kind.value} dialog is {self.state.value}"
            )

        self.state = DialogState.LOADING
        try:
            handle = await self.presenter.load(name)
        except Exception:
            self.state = DialogState.CLOSED
            raise

        if self.state is not DialogState.LOADING:
            self.presenter.destroy(handle)
            logger.debug(f"Discarded {name}: {self.kind.value} dialog closed while loading")
            return None

        self.handle = handle
        self.name = name
        self.load_count += 1
        logger.debug(f"Loaded {name} ({self.kind.value} dialog)")

        try:
            if prefill is not None:
                prefill(handle)
            self.presenter.open(handle)
        except Exception:
            self.close()
            raise

        self.state = DialogState.OPEN
        return handle

    def require_open(self) -> Any:
        """Dialog instance for a confirm handler. Raises unless OPEN."""
        if self.state is not DialogState.OPEN:
            raise DialogStateError(
                f"{self.kind.value} dialog is {self.state.value}; nothing to confirm"
            )
        return self.handle

    def begin_confirm(self) -> Any:
        """Move OPEN -> COMMITTING and return the instance to read from."""
        handle = self.require_open()
        self.state = DialogState.COMMITTING
        return handle

    def close(self) -> None:
        """Close and destroy the instance. No-op when nothing is loaded."""
        if self.handle is None:
            self.state = DialogState.CLOSED
            return

        if self.state in (DialogState.OPEN, DialogState.COMMITTING):
            self.presenter.close(self.handle)
        self.presenter.destroy(self.handle)
        logger.debug(f"Destroyed {self.name} ({self.kind.value} dialog)")

        self.handle = None
        self.name = None
        self.state = DialogState.CLOSED
