"""
Bookshelf - Editing session state.

One EditingSession per view. It owns the dialog slots, the pending-edit
handle captured at selection time, and the selected author's identifier.
Only the view's own event handlers mutate it.
"""

from dataclasses import dataclass, field
from typing import Any

from bookshelf.core.dialogs import DialogKind, DialogSlot, DialogStateError
from bookshelf.core.handles import EntityHandle
from bookshelf.core.protocols import DialogPresenter


@dataclass
class EditingSession:
    presenter: DialogPresenter
    slots: dict[DialogKind, DialogSlot] = field(default_factory=dict)
    pending_edit: EntityHandle | None = None
    pending_kind: DialogKind | None = None
    selected_author_id: Any = None

    def __post_init__(self) -> None:
        for kind in DialogKind:
            self.slots.setdefault(kind, DialogSlot(kind=kind, presenter=self.presenter))

    def dialog(self, kind: DialogKind) -> DialogSlot:
        return self.slots[kind]

    def busy_dialog(self) -> DialogSlot | None:
        """First slot that is not CLOSED, if any."""
        for slot in self.slots.values():
            if not slot.is_idle:
                return slot
        return None

    # ------------------------------------------------------------------
    # Pending edit
    # ------------------------------------------------------------------

    def capture_edit(self, handle: EntityHandle, kind: DialogKind | None = None) -> None:
        if self.pending_edit is not None and self.pending_edit is not handle:
            raise DialogStateError(
                f"An edit of {self.pending_edit.collection}({self.pending_edit.key}) is already pending"
            )
        self.pending_edit = handle
        self.pending_kind = kind

    def require_pending_edit(self) -> EntityHandle:
        if self.pending_edit is None:
            raise DialogStateError("No entity captured for editing")
        return self.pending_edit

    def release_edit(self) -> None:
        self.pending_edit = None
        self.pending_kind = None

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close_dialog(self, kind: DialogKind) -> None:
        """Close+destroy the dialog of `kind` and release the edit it captured."""
        self.dialog(kind).close()
        if self.pending_kind is None or self.pending_kind is kind:
            self.release_edit()

    def close_all(self) -> None:
        for kind in DialogKind:
            self.close_dialog(kind)
