"""
Bookshelf - Book workflow.

Every book operation is scoped to the session's selected author. The
author_ID of a new book comes from that selection, never from the dialog.
Create nests the currency ({"currency": {"code": ...}}); edit stages the
flat currency_code field.

Books are hard-deleted by default, after which the book table is re-bound.
"""

import logging
from typing import Any

from bookshelf.core.dialogs import ADD_BOOK_DIALOG, EDIT_BOOK_DIALOG, DialogKind
from bookshelf.core.fields import BOOK_FIELDS
from bookshelf.core.handles import EntityHandle
from bookshelf.workflows.base import EntityWorkflow
from bookshelf.workflows.selection import BOOKS

logger = logging.getLogger(__name__)


class BookWorkflow(EntityWorkflow):
    collection = BOOKS
    label = "Book"
    kind = DialogKind.BOOK
    fields = BOOK_FIELDS
    add_dialog = ADD_BOOK_DIALOG
    edit_dialog = EDIT_BOOK_DIALOG

    def can_add(self) -> bool:
        if self.session.selected_author_id is None:
            logger.warning("Add book without a selected author")
            self.notifier.toast("Please select an author first.")
            return False
        return True

    def build_create_payload(self, values: dict[str, Any]) -> dict[str, Any]:
        payload = {"author_ID": self.session.selected_author_id}
        for name, value in values.items():
            if name == "currency_code":
                payload["currency"] = {"code": value}
            else:
                payload[name] = value
        return payload

    async def after_change(self) -> None:
        await self.scope.refresh_books()

    async def after_delete(self, handle: EntityHandle, deleted: bool) -> None:
        await self.scope.bind_books(self.session.selected_author_id)
