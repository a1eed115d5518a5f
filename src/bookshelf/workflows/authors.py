"""
Bookshelf - Author workflow.

Authors are soft-deleted by default: the record stays resolvable for the
books that reference it, only its isDeleted flag is set. Dependent books
are left as they are.
"""

from bookshelf.core.dialogs import ADD_AUTHOR_DIALOG, EDIT_AUTHOR_DIALOG, DialogKind
from bookshelf.core.fields import AUTHOR_FIELDS
from bookshelf.core.handles import EntityHandle
from bookshelf.workflows.base import EntityWorkflow
from bookshelf.workflows.selection import AUTHORS


class AuthorWorkflow(EntityWorkflow):
    collection = AUTHORS
    label = "Author"
    kind = DialogKind.AUTHOR
    fields = AUTHOR_FIELDS
    add_dialog = ADD_AUTHOR_DIALOG
    edit_dialog = EDIT_AUTHOR_DIALOG

    async def after_change(self) -> None:
        await self.scope.refresh_authors()

    async def after_delete(self, handle: EntityHandle, deleted: bool) -> None:
        if deleted:
            self.scope.clear_author(handle.key)
        await self.scope.refresh_authors()
