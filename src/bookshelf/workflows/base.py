"""
Bookshelf - Shared CRUD workflow.

Authors and books go through the same shape:
- add: open the add dialog; confirm reads the fields and creates one record
- edit: exactly one row selected; capture it, prefill, open; confirm stages
  every field on the captured handle and commits them as one batch
- delete: exactly one row selected; ask for confirmation; delete per policy

Confirm handlers always close the dialog and update the list afterwards,
whether the remote call succeeded or not. Remote failures are shown once
and never retried. A second confirm or delete trigger that fires while the
first is still waiting on the remote call is ignored.
"""

import logging
from enum import Enum
from typing import Any

from bookshelf.core.dialogs import DialogKind, DialogSlot, DialogState
from bookshelf.core.fields import FieldDescriptor, prefill_fields, read_fields
from bookshelf.core.handles import EntityHandle
from bookshelf.core.protocols import GatewayError, Notifier, RemoteGateway, SelectionProvider
from bookshelf.core.session import EditingSession
from bookshelf.workflows.selection import BookScope

logger = logging.getLogger(__name__)


class DeletePolicy(Enum):
    SOFT = "soft"  # stage isDeleted = True and commit
    HARD = "hard"  # remove the record


class EntityWorkflow:
    """
    Create/edit/delete for one collection.

    Subclasses set the class attributes and the after_* hooks.
    """

    collection: str
    label: str
    kind: DialogKind
    fields: tuple[FieldDescriptor, ...]
    add_dialog: str
    edit_dialog: str

    def __init__(
        self,
        session: EditingSession,
        gateway: RemoteGateway,
        notifier: Notifier,
        selection: SelectionProvider,
        scope: BookScope,
        delete_policy: DeletePolicy,
    ) -> None:
        self.session = session
        self.gateway = gateway
        self.notifier = notifier
        self.selection = selection
        self.scope = scope
        self.delete_policy = delete_policy
        self._deleting = False

    @property
    def noun(self) -> str:
        return self.label.lower()

    @property
    def dialog(self) -> DialogSlot:
        return self.session.dialog(self.kind)

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _dialog_busy(self, trigger: str) -> bool:
        """Re-entrant trigger (e.g. double click) while any dialog is up."""
        slot = self.session.busy_dialog()
        if slot is None:
            return False
        logger.warning(f"Ignoring {trigger} {self.noun}: {slot.kind.value} dialog is {slot.state.value}")
        return True

    def _confirm_busy(self) -> bool:
        """Second confirm while the first one's remote call is in flight."""
        if self.dialog.state is not DialogState.COMMITTING:
            return False
        logger.warning(f"Ignoring confirm: {self.kind.value} dialog is already committing")
        return True

    def _single_selection(self, action: str) -> EntityHandle | None:
        selected = self.selection.get_selected()
        if len(selected) != 1:
            logger.warning(f"{action} {self.noun} needs one selected row, got {len(selected)}")
            self.notifier.toast(f"Please select one {self.noun} to {action}.")
            return None
        return selected[0]

    def _report_failure(self, action: str, error: GatewayError) -> None:
        logger.error(f"{action} {self.noun} failed: {error.message}")
        self.notifier.error(error.message)

    # ------------------------------------------------------------------
    # Add
    # ------------------------------------------------------------------

    def can_add(self) -> bool:
        return True

    async def open_add(self) -> None:
        if self._dialog_busy("add"):
            return
        if not self.can_add():
            return
        await self.dialog.open(self.add_dialog)

    def build_create_payload(self, values: dict[str, Any]) -> dict[str, Any]:
        return values

    async def confirm_add(self) -> None:
        if self._confirm_busy():
            return
        dialog = self.dialog.begin_confirm()
        payload = self.build_create_payload(
            read_fields(self.fields, self.session.presenter, dialog)
        )

        try:
            handle = await self.gateway.create_entity(self.collection, payload)
            logger.info(f"Created {self.noun} {handle.key}")
            self.notifier.toast(f"{self.label} created")
        except GatewayError as e:
            self._report_failure("Create", e)

        self.session.close_dialog(self.kind)
        await self.after_change()

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    async def open_edit(self) -> None:
        if self._dialog_busy("edit"):
            return
        handle = self._single_selection("edit")
        if handle is None:
            return

        self.session.capture_edit(handle, self.kind)
        record = handle.get_object()
        presenter = self.session.presenter
        try:
            await self.dialog.open(
                self.edit_dialog,
                prefill=lambda dialog: prefill_fields(self.fields, presenter, dialog, record),
            )
        except Exception:
            self.session.release_edit()
            raise

    async def confirm_edit(self) -> None:
        if self._confirm_busy():
            return
        handle = self.session.require_pending_edit()
        dialog = self.dialog.begin_confirm()
        values = read_fields(self.fields, self.session.presenter, dialog)

        try:
            for name, value in values.items():
                await self.gateway.set_field(handle, name, value)
            await self.gateway.commit_batch(self.gateway.update_group_id)
            logger.info(f"Updated {self.noun} {handle.key}")
            self.notifier.toast(f"{self.label} updated")
        except GatewayError as e:
            self._report_failure("Update", e)

        self.session.close_dialog(self.kind)
        await self.after_change()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self) -> None:
        if self._deleting:
            logger.warning(f"Ignoring delete {self.noun}: a delete is already in progress")
            return
        handle = self._single_selection("delete")
        if handle is None:
            return

        self._deleting = True
        try:
            await self._confirm_and_delete(handle)
        finally:
            self._deleting = False

    async def _confirm_and_delete(self, handle: EntityHandle) -> None:
        if not await self.notifier.confirm(f"Are you sure you want to delete this {self.noun}?"):
            return

        try:
            await self._perform_delete(handle)
            logger.info(f"Deleted {self.noun} {handle.key} ({self.delete_policy.value})")
            self.notifier.toast(f"{self.label} deleted successfully.")
            deleted = True
        except GatewayError as e:
            self._report_failure("Delete", e)
            deleted = False

        await self.after_delete(handle, deleted)

    async def _perform_delete(self, handle: EntityHandle) -> None:
        if self.delete_policy is DeletePolicy.SOFT:
            await self.gateway.set_field(handle, "isDeleted", True)
            await self.gateway.commit_batch(self.gateway.update_group_id)
        else:
            await self.gateway.delete_entity(handle)

    # ------------------------------------------------------------------
    # Cancel / hooks
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        self.session.close_dialog(self.kind)

    async def after_change(self) -> None:
        raise NotImplementedError

    async def after_delete(self, handle: EntityHandle, deleted: bool) -> None:
        raise NotImplementedError
