"""
Bookshelf - Collaborator protocols.

The editing core talks to its host only through these interfaces:
- RemoteGateway: create/bind/stage/commit/delete/refresh on named collections
- DialogPresenter: load/open/close/destroy dialogs, read/write their fields
- SelectionProvider: the selected rows of a list or table
- ListHost: the list or table whose items are bound to a CollectionView
- Notifier: toast, blocking error, and confirmation prompt

Hosts provide implementations (e.g. SupabaseGateway for the remote side,
a widget toolkit adapter for dialogs and lists).
"""

from typing import Any, Protocol, Sequence, runtime_checkable

from bookshelf.core.handles import CollectionView, EntityHandle, FilterClause


class GatewayError(Exception):
    """A rejected remote operation. `message` is shown to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@runtime_checkable
class RemoteGateway(Protocol):
    """
    Remote entity access for the editing core.

    Every coroutine either completes or raises GatewayError. create_entity
    resolves only after the server acknowledged the record.
    """

    @property
    def update_group_id(self) -> str:
        """Batch group that set_field enrols staged changes in."""
        ...

    async def create_entity(self, collection: str, payload: dict[str, Any]) -> EntityHandle:
        ...

    async def bind_collection(self, collection: str, filters: list[FilterClause]) -> CollectionView:
        ...

    async def set_field(self, handle: EntityHandle, name: str, value: Any) -> None:
        ...

    async def commit_batch(self, group_id: str) -> None:
        ...

    async def delete_entity(self, handle: EntityHandle) -> None:
        ...

    async def refresh(self, view: CollectionView) -> None:
        ...


@runtime_checkable
class DialogPresenter(Protocol):
    """Loads and drives modal dialogs. Field values are strings."""

    async def load(self, name: str) -> Any:
        ...

    def open(self, handle: Any) -> None:
        ...

    def close(self, handle: Any) -> None:
        ...

    def destroy(self, handle: Any) -> None:
        ...

    def get_value(self, handle: Any, field: str) -> str:
        ...

    def set_value(self, handle: Any, field: str, value: str) -> None:
        ...


@runtime_checkable
class SelectionProvider(Protocol):
    def get_selected(self) -> Sequence[EntityHandle]:
        ...


@runtime_checkable
class ListHost(Protocol):
    """A list/table whose items can be bound to, or unbound from, a view."""

    @property
    def binding(self) -> CollectionView | None:
        ...

    def bind(self, view: CollectionView) -> None:
        ...

    def unbind(self) -> None:
        ...


@runtime_checkable
class Notifier(Protocol):
    def toast(self, message: str) -> None:
        """Transient informational message."""
        ...

    def error(self, message: str) -> None:
        """Blocking error dialog."""
        ...

    async def confirm(self, message: str) -> bool:
        """Ask OK/Cancel. True only for OK."""
        ...
