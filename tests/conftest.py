"""
Pytest configuration and fixtures for Bookshelf tests.

Provides recording fakes for every collaborator of the editing core:
- FakeGateway: records create/bind/set/commit/delete/refresh calls
- FakePresenter: in-memory dialogs with string field values
- FakeNotifier: collects toasts/errors, answers confirmations
- FakeListView: selectable, bindable list or table
"""

import asyncio
import os
from typing import Any
from unittest.mock import MagicMock

import pytest

# Set test environment before importing bookshelf modules
os.environ["BOOKSHELF_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-key-not-real")

from bookshelf.controller import BookListController
from bookshelf.core.handles import CollectionView, EntityHandle
from bookshelf.core.protocols import GatewayError


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeGateway:
    """
    RemoteGateway that records every call.

    Set `fail[op] = message` to reject an op, `delay` to keep each call in
    flight long enough for a second handler to run.
    """

    update_group_id = "$auto"

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: dict[str, str] = {}
        self.batches: list[list[tuple[EntityHandle, dict[str, Any]]]] = []
        self._staged: list[EntityHandle] = []
        self._next_id = 100
        self.delay = 0.0

    async def _pause(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)

    def _check(self, op: str) -> None:
        if op in self.fail:
            raise GatewayError(self.fail[op])

    def ops(self) -> list[str]:
        return [call[0] for call in self.calls]

    def calls_of(self, op: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == op]

    async def create_entity(self, collection: str, payload: dict[str, Any]) -> EntityHandle:
        self.calls.append(("create", collection, payload))
        await self._pause()
        self._check("create")
        self._next_id += 1
        key = str(self._next_id)
        return EntityHandle(collection=collection, key=key, data={"ID": key, **payload})

    async def bind_collection(self, collection: str, filters: list) -> CollectionView:
        self.calls.append(("bind", collection, filters))
        await self._pause()
        self._check("bind")
        return CollectionView(collection=collection, filters=list(filters), load_count=1)

    async def set_field(self, handle: EntityHandle, name: str, value: Any) -> None:
        self.calls.append(("set", handle.key, name, value))
        await self._pause()
        self._check("set")
        handle.staged[name] = value
        if not any(h is handle for h in self._staged):
            self._staged.append(handle)

    async def commit_batch(self, group_id: str) -> None:
        self.calls.append(("commit", group_id))
        await self._pause()
        batch = [(h, dict(h.staged)) for h in self._staged]
        self.batches.append(batch)
        try:
            self._check("commit")
            for handle, values in batch:
                handle.data.update(values)
        finally:
            for handle, _ in batch:
                handle.staged.clear()
            self._staged = []

    async def delete_entity(self, handle: EntityHandle) -> None:
        self.calls.append(("delete", handle.collection, handle.key))
        await self._pause()
        self._check("delete")
        handle.deleted = True

    async def refresh(self, view: CollectionView) -> None:
        self.calls.append(("refresh", view.collection))
        await self._pause()
        self._check("refresh")
        view.load_count += 1


class FakeDialog:
    def __init__(self, name: str) -> None:
        self.name = name
        self.values: dict[str, str] = {}
        self.is_open = False
        self.destroyed = False


class FakePresenter:
    def __init__(self) -> None:
        self.loads: list[str] = []
        self.dialogs: list[FakeDialog] = []
        self.fail_load: Exception | None = None
        self.delay = 0.0

    @property
    def current(self) -> FakeDialog:
        return self.dialogs[-1]

    async def load(self, name: str) -> FakeDialog:
        self.loads.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_load is not None:
            raise self.fail_load
        dialog = FakeDialog(name)
        self.dialogs.append(dialog)
        return dialog

    def open(self, handle: FakeDialog) -> None:
        handle.is_open = True

    def close(self, handle: FakeDialog) -> None:
        handle.is_open = False

    def destroy(self, handle: FakeDialog) -> None:
        handle.destroyed = True

    def get_value(self, handle: FakeDialog, field: str) -> str:
        return handle.values.get(field, "")

    def set_value(self, handle: FakeDialog, field: str, value: str) -> None:
        handle.values[field] = value


class FakeNotifier:
    def __init__(self) -> None:
        self.toasts: list[str] = []
        self.errors: list[str] = []
        self.prompts: list[str] = []
        self.answer = True

    def toast(self, message: str) -> None:
        self.toasts.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    async def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


class FakeListView:
    def __init__(self, binding: CollectionView | None = None) -> None:
        self.selected: list[EntityHandle] = []
        self._binding = binding
        self.events: list[str] = []

    @property
    def binding(self) -> CollectionView | None:
        return self._binding

    def get_selected(self) -> list[EntityHandle]:
        return list(self.selected)

    def bind(self, view: CollectionView) -> None:
        self._binding = view
        self.events.append("bind")

    def unbind(self) -> None:
        self._binding = None
        self.events.append("unbind")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def presenter():
    return FakePresenter()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def author_list():
    """Author list already bound to the Authors collection by the host."""
    return FakeListView(binding=CollectionView(collection="Authors"))


@pytest.fixture
def book_table():
    """Book table, unbound until an author is selected."""
    return FakeListView()


@pytest.fixture
def controller(gateway, presenter, notifier, author_list, book_table):
    return BookListController(
        gateway=gateway,
        presenter=presenter,
        notifier=notifier,
        author_list=author_list,
        book_table=book_table,
    )


@pytest.fixture
def make_author():
    """Factory for author rows as the author list would hold them."""

    def _make(key: str = "a-1", name: str = "Ada Lovelace", bio: str = "Mathematician") -> EntityHandle:
        return EntityHandle(
            collection="Authors",
            key=key,
            data={"ID": key, "name": name, "bio": bio, "isDeleted": False},
        )

    return _make


@pytest.fixture
def make_book():
    """Factory for book rows as the book table would hold them."""

    def _make(key: str = "b-1", author_id: str = "a-1", **fields: Any) -> EntityHandle:
        data = {
            "ID": key,
            "author_ID": author_id,
            "title": "Notes on the Analytical Engine",
            "descr": "Translation with notes",
            "stock": 5,
            "price": "19.99",
            "currency_code": "GBP",
            "isDeleted": False,
        }
        data.update(fields)
        return EntityHandle(collection="Books", key=key, data=data)

    return _make


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for gateway tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.neq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client
