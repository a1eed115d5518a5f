"""
Bookshelf - Supabase Gateway.

Implements RemoteGateway on top of the Supabase/PostgREST query builder:
- create_entity: validate against the collection's create model, INSERT
- bind_collection / refresh: SELECT with the view's filters
- set_field: stage a value on the handle, enrol it in the update group
- commit_batch: one UPDATE per enrolled handle carrying all staged fields
- delete_entity: DELETE by key

Payloads are validated with the pydantic models in bookshelf.models before
anything is sent, so malformed input (empty names, NaN stock, bad currency
codes) is rejected here rather than coerced by the editing core.
"""

import logging
from typing import Any, Callable

from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError
from supabase import Client

from bookshelf.config import GatewaySettings, get_settings
from bookshelf.core.handles import CollectionView, EntityHandle, FilterClause
from bookshelf.core.protocols import GatewayError
from bookshelf.models import COLLECTION_MODELS

logger = logging.getLogger(__name__)

KEY_FIELD = "ID"


# =============================================================================
# Helpers
# =============================================================================


def apply_filter(query: Any, f: FilterClause) -> Any:
    """Apply a single filter clause to a Supabase query."""
    return query.eq(f.field, f.value)


def describe_validation_error(error: ValidationError) -> str:
    """First validation problem as a one-line, user-facing message."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if not location:
        return first["msg"]
    return f"Invalid {location}: {first['msg']}"


def _validate(model: type[BaseModel], payload: dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise GatewayError(describe_validation_error(e)) from e


# =============================================================================
# Gateway
# =============================================================================


class SupabaseGateway:
    """
    RemoteGateway backed by a Supabase client.

    Staged changes are tracked per update group. PostgREST has no multi-row
    transaction, so a group touching several handles sends one request per
    handle; every handle's fields still travel together in its request.
    """

    def __init__(
        self,
        client: Client,
        tables: dict[str, str],
        update_group_id: str = "$auto",
    ) -> None:
        self._client = client
        self._tables = dict(tables)
        self._update_group_id = update_group_id
        self._groups: dict[str, list[EntityHandle]] = {}

    @classmethod
    def from_settings(cls, settings: GatewaySettings | None = None) -> "SupabaseGateway":
        from bookshelf.db.client import get_client

        settings = settings or get_settings()
        return cls(
            client=get_client(),
            tables=settings.collection_tables,
            update_group_id=settings.update_group_id,
        )

    @property
    def update_group_id(self) -> str:
        return self._update_group_id

    def pending(self, group_id: str) -> list[EntityHandle]:
        """Handles currently enrolled in `group_id`."""
        return list(self._groups.get(group_id, []))

    def _table(self, collection: str) -> str:
        try:
            return self._tables[collection]
        except KeyError:
            raise GatewayError(f"Unknown collection '{collection}'") from None

    def _to_handle(self, collection: str, row: dict[str, Any]) -> EntityHandle:
        """Check a returned row against the read model and wrap it."""
        read_model, _, _ = COLLECTION_MODELS[collection]
        record = _validate(read_model, row)
        return EntityHandle(collection=collection, key=record.id, data=row)

    def _execute(self, action: str, request: Callable[[], Any]) -> Any:
        """Run a query, translating client failures into GatewayError."""
        try:
            return request()
        except APIError as e:
            logger.error(f"{action} rejected: {e.message}")
            raise GatewayError(e.message or str(e)) from e
        except Exception as e:
            logger.error(f"{action} failed: {e}")
            raise GatewayError(str(e)) from e

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_entity(self, collection: str, payload: dict[str, Any]) -> EntityHandle:
        table = self._table(collection)
        if not payload:
            raise GatewayError(f"Cannot create a {collection} entry from an empty payload")

        _, create_model, _ = COLLECTION_MODELS[collection]
        row = _validate(create_model, payload).to_row()

        result = self._execute(
            f"Create in {collection}",
            lambda: self._client.table(table).insert(row).execute(),
        )
        if not result.data:
            raise GatewayError(f"Failed to create {collection} entry")

        handle = self._to_handle(collection, result.data[0])
        logger.info(f"Created {collection}({handle.key})")
        return handle

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def bind_collection(self, collection: str, filters: list[FilterClause]) -> CollectionView:
        view = CollectionView(collection=collection, filters=list(filters))
        await self.refresh(view)
        return view

    async def refresh(self, view: CollectionView) -> None:
        table = self._table(view.collection)

        def request() -> Any:
            query = self._client.table(table).select("*")
            for f in view.filters:
                query = apply_filter(query, f)
            return query.execute()

        result = self._execute(f"Read {view.collection}", request)
        view.rows = [self._to_handle(view.collection, row) for row in result.data or []]
        view.load_count += 1

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def set_field(self, handle: EntityHandle, name: str, value: Any) -> None:
        if handle.deleted:
            raise GatewayError(f"{handle.collection} entry {handle.key} no longer exists")

        handle.staged[name] = value
        group = self._groups.setdefault(self._update_group_id, [])
        if not any(h is handle for h in group):
            group.append(handle)

    async def commit_batch(self, group_id: str) -> None:
        """
        Send every staged change in `group_id`.

        All handles are validated before the first request goes out. The
        group is cleared and staged values are discarded whether or not the
        commit succeeds.
        """
        handles = [h for h in self._groups.pop(group_id, []) if h.is_dirty]
        if not handles:
            return

        try:
            rows = []
            for handle in handles:
                _, _, patch_model = COLLECTION_MODELS[handle.collection]
                rows.append((handle, _validate(patch_model, handle.staged).to_wire()))

            for handle, row in rows:
                table = self._table(handle.collection)
                result = self._execute(
                    f"Update {handle.collection}({handle.key})",
                    lambda: self._client.table(table).update(row).eq(KEY_FIELD, handle.key).execute(),
                )
                if not result.data:
                    raise GatewayError(f"{handle.collection} entry {handle.key} not found")
                handle.data = {**handle.data, **result.data[0]}
                logger.info(f"Updated {handle.collection}({handle.key}): {sorted(row)}")
        finally:
            for handle in handles:
                handle.staged.clear()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete_entity(self, handle: EntityHandle) -> None:
        if handle.deleted:
            raise GatewayError(f"{handle.collection} entry {handle.key} was already deleted")

        table = self._table(handle.collection)
        self._execute(
            f"Delete {handle.collection}({handle.key})",
            lambda: self._client.table(table).delete().eq(KEY_FIELD, handle.key).execute(),
        )

        handle.deleted = True
        handle.staged.clear()
        for group in self._groups.values():
            group[:] = [h for h in group if h is not handle]
        logger.info(f"Deleted {handle.collection}({handle.key})")
