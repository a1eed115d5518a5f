"""
Bookshelf - Entity handles and collection views.

An EntityHandle references one remote record and buffers staged field
changes until the gateway commits them. A CollectionView is a bound query
(collection + filters) whose rows the gateway loads and refreshes.
"""

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel


class FilterClause(BaseModel):
    """A single equality filter on a collection query."""

    field: str
    op: Literal["="] = "="
    value: Any


@dataclass
class EntityHandle:
    """
    Reference to one remote record plus its staged-edit buffer.

    `data` is the last known server state. `staged` holds field values set
    locally but not yet committed.
    """

    collection: str
    key: Any
    data: dict[str, Any] = field(default_factory=dict)
    staged: dict[str, Any] = field(default_factory=dict)
    deleted: bool = False

    @property
    def is_dirty(self) -> bool:
        return bool(self.staged)

    def get_object(self) -> dict[str, Any]:
        """Current field values as the host would display them (staged wins)."""
        return {**self.data, **self.staged}

    def get_property(self, name: str) -> Any:
        return self.get_object().get(name)


@dataclass
class CollectionView:
    """A bound collection query and the rows it last loaded."""

    collection: str
    filters: list[FilterClause] = field(default_factory=list)
    rows: list[EntityHandle] = field(default_factory=list)
    load_count: int = 0

    def filter_values(self) -> dict[str, Any]:
        """Equality filters as a field -> value mapping."""
        return {f.field: f.value for f in self.filters}
