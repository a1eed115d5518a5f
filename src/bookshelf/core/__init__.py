"""
Bookshelf - Editing session core.

Host-independent state and contracts: dialog lifecycle, the editing
session, field descriptor tables, and the collaborator protocols.
"""

from bookshelf.core.dialogs import DialogKind, DialogSlot, DialogState, DialogStateError
from bookshelf.core.handles import CollectionView, EntityHandle, FilterClause
from bookshelf.core.protocols import (
    DialogPresenter,
    GatewayError,
    ListHost,
    Notifier,
    RemoteGateway,
    SelectionProvider,
)
from bookshelf.core.session import EditingSession

__all__ = [
    "CollectionView",
    "DialogKind",
    "DialogPresenter",
    "DialogSlot",
    "DialogState",
    "DialogStateError",
    "EditingSession",
    "EntityHandle",
    "FilterClause",
    "GatewayError",
    "ListHost",
    "Notifier",
    "RemoteGateway",
    "SelectionProvider",
]
