"""
Bookshelf - Selection and filtered binding.

The book table always shows the books of exactly one author:
- author switches re-bind the table with a new filter
- data changes under an unchanged filter only refresh the binding
- no author selected unbinds the table entirely
"""

import logging
from typing import Any

from bookshelf.core.handles import FilterClause
from bookshelf.core.protocols import GatewayError, ListHost, Notifier, RemoteGateway, SelectionProvider
from bookshelf.core.session import EditingSession

logger = logging.getLogger(__name__)

AUTHORS = "Authors"
BOOKS = "Books"


def book_filters(author_id: Any) -> list[FilterClause]:
    """Filter predicate for the books of one author that are not deleted."""
    return [
        FilterClause(field="author_ID", op="=", value=author_id),
        FilterClause(field="isDeleted", op="=", value=False),
    ]


class BookScope:
    """Binds the book table to the session's selected author."""

    def __init__(
        self,
        session: EditingSession,
        gateway: RemoteGateway,
        notifier: Notifier,
        author_list: SelectionProvider,
        author_host: ListHost,
        book_host: ListHost,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._notifier = notifier
        self._author_list = author_list
        self._author_host = author_host
        self._book_host = book_host

    async def on_author_select(self) -> None:
        selected = self._author_list.get_selected()
        if not selected:
            self._session.selected_author_id = None
            self.unbind_books()
            return

        author_id = selected[0].key
        self._session.selected_author_id = author_id
        await self.bind_books(author_id)

    async def bind_books(self, author_id: Any) -> None:
        """Replace the book table's query with the given author's books."""
        if author_id is None:
            self.unbind_books()
            return

        try:
            view = await self._gateway.bind_collection(BOOKS, book_filters(author_id))
        except GatewayError as e:
            logger.error(f"Failed to bind books for author {author_id}: {e.message}")
            self._book_host.unbind()
            self._notifier.error(e.message)
            return

        self._book_host.bind(view)
        logger.debug(f"Bound books to author {author_id}")

    def unbind_books(self) -> None:
        self._book_host.unbind()
        logger.debug("Unbound books (no author selected)")

    def clear_author(self, author_id: Any) -> None:
        """Drop the selection if it points at `author_id`."""
        if author_id is None or self._session.selected_author_id != author_id:
            return
        self._session.selected_author_id = None
        self.unbind_books()

    async def refresh_books(self) -> None:
        await self._refresh(self._book_host, BOOKS)

    async def refresh_authors(self) -> None:
        await self._refresh(self._author_host, AUTHORS)

    async def _refresh(self, host: ListHost, collection: str) -> None:
        view = host.binding
        if view is None:
            return
        try:
            await self._gateway.refresh(view)
        except GatewayError as e:
            logger.error(f"Failed to refresh {collection}: {e.message}")
            self._notifier.error(e.message)
