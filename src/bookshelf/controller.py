"""
Bookshelf - Book list controller.

Entry points the host view wires to its UI events. One controller, and one
EditingSession, per view. Every handler is a coroutine; the host schedules
it on its event loop when the event fires.

Usage:
    controller = BookListController.from_settings(
        presenter=dialogs,
        notifier=messages,
        author_list=author_list,
        book_table=book_table,
    )
    await controller.on_author_select()
    await controller.on_add_book()
"""

from typing import Any, Protocol

from bookshelf.config import EditorSettings, get_editor_settings
from bookshelf.core.protocols import DialogPresenter, ListHost, Notifier, RemoteGateway, SelectionProvider
from bookshelf.core.session import EditingSession
from bookshelf.workflows.authors import AuthorWorkflow
from bookshelf.workflows.base import DeletePolicy
from bookshelf.workflows.books import BookWorkflow
from bookshelf.workflows.selection import BookScope


class ListView(SelectionProvider, ListHost, Protocol):
    """A list or table that is both selectable and bindable."""


class BookListController:
    def __init__(
        self,
        *,
        gateway: RemoteGateway,
        presenter: DialogPresenter,
        notifier: Notifier,
        author_list: ListView,
        book_table: ListView,
        author_delete_policy: DeletePolicy = DeletePolicy.SOFT,
        book_delete_policy: DeletePolicy = DeletePolicy.HARD,
    ) -> None:
        self.session = EditingSession(presenter=presenter)
        self.scope = BookScope(
            session=self.session,
            gateway=gateway,
            notifier=notifier,
            author_list=author_list,
            author_host=author_list,
            book_host=book_table,
        )
        self.authors = AuthorWorkflow(
            session=self.session,
            gateway=gateway,
            notifier=notifier,
            selection=author_list,
            scope=self.scope,
            delete_policy=author_delete_policy,
        )
        self.books = BookWorkflow(
            session=self.session,
            gateway=gateway,
            notifier=notifier,
            selection=book_table,
            scope=self.scope,
            delete_policy=book_delete_policy,
        )

    @classmethod
    def from_settings(
        cls,
        *,
        presenter: DialogPresenter,
        notifier: Notifier,
        author_list: ListView,
        book_table: ListView,
        gateway: RemoteGateway | None = None,
        settings: EditorSettings | None = None,
    ) -> "BookListController":
        """Wire a controller from settings, defaulting to the Supabase gateway."""
        settings = settings or get_editor_settings()
        if gateway is None:
            from bookshelf.db.gateway import SupabaseGateway

            gateway = SupabaseGateway.from_settings()
        return cls(
            gateway=gateway,
            presenter=presenter,
            notifier=notifier,
            author_list=author_list,
            book_table=book_table,
            author_delete_policy=DeletePolicy(settings.author_delete_policy),
            book_delete_policy=DeletePolicy(settings.book_delete_policy),
        )

    @property
    def selected_author_id(self) -> Any:
        return self.session.selected_author_id

    # ------------------------------------------------------------------
    # Authors
    # ------------------------------------------------------------------

    async def on_add_author(self) -> None:
        await self.authors.open_add()

    async def on_add_author_confirm(self) -> None:
        await self.authors.confirm_add()

    async def on_edit_author(self) -> None:
        await self.authors.open_edit()

    async def on_edit_author_confirm(self) -> None:
        await self.authors.confirm_edit()

    async def on_delete_author(self) -> None:
        await self.authors.delete()

    async def on_author_select(self) -> None:
        await self.scope.on_author_select()

    # ------------------------------------------------------------------
    # Books
    # ------------------------------------------------------------------

    async def on_add_book(self) -> None:
        await self.books.open_add()

    async def on_add_book_confirm(self) -> None:
        await self.books.confirm_add()

    async def on_edit_book(self) -> None:
        await self.books.open_edit()

    async def on_edit_book_confirm(self) -> None:
        await self.books.confirm_edit()

    async def on_delete_book(self) -> None:
        await self.books.delete()

    # ------------------------------------------------------------------
    # Dialogs / view
    # ------------------------------------------------------------------

    def on_dialog_cancel(self) -> None:
        """Cancel closes and destroys whichever dialog is loaded."""
        self.session.close_all()

    def on_exit(self) -> None:
        """View teardown: destroy dependent dialogs, drop the pending edit."""
        self.session.close_all()
        self.session.selected_author_id = None
