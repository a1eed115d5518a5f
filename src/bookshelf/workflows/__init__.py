"""
Bookshelf - Editing workflows.

- selection: author selection and the author-scoped book binding
- authors: author create/edit/delete
- books: book create/edit/delete within the selected author
"""

from bookshelf.workflows.authors import AuthorWorkflow
from bookshelf.workflows.base import DeletePolicy, EntityWorkflow
from bookshelf.workflows.books import BookWorkflow
from bookshelf.workflows.selection import AUTHORS, BOOKS, BookScope, book_filters

__all__ = [
    "AUTHORS",
    "BOOKS",
    "AuthorWorkflow",
    "BookScope",
    "BookWorkflow",
    "DeletePolicy",
    "EntityWorkflow",
    "book_filters",
]
