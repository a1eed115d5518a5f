"""
Bookshelf - Author and book editing session manager.

Coordinates create/edit/delete workflows for authors and their books
against a remote data service:
- Core: dialog lifecycle, editing session, field descriptors, protocols
- Workflows: author CRUD, book CRUD, selection-scoped book binding
- DB: Supabase-backed remote gateway
"""

__version__ = "1.0.0"
