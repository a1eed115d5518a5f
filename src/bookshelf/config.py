"""
Bookshelf - Configuration and settings.

EditorSettings contains only what the editing core needs.
GatewaySettings adds the Supabase connection used by SupabaseGateway.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

DeletePolicyName = Literal["soft", "hard"]


class EditorSettings(BaseSettings):
    """
    Settings for the editing session core.

    Nothing here requires a database connection.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    bookshelf_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Batch group used for staged field updates
    update_group_id: str = "$auto"

    # Soft delete flags isDeleted, hard delete removes the row
    author_delete_policy: DeletePolicyName = "soft"
    book_delete_policy: DeletePolicyName = "hard"

    @property
    def is_development(self) -> bool:
        return self.bookshelf_env == "development"

    @property
    def is_production(self) -> bool:
        return self.bookshelf_env == "production"


class GatewaySettings(EditorSettings):
    """
    Settings for the Supabase-backed gateway.

    Extends EditorSettings with connection and table names.
    """

    # Supabase
    supabase_url: str
    supabase_anon_key: str

    # Collection -> table mapping
    authors_table: str = "authors"
    books_table: str = "books"

    @property
    def collection_tables(self) -> dict[str, str]:
        return {"Authors": self.authors_table, "Books": self.books_table}


@lru_cache
def get_editor_settings() -> EditorSettings:
    """Get cached EditorSettings instance (no Supabase fields required)."""
    return EditorSettings()


@lru_cache
def get_settings() -> GatewaySettings:
    """Get cached GatewaySettings instance."""
    return GatewaySettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: GatewaySettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
