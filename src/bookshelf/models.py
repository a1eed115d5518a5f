"""
Bookshelf - Record and payload models.

Models use the remote field names as aliases (ID, author_ID, isDeleted,
currency_code) so payloads validate and dump in wire shape.

Book payloads are asymmetric: create nests the currency as
{"currency": {"code": ...}}, read and update use the flat currency_code.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CURRENCY_PATTERN = r"^[A-Z]{3}$"
PRICE_PATTERN = r"^\d+(\.\d+)?$"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)

    def to_row(self) -> dict[str, Any]:
        """Row shape stored in the table. Same as the wire shape unless overridden."""
        return self.to_wire()


# =============================================================================
# Authors
# =============================================================================


class Author(_WireModel):
    """An author as read from the Authors collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Any = Field(alias="ID")
    name: str
    bio: str | None = None
    is_deleted: bool = Field(False, alias="isDeleted")


class AuthorCreate(_WireModel):
    name: str = Field(min_length=1)
    bio: str = ""


class AuthorPatch(_WireModel):
    """Staged field changes for an existing author."""

    name: str | None = Field(None, min_length=1)
    bio: str | None = None
    is_deleted: bool | None = Field(None, alias="isDeleted")


# =============================================================================
# Books
# =============================================================================


class CurrencyRef(_WireModel):
    code: str = Field(pattern=CURRENCY_PATTERN)


class Book(_WireModel):
    """A book as read from the Books collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Any = Field(alias="ID")
    author_id: Any = Field(alias="author_ID")
    title: str
    descr: str | None = None
    stock: int | None = 0
    price: str | float | None = None
    currency_code: str | None = None
    is_deleted: bool = Field(False, alias="isDeleted")


class BookCreate(_WireModel):
    author_id: str | int = Field(alias="author_ID")
    title: str = Field(min_length=1)
    descr: str = ""
    stock: int = Field(ge=0)
    price: str = Field(pattern=PRICE_PATTERN)
    currency: CurrencyRef

    def to_row(self) -> dict[str, Any]:
        """Flatten the nested currency into the currency_code column."""
        row = self.to_wire()
        row["currency_code"] = row.pop("currency")["code"]
        return row


class BookPatch(_WireModel):
    """Staged field changes for an existing book. author_ID is immutable."""

    title: str | None = Field(None, min_length=1)
    descr: str | None = None
    stock: int | None = Field(None, ge=0)
    price: str | None = Field(None, pattern=PRICE_PATTERN)
    currency_code: str | None = Field(None, pattern=CURRENCY_PATTERN)
    is_deleted: bool | None = Field(None, alias="isDeleted")


# Collection name -> (read model, create model, patch model)
COLLECTION_MODELS: dict[str, tuple[type[_WireModel], type[_WireModel], type[_WireModel]]] = {
    "Authors": (Author, AuthorCreate, AuthorPatch),
    "Books": (Book, BookCreate, BookPatch),
}
