"""
Bookshelf - Dialog field descriptors.

Each editable field is described once: its logical dialog name, the record
field it maps to on the remote collection, and how text from the dialog is
parsed (and record values formatted back) on the way through.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from bookshelf.core.protocols import DialogPresenter

_LEADING_INT = re.compile(r"[+-]?\d+")


def trimmed(text: str) -> str:
    return (text or "").strip()


def parse_stock(text: str) -> int | float:
    """
    Parse stock the way the dialog input reads: leading integer digits.

    Non-numeric input yields NaN. It is passed through untouched so the
    gateway rejects it instead of the value being coerced here.
    """
    match = _LEADING_INT.match(trimmed(text))
    if match is None:
        return math.nan
    return int(match.group())


def normalize_currency(text: str) -> str:
    return trimmed(text).upper()


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class FieldDescriptor:
    """Maps one dialog field to one record field."""

    name: str
    remote: str
    parse: Callable[[str], Any] = trimmed
    format: Callable[[Any], str] = as_text

    def read(self, presenter: DialogPresenter, dialog: Any) -> Any:
        return self.parse(presenter.get_value(dialog, self.name))

    def prefill(self, presenter: DialogPresenter, dialog: Any, record: dict[str, Any]) -> None:
        presenter.set_value(dialog, self.name, self.format(record.get(self.remote)))


AUTHOR_FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor("name", "name"),
    FieldDescriptor("bio", "bio"),
)

BOOK_FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor("title", "title"),
    FieldDescriptor("descr", "descr"),
    FieldDescriptor("stock", "stock", parse=parse_stock),
    FieldDescriptor("price", "price"),
    FieldDescriptor("currencyCode", "currency_code", parse=normalize_currency),
)


def read_fields(
    fields: tuple[FieldDescriptor, ...],
    presenter: DialogPresenter,
    dialog: Any,
) -> dict[str, Any]:
    """Read and parse every field. Keys are remote record field names."""
    return {f.remote: f.read(presenter, dialog) for f in fields}


def prefill_fields(
    fields: tuple[FieldDescriptor, ...],
    presenter: DialogPresenter,
    dialog: Any,
    record: dict[str, Any],
) -> None:
    for f in fields:
        f.prefill(presenter, dialog, record)
