"""
Tests for dialog field descriptors: parsing, normalizing, prefilling.
"""

import math

from bookshelf.core.fields import (
    AUTHOR_FIELDS,
    BOOK_FIELDS,
    normalize_currency,
    parse_stock,
    prefill_fields,
    read_fields,
    trimmed,
)


class TestParsers:
    def test_trimmed(self):
        assert trimmed("  Ada ") == "Ada"
        assert trimmed("") == ""
        assert trimmed(None) == ""

    def test_parse_stock_integer(self):
        assert parse_stock("12") == 12
        assert parse_stock(" 7 ") == 7
        assert parse_stock("-3") == -3

    def test_parse_stock_leading_digits(self):
        assert parse_stock("12 copies") == 12

    def test_parse_stock_non_numeric_is_nan(self):
        assert math.isnan(parse_stock("twelve"))
        assert math.isnan(parse_stock(""))

    def test_normalize_currency(self):
        assert normalize_currency(" eur ") == "EUR"


class TestDescriptorTables:
    def test_author_fields(self):
        assert [f.name for f in AUTHOR_FIELDS] == ["name", "bio"]

    def test_book_fields_map_currency_to_flat_column(self):
        by_name = {f.name: f.remote for f in BOOK_FIELDS}
        assert by_name == {
            "title": "title",
            "descr": "descr",
            "stock": "stock",
            "price": "price",
            "currencyCode": "currency_code",
        }

    def test_read_fields_parses_each_value(self, presenter):
        dialog = object()
        values = {
            "title": " Sketch ",
            "descr": " notes ",
            "stock": " 12 ",
            "price": " 9.50 ",
            "currencyCode": "usd",
        }
        presenter.get_value = lambda handle, field: values[field]

        assert read_fields(BOOK_FIELDS, presenter, dialog) == {
            "title": "Sketch",
            "descr": "notes",
            "stock": 12,
            "price": "9.50",
            "currency_code": "USD",
        }

    def test_prefill_formats_record_values(self, presenter, make_book):
        dialog = type("Dialog", (), {"values": {}})()
        presenter.set_value = lambda handle, field, value: handle.values.__setitem__(field, value)

        prefill_fields(BOOK_FIELDS, presenter, dialog, make_book(stock=5, descr=None).get_object())

        assert dialog.values["stock"] == "5"
        assert dialog.values["descr"] == ""
        assert dialog.values["currencyCode"] == "GBP"
