"""
Unit tests for the CSV line parser and column resolver.

Run: pytest tests/unit/test_csv_parser.py -v
"""

import pytest

from parsers.csv_parser import (
    resolve_column,
    has_identifier_column,
    parse_csv_line,
    parse_header,
    parse_row,
    split_lines,
    SKU_ALIASES,
    REVENUE_ALIASES,
    QUANTITY_ALIASES,
)


class TestParseCsvLine:
    """Tests for parse_csv_line()"""

    def test_splits_and_trims_fields(self):
        assert parse_csv_line("a, b ,c") == ["a", "b", "c"]

    def test_comma_inside_quotes_does_not_split(self):
        assert parse_csv_line('"Pen, Blue",2,amazon') == ["Pen, Blue", "2", "amazon"]

    def test_quote_characters_are_dropped(self):
        assert parse_csv_line('"pen",  "3"') == ["pen", "3"]

    def test_doubled_quotes_are_not_unescaped(self):
        """Each quote just toggles quoted mode; no literal quote survives."""
        assert parse_csv_line('"say ""hi""",1') == ["say hi", "1"]

    def test_empty_cells_are_kept(self):
        assert parse_csv_line("pen,,") == ["pen", "", ""]

    def test_empty_line_is_one_empty_field(self):
        assert parse_csv_line("") == [""]


class TestSplitLines:
    """Tests for split_lines()"""

    @pytest.mark.parametrize("text", [
        "sku,qty\npen,1\n",
        "sku,qty\r\npen,1\r\n",
        "sku,qty\rpen,1\r",
    ])
    def test_handles_line_endings(self, text):
        assert split_lines(text) == ["sku,qty", "pen,1"]

    def test_drops_blank_lines(self):
        assert split_lines("sku\n\n  \npen\n") == ["sku", "pen"]


class TestParseHeaderAndRow:
    """Tests for parse_header() and parse_row()"""

    def test_header_strips_byte_order_mark(self):
        assert parse_header("\ufeffSKU,Quantity") == ["SKU", "Quantity"]

    def test_row_pads_missing_cells(self):
        row = parse_row(["sku", "quantity", "revenue"], "pen,2")

        assert row == {"sku": "pen", "quantity": "2", "revenue": ""}

    def test_row_ignores_extra_cells(self):
        row = parse_row(["sku"], "pen,2,extra")

        assert row == {"sku": "pen"}


class TestResolveColumn:
    """Tests for resolve_column()"""

    def test_matches_header_by_substring_case_insensitive(self):
        row = {"Product SKU": "pen-blue", "Qty": "2"}

        assert resolve_column(row, SKU_ALIASES) == "pen-blue"

    def test_candidate_priority_beats_header_order(self):
        """The "sku" alias is tried before "asin", whatever the column order."""
        row = {"ASIN": "B0001", "Seller SKU": "pen"}

        assert resolve_column(row, SKU_ALIASES) == "pen"

    def test_first_header_wins_within_one_candidate(self):
        row = {"sku_parent": "parent", "sku": "child"}

        assert resolve_column(row, ["sku"]) == "parent"

    def test_no_match_returns_empty_string(self):
        assert resolve_column({"foo": "bar"}, QUANTITY_ALIASES) == ""

    def test_none_value_becomes_empty_string(self):
        assert resolve_column({"revenue": None}, REVENUE_ALIASES) == ""


class TestHasIdentifierColumn:
    """Tests for has_identifier_column()"""

    @pytest.mark.parametrize("headers", [
        ["SKU", "Qty"],
        ["Product Name"],
        ["FSN"],
        ["asin", "price"],
        ["MSKU"],
    ])
    def test_accepts_identifier_like_headers(self, headers):
        assert has_identifier_column(headers) is True

    def test_rejects_files_without_identifier(self):
        assert has_identifier_column(["date", "quantity", "revenue"]) is False
