"""
CSV parser for marketplace sales exports.

Sellers export sales from Amazon, Flipkart, Shopify and friends with
different header names, so columns are found by alias substring match
rather than by fixed position.
"""

from typing import Mapping, Optional, Sequence
import re


# ===================
# COLUMN ALIASES
# ===================

# Each list is a priority order: the first alias that matches any header wins.
SKU_ALIASES = ["sku", "product_sku", "productsku", "product_code", "fsn", "asin", "msku"]
NAME_ALIASES = ["product_name", "productname", "name", "title", "product_title", "product"]
MARKETPLACE_ALIASES = ["marketplace", "channel", "platform", "source"]
DATE_ALIASES = ["order_date", "orderdate", "date", "transaction_date", "ordered on", "invoice date"]
QUANTITY_ALIASES = ["quantity", "qty", "units", "count", "reconciled quantity"]
REVENUE_ALIASES = [
    "revenue", "price", "amount", "total", "value", "sales",
    "invoice amount", "selling price per item",
]

# A file must have at least one header containing one of these to be ingested.
IDENTIFIER_HEADER_KEYWORDS = ["sku", "product", "fsn", "asin", "msku"]

_LINE_BREAK = re.compile(r"\r?\n|\r")


# ===================
# COLUMN RESOLUTION
# ===================

def resolve_column(row: Mapping[str, Optional[str]], candidates: Sequence[str]) -> str:
    """
    Find the value for a semantic field by alias.

    For each candidate in priority order, headers are scanned in row order and
    the first header whose lower-cased text contains the candidate wins.

    Args:
        row: Header -> cell value
        candidates: Aliases, highest priority first

    Returns:
        The matching cell value, or "" if no header matches any alias
    """
    for candidate in candidates:
        for header, value in row.items():
            if candidate in header.lower():
                return value if value is not None else ""
    return ""


def has_identifier_column(headers: Sequence[str]) -> bool:
    """True if any header looks like a product identifier column."""
    return any(
        keyword in header.lower()
        for header in headers
        for keyword in IDENTIFIER_HEADER_KEYWORDS
    )


# ===================
# LINE PARSING
# ===================

def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed fields.

    A double quote toggles quoted mode; commas inside quotes do not split.
    Quote characters themselves are dropped. Doubled quotes ("") are not
    treated as an escaped quote: each one just toggles quoted mode again.

    Examples:
        'a, b ,c'            -> ['a', 'b', 'c']
        '"Pen, Blue",2'      -> ['Pen, Blue', '2']
        'say ""hi"" now,1'   -> ['say hi now', '1']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> list[str]:
    """Split file text into non-blank lines."""
    return [line for line in _LINE_BREAK.split(text) if line.strip()]


def parse_header(line: str) -> list[str]:
    """Parse the header line, dropping a UTF-8 byte order mark if present."""
    return parse_csv_line(line.lstrip("\ufeff"))


def parse_row(headers: Sequence[str], line: str) -> dict[str, str]:
    """
    Parse one data line into a header-keyed row.

    Missing trailing cells become ""; cells beyond the header count are ignored.
    """
    values = parse_csv_line(line)
    return {
        header: values[index] if index < len(values) else ""
        for index, header in enumerate(headers)
    }

