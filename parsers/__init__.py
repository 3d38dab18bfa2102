"""
Sales file parsers.
"""

from parsers.csv_parser import (
    resolve_column,
    has_identifier_column,
    parse_csv_line,
    parse_header,
    parse_row,
    split_lines,
    IDENTIFIER_HEADER_KEYWORDS,
)
from parsers.row_normalizer import (
    normalize_row,
    NormalizedFact,
    Skipped,
    Parsed,
    Defaulted,
)

__all__ = [
    "resolve_column",
    "has_identifier_column",
    "parse_csv_line",
    "parse_header",
    "parse_row",
    "split_lines",
    "IDENTIFIER_HEADER_KEYWORDS",
    "normalize_row",
    "NormalizedFact",
    "Skipped",
    "Parsed",
    "Defaulted",
]
