"""
Row normalizer for sales CSV rows.

Turns one raw header-keyed row into a sales fact candidate. Malformed
quantity, revenue and date cells never raise: they fall back to defaults.
Only a missing SKU identifier causes the row to be skipped.

Each coerced field is returned as Parsed(value) or Defaulted(value, reason)
so callers and tests can see when a default was substituted.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, Mapping, Optional, TypeVar, Union
import re
import warnings

import pandas as pd

from parsers.csv_parser import (
    resolve_column,
    SKU_ALIASES,
    NAME_ALIASES,
    MARKETPLACE_ALIASES,
    DATE_ALIASES,
    QUANTITY_ALIASES,
    REVENUE_ALIASES,
)

T = TypeVar("T")

DEFAULT_MARKETPLACE = "unknown"
DEFAULT_QUANTITY = 1
DEFAULT_REVENUE = Decimal("0")
REVENUE_PLACES = Decimal("0.01")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


# ===================
# FIELD RESULTS
# ===================

@dataclass(frozen=True)
class Parsed(Generic[T]):
    """Value read from the row as-is."""
    value: T

    @property
    def defaulted(self) -> bool:
        return False


@dataclass(frozen=True)
class Defaulted(Generic[T]):
    """Fallback value substituted because the cell was missing or malformed."""
    value: T
    reason: str

    @property
    def defaulted(self) -> bool:
        return True


FieldResult = Union[Parsed[T], Defaulted[T]]


# ===================
# OUTCOMES
# ===================

@dataclass
class NormalizedFact:
    """A row that can become a sales fact."""
    sku_code: str
    name: str
    marketplace: str
    quantity: int
    revenue: Decimal
    order_date: datetime
    raw_data: dict[str, Any]
    fields: dict[str, FieldResult] = field(default_factory=dict)

    @property
    def defaults(self) -> dict[str, str]:
        """Field name -> reason, for every field that fell back to a default."""
        return {
            name: result.reason
            for name, result in self.fields.items()
            if isinstance(result, Defaulted)
        }


@dataclass
class Skipped:
    """A row dropped because it has no SKU identifier."""
    reason: str
    raw_data: dict[str, Any]


# ===================
# FIELD PARSERS
# ===================

def parse_quantity(raw: Optional[str]) -> FieldResult[int]:
    """
    Parse the leading integer of a quantity cell.

    "3" -> 3, "12 units" -> 12, "2.9" -> 2. Empty, non-numeric,
    zero and negative values fall back to 1.
    """
    text = (raw or "").strip()
    if not text:
        return Defaulted(DEFAULT_QUANTITY, "missing")

    match = _LEADING_INT.match(text)
    if not match:
        return Defaulted(DEFAULT_QUANTITY, "not a number")

    value = int(match.group(1))
    if value <= 0:
        return Defaulted(DEFAULT_QUANTITY, "not positive")
    return Parsed(value)


def parse_revenue(raw: Optional[str]) -> FieldResult[Decimal]:
    """
    Parse a revenue cell after stripping currency symbols and separators.

    Every character except digits, "." and "-" is removed first, so
    "$1,234.56" -> Decimal("1234.56"). Anything unparseable becomes 0, as
    does a value too large to hold at two decimal places.
    """
    cleaned = _NON_NUMERIC.sub("", raw or "")
    if not cleaned:
        return Defaulted(DEFAULT_REVENUE, "missing")

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return Defaulted(DEFAULT_REVENUE, "not a number")

    if not value.is_finite():
        return Defaulted(DEFAULT_REVENUE, "not a number")

    try:
        return Parsed(value.quantize(REVENUE_PLACES))
    except InvalidOperation:
        return Defaulted(DEFAULT_REVENUE, "out of range")


def parse_order_date(raw: Optional[str], now: datetime) -> FieldResult[datetime]:
    """
    Parse an order date cell.

    Naive dates are taken as UTC. Empty or unparseable cells fall back to
    the processing instant.
    """
    text = (raw or "").strip()
    if not text:
        return Defaulted(now, "missing")

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, OverflowError, TypeError):
        return Defaulted(now, "unparseable")

    if parsed is None or pd.isna(parsed):
        return Defaulted(now, "unparseable")

    value = parsed.to_pydatetime()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return Parsed(value)


# ===================
# ROW NORMALIZATION
# ===================

def normalize_row(
    row: Mapping[str, Optional[str]],
    now: Optional[datetime] = None,
) -> Union[NormalizedFact, Skipped]:
    """
    Normalize one raw CSV row.

    Args:
        row: Header -> cell value, in file column order
        now: Processing instant used as the fallback order date

    Returns:
        NormalizedFact, or Skipped if the row has no SKU identifier
    """
    now = now or datetime.now(timezone.utc)
    raw_data = dict(row)

    sku_code = resolve_column(row, SKU_ALIASES).strip()
    if not sku_code:
        return Skipped(reason="missing SKU identifier", raw_data=raw_data)

    fields: dict[str, FieldResult] = {}

    name = resolve_column(row, NAME_ALIASES).strip()
    fields["name"] = Parsed(name) if name else Defaulted(sku_code, "missing")

    marketplace = resolve_column(row, MARKETPLACE_ALIASES).strip().lower()
    fields["marketplace"] = (
        Parsed(marketplace) if marketplace else Defaulted(DEFAULT_MARKETPLACE, "missing")
    )

    fields["quantity"] = parse_quantity(resolve_column(row, QUANTITY_ALIASES))
    fields["revenue"] = parse_revenue(resolve_column(row, REVENUE_ALIASES))
    fields["order_date"] = parse_order_date(resolve_column(row, DATE_ALIASES), now)

    return NormalizedFact(
        sku_code=sku_code,
        name=fields["name"].value,
        marketplace=fields["marketplace"].value,
        quantity=fields["quantity"].value,
        revenue=fields["revenue"].value,
        order_date=fields["order_date"].value,
        raw_data=raw_data,
        fields=fields,
    )
