"""
Sales fact service.

Sales facts are written by ingestion, one per normalized CSV row, and read
back for reports, the dashboard chart and top-product rankings.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional
import structlog

from config import get_supabase_client
from models.sku import SKUResponse, MSKUResponse
from models.sales import (
    SalesFactCreate,
    SalesFactResponse,
    SalesFactWithDetails,
    TopProduct,
    SalesChartPoint,
)
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


def to_decimal(value) -> Decimal:
    """Stored revenue comes back as a string or number; treat junk as 0."""
    if value is None:
        return Decimal("0")
    try:
        return Decimal(str(value))
    except ArithmeticError:
        return Decimal("0")


def parse_timestamp(value) -> datetime:
    """Stored timestamps come back as ISO strings; naive ones are UTC."""
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SalesService:
    """
    Sales fact business logic.

    Aggregations are done in Python over the rows returned by the store.
    """

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "sales_data"
        self.skus_table = "skus"
        self.mskus_table = "mskus"

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: SalesFactCreate) -> SalesFactResponse:
        """
        Insert one sales fact.

        Returns:
            The stored fact
        """
        try:
            result = (
                self.db.table(self.table)
                .insert(data.model_dump(mode="json"))
                .execute()
            )
            fact = SalesFactResponse(**result.data[0])
            logger.debug(
                "sales_fact_created",
                sales_id=fact.id,
                sku_id=fact.sku_id,
                msku_id=fact.msku_id
            )
            return fact

        except Exception as e:
            logger.error("create_sales_fact_failed", sku_id=data.sku_id, error=str(e))
            raise DatabaseError("insert", str(e))

    # ===================
    # READ OPERATIONS
    # ===================

    def get_rows(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> list[dict]:
        """
        Raw sales rows, newest order first, optionally bounded by order date.

        Both bounds are inclusive.
        """
        try:
            query = self.db.table(self.table).select("*")
            if start_date:
                query = query.gte("order_date", start_date.isoformat())
            if end_date:
                query = query.lte("order_date", end_date.isoformat())
            result = query.order("order_date", desc=True).execute()
            return result.data

        except Exception as e:
            logger.error("get_sales_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def _lookup(self, table: str) -> dict[int, dict]:
        try:
            result = self.db.table(table).select("*").execute()
            return {row["id"]: row for row in result.data}
        except Exception as e:
            logger.error("get_lookup_failed", table=table, error=str(e))
            raise DatabaseError("select", str(e))

    def _with_details(self, rows: list[dict]) -> list[SalesFactWithDetails]:
        skus = self._lookup(self.skus_table)
        mskus = self._lookup(self.mskus_table)

        facts = []
        for row in rows:
            sku = skus.get(row["sku_id"])
            if sku is None:
                continue
            msku = mskus.get(row.get("msku_id"))
            facts.append(SalesFactWithDetails(
                **row,
                sku=SKUResponse(**sku),
                msku=MSKUResponse(**msku) if msku else None,
            ))
        return facts

    def get_all_with_details(self) -> list[SalesFactWithDetails]:
        """All sales facts with SKU and MSKU, newest order first."""
        logger.info("getting_sales")
        facts = self._with_details(self.get_rows())
        logger.info("sales_retrieved", count=len(facts))
        return facts

    def get_by_date_range(
        self,
        start_date: datetime,
        end_date: datetime
    ) -> list[SalesFactWithDetails]:
        """Sales facts with order_date in [start_date, end_date], newest first."""
        logger.info(
            "getting_sales_by_date_range",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat()
        )
        return self._with_details(self.get_rows(start_date, end_date))

    def get_top_products(self, limit: int = 10) -> list[TopProduct]:
        """
        Top-selling MSKUs by total revenue.

        Facts without an MSKU are not counted.
        """
        mskus = self._lookup(self.mskus_table)

        revenue: dict[int, Decimal] = {}
        quantity: dict[int, int] = {}
        for row in self.get_rows():
            msku_id = row.get("msku_id")
            if msku_id is None or msku_id not in mskus:
                continue
            revenue[msku_id] = revenue.get(msku_id, Decimal("0")) + to_decimal(row.get("revenue"))
            quantity[msku_id] = quantity.get(msku_id, 0) + int(row.get("quantity") or 0)

        ranked = sorted(revenue, key=lambda k: revenue[k], reverse=True)[:limit]

        return [
            TopProduct(
                msku=MSKUResponse(**mskus[msku_id]),
                total_revenue=revenue[msku_id],
                total_quantity=quantity[msku_id],
            )
            for msku_id in ranked
        ]

    def get_chart_data(self, days: int = 7, now: Optional[datetime] = None) -> list[SalesChartPoint]:
        """
        Revenue per calendar day (UTC) for the last `days` days, oldest first.

        Days without sales are absent.
        """
        now = now or datetime.now(timezone.utc)
        start = now - timedelta(days=days)

        totals: dict[str, Decimal] = {}
        for row in self.get_rows(start_date=start):
            day = parse_timestamp(row["order_date"]).date().isoformat()
            totals[day] = totals.get(day, Decimal("0")) + to_decimal(row.get("revenue"))

        return [
            SalesChartPoint(date=day, revenue=totals[day])
            for day in sorted(totals)
        ]


_sales_service: Optional[SalesService] = None


def get_sales_service() -> SalesService:
    """Get or create sales service instance."""
    global _sales_service
    if _sales_service is None:
        _sales_service = SalesService()
    return _sales_service
