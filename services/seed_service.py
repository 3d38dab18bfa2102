"""
Sample data for local development.

Creates a small catalog of MSKUs, marketplace SKUs, mappings, inventory and
a month of random sales so the dashboard has something to show.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional
import random
import structlog

from config import get_supabase_client, get_admin_client, settings
from exceptions import SeedingNotAllowedError, DatabaseError

logger = structlog.get_logger(__name__)

SAMPLE_MSKUS = [
    {"msku": "CSTLE-PEN", "name": "Castle Pen Collection", "category": "Stationery"},
    {"msku": "GOLDEN-APPLE", "name": "Golden Apple Premium", "category": "Electronics"},
    {"msku": "TECH-GADGET", "name": "Tech Gadget Pro", "category": "Electronics"},
    {"msku": "HOME-DECOR", "name": "Home Decoration Set", "category": "Home & Garden"},
    {"msku": "SPORTS-GEAR", "name": "Sports Equipment", "category": "Sports"},
]

SAMPLE_SKUS = [
    {"sku": "pen", "name": "Basic Pen", "marketplace": "flipkart"},
    {"sku": "cstle-pen", "name": "Castle Pen", "marketplace": "flipkart"},
    {"sku": "pen-blue", "name": "Blue Pen", "marketplace": "amazon"},
    {"sku": "pen-blue2", "name": "Blue Pen v2", "marketplace": "shopify"},
    {"sku": "golden-apple-1", "name": "Golden Apple Device", "marketplace": "amazon"},
    {"sku": "tech-pro-x", "name": "Tech Pro X", "marketplace": "flipkart"},
    {"sku": "home-set-basic", "name": "Home Basic Set", "marketplace": "amazon"},
    {"sku": "sports-kit-1", "name": "Sports Kit Essential", "marketplace": "shopify"},
]

# (sku index, msku index, confidence, mapped_by); the last SKU stays unmapped
SAMPLE_MAPPINGS = [
    (0, 0, "0.95", "ai"),
    (1, 0, "0.98", "manual"),
    (2, 0, "0.85", "ai"),
    (3, 0, "0.90", "manual"),
    (4, 1, "0.99", "manual"),
    (5, 2, "0.92", "ai"),
    (6, 3, "0.88", "manual"),
]

# (msku index, warehouse, quantity, reserved)
SAMPLE_INVENTORY = [
    (0, "WH-001", 150, 10),
    (0, "WH-002", 85, 5),
    (1, "WH-001", 45, 8),
    (2, "WH-001", 75, 12),
    (2, "WH-003", 32, 2),
    (3, "WH-002", 0, 0),
    (4, "WH-001", 8, 3),
]

SALES_COUNT = 50
SALES_WINDOW_DAYS = 30
REGIONS = ["North", "South", "East", "West"]


class SeedService:
    """Populate an empty development database."""

    def __init__(self, db=None, rng: Optional[random.Random] = None):
        self.db = db or get_admin_client() or get_supabase_client()
        self.rng = rng or random.Random()

    def _insert(self, table: str, rows: list[dict]) -> list[dict]:
        try:
            return self.db.table(table).insert(rows).execute().data
        except Exception as e:
            logger.error("seed_insert_failed", table=table, error=str(e))
            raise DatabaseError("insert", str(e), details={"table": table})

    def seed(self, environment: Optional[str] = None, now: Optional[datetime] = None) -> dict[str, int]:
        """
        Insert the sample data set.

        Raises:
            SeedingNotAllowedError: Outside the development environment

        Returns:
            Rows created per table
        """
        environment = environment or settings.environment
        if environment != "development":
            raise SeedingNotAllowedError(environment)

        now = now or datetime.now(timezone.utc)
        logger.info("seeding_started")

        mskus = self._insert("mskus", SAMPLE_MSKUS)
        skus = self._insert("skus", SAMPLE_SKUS)

        mappings = [
            {
                "sku_id": skus[sku_index]["id"],
                "msku_id": mskus[msku_index]["id"],
                "confidence": confidence,
                "status": "active",
                "mapped_by": mapped_by,
            }
            for sku_index, msku_index, confidence, mapped_by in SAMPLE_MAPPINGS
        ]
        self._insert("sku_mappings", mappings)

        inventory = [
            {
                "msku_id": mskus[msku_index]["id"],
                "warehouse": warehouse,
                "quantity": quantity,
                "reserved_quantity": reserved,
            }
            for msku_index, warehouse, quantity, reserved in SAMPLE_INVENTORY
        ]
        self._insert("inventory", inventory)

        msku_by_sku = {m["sku_id"]: m["msku_id"] for m in mappings}
        sales = []
        for i in range(SALES_COUNT):
            sku = self.rng.choice(skus)
            order_date = now - timedelta(days=self.rng.randrange(SALES_WINDOW_DAYS))
            revenue = Decimal(str(self.rng.uniform(10, 110))).quantize(Decimal("0.01"))
            sales.append({
                "sku_id": sku["id"],
                "msku_id": msku_by_sku.get(sku["id"]),
                "order_date": order_date.isoformat(),
                "quantity": self.rng.randint(1, 5),
                "revenue": str(revenue),
                "marketplace": sku["marketplace"],
                "raw_data": {
                    "originalOrderId": f"ORD-{int(now.timestamp())}-{i}",
                    "customerRegion": self.rng.choice(REGIONS),
                },
            })
        self._insert("sales_data", sales)

        counts = {
            "mskus": len(mskus),
            "skus": len(skus),
            "sku_mappings": len(mappings),
            "inventory": len(inventory),
            "sales_data": len(sales),
        }
        logger.info("seeding_completed", **counts)
        return counts


def get_seed_service() -> SeedService:
    """Create a seed service (not cached; seeding is a one-off)."""
    return SeedService()
