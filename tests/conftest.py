"""
Shared test fixtures.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings are loaded at import time; required values must exist first
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from copy import deepcopy
from datetime import datetime, timedelta, timezone
from typing import Generator, Optional
from unittest.mock import MagicMock

# ===================
# IN-MEMORY SUPABASE CLIENT
# ===================

# Columns the database fills in on insert
TABLE_DEFAULTS = {
    "skus": {"created_at": None},
    "mskus": {"created_at": None, "category": None},
    "sku_mappings": {
        "created_at": None,
        "confidence": "1.00",
        "status": "active",
        "mapped_by": "manual",
    },
    "inventory": {"last_updated": None, "quantity": 0, "reserved_quantity": 0},
    "sales_data": {"processed_at": None, "msku_id": None, "raw_data": None},
    "file_uploads": {
        "uploaded_at": None,
        "status": "pending",
        "progress": 0,
        "rows_processed": 0,
        "total_rows": 0,
        "error_message": None,
    },
}


def _comparable(value):
    """ISO timestamp strings compare as datetimes; everything else as-is."""
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return value


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        self.count = count


class MockSupabaseQuery:
    """
    Chainable query over one in-memory table.

    Supports the subset of the PostgREST builder the services use.
    """

    def __init__(self, client: "MockSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._operation = "select"
        self._payload = None
        self._filters = []
        self._order = []
        self._limit = None
        self._range = None
        self._count = None
        self._is_single = False

    # Operations

    def select(self, *args, count: Optional[str] = None, **kwargs):
        self._operation = "select"
        self._count = count
        return self

    def insert(self, data):
        self._operation = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._operation = "update"
        self._payload = data
        return self

    def delete(self):
        self._operation = "delete"
        return self

    # Filters

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def gte(self, column, value):
        self._filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) >= _comparable(value)
        )
        return self

    def lte(self, column, value):
        self._filters.append(
            lambda row: row.get(column) is not None
            and _comparable(row[column]) <= _comparable(value)
        )
        return self

    # Modifiers

    def order(self, column, desc: bool = False, **kwargs):
        self._order.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def single(self):
        self._is_single = True
        return self

    # Execution

    def _matching(self, rows: list) -> list:
        return [row for row in rows if all(f(row) for f in self._filters)]

    def execute(self) -> MockSupabaseResponse:
        self._client.check_failure(self._table, self._operation)
        rows = self._client.rows(self._table)

        if self._operation == "insert":
            items = self._payload if isinstance(self._payload, list) else [self._payload]
            created = [self._client.add_row(self._table, item) for item in items]
            return MockSupabaseResponse(data=deepcopy(created), count=len(created))

        matched = self._matching(rows)

        if self._operation == "update":
            for row in matched:
                row.update(deepcopy(self._payload))
            return MockSupabaseResponse(data=deepcopy(matched), count=len(matched))

        if self._operation == "delete":
            for row in matched:
                rows.remove(row)
            return MockSupabaseResponse(data=deepcopy(matched), count=len(matched))

        for column, descending in reversed(self._order):
            matched = sorted(
                matched,
                key=lambda row: (
                    row.get(column) is None,
                    _comparable(row[column]) if row.get(column) is not None else 0,
                ),
                reverse=descending,
            )

        total = len(matched)
        if self._range:
            matched = matched[self._range[0]:self._range[1] + 1]
        if self._limit is not None:
            matched = matched[:self._limit]

        count = total if self._count else None

        if self._is_single:
            return MockSupabaseResponse(data=deepcopy(matched[0]) if matched else None, count=count)
        return MockSupabaseResponse(data=deepcopy(matched), count=count)


class MockSupabaseClient:
    """
    Stateful in-memory stand-in for the Supabase client.

    Inserts assign serial ids and fill the database defaults, so services
    can be exercised end to end without a network.
    """

    def __init__(self):
        self._tables: dict[str, list] = {}
        self._next_ids: dict[str, int] = {}
        self._failures: set = set()
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Replace a table's rows."""
        self._tables[table_name] = deepcopy(data)
        self._next_ids[table_name] = max((row.get("id", 0) for row in data), default=0) + 1

    def rows(self, table_name: str) -> list:
        """Live rows of a table (mutations are visible)."""
        return self._tables.setdefault(table_name, [])

    def add_row(self, table_name: str, item: dict) -> dict:
        row_id = self._next_ids.get(table_name, 1)
        self._next_ids[table_name] = row_id + 1

        self._clock += timedelta(seconds=1)
        row = {"id": row_id}
        for column, default in TABLE_DEFAULTS.get(table_name, {}).items():
            row[column] = default
            if column in ("created_at", "last_updated", "processed_at", "uploaded_at"):
                row[column] = self._clock.isoformat()
        row.update(deepcopy(item))
        self.rows(table_name).append(row)
        return row

    def fail(self, table_name: str, operation: str):
        """Make every `operation` on `table_name` raise."""
        self._failures.add((table_name, operation))

    def check_failure(self, table_name: str, operation: str):
        if (table_name, operation) in self._failures:
            raise RuntimeError(f"simulated {operation} failure on {table_name}")

    def table(self, name: str) -> MockSupabaseQuery:
        """Start a query on a table."""
        return MockSupabaseQuery(self, name)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create an empty in-memory Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("skus", [SKUFactory.create()])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_ai_client() -> MagicMock:
    """Anthropic client double; set messages.create.return_value per test."""
    return MagicMock()


@pytest.fixture
def services(mock_supabase, mock_ai_client):
    """Service container wired to the in-memory client."""
    from services.container import ServiceContainer

    return ServiceContainer.build(db=mock_supabase, ai_client=mock_ai_client)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> Path:
    """Point uploads at a temporary directory."""
    from config import settings

    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(directory))
    return directory


@pytest.fixture
def write_csv(tmp_path):
    """
    Write CSV text to a temp file and return its path.

    Usage:
        path = write_csv("sku,quantity\\npen,2\\n")
    """
    counter = {"n": 0}

    def _write(text: str, name: Optional[str] = None, encoding: str = "utf-8") -> Path:
        counter["n"] += 1
        path = tmp_path / (name or f"upload-{counter['n']}")
        path.write_bytes(text.encode(encoding))
        return path

    return _write


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(services) -> Generator:
    """
    Create FastAPI test client backed by the in-memory client.

    Usage:
        def test_endpoint(test_client, mock_supabase):
            response = test_client.get("/api/skus")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    app.state.services = services
    yield TestClient(app)
    app.state.services = None
