"""
Tests for the warehouse SKU mapper API.

Everything runs against an in-memory Supabase stand-in (tests/conftest.py);
no network or database is needed.

    pytest
    pytest tests/unit/test_ingestion_service.py -v
"""
