"""
Pytest configuration for the warehouse seeder.

Provides fixtures for:
- Database connection management
- Schema creation from db/init.sql
- Table cleanup between integration tests
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from warehouse.config import Settings

SCHEMA_PATH = Path(__file__).parent.parent / "db" / "init.sql"
WAREHOUSE_TABLES = "OrderLine, CustomerOrder, Product, Customer"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USERNAME", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "warehouse"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return test_settings.dsn


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.OperationalError:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the warehouse tables exist, creating them from db/init.sql.
    """
    with db_connection.cursor() as cur:
        cur.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
    return True


@pytest.fixture(scope="function")
def clean_warehouse(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty every warehouse table before and after each test function.

    Identities restart so a fresh run sees the same ids as the first one.
    """
    truncate = f"TRUNCATE TABLE {WAREHOUSE_TABLES} RESTART IDENTITY CASCADE;"
    with db_connection.cursor() as cur:
        cur.execute(truncate)
    yield
    with db_connection.cursor() as cur:
        cur.execute(truncate)


@pytest.fixture(scope="function")
def pool(test_dsn: str, clean_warehouse) -> Generator[ConnectionPool, None, None]:
    """
    A small autocommit pool configured like the application pool.
    """
    with ConnectionPool(
        conninfo=test_dsn, min_size=1, max_size=2, kwargs={"autocommit": True}, open=True
    ) as test_pool:
        yield test_pool
