"""
Database connection factory utilities for the warehouse seeder.

Provides centralized management of the PostgreSQL connection pool with proper
lifecycle management. The PoolManager singleton ensures the pool is closed on
application exit.

Pooled connections run in autocommit mode: every statement commits on its own
unless it is issued inside an explicit transaction (see
`warehouse.infrastructure.transaction`).

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

import atexit
import threading
from typing import Optional

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from warehouse.config import get_settings
from warehouse.utils.logging import get_logger

log = get_logger(__name__)


class PoolManager:
    """
    Thread-safe singleton for managing the database connection pool.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "PoolManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._sync_pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_sync_pool(self) -> ConnectionPool:
        """
        Get or create the synchronous connection pool.

        Pool sizes come from settings (`DB_POOL_MIN_SIZE`, `DB_POOL_MAX_SIZE`).

        Returns
        -------
        ConnectionPool
            The managed pool instance.
        """
        with self._lock:
            if self._sync_pool is None:
                settings = get_settings()
                self._sync_pool = ConnectionPool(
                    conninfo=build_dsn(),
                    min_size=settings.pool_min_size,
                    max_size=settings.pool_max_size,
                    kwargs={"autocommit": True},
                    open=True,
                )
                log.debug(
                    "Connection pool opened",
                    extra={"host": settings.db_host, "database": settings.db_name},
                )
            return self._sync_pool

    def close_all(self) -> None:
        """
        Close the managed pool and release its connections.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            if self._sync_pool is not None:
                pool, self._sync_pool = self._sync_pool, None
                pool.close()


def build_dsn() -> str:
    """Compose a DSN string from settings."""
    return get_settings().dsn


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated autocommit connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off operations. Prefer the pool for repeated use.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn(), autocommit=True)


def check_connection(dsn: Optional[str] = None) -> str:
    """
    Verify the database is reachable and return the server version string.
    """
    with get_sync_connection(dsn) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT version();")
            row = cur.fetchone()
    return row[0] if row else ""


def get_sync_pool() -> ConnectionPool:
    """
    Get or create the connection pool via PoolManager.
    """
    manager = PoolManager()
    return manager.get_sync_pool()


__all__ = [
    "PoolManager",
    "build_dsn",
    "check_connection",
    "get_sync_connection",
    "get_sync_pool",
]
