"""
Exception hierarchy for the warehouse seeder.

Database failures are not wrapped: psycopg.Error and psycopg_pool.PoolTimeout
propagate to the caller unchanged. The classes below cover conditions where
no driver exception is raised but the run cannot continue.
"""

from __future__ import annotations


class WarehouseError(Exception):
    """Base class for all errors raised by this package."""


class GenerationError(WarehouseError):
    """Synthetic data generation cannot proceed."""


class MissingResultError(GenerationError):
    """A query that must return a row returned none.

    Example:
        >>> raise MissingResultError("SELECT COUNT(*) FROM Customer")
        Traceback (most recent call last):
        ...
        MissingResultError: Query returned no row: SELECT COUNT(*) FROM Customer
    """

    def __init__(self, query: str) -> None:
        super().__init__(f"Query returned no row: {query}")
        self.query = query


class TransactionClosedError(WarehouseError):
    """A statement was attempted on a transaction that already ended."""

    def __init__(self, state: str) -> None:
        super().__init__(f"Transaction is already {state}")
        self.state = state


__all__ = [
    "WarehouseError",
    "GenerationError",
    "MissingResultError",
    "TransactionClosedError",
]
