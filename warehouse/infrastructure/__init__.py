"""
Infrastructure package for the warehouse seeder.

Centralizes database connectivity concerns (pooling, dedicated connections,
explicit transactions). Keep this layer focused on I/O and resource
management, decoupled from generation and reporting logic.
"""

from warehouse.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    check_connection,
    get_sync_connection,
    get_sync_pool,
)
from warehouse.infrastructure.transaction import Transaction, TransactionState, begin_transaction

__all__ = [
    "PoolManager",
    "build_dsn",
    "check_connection",
    "get_sync_connection",
    "get_sync_pool",
    "Transaction",
    "TransactionState",
    "begin_transaction",
]
