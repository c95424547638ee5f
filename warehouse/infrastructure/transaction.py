"""
Explicit transaction scope on an autocommit connection.

`begin_transaction` switches auto-commit off, hands out a `Transaction` and
restores the previous mode afterwards, whatever happened inside the block.
`commit()` and `rollback()` are the only ways to end a transaction, and
cursors can only be opened while it is active.

Usage:
    with begin_transaction(conn) as tx:
        with tx.cursor() as cur:
            cur.execute(...)
    # committed here, or rolled back and re-raised
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from typing import Any, Generator

import psycopg
from psycopg.pq import TransactionStatus

from warehouse.errors import TransactionClosedError
from warehouse.utils.logging import get_logger

log = get_logger(__name__)


class TransactionState(str, enum.Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled back"


class Transaction:
    """A unit of work on one connection, ended by commit or rollback."""

    def __init__(self, conn: Any) -> None:
        self._conn = conn
        self.state = TransactionState.ACTIVE

    @property
    def active(self) -> bool:
        return self.state is TransactionState.ACTIVE

    def _ensure_active(self) -> None:
        if not self.active:
            raise TransactionClosedError(self.state.value)

    def cursor(self) -> Any:
        """Open a cursor that takes part in this transaction."""
        self._ensure_active()
        return self._conn.cursor()

    def commit(self) -> None:
        self._ensure_active()
        self._conn.commit()
        self.state = TransactionState.COMMITTED

    def rollback(self) -> None:
        self._ensure_active()
        # Marked first: a failing rollback must not be retried on exit.
        self.state = TransactionState.ROLLED_BACK
        self._conn.rollback()


def _is_idle(conn: Any) -> bool:
    # psycopg refuses to change autocommit unless the session is idle.
    return not conn.closed and conn.info.transaction_status == TransactionStatus.IDLE


@contextmanager
def begin_transaction(conn: Any) -> Generator[Transaction, None, None]:
    """
    Run the block inside one explicit transaction on `conn`.

    Commits when the block completes without ending the transaction itself,
    rolls back and re-raises when it raises. The error from the block is the
    one that surfaces, even when the rollback fails too. The connection's
    auto-commit flag is restored whenever the connection is still usable.
    """
    previous_autocommit = conn.autocommit
    conn.autocommit = False
    tx = Transaction(conn)
    try:
        yield tx
        if tx.active:
            tx.commit()
    except BaseException:
        if tx.active:
            log.debug("Rolling back transaction")
            try:
                tx.rollback()
            except psycopg.Error:
                log.warning("Rollback failed", exc_info=True)
        raise
    finally:
        if _is_idle(conn):
            conn.autocommit = previous_autocommit
        else:
            log.warning("Connection not idle; auto-commit left unchanged")


__all__ = ["Transaction", "TransactionState", "begin_transaction"]
