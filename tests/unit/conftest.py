"""
In-memory stand-ins for psycopg connections and pools.

The fakes record every statement together with the connection's autocommit
flag at the time it ran, answer SELECTs from a substring -> rows table and
hand out increasing ids for `INSERT ... RETURNING`.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

import psycopg
import pytest
from psycopg.pq import TransactionStatus


class FakeCursor:
    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self._result: List[Sequence[Any]] = []
        self.rowcount = -1

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def execute(self, sql: str, params: Optional[Sequence[Any]] = None) -> None:
        self._conn.record("execute", sql, params)
        if "RETURNING" in sql:
            self._conn.next_id += 1
            self._result = [(self._conn.next_id,)]
            return
        self._result = self._conn.lookup(sql)
        self.rowcount = self._conn.rowcount

    def executemany(self, sql: str, params_seq: Sequence[Sequence[Any]]) -> None:
        self._conn.record("executemany", sql, list(params_seq))

    def fetchone(self) -> Optional[Sequence[Any]]:
        return self._result[0] if self._result else None

    def fetchall(self) -> List[Sequence[Any]]:
        return list(self._result)


class FakeInfo:
    def __init__(self) -> None:
        self.transaction_status = TransactionStatus.IDLE


class FakeConnection:
    def __init__(self) -> None:
        self.autocommit = True
        self.closed = False
        self.info = FakeInfo()
        self.commits = 0
        self.rollbacks = 0
        self.next_id = 0
        self.rowcount = 0
        self.results: Dict[str, List[Sequence[Any]]] = {}
        self.statements: List[Dict[str, Any]] = []
        self.fail_when: Optional[Callable[[str, Any], bool]] = None

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def record(self, kind: str, sql: str, params: Any) -> None:
        if self.fail_when is not None and self.fail_when(sql, params):
            raise psycopg.IntegrityError(f"forced failure: {sql}")
        self.statements.append(
            {"kind": kind, "sql": sql, "params": params, "autocommit": self.autocommit}
        )

    def lookup(self, sql: str) -> List[Sequence[Any]]:
        for fragment, rows in self.results.items():
            if fragment in sql:
                return list(rows)
        return []

    def executed(self, fragment: str) -> List[Dict[str, Any]]:
        return [s for s in self.statements if fragment in s["sql"]]

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


class FakePool:
    def __init__(self, conn: FakeConnection) -> None:
        self.conn = conn
        self.checkouts = 0
        self.returns = 0

    @contextmanager
    def connection(self) -> Iterator[FakeConnection]:
        self.checkouts += 1
        try:
            yield self.conn
        finally:
            self.returns += 1


@pytest.fixture()
def fake_conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture()
def fake_pool(fake_conn: FakeConnection) -> FakePool:
    return FakePool(fake_conn)


@pytest.fixture()
def empty_schema(fake_conn: FakeConnection) -> FakeConnection:
    """Counts report empty tables; read-backs return a small catalogue."""
    fake_conn.results = {
        "COUNT(*) FROM Customer": [(0,)],
        "COUNT(*) FROM Product": [(0,)],
        "SELECT productId, price FROM Product": [
            (1, Decimal("19.99")),
            (2, Decimal("250.00")),
            (3, Decimal("12.50")),
            (4, Decimal("999.99")),
            (5, Decimal("75.25")),
            (6, Decimal("10.00")),
        ],
        "SELECT customerId FROM Customer": [(1,), (2,), (3,), (4,)],
    }
    return fake_conn


@pytest.fixture()
def fake_conn_factory() -> Callable[[], FakeConnection]:
    return FakeConnection
