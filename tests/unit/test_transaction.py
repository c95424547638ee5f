from __future__ import annotations

import psycopg
import pytest
from psycopg.pq import TransactionStatus

from warehouse.errors import TransactionClosedError
from warehouse.infrastructure.transaction import TransactionState, begin_transaction


def test_block_runs_with_autocommit_off_and_commits(fake_conn) -> None:
    with begin_transaction(fake_conn) as tx:
        with tx.cursor() as cur:
            cur.execute("INSERT INTO Customer DEFAULT VALUES;")

    assert fake_conn.statements[0]["autocommit"] is False
    assert fake_conn.commits == 1
    assert fake_conn.rollbacks == 0
    assert tx.state is TransactionState.COMMITTED
    assert fake_conn.autocommit is True


def test_error_rolls_back_and_reraises_original(fake_conn) -> None:
    fake_conn.fail_when = lambda sql, params: "OrderLine" in sql

    with pytest.raises(psycopg.IntegrityError, match="forced failure"):
        with begin_transaction(fake_conn) as tx:
            with tx.cursor() as cur:
                cur.execute("INSERT INTO CustomerOrder VALUES (1) RETURNING orderId;")
                cur.executemany("INSERT INTO OrderLine VALUES (%s);", [(1,)])

    assert fake_conn.commits == 0
    assert fake_conn.rollbacks == 1
    assert tx.state is TransactionState.ROLLED_BACK
    assert fake_conn.autocommit is True


def test_previous_autocommit_mode_is_restored(fake_conn) -> None:
    fake_conn.autocommit = False

    with begin_transaction(fake_conn):
        pass

    assert fake_conn.autocommit is False


def test_explicit_commit_is_not_repeated_on_exit(fake_conn) -> None:
    with begin_transaction(fake_conn) as tx:
        tx.commit()

    assert fake_conn.commits == 1


def test_explicit_rollback_ends_without_commit(fake_conn) -> None:
    with begin_transaction(fake_conn) as tx:
        tx.rollback()

    assert fake_conn.commits == 0
    assert fake_conn.rollbacks == 1


def test_finished_transaction_refuses_new_statements(fake_conn) -> None:
    with begin_transaction(fake_conn) as tx:
        pass

    with pytest.raises(TransactionClosedError, match="committed"):
        tx.cursor()
    with pytest.raises(TransactionClosedError):
        tx.rollback()


def test_failed_commit_is_rolled_back(fake_conn) -> None:
    def _failing_commit() -> None:
        raise psycopg.OperationalError("connection lost")

    fake_conn.commit = _failing_commit

    with pytest.raises(psycopg.OperationalError):
        with begin_transaction(fake_conn):
            pass

    assert fake_conn.rollbacks == 1
    assert fake_conn.autocommit is True


def test_failed_rollback_does_not_hide_the_statement_error(fake_conn) -> None:
    def _broken_rollback() -> None:
        fake_conn.info.transaction_status = TransactionStatus.UNKNOWN
        raise psycopg.OperationalError("server closed the connection unexpectedly")

    fake_conn.rollback = _broken_rollback
    fake_conn.fail_when = lambda sql, params: "OrderLine" in sql

    with pytest.raises(psycopg.IntegrityError, match="forced failure"):
        with begin_transaction(fake_conn) as tx:
            with tx.cursor() as cur:
                cur.executemany("INSERT INTO OrderLine VALUES (%s);", [(1,)])

    assert tx.state is TransactionState.ROLLED_BACK
    # The session is no longer idle, so auto-commit cannot be switched back.
    assert fake_conn.autocommit is False


def test_closed_connection_keeps_the_original_error(fake_conn) -> None:
    def _drop_connection(sql, params) -> bool:
        fake_conn.closed = True
        fake_conn.info.transaction_status = TransactionStatus.UNKNOWN
        return True

    fake_conn.fail_when = _drop_connection

    with pytest.raises(psycopg.IntegrityError):
        with begin_transaction(fake_conn) as tx:
            with tx.cursor() as cur:
                cur.execute("INSERT INTO CustomerOrder VALUES (1) RETURNING orderId;")

    assert fake_conn.rollbacks == 1
    assert fake_conn.autocommit is False
