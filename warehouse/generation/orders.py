"""
Order graph generator.

Every customer gets one CustomerOrder and 1-5 OrderLines, written as a single
transaction. Line prices come from a price snapshot taken once per run, so a
later price change never alters historical order lines.
"""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from warehouse.domain.models import CustomerOrder, OrderGraph, OrderLine, ProductPrice
from warehouse.errors import GenerationError, MissingResultError
from warehouse.generation.random_source import RandomSource
from warehouse.infrastructure.transaction import begin_transaction
from warehouse.utils.logging import get_logger

log = get_logger(__name__)

MAX_DAYS_OFFSET = 179
MAX_ITEMS_PER_ORDER = 5
MAX_QUANTITY = 3

SELECT_PRICES = "SELECT productId, price FROM Product ORDER BY productId;"
SELECT_CUSTOMER_IDS = "SELECT customerId FROM Customer ORDER BY customerId;"
INSERT_ORDER = (
    "INSERT INTO CustomerOrder (customerId, orderDate, deliveryDate) "
    "VALUES (%s, %s, %s) RETURNING orderId;"
)
INSERT_ORDER_LINE = (
    "INSERT INTO OrderLine (orderId, productId, quantity, price) "
    "VALUES (%s, %s, %s, %s);"
)


def load_price_snapshot(conn: Any) -> List[ProductPrice]:
    with conn.cursor() as cur:
        cur.execute(SELECT_PRICES)
        return [ProductPrice(product_id=row[0], price=row[1]) for row in cur.fetchall()]


def load_customer_ids(conn: Any) -> List[int]:
    with conn.cursor() as cur:
        cur.execute(SELECT_CUSTOMER_IDS)
        return [row[0] for row in cur.fetchall()]


def pick_products(
    snapshot: Sequence[ProductPrice], item_count: int, rng: random.Random
) -> List[ProductPrice]:
    """
    Choose up to `item_count` distinct products from the snapshot.

    Sampling is without replacement over the distinct entries, so the result
    never repeats a product and is capped at the number of distinct products.
    """
    distinct = list(dict.fromkeys(snapshot))
    return rng.sample(distinct, min(item_count, len(distinct)))


def build_order_dates(today: date, rng: random.Random) -> Tuple[date, date]:
    """An order date 1-179 days ago and a delivery date 1-179 days ahead."""
    order_date = today - timedelta(days=rng.randint(1, MAX_DAYS_OFFSET))
    delivery_date = today + timedelta(days=rng.randint(1, MAX_DAYS_OFFSET))
    return order_date, delivery_date


def build_order_lines(
    order_id: int, snapshot: Sequence[ProductPrice], rng: random.Random
) -> List[OrderLine]:
    item_count = rng.randint(1, MAX_ITEMS_PER_ORDER)
    return [
        OrderLine(
            order_id=order_id,
            product_id=item.product_id,
            quantity=rng.randint(1, MAX_QUANTITY),
            price=item.price,
        )
        for item in pick_products(snapshot, item_count, rng)
    ]


def insert_order_graph(
    conn: Any,
    customer_id: int,
    snapshot: Sequence[ProductPrice],
    source: RandomSource,
    today: Optional[date] = None,
) -> OrderGraph:
    """
    Write one order and its lines for `customer_id` atomically.

    On any failure the whole order graph is rolled back and the original
    error is re-raised.
    """
    today = today or date.today()
    rng = source.rng
    order_date, delivery_date = build_order_dates(today, rng)

    log.debug("Generating order for customer %s", customer_id, extra={"customer_id": customer_id})
    with begin_transaction(conn) as tx:
        with tx.cursor() as cur:
            cur.execute(INSERT_ORDER, (customer_id, order_date, delivery_date))
            row = cur.fetchone()
            if row is None:
                raise MissingResultError(INSERT_ORDER)
            order = CustomerOrder(
                order_id=row[0],
                customer_id=customer_id,
                order_date=order_date,
                delivery_date=delivery_date,
            )

            lines = build_order_lines(order.order_id, snapshot, rng)
            log.debug(
                "Generating %d order lines for order %s",
                len(lines),
                order.order_id,
                extra={"order_id": order.order_id},
            )
            cur.executemany(
                INSERT_ORDER_LINE,
                [(line.order_id, line.product_id, line.quantity, line.price) for line in lines],
            )
        tx.commit()

    return OrderGraph(order=order, lines=lines)


def generate_orders(conn: Any, source: RandomSource, today: Optional[date] = None) -> List[OrderGraph]:
    """
    Create one order graph per customer, in customer id order.

    The first failing customer aborts the run; earlier customers keep their
    committed orders.
    """
    log.info("Generating orders")
    snapshot = load_price_snapshot(conn)
    if not snapshot:
        raise GenerationError("No products available to build order lines from")

    today = today or date.today()
    return [
        insert_order_graph(conn, customer_id, snapshot, source, today)
        for customer_id in load_customer_ids(conn)
    ]


__all__ = [
    "build_order_dates",
    "build_order_lines",
    "generate_orders",
    "insert_order_graph",
    "load_customer_ids",
    "load_price_snapshot",
    "pick_products",
]
