"""
Reporting queries and the scarce-product price update.

Each function borrows one pooled connection for the duration of the call.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List

from warehouse.errors import MissingResultError
from warehouse.utils.logging import get_logger

log = get_logger(__name__)

BEST_CUSTOMERS_LIMIT = 10

COUNT_PRODUCTS_COSTING_MORE = "SELECT COUNT(*) FROM Product WHERE price > %s;"

# Ranked on list price; customer discounts are not applied.
BEST_CUSTOMERS = """
    SELECT c.name
      FROM OrderLine AS ol
      JOIN CustomerOrder AS co
        ON ol.orderId = co.orderId
      JOIN Customer AS c
        ON co.customerId = c.customerId
     GROUP BY co.customerId, c.name
     ORDER BY SUM(ol.quantity * ol.price) DESC
     LIMIT %s;
"""

# Products less than 30% above their reorder point get 10% more expensive.
INCREASE_SCARCE_PRICES = """
    UPDATE Product
       SET price = price * 1.1
     WHERE stock < reorderPoint * 1.3;
"""


def count_products_costing_more(pool: Any, cost: Decimal) -> int:
    log.debug("Finding products costing more than %s", cost)
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(COUNT_PRODUCTS_COSTING_MORE, (cost,))
            row = cur.fetchone()
    if row is None:
        raise MissingResultError(COUNT_PRODUCTS_COSTING_MORE)
    return int(row[0])


def find_best_customers(pool: Any, limit: int = BEST_CUSTOMERS_LIMIT) -> List[str]:
    """
    Names of the customers with the highest total spend, best first.

    Spend is SUM(quantity * price) over all their order lines.
    """
    log.debug("Finding best customers", extra={"limit": limit})
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(BEST_CUSTOMERS, (limit,))
            return [row[0] for row in cur.fetchall()]


def increase_price_for_scarce_products(pool: Any) -> int:
    """Raise prices by 10% where stock < reorderPoint * 1.3; return rows updated."""
    log.debug("Increasing prices for scarce products")
    with pool.connection() as conn:
        with conn.cursor() as cur:
            cur.execute(INCREASE_SCARCE_PRICES)
            updated = cur.rowcount
    log.info("Updated prices of %d products", updated, extra={"rows": updated})
    return updated


__all__ = [
    "count_products_costing_more",
    "find_best_customers",
    "increase_price_for_scarce_products",
]
