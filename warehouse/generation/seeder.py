"""
Entry point for seeding the warehouse schema.

Usage:
    from warehouse.generation.seeder import generate_data
    from warehouse.infrastructure.db_factory import get_sync_pool

    result = generate_data(get_sync_pool())
    print(result["orders"])

Generation only runs when both Customer and Product are empty, so calling
`generate_data` again on a populated schema writes nothing.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, TypedDict

from warehouse.errors import MissingResultError
from warehouse.generation.entities import generate_customers, generate_products
from warehouse.generation.orders import generate_orders
from warehouse.generation.random_source import SEED, RandomSource
from warehouse.utils.logging import get_logger
from warehouse.utils.profiler import profile_block

log = get_logger(__name__)

COUNT_CUSTOMERS = "SELECT COUNT(*) FROM Customer;"
COUNT_PRODUCTS = "SELECT COUNT(*) FROM Product;"


class SeedResult(TypedDict, total=False):
    """
    Summary of one `generate_data` call.

    All counts are zero when the schema already held data.
    """

    generated: bool
    customers: int
    products: int
    orders: int
    order_lines: int
    duration_seconds: float
    peak_rss_bytes: Optional[int]


def _count_rows(conn: Any, query: str) -> int:
    with conn.cursor() as cur:
        cur.execute(query)
        row = cur.fetchone()
    if row is None:
        raise MissingResultError(query)
    return int(row[0])


def is_empty_database(conn: Any) -> bool:
    """True iff both Customer and Product hold no rows."""
    return _count_rows(conn, COUNT_CUSTOMERS) == 0 and _count_rows(conn, COUNT_PRODUCTS) == 0


def seed_connection(conn: Any, seed: int = SEED, today: Optional[date] = None) -> SeedResult:
    """
    Seed through an already acquired connection.

    Returns a result with `generated=False` and no inserts when data is present.
    """
    if not is_empty_database(conn):
        log.info("Data already present. No generation has been done.")
        return SeedResult(generated=False, customers=0, products=0, orders=0, order_lines=0)

    log.info("Generating data into database", extra={"seed": seed})
    source = RandomSource.from_seed(seed)
    customers = generate_customers(conn, source)
    products = generate_products(conn, source)
    graphs = generate_orders(conn, source, today=today)
    return SeedResult(
        generated=True,
        customers=customers,
        products=products,
        orders=len(graphs),
        order_lines=sum(len(graph.lines) for graph in graphs),
    )


def generate_data(pool: Any, today: Optional[date] = None) -> SeedResult:
    """
    Populate the schema with deterministic synthetic data if it is empty.

    One pooled connection is held for the whole run and is returned to the
    pool on every exit path. Errors propagate unchanged.
    """
    with profile_block("seed") as stats:
        with pool.connection() as conn:
            result = seed_connection(conn, today=today)

    result["duration_seconds"] = round(stats.duration_seconds, 2)
    result["peak_rss_bytes"] = stats.peak_rss_bytes
    if result["generated"]:
        log.info(
            "Data generation finished",
            extra={
                "customers": result["customers"],
                "products": result["products"],
                "orders": result["orders"],
                "order_lines": result["order_lines"],
                "duration_seconds": result["duration_seconds"],
            },
        )
    return result


__all__ = ["SeedResult", "generate_data", "is_empty_database", "seed_connection"]
