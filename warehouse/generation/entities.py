"""
Customer and product generators.

`build_customer` / `build_product` turn the random source into validated rows;
`generate_customers` / `generate_products` insert them in batches through
`executemany`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Iterator, List, Sequence, Tuple, TypeVar

from warehouse.domain.models import Customer, Product
from warehouse.generation.random_source import RandomSource
from warehouse.utils.logging import get_logger

log = get_logger(__name__)

CUSTOMER_COUNT = 1000
PRODUCT_COUNT = 1000
BATCH_SIZE = 50

DISCOUNT_PROBABILITY = 0.3
DISCOUNT_RATE = Decimal("0.05")
NO_DISCOUNT = Decimal("0.00")

MIN_STOCK = 10
MAX_STOCK = 109
# Prices are drawn in whole cents from [10.00, 1000.00).
MIN_PRICE_CENTS = 1_000
MAX_PRICE_CENTS = 100_000

HOUSE_LETTERS = ("A", "B", "C", "D")

PRODUCT_ADJECTIVES = (
    "Small", "Ergonomic", "Rustic", "Intelligent", "Gorgeous", "Incredible",
    "Fantastic", "Practical", "Sleek", "Awesome", "Enormous", "Mediocre",
    "Synergistic", "Heavy Duty", "Lightweight", "Aerodynamic", "Durable",
)
PRODUCT_MATERIALS = (
    "Steel", "Wooden", "Concrete", "Plastic", "Cotton", "Granite", "Rubber",
    "Leather", "Silk", "Wool", "Linen", "Marble", "Iron", "Bronze", "Copper",
    "Aluminum", "Paper",
)
PRODUCT_NOUNS = (
    "Chair", "Car", "Computer", "Gloves", "Pants", "Shirt", "Table", "Shoes",
    "Hat", "Plate", "Knife", "Bottle", "Coat", "Lamp", "Keyboard", "Bag",
    "Bench", "Clock", "Watch", "Wallet",
)

INSERT_CUSTOMER = (
    "INSERT INTO Customer (name, address, zipCode, city, discount) "
    "VALUES (%s, %s, %s, %s, %s);"
)
INSERT_PRODUCT = (
    "INSERT INTO Product (productName, stock, reorderPoint, price) "
    "VALUES (%s, %s, %s, %s);"
)

T = TypeVar("T")


def _clip(value: str, width: int) -> str:
    return value[:width].rstrip()


def _house_number(source: RandomSource) -> str:
    """A house number 1-99, sometimes followed by a letter A-D."""
    number = source.rng.randint(1, 99)
    letter = source.rng.choice(("",) + HOUSE_LETTERS)
    return f"{number}{letter}"


def build_customer(source: RandomSource) -> Customer:
    faker = source.faker
    name = faker.name()
    address = f"{faker.street_name()} {_house_number(source)}"
    zip_code = faker.postcode()
    city = faker.city()
    discount = DISCOUNT_RATE if source.rng.random() < DISCOUNT_PROBABILITY else NO_DISCOUNT
    return Customer(
        name=_clip(name, 30),
        address=_clip(address, 45),
        zip_code=_clip(zip_code, 6),
        city=_clip(city, 45),
        discount=discount,
    )


def build_product_name(source: RandomSource) -> str:
    rng = source.rng
    return " ".join(
        (rng.choice(PRODUCT_ADJECTIVES), rng.choice(PRODUCT_MATERIALS), rng.choice(PRODUCT_NOUNS))
    )


def build_product(source: RandomSource) -> Product:
    """
    Draw one product.

    The reorder point scales with stock and is always strictly below it:
    it is drawn from [0, 4 * (stock // 5) - 1].
    """
    rng = source.rng
    name = build_product_name(source)
    stock = rng.randint(MIN_STOCK, MAX_STOCK)
    reorder_point = rng.randrange(4 * (stock // 5))
    price = Decimal(rng.randrange(MIN_PRICE_CENTS, MAX_PRICE_CENTS)).scaleb(-2)
    return Product(
        product_name=_clip(name, 45),
        stock=stock,
        reorder_point=reorder_point,
        price=price,
    )


def _chunked(items: Iterator[T], size: int) -> Iterator[List[T]]:
    batch: List[T] = []
    for item in items:
        batch.append(item)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def _insert_batched(
    conn: Any,
    sql: str,
    rows: Iterator[Sequence[Any]],
    batch_size: int = BATCH_SIZE,
) -> int:
    inserted = 0
    with conn.cursor() as cur:
        for batch in _chunked(rows, batch_size):
            cur.executemany(sql, batch)
            inserted += len(batch)
    return inserted


def _customer_row(customer: Customer) -> Tuple[Any, ...]:
    return (customer.name, customer.address, customer.zip_code, customer.city, customer.discount)


def _product_row(product: Product) -> Tuple[Any, ...]:
    return (product.product_name, product.stock, product.reorder_point, product.price)


def _rows(
    count: int,
    build: Callable[[RandomSource], T],
    source: RandomSource,
    to_row: Callable[[T], Tuple[Any, ...]],
) -> Iterator[Tuple[Any, ...]]:
    for _ in range(count):
        yield to_row(build(source))


def generate_customers(conn: Any, source: RandomSource, count: int = CUSTOMER_COUNT) -> int:
    """Insert `count` synthetic customers and return how many were written."""
    log.info("Generating customers", extra={"rows": count})
    return _insert_batched(conn, INSERT_CUSTOMER, _rows(count, build_customer, source, _customer_row))


def generate_products(conn: Any, source: RandomSource, count: int = PRODUCT_COUNT) -> int:
    """Insert `count` synthetic products and return how many were written."""
    log.info("Generating products", extra={"rows": count})
    return _insert_batched(conn, INSERT_PRODUCT, _rows(count, build_product, source, _product_row))


__all__ = [
    "BATCH_SIZE",
    "CUSTOMER_COUNT",
    "PRODUCT_COUNT",
    "build_customer",
    "build_product",
    "generate_customers",
    "generate_products",
]
