"""
Generation package for the warehouse seeder.

Re-exports the seeding entry point and the building blocks it is made of so
callers can import from `warehouse.generation` directly.
"""

from warehouse.generation.entities import (
    build_customer,
    build_product,
    generate_customers,
    generate_products,
)
from warehouse.generation.orders import generate_orders, insert_order_graph, pick_products
from warehouse.generation.random_source import SEED, RandomSource
from warehouse.generation.seeder import SeedResult, generate_data, is_empty_database

__all__ = [
    "SEED",
    "RandomSource",
    "SeedResult",
    "build_customer",
    "build_product",
    "generate_customers",
    "generate_data",
    "generate_orders",
    "generate_products",
    "insert_order_graph",
    "is_empty_database",
    "pick_products",
]
