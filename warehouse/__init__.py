"""
Warehouse seeder - deterministic synthetic data for a small order warehouse.

This package populates a PostgreSQL warehouse schema (customers, products,
orders, order lines) with reproducible fake data and runs a few reporting
queries against it:

- Emptiness check gating the one-time seed
- Seeded customer and product generators with batched inserts
- Per-customer order graphs written as single transactions
- Product count, best-customer ranking and scarce-product price update
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from warehouse.config import Settings, get_settings
from warehouse.generation.random_source import SEED, RandomSource
from warehouse.generation.seeder import SeedResult, generate_data, is_empty_database
from warehouse.reports import (
    count_products_costing_more,
    find_best_customers,
    increase_price_for_scarce_products,
)
from warehouse.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Generation
    "SEED",
    "RandomSource",
    "SeedResult",
    "generate_data",
    "is_empty_database",
    # Reporting
    "count_products_costing_more",
    "find_best_customers",
    "increase_price_for_scarce_products",
    # Logging
    "configure_logging",
    "get_logger",
]
