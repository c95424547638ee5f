"""
Domain package for the warehouse seeder.

Exports the row models shared by the generators and the reporting queries.
Keep this package focused on data definitions and validation concerns.
"""

from warehouse.domain.models import (
    Customer,
    CustomerOrder,
    OrderGraph,
    OrderLine,
    Product,
    ProductPrice,
)

__all__ = [
    "Customer",
    "CustomerOrder",
    "OrderGraph",
    "OrderLine",
    "Product",
    "ProductPrice",
]
