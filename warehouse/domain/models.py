"""
Domain models for the warehouse seeder.

Defines the rows of the warehouse schema (`db/init.sql`): Customer, Product,
CustomerOrder and OrderLine, plus the ProductPrice snapshot used to stamp
order-line prices. Identity columns are optional because the store assigns
them on insert.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Customer(BaseModel):
    """
    Representation of a single row in the `Customer` table.
    """

    customer_id: Optional[int] = Field(None, description="Identity, assigned by the store.")
    name: str = Field(..., max_length=30)
    address: str = Field(..., max_length=45)
    zip_code: str = Field(..., max_length=6)
    city: str = Field(..., max_length=45)
    discount: Decimal = Field(Decimal("0.00"), ge=0, le=1)

    model_config = _FROZEN


class Product(BaseModel):
    """
    Representation of a single row in the `Product` table.
    """

    product_id: Optional[int] = Field(None, description="Identity, assigned by the store.")
    product_name: str = Field(..., max_length=45)
    stock: int = Field(..., ge=0)
    reorder_point: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0, decimal_places=2)

    model_config = _FROZEN


class ProductPrice(BaseModel):
    """
    A (product id, price) pair captured once per generation run.

    Hashable with equality on both fields.
    """

    product_id: int
    price: Decimal

    model_config = _FROZEN


class CustomerOrder(BaseModel):
    """
    Representation of a single row in the `CustomerOrder` table.
    """

    order_id: Optional[int] = Field(None, description="Identity, assigned by the store.")
    customer_id: int
    order_date: date
    delivery_date: date

    model_config = _FROZEN

    @model_validator(mode="after")
    def _delivery_not_before_order(self) -> "CustomerOrder":
        if self.delivery_date < self.order_date:
            raise ValueError("delivery_date must not be before order_date")
        return self


class OrderLine(BaseModel):
    """
    Representation of a single row in the `OrderLine` table.
    """

    order_id: int
    product_id: int
    quantity: int = Field(..., ge=1)
    price: Decimal = Field(..., ge=0)

    model_config = _FROZEN


class OrderGraph(BaseModel):
    """One committed order together with its lines."""

    order: CustomerOrder
    lines: List[OrderLine]

    model_config = _FROZEN


__all__ = ["Customer", "Product", "ProductPrice", "CustomerOrder", "OrderLine", "OrderGraph"]
