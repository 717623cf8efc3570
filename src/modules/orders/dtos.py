"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``AddressDTO``: postal address value object.
- ``OrderItemDTO``: canonical line item.
- ``OrderDTO``: the canonical, supplier-agnostic order.  Every supplier
  payload is translated into this shape before it is validated or
  persisted.  Identity is absent until the repository assigns one.
- ``CreateOrderDTO`` / ``UpdateOrderDTO``: validated input for the
  order CRUD endpoints.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from modules.orders.constants import OrderStatus


class AddressDTO(BaseModel):
    """Postal address; every field is independently optional."""

    model_config = ConfigDict(frozen=True)

    street: Optional[str] = None
    city: Optional[str] = None
    county: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class OrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    quantity: int
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.price


class OrderDTO(BaseModel):
    """Canonical order aggregate, before persistence.

    ``total_amount`` is a computed field: it is derived from ``items``
    each time it is read and is never part of the input.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[int] = None
    customer_email: Optional[str] = None
    supplier_id: int
    order_date: datetime
    status: OrderStatus = OrderStatus.RECEIVED
    billing_address: Optional[AddressDTO] = None
    delivery_address: Optional[AddressDTO] = None
    items: List[OrderItemDTO] = []

    @field_validator("items", mode="before")
    @classmethod
    def absent_items_become_empty(cls, v):
        return [] if v is None else v

    @model_validator(mode="after")
    def customer_identity_present(self) -> Self:
        if self.customer_id is None and not self.customer_email:
            raise ValueError("Either customer_id or customer_email is required.")
        return self

    @computed_field
    @property
    def total_amount(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return len(self.items)


# ---------------------------------------------------------------------------
# Input DTOs (order CRUD endpoints)
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single line item in a creation request."""

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(gt=0)
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - either ``customer_id`` (> 0) or ``customer_email`` is supplied.
    - ``supplier_id`` is positive.
    - ``items`` contains at least one line.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[int] = Field(default=None, gt=0)
    customer_email: Optional[EmailStr] = Field(default=None, max_length=200)
    supplier_id: int = Field(gt=0)
    order_date: datetime
    status: OrderStatus = OrderStatus.RECEIVED
    billing_address: Optional[AddressDTO] = None
    delivery_address: Optional[AddressDTO] = None
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @model_validator(mode="after")
    def customer_identity_present(self) -> Self:
        if self.customer_id is None and self.customer_email is None:
            raise ValueError("Either customer_id or customer_email is required.")
        return self

    def to_order(self) -> OrderDTO:
        return OrderDTO(
            customer_id=self.customer_id,
            customer_email=self.customer_email,
            supplier_id=self.supplier_id,
            order_date=self.order_date,
            status=self.status,
            billing_address=self.billing_address,
            delivery_address=self.delivery_address,
            items=[
                OrderItemDTO(
                    product_id=i.product_id, quantity=i.quantity, price=i.price
                )
                for i in self.items
            ],
        )


class UpdateOrderDTO(CreateOrderDTO):
    """Full replacement of an order's fields and items."""
