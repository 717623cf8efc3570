"""Result DTOs returned by the external-order endpoints.

One explicit result type per supplier and per endpoint kind (transform
preview vs. create), so the response shape is part of the code rather
than assembled ad hoc in the views.  DTOs are immutable
(``frozen=True``) and render to JSON with ``model_dump(mode="json")``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from modules.external_orders.constants import SupportedSupplier
from modules.external_orders.resolution import ProductResolution
from modules.orders.constants import OrderStatus
from modules.orders.dtos import AddressDTO, OrderDTO, OrderItemDTO


class ProductCodeResolutionDTO(BaseModel):
    """How one Vault product code was resolved."""

    model_config = ConfigDict(frozen=True)

    product_code: UUID
    resolved_product_id: int
    product_name: Optional[str] = None

    @classmethod
    def from_resolution(cls, resolution: ProductResolution) -> ProductCodeResolutionDTO:
        return cls(
            product_code=resolution.product_code,
            resolved_product_id=resolution.product_id,
            product_name=resolution.product_name,
        )


class TransformedOrderDTO(BaseModel):
    """The canonical order as previewed by a transform endpoint."""

    model_config = ConfigDict(frozen=True)

    customer_id: Optional[int]
    customer_email: Optional[str]
    supplier_id: int
    supplier_name: str
    order_date: datetime
    status: int
    status_name: str
    billing_address: Optional[AddressDTO]
    delivery_address: Optional[AddressDTO]
    items: List[OrderItemDTO]
    total_amount: Decimal
    item_count: int

    @classmethod
    def from_order(
        cls, order: OrderDTO, supplier: SupportedSupplier
    ) -> TransformedOrderDTO:
        return cls(
            customer_id=order.customer_id,
            customer_email=order.customer_email,
            supplier_id=order.supplier_id,
            supplier_name=supplier.display_name,
            order_date=order.order_date,
            status=int(order.status),
            status_name=OrderStatus(order.status).label,
            billing_address=order.billing_address,
            delivery_address=order.delivery_address,
            items=order.items,
            total_amount=order.total_amount,
            item_count=order.item_count,
        )


class SpeedyTransformResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    supplier: str
    transformed_order: TransformedOrderDTO


class VaultTransformResult(SpeedyTransformResult):
    product_code_resolution: List[ProductCodeResolutionDTO]


class SpeedyCreateResult(BaseModel):
    """Summary of an order created from a Speedy payload."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    order_id: int
    order_reference: str
    supplier: str
    total_amount: Decimal
    item_count: int
    order_date: datetime
    status: str


class VaultCreateResult(SpeedyCreateResult):
    product_resolutions: List[ProductCodeResolutionDTO]


class SupportedSupplierDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    reference_tag: str
    customer_identification: str
    description: str
    transform_endpoint: str
    create_endpoint: str
