"""Wire shapes of the supplier order payloads.

Both suppliers post camelCase JSON.  The models below accept those wire
names (and the snake_case attribute names), are immutable, and reject a
malformed body before any mapping happens.

Speedy::

    {"customerId": 123, "orderTimestamp": "2024-01-15T10:30:00Z",
     "billTo": {"streetAddress": ..., "city": ..., "region": ...,
                "postCode": ..., "country": ...},
     "shipTo": {...},
     "lineItems": [{"productId": 1, "qty": 5, "unitPrice": 29.99}]}

Vault::

    {"customerEmail": "buyer@example.com", "placedAt": 1705315800,
     "deliveryDetails": {"billingLocation": {"addressLine": ..., "cityName": ...,
                                             "stateProvince": ..., "zipPostal": ...,
                                             "countryCode": ...},
                         "shippingLocation": {...}},
     "items": [{"productCode": "<guid>", "quantityOrdered": 2,
                "pricePerUnit": 10.00}]}
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class SupplierPayload(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Speedy
# ---------------------------------------------------------------------------


class SpeedyAddressPayload(SupplierPayload):
    street_address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    post_code: Optional[str] = None
    country: Optional[str] = None


class SpeedyLineItemPayload(SupplierPayload):
    product_id: int
    qty: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)


class SpeedyOrderPayload(SupplierPayload):
    customer_id: int
    order_timestamp: datetime
    bill_to: Optional[SpeedyAddressPayload] = None
    ship_to: Optional[SpeedyAddressPayload] = None
    line_items: Optional[List[SpeedyLineItemPayload]] = None

    @field_validator("order_timestamp")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        """Offset-less timestamps are taken to be UTC already."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# Vault
# ---------------------------------------------------------------------------


class VaultLocationPayload(SupplierPayload):
    address_line: Optional[str] = None
    city_name: Optional[str] = None
    state_province: Optional[str] = None
    zip_postal: Optional[str] = None
    country_code: Optional[str] = None


class VaultDeliveryDetailsPayload(SupplierPayload):
    billing_location: Optional[VaultLocationPayload] = None
    shipping_location: Optional[VaultLocationPayload] = None


class VaultItemPayload(SupplierPayload):
    product_code: UUID
    quantity_ordered: int = Field(ge=1)
    price_per_unit: Decimal = Field(ge=0, max_digits=18, decimal_places=2)


class VaultOrderPayload(SupplierPayload):
    customer_email: EmailStr
    placed_at: int
    delivery_details: Optional[VaultDeliveryDetailsPayload] = None
    items: Optional[List[VaultItemPayload]] = None

    @field_validator("placed_at")
    @classmethod
    def representable(cls, v: int) -> int:
        try:
            datetime.fromtimestamp(v, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError("placedAt is not a valid Unix timestamp") from exc
        return v

    @property
    def placed_at_utc(self) -> datetime:
        """``placed_at`` (Unix seconds) as an aware UTC datetime."""
        return datetime.fromtimestamp(self.placed_at, tz=timezone.utc)

    @property
    def product_codes(self) -> List[UUID]:
        return [item.product_code for item in self.items or []]
