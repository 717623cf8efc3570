"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``product_code`` is optional; the model generates a UUIDv7 when omitted.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=200)
    price: Decimal = Field(ge=0, max_digits=18, decimal_places=2)
    description: str = ""
    product_code: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, max_length=200)
    price: Optional[Decimal] = Field(
        default=None, ge=0, max_digits=18, decimal_places=2
    )
    description: Optional[str] = None
    product_code: Optional[UUID] = None
