"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``TelephoneNumberDTO``: one phone number of a customer.
- ``CreateCustomerDTO``: input for customer creation.
- ``UpdateCustomerDTO``: input for partial customer updates.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.customers.models import PhoneType


class TelephoneNumberDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PhoneType = PhoneType.MOBILE
    number: str = Field(min_length=1, max_length=30)


class CreateCustomerDTO(BaseModel):
    """Immutable DTO for customer creation requests.

    Validates:
    - ``name`` is non-blank and at most 100 characters.
    - ``email`` is a well-formed address (Pydantic ``EmailStr``).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=100)
    email: EmailStr
    phone_numbers: List[TelephoneNumberDTO] = []

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()


class UpdateCustomerDTO(BaseModel):
    """Immutable DTO for customer update requests.

    All fields are optional; only supplied fields will be updated.
    ``phone_numbers``, when given, replaces the existing list.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    phone_numbers: Optional[List[TelephoneNumberDTO]] = None
