"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Email must be unique (case-insensitive).
- Telephone numbers are owned by the customer and replaced as a whole.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerInUse,
    CustomerNotFound,
)
from modules.customers.models import Customer

if TYPE_CHECKING:
    from django.db import models

    from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection.
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CreateCustomerDTO) -> Customer:
        """Create a new customer with its telephone numbers.

        Raises:
            CustomerAlreadyExists: if the email is already taken.
        """
        log = logger.bind(email=dto.email)

        if self._repo.email_exists(dto.email):
            log.warning("customer.duplicate_email")
            raise CustomerAlreadyExists(
                f"A customer with email '{dto.email}' already exists."
            )

        customer = self._repo.save(Customer(name=dto.name, email=dto.email))
        if dto.phone_numbers:
            self._repo.replace_phone_numbers(
                customer, [p.model_dump() for p in dto.phone_numbers]
            )
        log.info(
            "customer.created",
            customer_id=customer.id,
            phone_count=len(dto.phone_numbers),
        )
        return self._repo.get_by_id(customer.id) or customer

    @transaction.atomic
    def update_customer(self, id: int, dto: UpdateCustomerDTO) -> Customer:
        """Update an existing customer with the supplied fields.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerAlreadyExists: if the new email collides with another customer.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        log = logger.bind(customer_id=id)

        if dto.email is not None and dto.email.lower() != customer.email.lower():
            if self._repo.email_exists(dto.email, exclude_id=customer.id):
                log.warning("customer.duplicate_email")
                raise CustomerAlreadyExists(
                    f"A customer with email '{dto.email}' already exists."
                )

        for field in ("name", "email"):
            value = getattr(dto, field)
            if value is not None:
                setattr(customer, field, value)

        customer = self._repo.save(customer)
        if dto.phone_numbers is not None:
            self._repo.replace_phone_numbers(
                customer, [p.model_dump() for p in dto.phone_numbers]
            )
        log.info("customer.updated")
        return self._repo.get_by_id(customer.id) or customer

    @transaction.atomic
    def delete_customer(self, id: int) -> None:
        """Delete a customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerInUse: if orders still reference the customer.
        """
        try:
            deleted = self._repo.delete(id)
        except ProtectedError as exc:
            logger.warning("customer.delete_blocked", customer_id=id)
            raise CustomerInUse(
                f"Customer {id} has orders and cannot be deleted."
            ) from exc
        if not deleted:
            raise CustomerNotFound(f"Customer {id} not found.")
        logger.info("customer.removed", customer_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """Return customers, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: int) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer

    def get_customer_by_email(self, email: str) -> Customer:
        """Raises ``CustomerNotFound`` when no customer uses *email*."""
        customer = self._repo.get_by_email(email)
        if not customer:
            raise CustomerNotFound(f"Customer with email '{email}' not found.")
        return customer
