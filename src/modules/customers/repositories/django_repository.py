"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import structlog
from django.db import models, transaction

from modules.customers.models import Customer, TelephoneNumber
from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer (with phone numbers) by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return (
                Customer.objects.prefetch_related("phone_numbers")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"name__icontains": "smith"}
            {"email__iendswith": "@example.com"}
        """
        queryset = Customer.objects.prefetch_related("phone_numbers")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def exists(self, id: int) -> bool:
        return Customer.objects.filter(id=id).exists()

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""
        is_new = entity._state.adding
        entity.save()
        logger.info("customer.saved", customer_id=entity.id, is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete a customer and its telephone numbers.

        Returns ``True`` if the customer was found and deleted,
        ``False`` if no customer exists with the given ID.
        """
        customer = self.get_by_id(id)
        if not customer:
            return False
        customer.delete()
        logger.info("customer.deleted", customer_id=id)
        return True

    def get_by_email(self, email: str) -> Optional[Customer]:
        return (
            Customer.objects.prefetch_related("phone_numbers")
            .filter(email__iexact=email)
            .first()
        )

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        queryset = Customer.objects.filter(email__iexact=email)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    @transaction.atomic
    def replace_phone_numbers(
        self, customer: Customer, phone_numbers: Iterable[Dict[str, str]]
    ) -> None:
        customer.phone_numbers.all().delete()
        TelephoneNumber.objects.bulk_create(
            TelephoneNumber(customer=customer, type=p["type"], number=p["number"])
            for p in phone_numbers
        )
