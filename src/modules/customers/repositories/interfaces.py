"""Customer repository interface.

Extends ``IRepository[Customer]`` with the email look-ups needed for
uniqueness checks and for resolving Vault customers.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Customer]":
        """List customers with optional filters."""

    @abstractmethod
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email address (case-insensitive)."""

    @abstractmethod
    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """Return whether another customer already uses *email*."""

    @abstractmethod
    def replace_phone_numbers(
        self, customer: Customer, phone_numbers: Iterable[Dict[str, str]]
    ) -> None:
        """Replace every telephone number of *customer*."""
