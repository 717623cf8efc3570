"""Supplier repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.suppliers.models import Supplier


class ISupplierRepository(IRepository["Supplier"]):
    """Repository contract for the Supplier aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Supplier]":
        """List suppliers with optional filters."""

    @abstractmethod
    def save(self, entity: Supplier) -> Supplier:
        """Persist (create or update) a supplier."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Supplier]:
        """Retrieve a supplier by name (case-insensitive)."""

    @abstractmethod
    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Return whether another supplier already uses *name*."""
