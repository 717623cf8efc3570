"""Order repository interface.

Extends ``IRepository[Order]`` with the aggregate-level writes the
Order needs: atomic creation from a canonical ``OrderDTO`` (order plus
items in one transaction) and full replacement on update.

Services and the external-order pipeline depend exclusively on this
contract.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.dtos import OrderDTO
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Mutations
    must be atomic.
    """

    @abstractmethod
    def create(self, order: OrderDTO) -> Order:
        """Persist a canonical order with its items; assigns the identity."""

    @abstractmethod
    def update(self, id: int, order: OrderDTO) -> Optional[Order]:
        """Replace fields and items of an existing order; ``None`` if missing."""

    @abstractmethod
    def update_status(self, id: int, status: int) -> Optional[Order]:
        """Set the status of an order; ``None`` if missing."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with prefetched items."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional filters."""
