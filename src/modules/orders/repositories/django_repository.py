"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` so the
Order aggregate (Order + OrderItems) is persisted atomically.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.orders.dtos import AddressDTO, OrderDTO
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def _address_to_json(address: Optional[AddressDTO]) -> Optional[Dict[str, Any]]:
    return address.model_dump() if address is not None else None


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, order: OrderDTO) -> Order:
        """Create an order with its items atomically."""
        entity = Order(
            customer_id=order.customer_id,
            customer_email=order.customer_email,
            supplier_id=order.supplier_id,
            order_date=order.order_date,
            status=order.status,
            billing_address=_address_to_json(order.billing_address),
            delivery_address=_address_to_json(order.delivery_address),
        )
        entity.save()
        self._write_items(entity, order)

        logger.info(
            "order.created",
            order_id=entity.id,
            supplier_id=order.supplier_id,
            item_count=order.item_count,
        )
        return self.get_by_id(entity.id) or entity

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    @transaction.atomic
    def update(self, id: int, order: OrderDTO) -> Optional[Order]:
        """Replace an order's fields and items, locking the row first."""
        entity = self._locked(id)
        if entity is None:
            return None

        entity.customer_id = order.customer_id
        entity.customer_email = order.customer_email
        entity.supplier_id = order.supplier_id
        entity.order_date = order.order_date
        entity.status = order.status
        entity.billing_address = _address_to_json(order.billing_address)
        entity.delivery_address = _address_to_json(order.delivery_address)
        entity.save()

        entity.items.all().delete()
        self._write_items(entity, order)

        logger.info("order.updated", order_id=id, item_count=order.item_count)
        return self.get_by_id(id)

    @transaction.atomic
    def update_status(self, id: int, status: int) -> Optional[Order]:
        entity = self._locked(id)
        if entity is None:
            return None
        entity.status = status
        entity.save(update_fields=["status"])
        logger.info("order.status_saved", order_id=id, status=status)
        return self.get_by_id(id)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        ``select_related`` covers the customer and supplier FKs,
        ``prefetch_related`` the items and their products, so reading
        ``total_amount`` costs no extra queries.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return (
                Order.objects.select_related("customer", "supplier")
                .prefetch_related("items__product")
                .filter(id=id)
                .first()
            )
        except (TypeError, ValueError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders with optional filters and eager-loaded relations.

        Supported filter keys include ``status``, ``supplier_id``,
        ``customer_id`` and ``order_date__range``.
        """
        queryset = Order.objects.select_related(
            "customer", "supplier"
        ).prefetch_related("items__product")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def exists(self, id: int) -> bool:
        return Order.objects.filter(id=id).exists()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Delete an order and, by cascade, its items."""
        entity = self.get_by_id(id)
        if not entity:
            return False
        entity.delete()
        logger.info("order.deleted", order_id=id)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _locked(self, id: int) -> Optional[Order]:
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _write_items(entity: Order, order: OrderDTO) -> None:
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=entity,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ]
        )
