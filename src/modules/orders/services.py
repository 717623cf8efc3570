"""Order service layer (Use Cases).

Orchestrates the order CRUD use-cases.  Each command is atomic; the
service defines the unit-of-work boundary, the repository performs the
writes.

Business rules enforced:
- Referenced customer (when given by id), supplier and products must exist.
- Status only moves forward: Received → Picking → Dispatched → Delivered.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import transaction

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import (
    CustomerNotFound,
    InvalidOrderStatus,
    OrderNotFound,
    ProductNotFound,
    SupplierNotFound,
)

if TYPE_CHECKING:
    from django.db import models

    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO, OrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository
    from modules.suppliers.repositories.interfaces import ISupplierRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        supplier_repository: ISupplierRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._supplier_repo = supplier_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Validate references and persist a new order.

        Raises:
            CustomerNotFound: ``customer_id`` is given but unknown.
            SupplierNotFound: the supplier does not exist.
            ProductNotFound: an item references an unknown product.
        """
        order = dto.to_order()
        log = logger.bind(
            customer_id=order.customer_id, supplier_id=order.supplier_id
        )
        log.info("order.creation_started", item_count=order.item_count)

        self._check_references(order)

        created = self._order_repo.create(order)
        log.info("order.created", order_id=created.id)
        return created

    @transaction.atomic
    def update_order(self, order_id: int, dto: UpdateOrderDTO) -> Order:
        """Replace an order's fields and items.

        Raises:
            OrderNotFound: the order does not exist.
            CustomerNotFound / SupplierNotFound / ProductNotFound: as for
            ``create_order``.
        """
        if not self._order_repo.exists(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")

        order = dto.to_order()
        self._check_references(order)

        updated = self._order_repo.update(order_id, order)
        if updated is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        logger.info("order.updated", order_id=order_id)
        return updated

    @transaction.atomic
    def update_status(self, order_id: int, new_status: int) -> Order:
        """Move an order one step forward through its lifecycle.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: unknown status or a non-forward transition.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(
            order_id=order_id, current_status=order.status, new_status=new_status
        )

        if new_status not in OrderStatus.values:
            log.warning("order.unknown_status")
            raise InvalidOrderStatus(f"Unknown order status {new_status}.")

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {OrderStatus(order.status).label} "
                f"to {OrderStatus(new_status).label}."
            )

        updated = self._order_repo.update_status(order_id, new_status)
        if updated is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        log.info("order.status_updated")
        return updated

    @transaction.atomic
    def delete_order(self, order_id: int) -> None:
        if not self._order_repo.delete(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """Return orders, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_references(self, order: OrderDTO) -> None:
        if order.customer_id is not None and not self._customer_repo.exists(
            order.customer_id
        ):
            raise CustomerNotFound(f"Customer {order.customer_id} not found.")

        if not self._supplier_repo.exists(order.supplier_id):
            raise SupplierNotFound(f"Supplier {order.supplier_id} not found.")

        for product_id in dict.fromkeys(item.product_id for item in order.items):
            if not self._product_repo.exists(product_id):
                raise ProductNotFound(f"Product {product_id} not found.")
