"""Order and OrderItem models.

Business rules implemented:
- An order is identified to a customer by id or by email; the database
  refuses rows carrying neither.
- Billing and delivery addresses are stored as JSON objects that are
  either present as a whole or ``NULL``.
- ``total_amount`` is never stored: it is recomputed from the items on
  every read, so it cannot drift from the line items.
- Customer, supplier and product FKs use PROTECT to preserve history.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus


class Order(BaseModel):
    """Order aggregate root (persisted form of the canonical order)."""

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
        null=True,
        blank=True,
    )
    customer_email = models.EmailField(max_length=200, null=True, blank=True)
    supplier = models.ForeignKey(
        "suppliers.Supplier",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date = models.DateTimeField()
    status = models.PositiveSmallIntegerField(
        choices=OrderStatus.choices,
        default=OrderStatus.RECEIVED,
    )
    billing_address = models.JSONField(null=True, blank=True)
    delivery_address = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = "orders"
        ordering = ["-order_date", "-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-order_date"], name="orders_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(customer__isnull=False)
                    | models.Q(customer_email__isnull=False)
                ),
                name="orders_customer_identity_present",
            ),
        ]

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def total_amount(self) -> Decimal:
        """Sum of ``quantity * price`` over all items; ``0`` when empty."""
        return sum((item.line_total for item in self.items.all()), Decimal("0"))

    @property
    def item_count(self) -> int:
        return len(self.items.all())

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: int) -> bool:
        """Check whether moving to *new_status* is a valid forward step."""
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def __str__(self) -> str:
        return f"Order {self.pk} ({OrderStatus(self.status).label})"


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``price`` is the unit price quoted by the supplier on the order, not
    the catalogue price.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "order_items"
        ordering = ["id"]

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.price

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price}"
