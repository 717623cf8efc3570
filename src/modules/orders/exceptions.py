"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidOrderStatus(Exception):
    """An invalid status transition was attempted."""


class CustomerNotFound(Exception):
    """The customer referenced by the order does not exist."""


class SupplierNotFound(Exception):
    """The supplier referenced by the order does not exist."""


class ProductNotFound(Exception):
    """A product referenced by an order item does not exist."""
