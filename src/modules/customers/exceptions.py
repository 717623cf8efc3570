"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CustomerAlreadyExists(Exception):
    """A customer with the same email address already exists."""


class CustomerNotFound(Exception):
    """The requested customer does not exist."""


class CustomerInUse(Exception):
    """The customer is referenced by orders and cannot be deleted."""
