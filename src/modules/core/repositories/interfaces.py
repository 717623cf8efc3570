"""Generic repository interface.

Provides ``IRepository[T]``, the base abstract class that every
aggregate-specific repository interface extends.  Services and the
external-order pipeline depend on these abstractions, never on the
Django ORM directly, so tests can hand them a ``MagicMock``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` is the aggregate managed by the repository
    (e.g. ``Customer``, ``Product``).  Look-ups follow the Null Object
    pattern: a missing row yields ``None`` / ``False``, never an exception.
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities with optional ORM-style filters."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Remove an entity by ID; ``False`` when it does not exist."""

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Return whether an entity with this primary key exists."""
