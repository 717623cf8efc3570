"""Supplier constants for the external order formats.

Each supported format is bound to a fixed supplier row (seeded with the
same id) and a tag used to build human-readable order references.
"""

from __future__ import annotations

from enum import Enum


class SupportedSupplier(Enum):
    SPEEDY = (1, "SPEEDY", "Speedy")
    VAULT = (2, "VAULT", "Vault")

    def __init__(self, supplier_id: int, tag: str, display_name: str) -> None:
        self.supplier_id = supplier_id
        self.tag = tag
        self.display_name = display_name

    def order_reference(self, order_id: int) -> str:
        """``SPEEDY-123`` / ``VAULT-124``."""
        return f"{self.tag}-{order_id}"


SPEEDY = SupportedSupplier.SPEEDY
VAULT = SupportedSupplier.VAULT
