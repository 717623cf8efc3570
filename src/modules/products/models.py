"""Product model.

Products carry two identifiers: the numeric primary key used by
Speedy line items, and ``product_code``, a GUID used by Vault line
items.  ``product_code`` is generated as a UUIDv7 when not supplied.
"""

from __future__ import annotations

from decimal import Decimal

import uuid6
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Product aggregate root."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    product_code = models.UUIDField(unique=True, default=uuid6.uuid7)

    class Meta:
        db_table = "products"
        ordering = ["name", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.product_code})"
