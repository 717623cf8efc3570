"""Customer and TelephoneNumber models.

A customer is identified either by numeric id (Speedy orders) or by
email address (Vault orders), so ``email`` is unique across the system.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class PhoneType(models.TextChoices):
    MOBILE = "Mobile", "Mobile"
    HOME = "Home", "Home"
    WORK = "Work", "Work"


class Customer(BaseModel):
    """Customer aggregate root; owns its telephone numbers."""

    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=200, unique=True)

    class Meta:
        db_table = "customers"
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["name"], name="customers_name_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class TelephoneNumber(BaseModel):
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.CASCADE,
        related_name="phone_numbers",
    )
    type = models.CharField(
        max_length=10,
        choices=PhoneType.choices,
        default=PhoneType.MOBILE,
    )
    number = models.CharField(max_length=30)

    class Meta:
        db_table = "customer_telephone_numbers"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.type}: {self.number}"
