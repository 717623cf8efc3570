from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Supplier(BaseModel):
    """A company orders arrive from; names are unique (e.g. "Speedy", "Vault")."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default="")

    class Meta:
        db_table = "suppliers"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name
