from __future__ import annotations

from rest_framework import serializers

from modules.suppliers.models import Supplier


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = ["id", "name", "description", "created_at", "updated_at"]
        read_only_fields = fields
