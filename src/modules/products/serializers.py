"""Product DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "product_code",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
