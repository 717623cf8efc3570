"""Order DRF serializers for API output.

Input is parsed into Pydantic DTOs (``dtos.py``) by the views; these
serializers only render responses.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the product's name."""

    product_name = serializers.CharField(source="product.name", read_only=True)
    line_total = serializers.DecimalField(
        max_digits=18, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_name",
            "quantity",
            "price",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and computed totals."""

    status_display = serializers.CharField(
        source="get_status_display", read_only=True
    )
    supplier_name = serializers.CharField(source="supplier.name", read_only=True)
    total_amount = serializers.DecimalField(
        max_digits=18, decimal_places=2, read_only=True
    )
    item_count = serializers.IntegerField(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "customer_email",
            "supplier_id",
            "supplier_name",
            "order_date",
            "status",
            "status_display",
            "billing_address",
            "delivery_address",
            "total_amount",
            "item_count",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested items)."""

    status_display = serializers.CharField(
        source="get_status_display", read_only=True
    )
    total_amount = serializers.DecimalField(
        max_digits=18, decimal_places=2, read_only=True
    )
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "customer_email",
            "supplier_id",
            "order_date",
            "status",
            "status_display",
            "total_amount",
            "item_count",
        ]
        read_only_fields = fields
