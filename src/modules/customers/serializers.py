"""Customer DRF serializers for API output.

Input is parsed into Pydantic DTOs (``dtos.py``) by the views; these
serializers only render responses.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.customers.models import Customer, TelephoneNumber


class TelephoneNumberSerializer(serializers.ModelSerializer):
    class Meta:
        model = TelephoneNumber
        fields = ["id", "type", "number"]
        read_only_fields = fields


class CustomerSerializer(serializers.ModelSerializer):
    """Read serializer for the Customer resource with nested phone numbers."""

    phone_numbers = TelephoneNumberSerializer(many=True, read_only=True)

    class Meta:
        model = Customer
        fields = [
            "id",
            "name",
            "email",
            "phone_numbers",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
