"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views) and owns
the wire format (camelCase keys).  Business logic lives in the Service
Layer, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.constants import MAX_QUANTITY
from modules.products.models import Product

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class ProductRequestSerializer(serializers.Serializer):
    """Validates the create / full-update payload."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField(
        default="", allow_blank=True, allow_null=True
    )
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal("0.01")
    )
    stock = serializers.IntegerField(min_value=0)


class AvailabilityCheckSerializer(serializers.Serializer):
    """Validates ``{"productId": ..., "quantity": ...}``."""

    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)


class ReduceStockSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "stock",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
