"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views) and owns
the wire format (camelCase keys).  Business logic lives in the Service
Layer, which receives Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import MAX_ITEM_QUANTITY
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single item in an order creation request."""

    productId = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_QUANTITY)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    customerEmail = serializers.EmailField(max_length=255)
    customerName = serializers.CharField(max_length=255)
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for order items with the product snapshot."""

    productId = serializers.UUIDField(source="product_id", read_only=True)
    productName = serializers.CharField(source="product_name", read_only=True)
    unitPrice = serializers.DecimalField(
        source="unit_price", max_digits=10, decimal_places=2, read_only=True
    )
    totalPrice = serializers.DecimalField(
        source="subtotal", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "productId",
            "productName",
            "quantity",
            "unitPrice",
            "totalPrice",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    customerEmail = serializers.EmailField(source="customer_email", read_only=True)
    customerName = serializers.CharField(source="customer_name", read_only=True)
    totalAmount = serializers.DecimalField(
        source="total_amount", max_digits=10, decimal_places=2, read_only=True
    )
    items = OrderItemSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customerEmail",
            "customerName",
            "status",
            "totalAmount",
            "items",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields
