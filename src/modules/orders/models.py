"""Order and OrderItem models.

Business rules implemented:
- An Order owns its items exclusively (CASCADE, no sharing).
- OrderItem snapshots product name and unit price at creation time; the
  product itself lives in another service and is referenced by id only.
- OrderItem subtotal is always ``quantity * unit_price`` (calculated on save).
- ``Order.total_amount`` is recomputed whenever items are added or removed.
- Status defaults to PENDING and may be overwritten freely.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus

logger = structlog.get_logger(__name__)


class Order(BaseModel):
    """Order aggregate root."""

    customer_email: models.EmailField = models.EmailField(max_length=255)
    customer_name: models.CharField = models.CharField(max_length=255)
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["customer_email"], name="orders_customer_email_idx"),
            models.Index(fields=["status"], name="orders_status_idx"),
        ]

    # ------------------------------------------------------------------
    # Items / totals
    # ------------------------------------------------------------------

    def add_item(
        self,
        product_id: UUID,
        product_name: str,
        quantity: int,
        unit_price: Decimal,
    ) -> OrderItem:
        """Append a line item and refresh ``total_amount``.

        The order must already be persisted.
        """
        item = OrderItem(
            order=self,
            position=self.items.count(),
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )
        item.save()
        self.recalculate_total()
        return item

    def remove_item(self, item: OrderItem) -> None:
        """Delete one of this order's items and refresh ``total_amount``."""
        if item.order_id != self.id:
            raise ValidationError("Item does not belong to this order.")
        item.delete()
        self.recalculate_total()

    def recalculate_total(self) -> Decimal:
        total = self.items.aggregate(total=Sum("subtotal"))["total"]
        self.total_amount = total or Decimal("0.00")
        self.save(update_fields=["total_amount"])
        return self.total_amount

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    """Line item of an Order.

    ``product_name`` and ``unit_price`` are **snapshots** taken from the
    availability check; they never change even if the product is later
    updated or deleted in the product service.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    position: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    product_id: models.UUIDField = models.UUIDField()
    product_name: models.CharField = models.CharField(max_length=255)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self.unit_price is None:
            raise ValidationError({"unit_price": "Unit price is required."})
        self.subtotal = self.line_total
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "subtotal" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["subtotal"]
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_name} x{self.quantity} (${self.subtotal})"
