"""Product model with stock control.

Business rules implemented:
- Name must not be blank.
- Price must be greater than zero (DB check constraint + ``clean``).
- Stock cannot be negative (DB check constraint + ``clean``).
- Stock is only ever decremented through the repository's atomic
  conditional update, never by read-modify-write on the instance.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Product aggregate root."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if not self.name or not self.name.strip():
            raise ValidationError({"name": "Name must not be blank."})
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": "Price must be greater than zero."})
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})

    # ------------------------------------------------------------------
    # Domain helpers
    # ------------------------------------------------------------------

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def __str__(self) -> str:
        return f"{self.name} ({self.stock} in stock)"
