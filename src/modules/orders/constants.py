"""Order domain constants.

Defines the status choices.  No transition rules are enforced: any
status may be overwritten with any other one.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    PROCESSING = "PROCESSING", "Processing"
    SHIPPED = "SHIPPED", "Shipped"
    DELIVERED = "DELIVERED", "Delivered"
    CANCELLED = "CANCELLED", "Cancelled"


VALID_STATUSES: list[str] = [choice.value for choice in OrderStatus]

UNAVAILABLE_PRODUCTS_PREFIX = "Products not available: "
UNAVAILABLE_PRODUCTS_SEPARATOR = ", "

MAX_ITEM_QUANTITY = 1_000_000
# Largest value the DECIMAL(10, 2) amount columns can hold.
MAX_AMOUNT = Decimal("99999999.99")
