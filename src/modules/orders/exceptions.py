"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
Each one belongs to an ``ErrorKind`` which the API layer maps to an
HTTP status code.
"""

from __future__ import annotations

from modules.core.exceptions import (
    NotFoundError,
    UnavailableError,
    ValidationFailedError,
)
from modules.orders.constants import VALID_STATUSES


class OrderNotFound(NotFoundError):
    """The requested order does not exist."""

    title = "Order not found"


class ProductUnavailable(UnavailableError):
    """At least one requested line item failed the availability check.

    The message aggregates the reason reported for every failing item.
    """

    title = "Product not available"


class InvalidOrderStatus(ValidationFailedError):
    """The requested status is not part of the status enumeration."""

    title = "Invalid status"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"'{value}' is not a valid status. "
            f"Valid statuses are: {', '.join(VALID_STATUSES)}."
        )
        self.value = value


class OrderAmountTooLarge(ValidationFailedError):
    """A line total or the order total exceeds ``MAX_AMOUNT``."""

    title = "Order amount too large"
