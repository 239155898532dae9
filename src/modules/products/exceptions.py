"""Product domain exceptions.

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


class ProductNotFound(NotFoundError):
    """The requested product does not exist."""

    title = "Product not found"


class InsufficientStock(UnavailableError):
    """A stock reduction asked for more units than are in stock."""

    title = "Insufficient stock"


class InvalidQuantity(ValidationFailedError):
    """A stock reduction asked for fewer than one unit."""

    title = "Invalid quantity"
