"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers),
the product service client and the Service layer.  DTOs are
immutable (``frozen=True``).

- ``CreateOrderItemDTO``: input for a single order line item.
- ``CreateOrderDTO``: input for order creation (nested items).
- ``ProductAvailabilityDTO``: the product service's availability answer,
  parsed from its camelCase JSON.
- ``ProductSnapshotDTO``: a product as returned by the product service.
- ``ItemValidationResult``: per-item outcome of the availability round.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    """Immutable DTO for a single order item in a creation request.

    The client sends ``product_id`` and ``quantity``.  Name and
    ``unit_price`` are resolved through the product service.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    Validates:
    - ``customer_email`` and ``customer_name`` are not blank (e-mail
      format is checked by the serializer at the API boundary).
    - ``items`` must contain at least one item.
    """

    model_config = ConfigDict(frozen=True)

    customer_email: str
    customer_name: str
    items: List[CreateOrderItemDTO]

    @field_validator("customer_email", "customer_name")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field must not be blank.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


# ---------------------------------------------------------------------------
# Product service contracts
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProductAvailabilityDTO(_CamelModel):
    """Availability answer for one (product, quantity) pair."""

    product_id: UUID
    product_name: Optional[str] = None
    available: bool
    requested_quantity: int
    available_stock: int = 0
    unit_price: Optional[Decimal] = None
    message: str = ""


class ProductSnapshotDTO(_CamelModel):
    """Product representation served by ``GET /api/products/{id}``."""

    id: UUID
    name: str
    description: str = ""
    price: Decimal
    stock: int


# ---------------------------------------------------------------------------
# Workflow results
# ---------------------------------------------------------------------------


class ItemValidationResult(BaseModel):
    """Outcome of checking one requested line item."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    requested_quantity: int
    available: bool
    product_name: Optional[str] = None
    unit_price: Optional[Decimal] = None
    available_stock: int = 0
    error_message: Optional[str] = None
