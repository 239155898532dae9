"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductRequestDTO``: input for product creation and full update.
- ``AvailabilityCheckDTO``: input for the availability check.
- ``AvailabilityResultDTO``: output of the availability check.  It is
  rendered with camelCase aliases because the order service consumes it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductRequestDTO(BaseModel):
    """Immutable DTO for product create / update requests.

    Update is a full overwrite, so the same contract serves both.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is a Decimal greater than zero.
    - ``stock`` is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    stock: int
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: Optional[str]) -> str:
        return v or ""


class AvailabilityCheckDTO(BaseModel):
    """Immutable DTO for a single availability question."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class AvailabilityResultDTO(BaseModel):
    """Answer to an availability check.

    ``product_name`` and ``unit_price`` are ``None`` when the product does
    not exist; ``available_stock`` is then ``0``.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    product_id: UUID
    product_name: Optional[str] = None
    available: bool
    requested_quantity: int
    available_stock: int = 0
    unit_price: Optional[Decimal] = None
    message: str

    def to_payload(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
