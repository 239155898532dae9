"""Unit tests for Order DTOs."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import (
    CreateOrderDTO,
    CreateOrderItemDTO,
    ProductAvailabilityDTO,
    ProductSnapshotDTO,
)

pytestmark = pytest.mark.unit


# ===========================================================================
# CreateOrderItemDTO
# ===========================================================================


class TestCreateOrderItemDTO:
    def test_valid(self):
        dto = CreateOrderItemDTO(product_id=uuid4(), quantity=1)
        assert dto.quantity == 1

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="at least 1"):
            CreateOrderItemDTO(product_id=uuid4(), quantity=quantity)

    def test_invalid_product_id_rejected(self):
        with pytest.raises(ValidationError):
            CreateOrderItemDTO(product_id="nope", quantity=1)


# ===========================================================================
# CreateOrderDTO
# ===========================================================================


class TestCreateOrderDTO:
    def _item(self):
        return CreateOrderItemDTO(product_id=uuid4(), quantity=1)

    def test_strips_customer_fields(self):
        dto = CreateOrderDTO(
            customer_email=" ana@example.com ",
            customer_name=" Ana ",
            items=[self._item()],
        )
        assert dto.customer_email == "ana@example.com"
        assert dto.customer_name == "Ana"

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            CreateOrderDTO(customer_email="a@b.com", customer_name="Ana", items=[])

    @pytest.mark.parametrize("field", ["customer_email", "customer_name"])
    def test_blank_customer_fields_rejected(self, field):
        data = {
            "customer_email": "a@b.com",
            "customer_name": "Ana",
            "items": [self._item()],
        }
        data[field] = "   "
        with pytest.raises(ValidationError, match="must not be blank"):
            CreateOrderDTO(**data)


# ===========================================================================
# Product service contracts
# ===========================================================================


class TestProductAvailabilityDTO:
    def test_parses_camel_case_payload(self):
        product_id = uuid4()
        dto = ProductAvailabilityDTO.model_validate(
            {
                "productId": str(product_id),
                "productName": "Widget",
                "available": True,
                "requestedQuantity": 2,
                "availableStock": 7,
                "unitPrice": "50.00",
                "message": "Product available",
            }
        )
        assert dto.product_id == product_id
        assert dto.unit_price == Decimal("50.00")
        assert dto.available_stock == 7

    def test_null_fields_for_unknown_product(self):
        dto = ProductAvailabilityDTO.model_validate(
            {
                "productId": str(uuid4()),
                "productName": None,
                "available": False,
                "requestedQuantity": 1,
                "availableStock": 0,
                "unitPrice": None,
                "message": "Product not found",
            }
        )
        assert dto.product_name is None
        assert dto.unit_price is None

    def test_missing_required_field_rejected(self):
        with pytest.raises(ValidationError):
            ProductAvailabilityDTO.model_validate({"productId": str(uuid4())})


class TestProductSnapshotDTO:
    def test_ignores_unknown_keys(self):
        dto = ProductSnapshotDTO.model_validate(
            {
                "id": str(uuid4()),
                "name": "Widget",
                "description": "",
                "price": "9.99",
                "stock": 3,
                "createdAt": "2024-01-01T00:00:00Z",
            }
        )
        assert dto.price == Decimal("9.99")
