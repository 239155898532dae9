"""Unit tests for ProductService with a mocked repository."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from modules.products.dtos import AvailabilityCheckDTO, ProductRequestDTO
from modules.products.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository
from modules.products.services import ProductService

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def repo():
    repository = MagicMock(spec=IProductRepository)
    repository.save.side_effect = lambda product: product
    return repository


@pytest.fixture()
def service(repo):
    return ProductService(repository=repo)


def _product(stock: int = 10, price: str = "50.00") -> Product:
    return Product(id=uuid4(), name="Widget", price=Decimal(price), stock=stock)


# ===========================================================================
# check_availability
# ===========================================================================


class TestCheckAvailability:
    def test_unknown_product(self, service, repo):
        repo.get_by_id.return_value = None
        product_id = uuid4()

        result = service.check_availability(
            AvailabilityCheckDTO(product_id=product_id, quantity=3)
        )

        assert result.available is False
        assert result.product_id == product_id
        assert result.product_name is None
        assert result.requested_quantity == 3
        assert result.available_stock == 0
        assert result.unit_price is None
        assert result.message == "Product not found"

    def test_quantity_within_stock(self, service, repo):
        product = _product(stock=5)
        repo.get_by_id.return_value = product

        result = service.check_availability(
            AvailabilityCheckDTO(product_id=product.id, quantity=5)
        )

        assert result.available is True
        assert result.product_name == "Widget"
        assert result.available_stock == 5
        assert result.unit_price == Decimal("50.00")
        assert result.message == "Product available"

    def test_quantity_above_stock(self, service, repo):
        product = _product(stock=5)
        repo.get_by_id.return_value = product

        result = service.check_availability(
            AvailabilityCheckDTO(product_id=product.id, quantity=10)
        )

        assert result.available is False
        assert result.requested_quantity == 10
        assert result.available_stock == 5
        assert result.message == "Insufficient stock. Available: 5"

    def test_is_read_only(self, service, repo):
        product = _product(stock=5)
        repo.get_by_id.return_value = product

        service.check_availability(AvailabilityCheckDTO(product_id=product.id, quantity=1))

        repo.save.assert_not_called()
        repo.reduce_stock.assert_not_called()


# ===========================================================================
# Commands
# ===========================================================================


class TestCreateProduct:
    def test_persists_dto_fields(self, service, repo):
        dto = ProductRequestDTO(
            name="Widget", description="Blue", price=Decimal("9.99"), stock=4
        )

        product = service.create_product(dto)

        repo.save.assert_called_once()
        assert product.name == "Widget"
        assert product.description == "Blue"
        assert product.price == Decimal("9.99")
        assert product.stock == 4


class TestUpdateProduct:
    def test_overwrites_every_field(self, service, repo):
        product = _product(stock=1)
        repo.get_by_id.return_value = product
        dto = ProductRequestDTO(name="Renamed", price=Decimal("1.50"), stock=9)

        updated = service.update_product(str(product.id), dto)

        assert updated.name == "Renamed"
        assert updated.description == ""
        assert updated.price == Decimal("1.50")
        assert updated.stock == 9

    def test_unknown_product_raises(self, service, repo):
        repo.get_by_id.return_value = None
        dto = ProductRequestDTO(name="X", price=Decimal("1.00"), stock=0)

        with pytest.raises(ProductNotFound):
            service.update_product(str(uuid4()), dto)
        repo.save.assert_not_called()


class TestDeleteProduct:
    def test_deletes_existing(self, service, repo):
        repo.exists.return_value = True
        product_id = str(uuid4())

        service.delete_product(product_id)

        repo.delete.assert_called_once_with(product_id)

    def test_unknown_product_raises(self, service, repo):
        repo.exists.return_value = False

        with pytest.raises(ProductNotFound):
            service.delete_product(str(uuid4()))
        repo.delete.assert_not_called()


# ===========================================================================
# Stock
# ===========================================================================


class TestReduceStock:
    def test_delegates_to_atomic_repository_operation(self, service, repo):
        repo.reduce_stock.return_value = True
        product_id = str(uuid4())

        assert service.reduce_stock(product_id, 2) is True
        repo.reduce_stock.assert_called_once_with(product_id, 2)

    def test_reports_failure(self, service, repo):
        repo.reduce_stock.return_value = False
        assert service.reduce_stock(str(uuid4()), 2) is False

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_non_positive_quantity_raises(self, service, repo, quantity):
        with pytest.raises(InvalidQuantity, match="at least 1"):
            service.reduce_stock(str(uuid4()), quantity)
        repo.reduce_stock.assert_not_called()

    def test_negative_quantity_never_adds_stock(self):
        product = Product.objects.create(
            name="Widget", price=Decimal("10.00"), stock=2
        )
        service = ProductService(repository=ProductDjangoRepository())

        with pytest.raises(InvalidQuantity):
            service.reduce_stock(str(product.id), -5)

        product.refresh_from_db()
        assert product.stock == 2


class TestReserveStock:
    def test_returns_refreshed_product(self, service, repo):
        product = _product(stock=3)
        repo.reduce_stock.return_value = True
        repo.get_by_id.return_value = product

        assert service.reserve_stock(str(product.id), 2) is product

    def test_insufficient_stock(self, service, repo):
        product = _product(stock=1)
        repo.reduce_stock.return_value = False
        repo.get_by_id.return_value = product

        with pytest.raises(InsufficientStock, match="only 1 available"):
            service.reserve_stock(str(product.id), 2)

    def test_unknown_product(self, service, repo):
        repo.reduce_stock.return_value = False
        repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.reserve_stock(str(uuid4()), 2)

    def test_invalid_quantity(self, service, repo):
        with pytest.raises(InvalidQuantity):
            service.reserve_stock(str(uuid4()), 0)
        repo.get_by_id.assert_not_called()


# ===========================================================================
# Queries
# ===========================================================================


class TestListProducts:
    def test_without_name_lists_all(self, service, repo):
        service.list_products()
        repo.list.assert_called_once_with()
        repo.search_by_name.assert_not_called()
        repo.list_in_stock.assert_not_called()

    def test_with_name_searches(self, service, repo):
        service.list_products(name="wid")
        repo.search_by_name.assert_called_once_with("wid")

    def test_in_stock_uses_repository_query(self, service, repo):
        service.list_products(in_stock=True)
        repo.list_in_stock.assert_called_once_with()
        repo.list.assert_not_called()

    def test_name_and_in_stock_combined(self):
        Product.objects.create(name="Widget", price=Decimal("1.00"), stock=3)
        Product.objects.create(name="Widget Pro", price=Decimal("2.00"), stock=0)
        Product.objects.create(name="Gadget", price=Decimal("3.00"), stock=5)
        service = ProductService(repository=ProductDjangoRepository())

        names = [p.name for p in service.list_products(name="widget", in_stock=True)]

        assert names == ["Widget"]


class TestGetProduct:
    def test_unknown_product_raises(self, service, repo):
        repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.get_product(str(uuid4()))
