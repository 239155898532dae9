"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Price > 0 and stock >= 0 (validated by DTO, guarded by DB constraints).
- Update is a full overwrite of name, description, price and stock.
- Availability checks are read-only.
- Stock is only reduced through the repository's atomic conditional update.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import transaction

from modules.products.constants import (
    AVAILABLE_MESSAGE,
    INSUFFICIENT_STOCK_MESSAGE,
    NOT_FOUND_MESSAGE,
)
from modules.products.dtos import AvailabilityResultDTO
from modules.products.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
)
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db import models

    from modules.products.dtos import AvailabilityCheckDTO, ProductRequestDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: ProductRequestDTO) -> Product:
        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
        )
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id), name=dto.name)
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: ProductRequestDTO) -> Product:
        """Overwrite every mutable field of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        product.name = dto.name
        product.description = dto.description
        product.price = dto.price
        product.stock = dto.stock

        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id))
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Remove a product unconditionally.

        Order line items snapshot name and price, so nothing downstream
        depends on the row still existing.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.exists(id):
            raise ProductNotFound(f"Product {id} not found.")
        self._repo.delete(id)
        logger.info("product.deleted", product_id=str(id))

    def reduce_stock(self, id: str, quantity: int) -> bool:
        """Decrement stock by ``quantity`` if enough units are available.

        Returns ``True`` on success, ``False`` if the product is missing or
        the stock would go negative.  Never invoked by order creation.

        Raises:
            InvalidQuantity: if ``quantity`` is less than one.
        """
        if quantity < 1:
            raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}.")

        log = logger.bind(product_id=str(id), quantity=quantity)
        reduced = self._repo.reduce_stock(id, quantity)
        if reduced:
            log.info("product.stock_reduced")
        else:
            log.warning("product.stock_not_reduced")
        return reduced

    def reserve_stock(self, id: str, quantity: int) -> Product:
        """``reduce_stock`` with domain errors instead of a boolean.

        Raises:
            ProductNotFound: if the product does not exist.
            InsufficientStock: if fewer than ``quantity`` units are in stock.
            InvalidQuantity: if ``quantity`` is less than one.
        """
        if self.reduce_stock(id, quantity):
            return self.get_product(id)
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        raise InsufficientStock(
            f"Cannot reduce stock of product {id} by {quantity}: "
            f"only {product.stock} available."
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, name: Optional[str] = None, in_stock: bool = False
    ) -> models.QuerySet[Product]:
        """Return products, optionally narrowed by name and stock."""
        queryset = self._repo.list_in_stock() if in_stock else self._repo.list()
        if name:
            queryset = queryset & self._repo.search_by_name(name)
        return queryset

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def check_availability(self, dto: AvailabilityCheckDTO) -> AvailabilityResultDTO:
        """Answer whether ``dto.quantity`` units of a product are in stock."""
        log = logger.bind(product_id=str(dto.product_id), quantity=dto.quantity)

        product = self._repo.get_by_id(str(dto.product_id))
        if not product:
            log.warning("product.availability_unknown_product")
            return AvailabilityResultDTO(
                product_id=dto.product_id,
                product_name=None,
                available=False,
                requested_quantity=dto.quantity,
                available_stock=0,
                unit_price=None,
                message=NOT_FOUND_MESSAGE,
            )

        available = product.has_stock_for(dto.quantity)
        message = (
            AVAILABLE_MESSAGE
            if available
            else INSUFFICIENT_STOCK_MESSAGE.format(stock=product.stock)
        )
        log.info("product.availability_checked", available=available, stock=product.stock)

        return AvailabilityResultDTO(
            product_id=product.id,
            product_name=product.name,
            available=available,
            requested_quantity=dto.quantity,
            available_stock=product.stock,
            unit_price=product.price,
            message=message,
        )
