"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or ``False``) instead of raising HTTP-level exceptions; the Service
Layer decides how to translate a missing entity into an API response.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> models.QuerySet[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def search_by_name(self, term: str) -> models.QuerySet[Product]:
        return Product.objects.filter(name__icontains=term)

    def list_in_stock(self) -> models.QuerySet[Product]:
        return Product.objects.filter(stock__gt=0)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` if no product
        exists with the given ID.
        """
        try:
            deleted, _ = Product.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("product.deleted", product_id=str(id))
        return bool(deleted)

    def exists(self, id: str) -> bool:
        try:
            return Product.objects.filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def has_enough_stock(self, id: str, quantity: int) -> Optional[bool]:
        product = self.get_by_id(id)
        if not product:
            return None
        return product.has_stock_for(quantity)

    def reduce_stock(self, id: str, quantity: int) -> bool:
        """Atomic conditional decrement.

        Issues ``UPDATE products SET stock = stock - q, updated_at = now
        WHERE id = :id AND stock >= q``.  The guard lives in the WHERE
        clause, so two concurrent reductions can never overdraw stock.
        A ``quantity`` below one is rejected without touching the row.
        """
        if quantity < 1:
            logger.warning(
                "product.stock_reduction_rejected", product_id=str(id), quantity=quantity
            )
            return False

        try:
            updated = Product.objects.filter(id=id, stock__gte=quantity).update(
                stock=F("stock") - quantity,
                updated_at=timezone.now(),
            )
        except (ValueError, ValidationError):
            return False

        log = logger.bind(product_id=str(id), quantity=quantity)
        if updated:
            log.info("product.stock_reduced")
        else:
            log.warning("product.stock_reduction_rejected")
        return updated == 1
