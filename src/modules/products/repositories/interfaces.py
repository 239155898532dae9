"""Product repository interface.

Extends ``IRepository[Product]`` with the explicit look-ups needed by the
product service: name search, in-stock listing, stock questions, and the
atomic conditional stock reduction.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def search_by_name(self, term: str) -> "models.QuerySet[Product]":
        """Products whose name contains ``term`` (case-insensitive)."""

    @abstractmethod
    def list_in_stock(self) -> "models.QuerySet[Product]":
        """Products with at least one unit in stock."""

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Whether a product with the given ID exists."""

    @abstractmethod
    def has_enough_stock(self, id: str, quantity: int) -> Optional[bool]:
        """``stock >= quantity`` for the product, ``None`` if it does not exist."""

    @abstractmethod
    def reduce_stock(self, id: str, quantity: int) -> bool:
        """Subtract ``quantity`` from stock only if ``stock >= quantity``.

        Must be a single atomic conditional UPDATE.  Returns ``True`` when
        the row was updated, ``False`` when the product is missing or the
        stock is insufficient.
        """
