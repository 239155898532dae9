"""Order repository interface.

Extends ``IRepository[Order]`` with the methods required by the Order
aggregate: atomic creation with items and the explicit list queries
used by the API (by customer e-mail, by status).

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Creation must
    be atomic: either the order and every item are stored, or nothing.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_email``, ``customer_name`` and
        ``items`` (list of dicts with ``product_id``, ``product_name``,
        ``quantity``, ``unit_price``), in the order they were requested.
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched items."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders with optional filters."""

    @abstractmethod
    def list_by_customer_email(self, email: str) -> models.QuerySet[Order]:
        """Orders placed with exactly this customer e-mail."""

    @abstractmethod
    def list_by_status(self, status: str) -> models.QuerySet[Order]:
        """Orders currently in ``status``."""
