"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` to ensure
the Order aggregate (Order + OrderItems) is persisted atomically.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` keys:
        - ``customer_email`` (required)
        - ``customer_name`` (required)
        - ``items`` (required): list of dicts with ``product_id``,
          ``product_name``, ``quantity``, ``unit_price``
        """
        order = Order(
            customer_email=data["customer_email"],
            customer_name=data["customer_name"],
        )
        order.save()

        items = data.get("items", [])
        for item_data in items:
            order.add_item(
                product_id=item_data["product_id"],
                product_name=item_data["product_name"],
                quantity=item_data["quantity"],
                unit_price=item_data["unit_price"],
            )

        log = logger.bind(order_id=str(order.id), item_count=len(items))
        log.info("order.persisted", total_amount=str(order.total_amount))

        return self.get_by_id(str(order.id)) or order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its items prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.prefetch_related("items").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet[Order]:
        """List orders with optional filters and prefetched items.

        Supported filter keys include ``status`` and ``customer_email``.
        """
        queryset = Order.objects.prefetch_related("items")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_by_customer_email(self, email: str) -> models.QuerySet[Order]:
        return self.list({"customer_email": email})

    def list_by_status(self, status: str) -> models.QuerySet[Order]:
        return self.list({"status": status})

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order."""
        entity.save()
        logger.info("order.saved", order_id=str(entity.id), status=entity.status)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Hard-delete an order and, by cascade, its items.

        Not reachable through the HTTP API; kept for the repository contract.
        """
        try:
            deleted, _ = Order.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return bool(deleted)
