"""Order service layer (Use Cases).

Orchestrates order creation, look-ups and status management.
Collaborators are injected: an ``IOrderRepository`` for persistence and
a ``ProductServiceClient`` for the availability round-trip.

Business rules enforced:
- Every requested line item is checked against the product service,
  one synchronous call per item, in request order.
- Any unavailable item aborts the whole order (all-or-nothing); the
  repository is never called in that case.
- Line items snapshot product name and unit price from the check.
- Line totals and the order total must not exceed ``MAX_AMOUNT``.
- Stock is checked, not reserved: creation never decrements stock.
- Status may be overwritten with any value of the enumeration.

The availability calls run **outside** any database transaction; only
``IOrderRepository.create`` opens one.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

import structlog

from modules.orders.constants import (
    MAX_AMOUNT,
    UNAVAILABLE_PRODUCTS_PREFIX,
    UNAVAILABLE_PRODUCTS_SEPARATOR,
    OrderStatus,
)
from modules.orders.dtos import ItemValidationResult
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderAmountTooLarge,
    OrderNotFound,
    ProductUnavailable,
)

if TYPE_CHECKING:
    from django.db import models

    from modules.orders.clients import ProductServiceClient
    from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def parse_status(value: str) -> OrderStatus:
    """Case-insensitive lookup in the status enumeration.

    Raises:
        InvalidOrderStatus: ``value`` is not a known status.
    """
    try:
        return OrderStatus((value or "").strip().upper())
    except ValueError:
        raise InvalidOrderStatus(value) from None


class OrderService:
    """Application service for Order use-cases.

    Receives its repository and product client via constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_client: ProductServiceClient,
    ) -> None:
        self._order_repo = order_repository
        self._product_client = product_client

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Validate every item against the product service, then persist.

        Steps:
        1. Check availability for each item (one call each, in order).
        2. Partition the results into available / unavailable.
        3. If anything is unavailable, raise with the aggregated messages.
        4. Otherwise persist a PENDING order with snapshotted items.

        Raises:
            ProductUnavailable: at least one item is unavailable, or the
                product service could not be reached for it.
            OrderAmountTooLarge: a line total or the order total does not
                fit the amount columns.
        """
        log = logger.bind(customer_email=dto.customer_email, item_count=len(dto.items))
        log.info("order.creation_started")

        results = self._validate_items(dto.items)

        unavailable = [result for result in results if not result.available]
        if unavailable:
            message = UNAVAILABLE_PRODUCTS_PREFIX + UNAVAILABLE_PRODUCTS_SEPARATOR.join(
                result.error_message or "" for result in unavailable
            )
            log.warning(
                "order.creation_rejected",
                unavailable_count=len(unavailable),
                reason=message,
            )
            raise ProductUnavailable(message)

        self._check_amounts(results)

        order = self._order_repo.create(
            {
                "customer_email": dto.customer_email,
                "customer_name": dto.customer_name,
                "items": [
                    {
                        "product_id": result.product_id,
                        "product_name": result.product_name or "",
                        "quantity": result.requested_quantity,
                        "unit_price": result.unit_price,
                    }
                    for result in results
                ],
            }
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            total_amount=str(order.total_amount),
        )
        return order

    def update_status(self, order_id: str, status: str) -> Order:
        """Overwrite an order's status.  No transition rules apply.

        Raises:
            InvalidOrderStatus: ``status`` is not part of the enumeration.
            OrderNotFound: order does not exist (nothing is written).
        """
        new_status = parse_status(status)

        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(
            order_id=str(order_id),
            old_status=order.status,
            new_status=new_status.value,
        )

        order.status = new_status
        order = self._order_repo.save(order)
        log.info("order.status_updated")
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(
        self,
        customer_email: Optional[str] = None,
        status: Optional[str] = None,
    ) -> models.QuerySet[Order]:
        """All orders, narrowed by ``customer_email`` and ``status`` when given.

        ``status`` is matched case-insensitively; an unknown value yields an
        empty result rather than an error.
        """
        if customer_email:
            queryset = self._order_repo.list_by_customer_email(customer_email)
        else:
            queryset = self._order_repo.list()
        if status:
            try:
                parsed = parse_status(status)
            except InvalidOrderStatus:
                return queryset.none()
            queryset = queryset & self._order_repo.list_by_status(parsed)
        return queryset

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate_items(self, items: List[CreateOrderItemDTO]) -> List[ItemValidationResult]:
        results: List[ItemValidationResult] = []
        for item in items:
            availability = self._product_client.check_availability(
                item.product_id, item.quantity
            )
            if availability.available and availability.unit_price is None:
                availability = availability.model_copy(
                    update={
                        "available": False,
                        "message": f"No price reported for product {item.product_id}",
                    }
                )
            if availability.available:
                results.append(
                    ItemValidationResult(
                        product_id=item.product_id,
                        requested_quantity=item.quantity,
                        available=True,
                        product_name=availability.product_name,
                        unit_price=availability.unit_price,
                        available_stock=availability.available_stock,
                    )
                )
            else:
                results.append(
                    ItemValidationResult(
                        product_id=item.product_id,
                        requested_quantity=item.quantity,
                        available=False,
                        error_message=availability.message,
                    )
                )
        return results

    @staticmethod
    def _check_amounts(results: List[ItemValidationResult]) -> None:
        total = Decimal("0.00")
        for result in results:
            line_total = result.unit_price * result.requested_quantity
            if line_total > MAX_AMOUNT:
                raise OrderAmountTooLarge(
                    f"Line total {line_total} for product {result.product_id} "
                    f"exceeds the maximum of {MAX_AMOUNT}."
                )
            total += line_total
        if total > MAX_AMOUNT:
            raise OrderAmountTooLarge(
                f"Order total {total} exceeds the maximum of {MAX_AMOUNT}."
            )
