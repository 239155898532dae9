"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into HTTP responses via
their ``ErrorKind``; the view never swallows generic exceptions.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response, validation_error_response
from modules.orders.clients import get_product_client
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    InvalidOrderStatus,
    OrderAmountTooLarge,
    OrderNotFound,
    ProductUnavailable,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import CreateOrderSerializer, OrderSerializer
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with the Django repository and the shared
    product service client (DIP).  Does **not** extend ``ModelViewSet``:
    all ORM access goes through the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_client=get_product_client(),
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/orders"""
        create_serializer = CreateOrderSerializer(data=request.data)
        if not create_serializer.is_valid():
            return validation_error_response(create_serializer.errors)

        data = create_serializer.validated_data
        try:
            dto = CreateOrderDTO(
                customer_email=data["customerEmail"],
                customer_name=data["customerName"],
                items=[
                    CreateOrderItemDTO(
                        product_id=item["productId"],
                        quantity=item["quantity"],
                    )
                    for item in data["items"]
                ],
            )
        except PydanticValidationError as exc:
            return validation_error_response([error["msg"] for error in exc.errors()])

        try:
            order = self._service.create_order(dto)
        except (ProductUnavailable, OrderAmountTooLarge) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        params = self.request.query_params
        return self._service.list_orders(
            customer_email=params.get("customerEmail") or None,
            status=params.get("status") or None,
        )

    def list(self, request: Request) -> Response:
        """GET /api/orders?customerEmail=&status=

        All orders when ``customerEmail`` is omitted or empty.
        """
        queryset = self.filter_queryset(self.get_queryset())
        return Response(OrderSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/orders/{pk}"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound as exc:
            return error_response(exc)
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/orders/{pk}/status?status=SHIPPED

        Status is matched case-insensitively.  An unknown value yields 400
        with an error body listing the valid statuses.
        """
        status_value = request.query_params.get("status")
        if not status_value:
            return error_response(InvalidOrderStatus(""))

        try:
            order = self._service.update_status(order_id=pk, status=status_value)
        except (InvalidOrderStatus, OrderNotFound) as exc:
            return error_response(exc)

        return Response(OrderSerializer(order).data)
