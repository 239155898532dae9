"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
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
from modules.products.dtos import AvailabilityCheckDTO, ProductRequestDTO
from modules.products.exceptions import (
    InsufficientStock,
    InvalidQuantity,
    ProductNotFound,
)
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    AvailabilityCheckSerializer,
    ProductRequestSerializer,
    ProductSerializer,
    ReduceStockSerializer,
)
from modules.products.services import ProductService


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD, availability and stock operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products(
            name=self.request.query_params.get("name") or None,
            in_stock=_truthy(self.request.query_params.get("inStock")),
        )

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        queryset = self.filter_queryset(self.get_queryset())
        return Response(ProductSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = self._build_request_dto(request)
        if isinstance(dto, Response):
            return dto

        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        dto = self._build_request_dto(request)
        if isinstance(dto, Response):
            return dto

        try:
            product = self._service.update_product(pk, dto)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound as exc:
            return error_response(exc)
        return Response(
            {"message": "Product deleted successfully.", "productId": pk},
            status=status.HTTP_200_OK,
        )

    # ------------------------------------------------------------------
    # Availability / Stock
    # ------------------------------------------------------------------

    @action(detail=False, methods=["post"], url_path="check-availability")
    def check_availability(self, request: Request) -> Response:
        """POST /api/products/check-availability

        Always 200 for a well-formed request; an unknown product is
        reported inside the body (``available=false``).
        """
        serializer = AvailabilityCheckSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        result = self._service.check_availability(
            AvailabilityCheckDTO(product_id=data["productId"], quantity=data["quantity"])
        )
        return Response(result.to_payload())

    @action(detail=True, methods=["post"], url_path="reduce-stock")
    def reduce_stock(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/products/{pk}/reduce-stock

        Accepts ``{"quantity": N}``.  Uses the atomic conditional update.
        """
        serializer = ReduceStockSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        quantity = serializer.validated_data["quantity"]
        try:
            product = self._service.reserve_stock(pk, quantity)
        except (ProductNotFound, InsufficientStock, InvalidQuantity) as exc:
            return error_response(exc)

        return Response(
            {"productId": str(product.id), "quantity": quantity, "stock": product.stock}
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _build_request_dto(request: Request) -> ProductRequestDTO | Response:
        serializer = ProductRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        try:
            return ProductRequestDTO(
                name=data["name"],
                description=data.get("description") or "",
                price=data["price"],
                stock=data["stock"],
            )
        except PydanticValidationError as exc:
            return validation_error_response(
                [error["msg"] for error in exc.errors()]
            )
