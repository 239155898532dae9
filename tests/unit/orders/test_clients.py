"""Unit tests for ProductServiceClient.

The HTTP layer is replaced by ``httpx.MockTransport`` so every branch
(success, non-2xx, transport error, bad payload) runs without a network.
"""

from __future__ import annotations

import json
from decimal import Decimal
from uuid import uuid4

import httpx
import pytest

from modules.core.middleware import correlation_id_var
from modules.orders.clients import (
    CHECK_AVAILABILITY_PATH,
    ProductServiceClient,
    get_product_client,
)

pytestmark = pytest.mark.unit


def _client(handler) -> ProductServiceClient:
    return ProductServiceClient(
        http_client=httpx.Client(
            transport=httpx.MockTransport(handler),
            base_url="http://product-service",
        )
    )


def _availability_body(product_id, quantity, **overrides) -> dict:
    body = {
        "productId": str(product_id),
        "productName": "Widget",
        "available": True,
        "requestedQuantity": quantity,
        "availableStock": 10,
        "unitPrice": "50.00",
        "message": "Product available",
    }
    body.update(overrides)
    return body


# ===========================================================================
# check_availability
# ===========================================================================


class TestCheckAvailability:
    def test_posts_camel_case_body(self):
        captured = {}
        product_id = uuid4()

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_availability_body(product_id, 2))

        result = _client(handler).check_availability(product_id, 2)

        assert captured == {
            "method": "POST",
            "path": CHECK_AVAILABILITY_PATH,
            "body": {"productId": str(product_id), "quantity": 2},
        }
        assert result.available is True
        assert result.product_name == "Widget"
        assert result.unit_price == Decimal("50.00")

    def test_passes_through_unavailable_answer(self):
        product_id = uuid4()

        def handler(request):
            return httpx.Response(
                200,
                json=_availability_body(
                    product_id,
                    10,
                    available=False,
                    availableStock=5,
                    message="Insufficient stock. Available: 5",
                ),
            )

        result = _client(handler).check_availability(product_id, 10)

        assert result.available is False
        assert result.message == "Insufficient stock. Available: 5"

    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    def test_non_success_status_is_unavailable(self, status_code):
        product_id = uuid4()
        client = _client(lambda request: httpx.Response(status_code, json={}))

        result = client.check_availability(product_id, 3)

        assert result.available is False
        assert result.product_id == product_id
        assert result.requested_quantity == 3
        assert result.available_stock == 0
        assert result.unit_price is None
        assert result.message == (
            f"Unexpected response from product service (HTTP {status_code})"
        )

    def test_transport_error_is_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = _client(handler).check_availability(uuid4(), 1)

        assert result.available is False
        assert result.message == (
            "Error communicating with product service: Connection refused"
        )

    def test_timeout_is_unavailable(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = _client(handler).check_availability(uuid4(), 1)

        assert result.available is False
        assert result.message.startswith("Error communicating with product service")

    def test_undecodable_body_is_unavailable(self):
        client = _client(lambda request: httpx.Response(200, content=b"<html>"))

        result = client.check_availability(uuid4(), 1)

        assert result.available is False
        assert result.message.startswith("Error communicating with product service")

    def test_never_retries(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        _client(handler).check_availability(uuid4(), 1)
        assert len(calls) == 1


# ===========================================================================
# get_product
# ===========================================================================


class TestGetProduct:
    def test_returns_snapshot(self):
        product_id = uuid4()

        def handler(request):
            assert request.url.path == f"/api/products/{product_id}"
            return httpx.Response(
                200,
                json={
                    "id": str(product_id),
                    "name": "Widget",
                    "description": "",
                    "price": "9.99",
                    "stock": 4,
                },
            )

        product = _client(handler).get_product(product_id)

        assert product.id == product_id
        assert product.price == Decimal("9.99")

    def test_not_found_returns_none(self):
        client = _client(lambda request: httpx.Response(404, json={}))
        assert client.get_product(uuid4()) is None

    def test_transport_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        assert _client(handler).get_product(uuid4()) is None


# ===========================================================================
# Correlation id / wiring
# ===========================================================================


class TestCorrelationForwarding:
    def test_forwards_request_id(self):
        seen = {}

        def handler(request):
            seen["cid"] = request.headers.get("X-Request-ID")
            return httpx.Response(404)

        token = correlation_id_var.set("cid-123")
        try:
            _client(handler).get_product(uuid4())
        finally:
            correlation_id_var.reset(token)

        assert seen["cid"] == "cid-123"

    def test_no_header_outside_a_request(self):
        seen = {}

        def handler(request):
            seen["has_header"] = "X-Request-ID" in request.headers
            return httpx.Response(404)

        _client(handler).get_product(uuid4())
        assert seen["has_header"] is False


class TestGetProductClient:
    def test_shared_instance_uses_settings(self, settings):
        get_product_client.cache_clear()
        try:
            client = get_product_client()
            assert get_product_client() is client
            assert str(client._http.base_url).rstrip("/") == settings.PRODUCT_SERVICE_URL
        finally:
            get_product_client().close()
            get_product_client.cache_clear()
