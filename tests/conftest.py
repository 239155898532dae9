import httpx
import pytest

from django.test import Client
from rest_framework.test import APIClient

from modules.orders.clients import ProductServiceClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Product service wiring
# ---------------------------------------------------------------------------


def _make_client(handler) -> ProductServiceClient:
    http = httpx.Client(
        transport=httpx.MockTransport(handler),
        base_url="http://product-service",
    )
    return ProductServiceClient(http_client=http)


@pytest.fixture()
def forwarded_requests():
    """Every ``httpx.Request`` the order service sent to the product service."""
    return []


@pytest.fixture()
def product_client(forwarded_requests):
    """Product client whose transport calls the in-process product API."""
    django_client = Client()

    def _forward(request: httpx.Request) -> httpx.Response:
        forwarded_requests.append(request)
        headers = {}
        if "x-request-id" in request.headers:
            headers["X-Request-ID"] = request.headers["x-request-id"]
        response = django_client.generic(
            request.method,
            request.url.path,
            request.content,
            content_type="application/json",
            headers=headers,
        )
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers={"Content-Type": response.get("Content-Type", "application/json")},
        )

    client = _make_client(_forward)
    yield client
    client.close()


@pytest.fixture()
def wired_orders(monkeypatch, product_client):
    """Order views talk to the product API through ``product_client``."""
    monkeypatch.setattr(
        "modules.orders.views.get_product_client", lambda: product_client
    )
    return product_client


@pytest.fixture()
def unreachable_product_service(monkeypatch):
    """Order views talk to a product service that refuses connections."""

    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client = _make_client(_refuse)
    monkeypatch.setattr("modules.orders.views.get_product_client", lambda: client)
    yield client
    client.close()
