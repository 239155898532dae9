"""HTTP client for the product service.

The order service never touches product rows directly: it asks the
product service over HTTP.  Communication problems are **not** raised:
they come back as an "unavailable" availability answer whose message
says what went wrong, so the order workflow treats a failed call exactly
like an out-of-stock item.  No retries, no caching.
"""

from __future__ import annotations

import functools
from typing import Optional
from uuid import UUID

import httpx
import structlog
from django.conf import settings
from pydantic import ValidationError as PydanticValidationError

from modules.core.middleware import REQUEST_ID_HEADER, get_correlation_id
from modules.orders.dtos import ProductAvailabilityDTO, ProductSnapshotDTO

logger = structlog.get_logger(__name__)

CHECK_AVAILABILITY_PATH = "/api/products/check-availability"
PRODUCT_DETAIL_PATH = "/api/products/{product_id}"


class ProductServiceClient:
    """Synchronous client for the product service REST API.

    Takes an ``httpx.Client`` so tests (or callers with special transport
    needs) can inject one; otherwise builds its own from settings.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._http = http_client or httpx.Client(
            base_url=base_url or settings.PRODUCT_SERVICE_URL,
            timeout=timeout if timeout is not None else settings.PRODUCT_SERVICE_TIMEOUT,
        )

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def check_availability(self, product_id: UUID, quantity: int) -> ProductAvailabilityDTO:
        """Ask whether ``quantity`` units of ``product_id`` are in stock."""
        log = logger.bind(product_id=str(product_id), quantity=quantity)
        log.info("product_client.check_availability")

        try:
            response = self._http.post(
                CHECK_AVAILABILITY_PATH,
                json={"productId": str(product_id), "quantity": quantity},
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            log.error("product_client.communication_error", error=str(exc))
            return self._unavailable(
                product_id, quantity, f"Error communicating with product service: {exc}"
            )

        if not response.is_success:
            log.warning("product_client.unexpected_status", status_code=response.status_code)
            return self._unavailable(
                product_id,
                quantity,
                f"Unexpected response from product service (HTTP {response.status_code})",
            )

        try:
            result = ProductAvailabilityDTO.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            log.error("product_client.invalid_payload", error=str(exc))
            return self._unavailable(
                product_id,
                quantity,
                "Error communicating with product service: invalid response payload",
            )

        log.info(
            "product_client.availability_received",
            available=result.available,
            message=result.message,
        )
        return result

    # ------------------------------------------------------------------
    # Product lookup
    # ------------------------------------------------------------------

    def get_product(self, product_id: UUID) -> Optional[ProductSnapshotDTO]:
        """Fetch a product; ``None`` if missing or the call failed."""
        log = logger.bind(product_id=str(product_id))
        try:
            response = self._http.get(
                PRODUCT_DETAIL_PATH.format(product_id=product_id),
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            log.error("product_client.communication_error", error=str(exc))
            return None

        if not response.is_success:
            log.warning("product_client.product_not_fetched", status_code=response.status_code)
            return None

        try:
            return ProductSnapshotDTO.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            log.error("product_client.invalid_payload", error=str(exc))
            return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _headers() -> dict[str, str]:
        cid = get_correlation_id()
        return {REQUEST_ID_HEADER: cid} if cid else {}

    @staticmethod
    def _unavailable(product_id: UUID, quantity: int, message: str) -> ProductAvailabilityDTO:
        return ProductAvailabilityDTO(
            product_id=product_id,
            product_name=None,
            available=False,
            requested_quantity=quantity,
            available_stock=0,
            unit_price=None,
            message=message,
        )


@functools.lru_cache(maxsize=1)
def get_product_client() -> ProductServiceClient:
    """Process-wide client; ``httpx.Client`` pools connections and is thread-safe."""
    return ProductServiceClient()
