"""Error taxonomy shared by both services.

Every domain error raised by a Service Layer belongs to exactly one
``ErrorKind``.  The kind, not the concrete class, decides the HTTP
status code, so the mapping stays deterministic at the API boundary:

- ``NOT_FOUND``          -> 404
- ``UNAVAILABLE``        -> 400
- ``VALIDATION_FAILED``  -> 400
- ``INTERNAL``           -> 500

Views catch domain errors explicitly and render them with
``error_response``.  ``api_exception_handler`` is registered as the DRF
``EXCEPTION_HANDLER`` and turns anything that escapes a view into a
generic 500 without leaking internal detail.
"""

from __future__ import annotations

import enum
from typing import Any, Dict, Optional

import structlog
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INTERNAL = "INTERNAL"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_TITLE = "Internal server error"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


# ---------------------------------------------------------------------------
# Base classes (one per kind)
# ---------------------------------------------------------------------------


class ServiceError(Exception):
    """Base class for every error a Service Layer may raise."""

    kind: ErrorKind = ErrorKind.INTERNAL
    title: str = INTERNAL_ERROR_TITLE

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.title


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND
    title = "Not found"


class UnavailableError(ServiceError):
    kind = ErrorKind.UNAVAILABLE
    title = "Unavailable"


class ValidationFailedError(ServiceError):
    kind = ErrorKind.VALIDATION_FAILED
    title = "Validation failed"


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def error_payload(
    title: str, message: str, details: Optional[Any] = None
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"error": title, "message": message}
    if details is not None:
        payload["details"] = details
    return payload


def error_response(exc: ServiceError) -> Response:
    """Translate a domain error into a DRF ``Response``."""
    if exc.kind is ErrorKind.INTERNAL:
        body = error_payload(INTERNAL_ERROR_TITLE, INTERNAL_ERROR_MESSAGE)
    else:
        body = error_payload(exc.title, exc.message)
    return Response(body, status=STATUS_BY_KIND[exc.kind])


def validation_error_response(details: Any) -> Response:
    """400 response for a request payload that failed shape validation."""
    return Response(
        error_payload(
            ValidationFailedError.title,
            "Request payload is invalid.",
            details=details,
        ),
        status=status.HTTP_400_BAD_REQUEST,
    )


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """DRF exception handler used as the last line of the API boundary."""
    if isinstance(exc, ServiceError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("api.service_error", error=exc.message, exc_info=exc)
        return error_response(exc)

    if isinstance(exc, drf_exceptions.ValidationError):
        return validation_error_response(exc.detail)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail") if isinstance(response.data, dict) else None
        response.data = error_payload(
            response.status_text,
            str(detail) if detail is not None else response.status_text,
        )
        return response

    view = context.get("view")
    logger.error(
        "api.unhandled_exception",
        view=type(view).__name__ if view is not None else None,
        exc_info=exc,
    )
    return Response(
        error_payload(INTERNAL_ERROR_TITLE, INTERNAL_ERROR_MESSAGE),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
