"""Custom exceptions and FastAPI exception handlers.

Error taxonomy:
- ValidationError: bad or missing request parameters (400).
- ProxyError: building the sales series failed (500).
  - UpstreamFetchError: the upstream e-commerce API could not be read.
- NotificationDeliveryError: webhook POST failed. Logged only, never surfaced.

All handled errors are rendered as RFC 7807 problem documents.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from sales_dashboard.core.logging import get_logger
from sales_dashboard.core.problem_details import (
    ERROR_TYPES,
    ProblemDetailResponse,
    problem_response,
)

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class SalesDashboardError(Exception):
    """Base exception for application errors.

    Each subclass maps to an RFC 7807 problem type URI and an HTTP status.
    """

    error_type_uri: str = ERROR_TYPES["INTERNAL_ERROR"]

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            status_code: HTTP status code.
            context: Additional structured context for logs.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.context = context or {}

    @property
    def title(self) -> str:
        """RFC 7807 title - short summary of problem type."""
        return self.code.replace("_", " ").title()

    @property
    def public_message(self) -> str:
        """Message placed in the response `error` member."""
        return self.message

    @property
    def public_details(self) -> str | None:
        """Value placed in the response `details` member, if any."""
        return None


class ValidationError(SalesDashboardError):
    """Request parameters are missing or malformed."""

    error_type_uri: str = ERROR_TYPES["VALIDATION_ERROR"]

    def __init__(
        self,
        message: str = "Validation failed",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            context=context,
        )


class ProxyError(SalesDashboardError):
    """The sales-data proxy failed to build a response.

    Callers see a generic "Proxy error" with the underlying cause in `details`.
    """

    error_type_uri: str = ERROR_TYPES["PROXY_ERROR"]

    def __init__(
        self,
        message: str,
        code: str = "PROXY_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, status_code=500, context=context)

    @property
    def public_message(self) -> str:
        return "Proxy error"

    @property
    def public_details(self) -> str | None:
        return self.message


class UpstreamFetchError(ProxyError):
    """The upstream catalog or cart endpoint could not be read.

    Raised for non-success statuses, transport failures, timeouts and
    payloads that do not match the expected shape.
    """

    error_type_uri: str = ERROR_TYPES["UPSTREAM_FETCH_ERROR"]

    def __init__(
        self,
        message: str,
        resource: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="UPSTREAM_FETCH_ERROR",
            context={"resource": resource, "upstream_status": upstream_status},
        )
        self.resource = resource
        self.upstream_status = upstream_status


class NotificationDeliveryError(SalesDashboardError):
    """Webhook notification could not be delivered."""

    error_type_uri: str = ERROR_TYPES["NOTIFICATION_DELIVERY_ERROR"]

    def __init__(
        self,
        message: str = "Webhook delivery failed",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="NOTIFICATION_DELIVERY_ERROR",
            status_code=502,
            context=context,
        )


# =============================================================================
# Exception Handlers (RFC 7807)
# =============================================================================


async def sales_dashboard_exception_handler(
    _request: Request,
    exc: SalesDashboardError,
) -> ProblemDetailResponse:
    """Handle SalesDashboardError exceptions with RFC 7807 Problem Details.

    Args:
        _request: FastAPI request object.
        exc: The raised exception.

    Returns:
        RFC 7807 Problem Detail response.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        context=exc.context,
    )

    return problem_response(
        status=exc.status_code,
        title=exc.title,
        error=exc.public_message,
        detail=exc.message,
        details=exc.public_details,
        error_code=exc.code,
        type_uri=exc.error_type_uri,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Handle FastAPI request validation errors as 400 problem documents.

    Args:
        request: FastAPI request object.
        exc: Pydantic validation error.

    Returns:
        RFC 7807 Problem Detail response with field-level errors.
    """
    field_errors: list[dict[str, str]] = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = ".".join(str(part) for part in loc if part not in ("body", "query"))
        field_errors.append(
            {
                "field": field_path,
                "message": str(error.get("msg", "Validation failed")),
                "type": str(error.get("type", "unknown")),
            }
        )

    logger.warning(
        "app.validation_error",
        error_count=len(field_errors),
        path=str(request.url.path),
        fields=[e["field"] for e in field_errors],
    )

    return problem_response(
        status=400,
        title="Validation Error",
        error="Invalid request parameters: "
        + ", ".join(e["field"] or "request" for e in field_errors),
        detail=f"Request validation failed with {len(field_errors)} error(s).",
        error_code="VALIDATION_ERROR",
        errors=field_errors,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ProblemDetailResponse:
    """Handle unexpected exceptions with RFC 7807 Problem Details.

    Args:
        request: FastAPI request object.
        exc: The raised exception.

    Returns:
        RFC 7807 Problem Detail response.
    """
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return problem_response(
        status=500,
        title="Internal Server Error",
        error="Internal server error",
        detail="An unexpected error occurred. Please try again later or "
        "contact support with the request_id.",
        error_code="INTERNAL_ERROR",
    )


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(SalesDashboardError, sales_dashboard_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
