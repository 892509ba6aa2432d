"""RFC 7807 Problem Details for HTTP APIs.

Error responses are problem documents that also carry the `error` (and, for
upstream failures, `details`) members the dashboard frontend reads.

Reference: https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sales_dashboard.core.logging import request_id_ctx

# =============================================================================
# Error Type URIs
# =============================================================================

ERROR_TYPE_BASE = "/errors"

ERROR_TYPES = {
    "VALIDATION_ERROR": f"{ERROR_TYPE_BASE}/validation",
    "PROXY_ERROR": f"{ERROR_TYPE_BASE}/proxy",
    "UPSTREAM_FETCH_ERROR": f"{ERROR_TYPE_BASE}/upstream-fetch",
    "NOTIFICATION_DELIVERY_ERROR": f"{ERROR_TYPE_BASE}/notification-delivery",
    "INTERNAL_ERROR": f"{ERROR_TYPE_BASE}/internal",
}


# =============================================================================
# Problem Detail Schema
# =============================================================================


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details document.

    Attributes:
        type: URI identifying the error type.
        title: Short human-readable summary of the problem.
        status: HTTP status code.
        error: Human-readable message shown by the dashboard.
        detail: Explanation specific to this occurrence.
        details: Underlying cause for upstream failures.
        instance: URI reference for this occurrence.
        errors: Field-level validation errors.
        code: Machine-readable error code.
        request_id: Request correlation ID.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(
        default="about:blank",
        description="URI reference identifying the problem type.",
    )
    title: str = Field(..., description="Short, human-readable summary of the problem type.")
    status: int = Field(..., ge=400, le=599, description="HTTP status code.")
    error: str = Field(..., description="Message displayed to dashboard users.")
    detail: str | None = Field(None, description="Explanation specific to this occurrence.")
    details: str | None = Field(
        None,
        description="Underlying cause (upstream status or transport error) for 500 responses.",
    )
    instance: str | None = Field(None, description="URI reference for this occurrence.")
    errors: list[dict[str, Any]] | None = Field(
        None,
        description="Field-level validation errors.",
    )
    code: str | None = Field(None, description="Machine-readable error code.")
    request_id: str | None = Field(None, description="Request correlation ID.")


class ProblemDetailResponse(JSONResponse):
    """JSON response with RFC 7807 content type."""

    media_type = "application/problem+json"


# =============================================================================
# Helper Functions
# =============================================================================


def create_problem_detail(
    status: int,
    title: str,
    error: str,
    detail: str | None = None,
    details: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
    type_uri: str | None = None,
) -> ProblemDetail:
    """Create a ProblemDetail with type URI and instance filled in.

    Args:
        status: HTTP status code.
        title: Short problem summary.
        error: Message displayed to users.
        detail: Explanation of this occurrence (optional).
        details: Underlying cause (optional).
        error_code: Internal error code for type URI lookup.
        errors: Field-level validation errors (optional).
        type_uri: Problem type URI; looked up from `error_code` when omitted.

    Returns:
        Configured ProblemDetail instance.
    """
    request_id = request_id_ctx.get()

    return ProblemDetail(
        type=type_uri or ERROR_TYPES.get(error_code, f"{ERROR_TYPE_BASE}/{error_code.lower()}"),
        title=title,
        status=status,
        error=error,
        detail=detail,
        details=details,
        instance=f"/requests/{request_id}" if request_id else None,
        errors=errors,
        code=error_code,
        request_id=request_id,
    )


def problem_response(
    status: int,
    title: str,
    error: str,
    detail: str | None = None,
    details: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
    type_uri: str | None = None,
) -> ProblemDetailResponse:
    """Create a ProblemDetailResponse with the problem+json content type.

    Returns:
        JSONResponse carrying the problem document.
    """
    problem = create_problem_detail(
        status=status,
        title=title,
        error=error,
        detail=detail,
        details=details,
        error_code=error_code,
        errors=errors,
        type_uri=type_uri,
    )

    return ProblemDetailResponse(
        status_code=status,
        content=problem.model_dump(exclude_none=True),
    )
