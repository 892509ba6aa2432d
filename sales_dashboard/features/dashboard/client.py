"""HTTP client the dashboard uses to call `GET /api/sales-data`."""

from __future__ import annotations

import httpx
from pydantic import ValidationError as PydanticValidationError

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.exceptions import SalesDashboardError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.dashboard.schemas import DashboardFilters
from sales_dashboard.features.sales.schemas import SalesDataResponse

logger = get_logger(__name__)


class DashboardFetchError(SalesDashboardError):
    """The sales-data endpoint returned an error or could not be reached.

    `message` is what the dashboard shows: the `error` member of the
    response body when present, otherwise a generic HTTP status message.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            message=message,
            code="DASHBOARD_FETCH_ERROR",
            status_code=502,
            context={"upstream_status": status_code},
        )
        self.response_status = status_code


def error_message_from_response(response: httpx.Response) -> str:
    """Extract the `error` member of an error body, with a status fallback."""
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class SalesDataClient:
    """Calls the sales-data API with the dashboard's filters.

    Args:
        base_url: API root. Defaults to `dashboard_api_base_url`.
        transport: Optional httpx transport (tests, in-process ASGI).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.dashboard_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self._transport = transport

    def build_url(self, filters: DashboardFilters) -> httpx.URL:
        return httpx.URL(f"{self.base_url}/api/sales-data", params=filters.to_query_params())

    async def fetch(self, filters: DashboardFilters) -> SalesDataResponse:
        """Fetch the series for `filters`.

        Raises:
            DashboardFetchError: On transport failure, non-2xx status or bad body.
        """
        url = self.build_url(filters)
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                logger.error("dashboard.fetch_failed", url=str(url), error=str(e))
                raise DashboardFetchError(str(e) or type(e).__name__) from e

        if not response.is_success:
            message = error_message_from_response(response)
            logger.warning(
                "dashboard.fetch_rejected",
                url=str(url),
                status_code=response.status_code,
                error=message,
            )
            raise DashboardFetchError(message, status_code=response.status_code)

        try:
            return SalesDataResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DashboardFetchError(f"Invalid sales data response: {e}") from e
