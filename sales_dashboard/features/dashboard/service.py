"""Service layer for the dashboard page.

Loads the series for a filter set (in-process or over HTTP) and turns it
into a DashboardView.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import Protocol

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.exceptions import SalesDashboardError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.dashboard.client import SalesDataClient
from sales_dashboard.features.dashboard.schemas import DashboardFilters, DashboardView
from sales_dashboard.features.dashboard.view import DashboardState, points_from_response
from sales_dashboard.features.sales.schemas import SalesDataResponse, SalesQuery
from sales_dashboard.features.sales.service import SalesDataService

logger = get_logger(__name__)


class SalesDataSource(Protocol):
    async def fetch(self, filters: DashboardFilters) -> SalesDataResponse: ...


class LocalSalesDataSource:
    """Calls SalesDataService directly, without an HTTP hop."""

    def __init__(self, service: SalesDataService | None = None) -> None:
        self.service = service or SalesDataService()

    async def fetch(self, filters: DashboardFilters) -> SalesDataResponse:
        query = SalesQuery(
            start_date=filters.start_date,
            end_date=filters.end_date,
            category=filters.category,
        )
        return await self.service.get_sales_data(query)


def default_source() -> SalesDataSource:
    """Pick the data source named by `dashboard_source`."""
    if get_settings().dashboard_source == "http":
        return SalesDataClient()
    return LocalSalesDataSource()


class DashboardService:
    """Builds dashboard views.

    Load errors do not raise; they end up in `DashboardView.error` so the
    page can show them.
    """

    def __init__(self, source: SalesDataSource | None = None, top_n: int | None = None) -> None:
        self.settings = get_settings()
        self.source = source or default_source()
        self.top_n = top_n if top_n is not None else self.settings.dashboard_top_n

    async def load(self, state: DashboardState) -> DashboardState:
        """Fetch the series for `state.filters` and return the loaded state."""
        try:
            response = await self.source.fetch(state.filters)
        except SalesDashboardError as e:
            logger.warning(
                "dashboard.load_failed",
                error=e.public_message,
                error_code=e.code,
            )
            return state.with_error(e.public_message)

        points = points_from_response(response)
        logger.info(
            "dashboard.loaded",
            category=state.filters.category.value,
            start_date=str(state.filters.start_date),
            end_date=str(state.filters.end_date),
            days=len(points),
        )
        return state.with_points(points)

    async def build_view(
        self,
        state: DashboardState,
        selected: date_type | None = None,
    ) -> DashboardView:
        """Render `state`, loading it first if its filters changed.

        Args:
            state: Dashboard state, usually fresh from `with_filters`.
            selected: Day to show in the detail panel.
        """
        if state.stale:
            state = await self.load(state)
        if selected is not None:
            state = state.select(selected)
        return state.to_view(self.top_n)
