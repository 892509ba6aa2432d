"""Dashboard presentation layer: filters, KPIs, top days, selection and page rendering."""

from sales_dashboard.features.dashboard.client import DashboardFetchError, SalesDataClient
from sales_dashboard.features.dashboard.routes import router
from sales_dashboard.features.dashboard.schemas import (
    DashboardFilters,
    DashboardKPIs,
    DashboardView,
    DayPoint,
)
from sales_dashboard.features.dashboard.service import DashboardService, LocalSalesDataSource
from sales_dashboard.features.dashboard.view import (
    DashboardState,
    compute_kpis,
    format_date_tick,
    points_from_response,
    top_days_by_volume,
)

__all__ = [
    "DashboardFetchError",
    "DashboardFilters",
    "DashboardKPIs",
    "DashboardService",
    "DashboardState",
    "DashboardView",
    "DayPoint",
    "LocalSalesDataSource",
    "SalesDataClient",
    "compute_kpis",
    "format_date_tick",
    "points_from_response",
    "router",
    "top_days_by_volume",
]
