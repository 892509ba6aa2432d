"""Sales-data proxy: upstream fetch, daily aggregation, trace and webhook."""

from sales_dashboard.features.sales.aggregator import AggregatedSeries, DailyBucket, aggregate
from sales_dashboard.features.sales.notifier import WebhookNotifier
from sales_dashboard.features.sales.routes import router
from sales_dashboard.features.sales.schemas import (
    Cart,
    CartLine,
    Category,
    Product,
    SalesDataResponse,
    SalesQuery,
    WebhookPayload,
)
from sales_dashboard.features.sales.service import SalesDataService
from sales_dashboard.features.sales.upstream import UpstreamClient

__all__ = [
    "AggregatedSeries",
    "Cart",
    "CartLine",
    "Category",
    "DailyBucket",
    "Product",
    "SalesDataResponse",
    "SalesDataService",
    "SalesQuery",
    "UpstreamClient",
    "WebhookNotifier",
    "WebhookPayload",
    "aggregate",
    "router",
]
