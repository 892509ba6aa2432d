"""Service layer for the sales-data proxy.

Orchestrates one request: fetch catalog and carts, aggregate, write the
trace log, notify the webhook.
"""

from __future__ import annotations

import time

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.exceptions import ProxyError, SalesDashboardError
from sales_dashboard.core.logging import TraceLog, get_logger, get_trace_log
from sales_dashboard.features.sales.aggregator import aggregate
from sales_dashboard.features.sales.notifier import WebhookNotifier
from sales_dashboard.features.sales.schemas import SalesDataResponse, SalesQuery, WebhookPayload
from sales_dashboard.features.sales.upstream import UpstreamClient

logger = get_logger(__name__)


class SalesDataService:
    """Builds the daily sales/volume series for a query.

    Every call re-fetches and re-aggregates the full upstream dataset.

    Args:
        upstream: Upstream API client.
        notifier: Webhook notifier.
        trace_log: JSONL trace log.
    """

    def __init__(
        self,
        upstream: UpstreamClient | None = None,
        notifier: WebhookNotifier | None = None,
        trace_log: TraceLog | None = None,
    ) -> None:
        self.settings = get_settings()
        self.upstream = upstream or UpstreamClient()
        self.notifier = notifier or WebhookNotifier()
        self.trace_log = trace_log or get_trace_log()

    async def get_sales_data(self, query: SalesQuery) -> SalesDataResponse:
        """Fetch, aggregate and record one sales-data request.

        Args:
            query: Validated date range and category.

        Returns:
            Index-aligned `prices` and `total_volumes` series.

        Raises:
            UpstreamFetchError: If the catalog or carts could not be read.
            ProxyError: If building the series failed for any other reason.
        """
        started = time.perf_counter()

        try:
            products, carts = await self.upstream.fetch_catalog_and_orders()
            series = aggregate(
                products,
                carts,
                query.start_date,
                query.end_date,
                query.category,
            )
            response = series.to_response()
        except SalesDashboardError as e:
            self.trace_log.record_failure(e.message)
            raise
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error("sales.aggregation_failed", error=message, exc_info=True)
            self.trace_log.record_failure(message)
            raise ProxyError(message, context={"error_type": type(e).__name__}) from e

        duration_ms = int((time.perf_counter() - started) * 1000)
        self.trace_log.record_success(
            method="GET",
            source=self.settings.upstream_source_label,
            status=200,
            duration_ms=duration_ms,
        )

        logger.info(
            "sales.data_aggregated",
            start_date=str(query.start_date),
            end_date=str(query.end_date),
            category=query.category.value,
            days=len(series),
            products=len(products),
            carts=len(carts),
            duration_ms=duration_ms,
        )

        await self.notifier.notify(
            WebhookPayload(
                **{
                    "from": query.start_date.isoformat(),
                    "to": query.end_date.isoformat(),
                    "category": query.category.value,
                }
            )
        )

        return response
