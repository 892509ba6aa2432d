"""Test fixtures for the sales-data proxy."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from sales_dashboard.core.logging import TraceLog
from sales_dashboard.features.sales.notifier import WebhookNotifier
from sales_dashboard.features.sales.schemas import Cart, Product
from sales_dashboard.features.sales.service import SalesDataService
from sales_dashboard.features.sales.upstream import UpstreamClient

UPSTREAM_URL = "https://upstream.test"
WEBHOOK_URL = "https://hooks.test/sales"


@pytest.fixture
def products_payload() -> list[dict[str, Any]]:
    """Catalog in the upstream wire format (extra fields included)."""
    return [
        {
            "id": 1,
            "title": "Backpack",
            "price": 10.0,
            "description": "...",
            "category": "electronics",
            "image": "https://img.test/1.jpg",
            "rating": {"rate": 3.9, "count": 120},
        },
        {"id": 2, "title": "Cable", "price": 5.0, "category": "electronics"},
        {"id": 3, "title": "Shirt", "price": 22.3, "category": "men's clothing"},
        {"id": 4, "title": "Ring", "price": 168.0, "category": "jewelery"},
    ]


@pytest.fixture
def carts_payload() -> list[dict[str, Any]]:
    """Carts in the upstream wire format."""
    return [
        {
            "id": 1,
            "userId": 1,
            "date": "2020-03-02T00:00:00.000Z",
            "products": [{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}],
            "__v": 0,
        },
        {
            "id": 2,
            "userId": 1,
            "date": "2020-01-02T00:00:00.000Z",
            "products": [{"productId": 3, "quantity": 1}],
            "__v": 0,
        },
        {
            "id": 3,
            "userId": 2,
            "date": "2020-03-01T00:00:00.000Z",
            "products": [{"productId": 3, "quantity": 4}, {"productId": 99, "quantity": 5}],
            "__v": 0,
        },
    ]


@pytest.fixture
def products(products_payload) -> list[Product]:
    return [Product.model_validate(p) for p in products_payload]


@pytest.fixture
def carts(carts_payload) -> list[Cart]:
    return [Cart.model_validate(c) for c in carts_payload]


@pytest.fixture
def upstream_transport(
    products_payload, carts_payload
) -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport serving /products and /carts.

    Status codes can be overridden per path; requests are recorded in `calls`.
    """

    def _build(
        products_status: int = 200,
        carts_status: int = 200,
        calls: list[str] | None = None,
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request.url.path)
            if request.url.path == "/products":
                return httpx.Response(products_status, json=products_payload)
            if request.url.path == "/carts":
                return httpx.Response(carts_status, json=carts_payload)
            return httpx.Response(404)

        return httpx.MockTransport(handler)

    return _build


@pytest.fixture
def trace_path(tmp_path):
    return tmp_path / "logs" / "http_trace.jsonl"


@pytest.fixture
def webhook_calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_service(upstream_transport, trace_path, webhook_calls):
    """Build a SalesDataService wired to mock upstream and webhook transports."""

    def _build(
        products_status: int = 200,
        carts_status: int = 200,
        webhook_url: str = "",
        webhook_status: int = 200,
    ) -> SalesDataService:
        def webhook_handler(request: httpx.Request) -> httpx.Response:
            webhook_calls.append(request)
            return httpx.Response(webhook_status)

        return SalesDataService(
            upstream=UpstreamClient(
                base_url=UPSTREAM_URL,
                transport=upstream_transport(products_status, carts_status),
            ),
            notifier=WebhookNotifier(
                url=webhook_url,
                transport=httpx.MockTransport(webhook_handler),
            ),
            trace_log=TraceLog(trace_path),
        )

    return _build
