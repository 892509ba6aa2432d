"""HTTP client for the upstream e-commerce API (catalog and carts).

Both resources are read in full on every call; there is no pagination,
caching or retry. Any failure of either read fails the whole fetch.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.exceptions import UpstreamFetchError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.sales.schemas import Cart, Product

logger = get_logger(__name__)

_products_adapter: TypeAdapter[list[Product]] = TypeAdapter(list[Product])
_carts_adapter: TypeAdapter[list[Cart]] = TypeAdapter(list[Cart])


class UpstreamClient:
    """Read-only client for `GET /products` and `GET /carts`.

    Args:
        base_url: Upstream root URL. Defaults to settings.
        timeout: Per-request timeout in seconds. Defaults to settings.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.upstream_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    async def _get_json(self, client: httpx.AsyncClient, path: str) -> Any:
        """GET `path` and decode JSON.

        Raises:
            UpstreamFetchError: On transport failure, non-2xx status or invalid JSON.
        """
        resource = path.lstrip("/")
        try:
            response = await client.get(path)
        except httpx.HTTPError as e:
            logger.error(
                "upstream.fetch_failed",
                resource=resource,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamFetchError(
                f"Failed to fetch {resource} from upstream: {str(e) or type(e).__name__}",
                resource=resource,
            ) from e

        if not response.is_success:
            logger.error(
                "upstream.fetch_failed",
                resource=resource,
                status_code=response.status_code,
            )
            raise UpstreamFetchError(
                f"Upstream returned HTTP {response.status_code} for {resource}",
                resource=resource,
                upstream_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("upstream.invalid_json", resource=resource, error=str(e))
            raise UpstreamFetchError(
                f"Upstream returned invalid JSON for {resource}",
                resource=resource,
                upstream_status=response.status_code,
            ) from e

    async def _fetch_products(self, client: httpx.AsyncClient) -> list[Product]:
        payload = await self._get_json(client, "/products")
        try:
            return _products_adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise UpstreamFetchError(
                f"Unexpected products payload: {e.error_count()} invalid field(s)",
                resource="products",
            ) from e

    async def _fetch_carts(self, client: httpx.AsyncClient) -> list[Cart]:
        payload = await self._get_json(client, "/carts")
        try:
            return _carts_adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise UpstreamFetchError(
                f"Unexpected carts payload: {e.error_count()} invalid field(s)",
                resource="carts",
            ) from e

    async def fetch_products(self) -> list[Product]:
        """Fetch the full product catalog."""
        async with self._client() as client:
            return await self._fetch_products(client)

    async def fetch_carts(self) -> list[Cart]:
        """Fetch all carts."""
        async with self._client() as client:
            return await self._fetch_carts(client)

    async def fetch_catalog_and_orders(self) -> tuple[list[Product], list[Cart]]:
        """Fetch products and carts concurrently.

        Returns:
            Tuple of (products, carts).

        Raises:
            UpstreamFetchError: If either read fails.
        """
        async with self._client() as client:
            products, carts = await asyncio.gather(
                self._fetch_products(client),
                self._fetch_carts(client),
            )

        logger.info(
            "upstream.fetch_completed",
            base_url=self.base_url,
            products=len(products),
            carts=len(carts),
        )
        return products, carts
