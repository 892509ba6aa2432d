"""Best-effort webhook notification after a successful aggregation."""

from __future__ import annotations

import httpx

from sales_dashboard.core.config import get_settings
from sales_dashboard.core.exceptions import NotificationDeliveryError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.sales.schemas import WebhookPayload

logger = get_logger(__name__)


class WebhookNotifier:
    """POSTs a JSON summary to the configured webhook URL.

    Delivery is attempted once. `notify` never raises: failures are logged
    as `notification.delivery_failed` and reported through the return value.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.url = settings.webhook_url if url is None else url
        self.timeout = timeout if timeout is not None else settings.webhook_timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def deliver(self, payload: WebhookPayload) -> None:
        """POST the payload.

        Raises:
            NotificationDeliveryError: On transport failure or non-2xx status.
        """
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    self.url,
                    json=payload.model_dump(by_alias=True),
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise NotificationDeliveryError(
                    f"Webhook request failed: {str(e) or type(e).__name__}",
                    context={"url": self.url},
                ) from e

        if not response.is_success:
            raise NotificationDeliveryError(
                f"Webhook returned HTTP {response.status_code}",
                context={"url": self.url, "status_code": response.status_code},
            )

    async def notify(self, payload: WebhookPayload) -> bool:
        """Deliver the payload if a webhook is configured.

        Returns:
            True if delivered, False if disabled or delivery failed.
        """
        if not self.enabled:
            return False

        try:
            await self.deliver(payload)
        except NotificationDeliveryError as e:
            logger.warning(
                "notification.delivery_failed",
                error=e.message,
                **e.context,
            )
            return False

        logger.info("notification.delivered", url=self.url)
        return True
