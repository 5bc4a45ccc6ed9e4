"""Discord webhook notification module."""

import logging
from typing import Optional

import httpx

from .config import REQUEST_TIMEOUT_SECONDS
from .errors import NotifyError

logger = logging.getLogger(__name__)


def format_bid_message(bid: int) -> str:
    """Alert text for a new highest bid, pinging the whole channel."""
    return f"New ask! {bid}£ @everyone"


class WebhookNotifier:
    """Posts plain-text messages to a Discord webhook."""

    def __init__(
        self,
        webhook_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url
        self.transport = transport

    async def send_message(self, content: str) -> None:
        """
        Deliver `content` to the webhook.

        Raises NotifyError on a transport failure or non-success status.
        Nothing is retried.
        """
        payload = {"content": content}

        try:
            async with httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT_SECONDS,
                transport=self.transport,
            ) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Discord webhook error: {e.response.status_code} - {e.response.text}")
            raise NotifyError(f"Webhook rejected message with {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Discord webhook request failed: {e}")
            raise NotifyError(f"Webhook request failed: {e!r}") from e

    async def notify(self, bid: int) -> None:
        """Send the new-bid alert for `bid`."""
        await self.send_message(format_bid_message(bid))
        logger.info(f"Discord alert sent for bid {bid}")

    async def send_test_message(self) -> None:
        """Send a test message to verify webhook connectivity."""
        await self.send_message("🧪 Bid monitor webhook test")
