"""Poll loop tying together fetch, detection and notification."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from .config import CHECK_INTERVAL_SECONDS
from .detector import matching_bids
from .errors import MonitorError
from .models import PollerState, ProductSnapshot

logger = logging.getLogger(__name__)


class SnapshotSource(Protocol):
    async def fetch(self, url_key: str) -> ProductSnapshot: ...


class BidNotifier(Protocol):
    async def notify(self, bid: int) -> None: ...


class ErrorPolicy(Protocol):
    def handle(self, error: MonitorError) -> None: ...


class FailFast:
    """Re-raise every error so the process stops."""

    def handle(self, error: MonitorError) -> None:
        raise error


class LogAndContinue:
    """Log the error and keep polling."""

    def handle(self, error: MonitorError) -> None:
        logger.error(f"{type(error).__name__}: {error} (continuing)")


@dataclass
class BidMonitor:
    """Polls one product and alerts when the target size gets a higher bid."""

    client: SnapshotSource
    notifier: BidNotifier
    url_key: str
    size: str
    interval: float = CHECK_INTERVAL_SECONDS
    error_policy: ErrorPolicy = field(default_factory=FailFast)
    state: PollerState = field(default_factory=PollerState)
    _running: bool = False

    async def _notify(self, bid: int) -> bool:
        try:
            await self.notifier.notify(bid)
        except MonitorError as e:
            self.error_policy.handle(e)
            return False
        self.state.record(bid)
        return True

    async def run_once(self) -> list[int]:
        """
        Run a single poll cycle.

        Returns the bids notified during this cycle, in the order they
        were sent.
        """
        logger.info(f"Checking {self.url_key} for size {self.size}...")

        try:
            snapshot = await self.client.fetch(self.url_key)
        except MonitorError as e:
            self.error_policy.handle(e)
            return []

        notified: list[int] = []
        for bid in matching_bids(snapshot, self.size):
            if not self.state.is_new_high(bid):
                logger.debug(f"Bid {bid} not above {self.state.last_notified_bid}, skipping")
                continue
            logger.info(f"New highest bid for size {self.size}: {self.state.last_notified_bid} → {bid}")
            if await self._notify(bid):
                notified.append(bid)

        logger.info("Check cycle complete")
        return notified

    async def run(self) -> None:
        """Run the monitor loop until stopped or an error escapes the policy."""
        self._running = True
        logger.info(
            f"Bid monitor started. Checking {self.url_key} size {self.size} "
            f"every {self.interval}s"
        )

        while self._running:
            await self.run_once()
            if not self._running:
                break
            logger.debug(f"Next check in {self.interval}s")
            await asyncio.sleep(self.interval)

    def stop(self) -> None:
        """Stop the monitor loop."""
        self._running = False
        logger.info("Bid monitor stopping...")
