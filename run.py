#!/usr/bin/env python3
"""
Bid Monitor - Entry Point

Polls a marketplace product and posts a Discord alert whenever the
target size receives a new highest bid.

Usage:
    python run.py                    # Run continuous monitoring
    python run.py --test             # Single check cycle
    python run.py --test-webhook     # Test Discord webhook connection
    python run.py --interval 60      # Custom check interval
    python run.py --keep-going       # Log fetch/webhook errors instead of exiting
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from bid_monitor.client import MarketClient
from bid_monitor.config import CHECK_INTERVAL_SECONDS, Settings, load_settings
from bid_monitor.errors import MonitorError
from bid_monitor.monitor import BidMonitor, FailFast, LogAndContinue
from bid_monitor.notifier import WebhookNotifier

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("bid_monitor")


def resolve_interval(requested: Optional[int]) -> int:
    """Interval from --interval, falling back to the configured default."""
    return requested if requested is not None else CHECK_INTERVAL_SECONDS


def summarize_check(size: str, notified: list[int]) -> list[str]:
    """Console lines describing one check cycle."""
    if not notified:
        return [f"   ✗ Size {size}: no new highest bid"]
    return [f"   ✓ Size {size}: alert sent for {bid}£" for bid in notified]


async def test_webhook(settings: Settings) -> None:
    """Test Discord webhook connectivity."""
    print("\n🔔 Testing Discord Webhook...")
    print(f"   Webhook URL: {settings.webhook_url[:50]}...")

    await WebhookNotifier(settings.webhook_url).send_test_message()

    print("✅ Test message sent successfully! Check your Discord channel.")


async def run_single_check(settings: Settings) -> None:
    """Run a single check cycle (for testing)."""
    print(f"\n🔍 Running single check cycle on {settings.item_url_key}...")

    async with MarketClient.from_settings(settings) as client:
        monitor = BidMonitor(
            client=client,
            notifier=WebhookNotifier(settings.webhook_url),
            url_key=settings.item_url_key,
            size=settings.look_for_size,
        )
        notified = await monitor.run_once()

    print("\n📊 Results:")
    for line in summarize_check(settings.look_for_size, notified):
        print(line)


async def run_continuous(settings: Settings, interval: float, keep_going: bool) -> None:
    """Run continuous monitoring."""
    print("\n🚀 Starting continuous bid monitoring...")
    print(f"   Product: {settings.item_url_key} (size {settings.look_for_size})")
    print(f"   Interval: {interval}s")
    print(f"   On error: {'log and continue' if keep_going else 'exit'}")
    print("\n   Press Ctrl+C to stop.\n")

    async with MarketClient.from_settings(settings) as client:
        monitor = BidMonitor(
            client=client,
            notifier=WebhookNotifier(settings.webhook_url),
            url_key=settings.item_url_key,
            size=settings.look_for_size,
            interval=interval,
            error_policy=LogAndContinue() if keep_going else FailFast(),
        )
        await monitor.run()


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Marketplace Bid Monitor with Discord Alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--test",
        action="store_true",
        help="Run single check cycle and exit",
    )
    parser.add_argument(
        "--test-webhook",
        action="store_true",
        help="Test Discord webhook connection and exit",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=None,
        help=f"Check interval in seconds (default: {CHECK_INTERVAL_SECONDS})",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Log fetch and webhook failures and keep polling instead of exiting",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        settings = load_settings()

        if args.test_webhook:
            asyncio.run(test_webhook(settings))
        elif args.test:
            asyncio.run(run_single_check(settings))
        else:
            asyncio.run(run_continuous(settings, resolve_interval(args.interval), args.keep_going))
    except MonitorError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n👋 Monitor stopped.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
