"""Marketplace bid monitor with Discord webhook alerts."""

from .client import MarketClient
from .errors import ConfigError, FetchError, MonitorError, NotifyError
from .models import PollerState, ProductSnapshot, VariantListing
from .monitor import BidMonitor, FailFast, LogAndContinue
from .notifier import WebhookNotifier

__all__ = [
    "BidMonitor",
    "ConfigError",
    "FailFast",
    "FetchError",
    "LogAndContinue",
    "MarketClient",
    "MonitorError",
    "NotifyError",
    "PollerState",
    "ProductSnapshot",
    "VariantListing",
    "WebhookNotifier",
]
