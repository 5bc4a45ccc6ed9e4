"""Shared fixtures for bid monitor tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bid_monitor.config import Settings
from bid_monitor.models import ProductSnapshot, VariantListing


def make_snapshot(*variants: tuple[str, int]) -> ProductSnapshot:
    """Build a snapshot from (size, highest_bid) pairs."""
    return ProductSnapshot(
        variants={
            f"variant-{i}": VariantListing(size=size, highest_bid=bid)
            for i, (size, bid) in enumerate(variants)
        }
    )


def product_payload(*variants: tuple[str, int]) -> dict:
    """Raw API body for (size, highest_bid) pairs."""
    return {
        "Product": {
            "id": "abc",
            "children": {
                f"uuid-{i}": {
                    "shoeSize": size,
                    "market": {"highestBid": bid, "lowestAsk": bid + 50},
                }
                for i, (size, bid) in enumerate(variants)
            },
        }
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        webhook_url="https://discord.com/api/webhooks/1/token",
        proxy_url="http://proxy.example:8080",
        proxy_user="user",
        proxy_password="secret",
        look_for_size="6",
        item_url_key="air-jordan-1-retro-high",
    )
