"""Bid extraction and change detection."""

import logging
from typing import Iterator

from .models import ProductSnapshot

logger = logging.getLogger(__name__)


def matching_bids(snapshot: ProductSnapshot, size: str) -> Iterator[int]:
    """
    Yield the highest bid of every variant whose size equals `size`.

    Sizes are compared as-is, without trimming or case folding. Order
    follows the snapshot's variant map and carries no meaning.
    """
    for key, listing in snapshot.variants.items():
        if listing.size != size:
            continue
        logger.debug(f"Variant {key} (size {listing.size}): highest bid {listing.highest_bid}")
        yield listing.highest_bid


def new_bids(snapshot: ProductSnapshot, size: str, last_bid: int) -> list[int]:
    """Bids that would be notified, each strictly above the one before it."""
    fired: list[int] = []
    for bid in matching_bids(snapshot, size):
        if bid > last_bid:
            fired.append(bid)
            last_bid = bid
    return fired
