"""Data models for marketplace snapshots and poller state."""

from dataclasses import dataclass, field
from typing import Any


def _require_mapping(value: Any, where: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"Expected an object at {where}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class VariantListing:
    """Market data for a single size of a product."""
    size: str
    highest_bid: int

    @classmethod
    def from_payload(cls, key: str, data: Any) -> "VariantListing":
        """Build a listing from one entry of the `children` map."""
        data = _require_mapping(data, f"Product.children[{key!r}]")

        size = data.get("shoeSize")
        if not isinstance(size, str):
            raise ValueError(f"Variant {key!r} has no string shoeSize")

        market = _require_mapping(data.get("market"), f"Product.children[{key!r}].market")
        bid = market.get("highestBid")
        # bool is an int subclass, reject it explicitly
        if not isinstance(bid, int) or isinstance(bid, bool) or bid < 0:
            raise ValueError(f"Variant {key!r} has invalid highestBid: {bid!r}")

        return cls(size=size, highest_bid=bid)


@dataclass(frozen=True)
class ProductSnapshot:
    """Product variants as reported by the marketplace at one poll."""
    variants: dict[str, VariantListing] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ProductSnapshot":
        """
        Parse the product API response body.

        Expects `{"Product": {"children": {key: {...}}}}`. Unknown fields
        are ignored. Raises ValueError when the structure does not match.
        """
        payload = _require_mapping(payload, "response body")
        product = _require_mapping(payload.get("Product"), "Product")
        children = _require_mapping(product.get("children"), "Product.children")

        return cls(
            variants={
                key: VariantListing.from_payload(key, data)
                for key, data in children.items()
            }
        )


@dataclass
class PollerState:
    """Highest bid notified so far. Only ever moves upwards."""
    last_notified_bid: int = 0

    def is_new_high(self, bid: int) -> bool:
        return bid > self.last_notified_bid

    def record(self, bid: int) -> None:
        """Store a bid that has just been notified."""
        if bid < self.last_notified_bid:
            raise ValueError(
                f"Bid {bid} is below last notified bid {self.last_notified_bid}"
            )
        self.last_notified_bid = bid
