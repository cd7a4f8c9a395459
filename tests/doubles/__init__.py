"""Test doubles for unit testing.

Test doubles are fake implementations of the rule contracts and small
entities used for testing. They're faster and more reliable than
mocking, and they implement the actual interface contracts.

Types of test doubles:
- Fake: Lightweight working implementation (e.g., the auction bid entity)
- Stub: Returns predetermined values (e.g., a rule with a fixed outcome)
- Spy: Records calls for verification (e.g., a rule recording its values)
- Mock: Verifies interactions (use unittest.mock for this)

Example:
    >>> from tests.doubles import AuctionBid
    >>> bid = AuctionBid(new_bid=-5)
    >>> assert await bid.validate() is False
    >>> assert len(bid.validation_messages["new_bid"]) == 2
"""

from .auction_bid import AuctionBid, AuctionLot, BidAbuseCheck, build_auction_bid_rules
from .fake_rules import (
    CancelledLookupRule,
    EntityWideRule,
    GatedAsyncRule,
    RaisingRule,
    RecordingGroupRule,
    RecordingRule,
)

__all__ = [
    "AuctionBid",
    "AuctionLot",
    "BidAbuseCheck",
    "build_auction_bid_rules",
    "CancelledLookupRule",
    "EntityWideRule",
    "GatedAsyncRule",
    "RaisingRule",
    "RecordingGroupRule",
    "RecordingRule",
]
