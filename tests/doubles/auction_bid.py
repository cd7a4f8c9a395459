"""Fake auction entities for testing.

An auction bid has a current bid, a new bid and an optional highest bid
the bidder accepts. The rules mirror a typical bidding form:
- new_bid must be greater 0
- new_bid must be greater than the current bid
- new_bid must not be greater than max_new_bid (group rule)
- a suspiciously high bid is flagged as a warning (async, explicit only)
"""

from __future__ import annotations

import asyncio
from typing import Any

from reactive_validation import (
    AsyncValidationRule,
    RuleRegistry,
    ValidatableEntity,
    ValidationContext,
    ValidationResult,
)
from reactive_validation.validation import (
    CrossPropertyValidation,
    ExpressionValidation,
    NestedEntityValidation,
    RelationshipValidation,
)

GREATER_ZERO = "Value must be greater 0."
GREATER_CURRENT = "Value must be greater than current bid ({related_value})."
NOT_ABOVE_MAX = "New bid must not be greater than highest bid."
BID_ABUSE = "Your bid surpasses the current bid by a 100 times. Are you sure?"


class BidAbuseCheck(AsyncValidationRule):
    """Flag bids far above the current bid, as a remote check would."""

    DEFAULT_ERROR = BID_ABUSE

    async def check_async(self, value: Any, context: ValidationContext) -> ValidationResult:
        await asyncio.sleep(0)
        current = context.get_property_value("current_bid")
        if value is not None and current and value >= current * 100:
            return self.fail()
        return ValidationResult.success()


def build_auction_bid_rules() -> RuleRegistry:
    """Build a fresh registry with the auction bid rules."""
    return RuleRegistry(
        properties={
            "new_bid": [
                ExpressionValidation({"condition": "value > 0", "error": GREATER_ZERO}),
                RelationshipValidation(
                    {
                        "related": "current_bid",
                        "condition": "value > related_value",
                        "error": GREATER_CURRENT,
                    }
                ),
                BidAbuseCheck({"level": "warning", "implicit": False}),
            ],
        },
        groups=[
            CrossPropertyValidation(
                {
                    "properties": ["new_bid", "max_new_bid"],
                    "condition": "max_new_bid is None or new_bid <= max_new_bid",
                    "error": NOT_ABOVE_MAX,
                    "show_on_property": False,
                }
            ),
        ],
    )


class AuctionBid(ValidatableEntity):
    """Bid on an auction lot."""

    validation_rules = build_auction_bid_rules()

    def __init__(self, current_bid: int = 100, new_bid: int = 0, max_new_bid=None, **kwargs):
        super().__init__(**kwargs)
        self.current_bid = current_bid
        self.new_bid = new_bid
        self.max_new_bid = max_new_bid


class AuctionLot(ValidatableEntity):
    """Auction lot holding a bid as a nested entity."""

    validation_rules = RuleRegistry(
        properties={"bid": [NestedEntityValidation()]},
    )

    def __init__(self, bid=None):
        super().__init__()
        self.bid = bid
