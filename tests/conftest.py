"""Pytest configuration and fixtures for reactive validation tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import reactive_validation
sys.path.insert(0, str(Path(__file__).parent.parent))

from types import SimpleNamespace

import pytest

from reactive_validation import BindableValidator, RuleRegistry
from tests.doubles import AuctionBid, RecordingGroupRule, RecordingRule


@pytest.fixture
def auction_bid() -> AuctionBid:
    """Return an auction bid with a current bid of 100."""
    return AuctionBid(current_bid=100)


@pytest.fixture
def plain_entity() -> SimpleNamespace:
    """Return a plain object with three properties."""
    return SimpleNamespace(first=1, second=2, third=3)


@pytest.fixture
def failing_rule() -> RecordingRule:
    """Return a rule failing with 'First is wrong.'."""
    return RecordingRule({"error": "First is wrong."}, fail=True)


@pytest.fixture
def group_rule() -> RecordingGroupRule:
    """Return a failing group rule over first and second."""
    return RecordingGroupRule(
        {"affected": ["first", "second"], "error": "First and second disagree."},
        fail=True,
    )


@pytest.fixture
def registry(failing_rule, group_rule) -> RuleRegistry:
    """Return a registry with one property rule and one group rule."""
    return RuleRegistry(properties={"first": [failing_rule]}, groups=[group_rule])


@pytest.fixture
def validator(plain_entity, registry) -> BindableValidator:
    """Return a validator for the plain entity."""
    return BindableValidator(plain_entity, registry)


@pytest.fixture
def events() -> list:
    """Return a list to collect notifications in."""
    return []
