"""Tests for the built-in validation rules."""

from types import SimpleNamespace

import pytest

from reactive_validation.domain.exceptions import RuleConfigurationError
from reactive_validation.validation import (
    CrossPropertyValidation,
    EnumValidation,
    ExpressionValidation,
    NestedEntityValidation,
    RangeValidation,
    RelationshipValidation,
    ValidationContext,
)
from tests.doubles import AuctionBid, AuctionLot


@pytest.fixture
def context():
    """Create a context for an entity with a current bid of 100."""
    return ValidationContext(SimpleNamespace(current_bid=100, new_bid=50), "new_bid")


class TestRangeValidation:
    """Test suite for RangeValidation."""

    @pytest.mark.parametrize("value", [0, 50, 100])
    def test_in_range(self, context, value):
        """Test values within bounds, inclusive."""
        rule = RangeValidation({"min": 0, "max": 100})

        assert rule.check(value, context).valid

    @pytest.mark.parametrize("value", [-1, 101])
    def test_out_of_range(self, context, value):
        """Test values outside bounds."""
        rule = RangeValidation({"min": 0, "max": 100})

        result = rule.check(value, context)

        assert not result.valid
        assert result.errors == ["Value must be between 0 and 100."]

    def test_open_bound(self, context):
        """Test a range with only a minimum."""
        rule = RangeValidation({"min": 0, "error": "Value {value} must be at least {min}."})

        assert rule.check(10**6, context).valid
        assert rule.check(-5, context).errors == ["Value -5 must be at least 0."]

    def test_none_passes(self, context):
        """Test that a missing value is not checked."""
        assert RangeValidation({"min": 0}).check(None, context).valid


class TestEnumValidation:
    """Test suite for EnumValidation."""

    def test_allowed_value(self, context):
        """Test a value in the allowed set."""
        rule = EnumValidation({"allowed": [12, 24, 48]})

        assert rule.check(24, context).valid

    def test_disallowed_value(self, context):
        """Test a value outside the allowed set."""
        rule = EnumValidation({"allowed": [12, 24, 48]})

        result = rule.check(36, context)

        assert not result.valid
        assert result.errors == ["Value 36 is not one of [12, 24, 48]."]


class TestExpressionValidation:
    """Test suite for ExpressionValidation."""

    def test_condition_met(self, context):
        """Test a passing expression."""
        rule = ExpressionValidation({"condition": "value > 0"})

        assert rule.check(5, context).valid

    def test_condition_failed(self, context):
        """Test a failing expression."""
        rule = ExpressionValidation({"condition": "value > 0", "error": "Value must be greater 0."})

        assert rule.check(-5, context).errors == ["Value must be greater 0."]

    def test_variables_read_entity_properties(self, context):
        """Test that variables are bound to other properties."""
        rule = ExpressionValidation(
            {
                "condition": "value < current * 100",
                "variables": {"current": "current_bid"},
                "error": "{value} is more than 100 times {current}.",
            }
        )

        assert rule.check(9999, context).valid
        assert rule.check(10000, context).errors == ["10000 is more than 100 times 100."]

    def test_no_builtins(self, context):
        """Test that expressions cannot call builtins."""
        rule = ExpressionValidation({"condition": "len(value) > 0"})

        with pytest.raises(NameError):
            rule.check("abc", context)

    def test_missing_condition(self):
        """Test that a condition is required."""
        with pytest.raises(RuleConfigurationError, match="missing condition"):
            ExpressionValidation({})


class TestRelationshipValidation:
    """Test suite for RelationshipValidation."""

    @pytest.fixture
    def rule(self):
        """Create a 'greater than current bid' rule."""
        return RelationshipValidation(
            {
                "related": "current_bid",
                "condition": "value > related_value",
                "error": "Value must be greater than current bid ({related_value}).",
            }
        )

    def test_relationship_met(self, rule, context):
        """Test a value satisfying the relationship."""
        assert rule.check(150, context).valid

    def test_relationship_failed(self, rule, context):
        """Test a value violating the relationship."""
        assert rule.check(50, context).errors == [
            "Value must be greater than current bid (100)."
        ]

    def test_missing_related_value_passes(self, rule):
        """Test that the check is skipped while the related value is unset."""
        context = ValidationContext(SimpleNamespace(current_bid=None), "new_bid")

        assert rule.check(50, context).valid

    def test_missing_configuration(self):
        """Test that related property and condition are required."""
        with pytest.raises(RuleConfigurationError, match="missing related or condition"):
            RelationshipValidation({"related": "current_bid"})


class TestCrossPropertyValidation:
    """Test suite for CrossPropertyValidation."""

    @pytest.fixture
    def rule(self):
        """Create the 'not above highest bid' rule."""
        return CrossPropertyValidation(
            {
                "properties": ["new_bid", "max_new_bid"],
                "condition": "max_new_bid is None or new_bid <= max_new_bid",
                "error": "New bid must not be greater than highest bid.",
            }
        )

    def test_properties_are_affected_and_causative(self, rule):
        """Test default affected/causative properties."""
        assert rule.affected_properties == ("new_bid", "max_new_bid")
        assert rule.causative_properties == ("new_bid", "max_new_bid")

    def test_explicit_affected(self):
        """Test overriding the affected properties."""
        rule = CrossPropertyValidation(
            {
                "properties": ["new_bid", "max_new_bid"],
                "condition": "True",
                "affected": ["new_bid"],
            }
        )

        assert rule.affected_properties == ("new_bid",)
        assert rule.causative_properties == ("new_bid",)

    def test_condition_met(self, rule):
        """Test entity satisfying the condition."""
        entity = SimpleNamespace(new_bid=30, max_new_bid=50)

        assert rule.check(entity, ValidationContext(entity)).valid

    def test_condition_failed(self, rule):
        """Test entity violating the condition."""
        entity = SimpleNamespace(new_bid=50, max_new_bid=30)

        result = rule.check(entity, ValidationContext(entity))

        assert result.errors == ["New bid must not be greater than highest bid."]

    def test_missing_configuration(self):
        """Test that properties and condition are required."""
        with pytest.raises(RuleConfigurationError, match="missing properties or condition"):
            CrossPropertyValidation({"condition": "True"})


class TestNestedEntityValidation:
    """Test suite for NestedEntityValidation."""

    @pytest.mark.asyncio
    async def test_valid_child(self):
        """Test that a valid child passes."""
        lot = AuctionLot(AuctionBid(current_bid=100, new_bid=150))
        rule = NestedEntityValidation()

        result = await rule.check_async(lot.bid, ValidationContext(lot, "bid"))

        assert result.valid

    @pytest.mark.asyncio
    async def test_invalid_child(self):
        """Test that an invalid child fails with the property name."""
        lot = AuctionLot(AuctionBid(current_bid=100, new_bid=-5))
        rule = NestedEntityValidation()

        result = await rule.check_async(lot.bid, ValidationContext(lot, "bid"))

        assert result.errors == ["bid has one or more validation errors"]
        assert len(lot.bid.validation_messages["new_bid"]) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [None, 42, SimpleNamespace(new_bid=-5)])
    async def test_non_entities_pass(self, value):
        """Test that values which are not validatable entities pass."""
        rule = NestedEntityValidation()

        result = await rule.check_async(value, ValidationContext(SimpleNamespace(), "bid"))

        assert result.valid

    @pytest.mark.asyncio
    async def test_self_reference_skipped(self):
        """Test that an entity holding itself is not validated again."""
        lot = AuctionLot()
        rule = NestedEntityValidation()

        result = await rule.check_async(lot, ValidationContext(lot, "bid"))

        assert result.valid
