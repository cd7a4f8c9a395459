"""Rule Registry.

Explicit, statically built mapping from property names to rule objects,
plus the group rules of an entity type. A registry is built once per
entity type and shared by every instance.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..const import (
    CONF_GROUPS,
    CONF_PROPERTIES,
    CONF_TYPE,
    RULE_TYPE_CROSS_PROPERTY,
    RULE_TYPE_ENUM,
    RULE_TYPE_EXPRESSION,
    RULE_TYPE_NESTED,
    RULE_TYPE_RANGE,
    RULE_TYPE_RELATIONSHIP,
)
from ..domain.exceptions import RuleConfigurationError
from ..domain.interfaces import IGroupValidationRule, IValidationRule
from .cross_property_validation import CrossPropertyValidation
from .enum_validation import EnumValidation
from .expression_validation import ExpressionValidation
from .group_validation_rule import AsyncGroupValidationRule, SyncGroupValidationRule
from .nested_validation import NestedEntityValidation
from .range_validation import RangeValidation
from .relationship_validation import RelationshipValidation
from .validation_rule import AsyncValidationRule, SyncValidationRule

_LOGGER = logging.getLogger(__name__)


class RuleRegistry:
    """Rules declared for one entity type.

    Single-property rules keep their registration order per property.
    Group rules keep their registration order overall and are looked up
    by causative property name.

    Example:
        >>> registry = RuleRegistry(
        ...     properties={"Bid": [RangeValidation({"min": 0})]},
        ...     groups=[CrossPropertyValidation({...})],
        ... )
        >>> registry.property_names()
        ['Bid', 'NewBid', 'MaxNewBid']
    """

    # Mapping of rule types to validation classes
    RULE_TYPES: dict[str, type] = {
        RULE_TYPE_RANGE: RangeValidation,
        RULE_TYPE_ENUM: EnumValidation,
        RULE_TYPE_EXPRESSION: ExpressionValidation,
        RULE_TYPE_RELATIONSHIP: RelationshipValidation,
        RULE_TYPE_CROSS_PROPERTY: CrossPropertyValidation,
        RULE_TYPE_NESTED: NestedEntityValidation,
    }

    def __init__(
        self,
        properties: Optional[dict[str, Iterable[IValidationRule]]] = None,
        groups: Optional[Iterable[IGroupValidationRule]] = None,
    ) -> None:
        """Initialize registry.

        Args:
            properties: Property name -> single-property rules
            groups: Group rules of the entity type
        """
        self._property_rules: dict[str, list[IValidationRule]] = {}
        self._group_rules: list[IGroupValidationRule] = []

        for name, rules in (properties or {}).items():
            for rule in rules:
                self.add_property_rule(name, rule)
        for rule in groups or ():
            self.add_group_rule(rule)

    def add_property_rule(self, property_name: str, rule: IValidationRule) -> None:
        """Attach a single-property rule.

        Raises:
            RuleConfigurationError: If the name is empty or the rule is a
                group rule or not a rule at all
        """
        if not isinstance(property_name, str) or not property_name:
            raise RuleConfigurationError(
                f"Property name must be a non-empty string, got {property_name!r}"
            )
        if isinstance(rule, IGroupValidationRule):
            raise RuleConfigurationError(
                f"{type(rule).__name__} is a group rule; use add_group_rule()"
            )
        if not isinstance(rule, (SyncValidationRule, AsyncValidationRule)):
            raise RuleConfigurationError(
                f"Expected a sync or async validation rule for '{property_name}', "
                f"got {type(rule).__name__}"
            )
        self._property_rules.setdefault(property_name, []).append(rule)

    def add_group_rule(self, rule: IGroupValidationRule) -> None:
        """Attach a group rule.

        Raises:
            RuleConfigurationError: If the rule is not a group rule or the
                same instance is already registered
        """
        if not isinstance(rule, (SyncGroupValidationRule, AsyncGroupValidationRule)):
            raise RuleConfigurationError(
                f"Expected a sync or async group validation rule, got {type(rule).__name__}"
            )
        if any(existing is rule for existing in self._group_rules):
            raise RuleConfigurationError(f"Group rule {rule!r} is already registered")
        self._group_rules.append(rule)

    def property_rules(self, property_name: str) -> tuple[IValidationRule, ...]:
        """Single-property rules attached to a property."""
        return tuple(self._property_rules.get(property_name, ()))

    def group_rules_for(self, property_name: str) -> tuple[IGroupValidationRule, ...]:
        """Group rules re-evaluated when the given property changes."""
        return tuple(
            rule
            for rule in self._group_rules
            if property_name in rule.causative_properties
        )

    def group_rules(self) -> tuple[IGroupValidationRule, ...]:
        """All group rules in registration order."""
        return tuple(self._group_rules)

    def property_names(self) -> list[str]:
        """Every property the registry knows, in order of first mention."""
        names = list(self._property_rules)
        for rule in self._group_rules:
            for name in (*rule.causative_properties, *rule.affected_properties):
                if name not in names:
                    names.append(name)
        return names

    def has_property(self, property_name: str) -> bool:
        """Check if any rule mentions the property."""
        return property_name in self.property_names()

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> RuleRegistry:
        """Build a registry from the YAML rule definition form.

        Args:
            config: Dictionary with optional ``properties`` and ``groups``

        Returns:
            Populated RuleRegistry
        """
        registry = cls()

        for property_name, rules in (config.get(CONF_PROPERTIES) or {}).items():
            for rule_config in rules or []:
                rule = cls._create_rule(rule_config, property_name)
                if rule is not None:
                    registry.add_property_rule(property_name, rule)

        for rule_config in config.get(CONF_GROUPS) or []:
            rule = cls._create_rule(rule_config, None)
            if rule is not None:
                registry.add_group_rule(rule)

        _LOGGER.info(
            "Loaded %d property rule sets and %d group rules",
            len(registry._property_rules),
            len(registry._group_rules),
        )
        return registry

    @classmethod
    def _create_rule(
        cls, rule_config: dict[str, Any], property_name: Optional[str]
    ) -> Optional[IValidationRule]:
        rule_type = rule_config.get(CONF_TYPE)
        if rule_type not in cls.RULE_TYPES:
            _LOGGER.debug(
                "Unknown validation rule type '%s' for property '%s'",
                rule_type,
                property_name,
            )
            return None

        # Create rule instance
        rule_class = cls.RULE_TYPES[rule_type]
        return rule_class(rule_config)

    def __repr__(self) -> str:
        return (
            f"RuleRegistry(properties={list(self._property_rules)}, "
            f"groups={len(self._group_rules)})"
        )
