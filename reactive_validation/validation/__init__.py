"""Validation rules for bound entities.

This module provides the rule side of the validation engine:
- Capability variants: sync/async single-property rules and sync/async
  group rules checked against the whole entity
- Built-in rules: range, enum, expression, relationship, cross-property
  and nested entity validation
- RuleRegistry: explicit mapping from properties to their rules, built
  from code or from the YAML rule definition form
"""

from .validation_result import ValidationResult
from .validation_context import ValidationContext
from .validation_rule import AsyncValidationRule, SyncValidationRule, ValidationRule
from .group_validation_rule import AsyncGroupValidationRule, SyncGroupValidationRule
from .range_validation import RangeValidation
from .enum_validation import EnumValidation
from .expression_validation import ExpressionValidation
from .relationship_validation import RelationshipValidation
from .cross_property_validation import CrossPropertyValidation
from .nested_validation import NestedEntityValidation
from .rule_registry import RuleRegistry

__all__ = [
    "ValidationResult",
    "ValidationContext",
    "ValidationRule",
    "SyncValidationRule",
    "AsyncValidationRule",
    "SyncGroupValidationRule",
    "AsyncGroupValidationRule",
    "RangeValidation",
    "EnumValidation",
    "ExpressionValidation",
    "RelationshipValidation",
    "CrossPropertyValidation",
    "NestedEntityValidation",
    "RuleRegistry",
]
