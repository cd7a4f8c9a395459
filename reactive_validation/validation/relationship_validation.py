"""Relationship Validation rule.

Validate relationship with another property's value.
"""

from typing import Any, Optional

from ..const import CONF_CONDITION, CONF_RELATED
from ..domain.exceptions import RuleConfigurationError
from .expression_validation import evaluate_condition
from .validation_context import ValidationContext
from .validation_result import ValidationResult
from .validation_rule import SyncValidationRule


class RelationshipValidation(SyncValidationRule):
    """Validate relationship with another property of the same entity.

    The check is skipped while either value is None, so optional
    properties do not fail before they are filled in.

    YAML configuration:
        type: relationship
        related: CurrentBid
        condition: "value > related_value"
        error: "Value must be greater than current bid ({related_value})."
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.related = self.config.get(CONF_RELATED)
        self.condition = self.config.get(CONF_CONDITION)

        if not self.related or not self.condition:
            raise RuleConfigurationError(
                "Invalid relationship validation config: missing related or condition"
            )

    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Check relationship condition with the related property.

        Args:
            value: Value to validate
            context: Validation context used to read the related property

        Returns:
            ValidationResult indicating if relationship condition is met
        """
        related_value = context.get_property_value(self.related)
        if value is None or related_value is None:
            return ValidationResult.success()

        eval_context = {"value": value, "related_value": related_value}
        if not evaluate_condition(self.condition, eval_context):
            return self.fail(
                value=value,
                related_value=related_value,
                related=self.related,
            )

        return ValidationResult.success()
