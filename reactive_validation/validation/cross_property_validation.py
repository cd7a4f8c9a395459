"""Cross-Property Validation rule.

Validate a condition spanning several properties of the entity.
"""

from typing import Any, Optional

from ..const import CONF_AFFECTED, CONF_CONDITION, CONF_PROPERTIES
from ..domain.exceptions import RuleConfigurationError
from .expression_validation import evaluate_condition
from .group_validation_rule import SyncGroupValidationRule
from .validation_context import ValidationContext
from .validation_result import ValidationResult


class CrossPropertyValidation(SyncGroupValidationRule):
    """Validate a condition across multiple properties.

    Every listed property is a name in the expression. Unless configured
    otherwise, the listed properties are both affected and causative, so
    the message shows on each of them and changing any of them
    re-evaluates the rule.

    YAML configuration:
        type: cross_property
        properties: [NewBid, MaxNewBid]
        condition: "MaxNewBid is None or NewBid <= MaxNewBid"
        error: "New bid must not be greater than highest bid."
        show_on_property: false
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        config = dict(config or {})
        properties = config.get(CONF_PROPERTIES) or []
        if isinstance(properties, str):
            properties = [properties]
        config.setdefault(CONF_AFFECTED, list(properties))
        super().__init__(config)

        self.properties: tuple[str, ...] = tuple(properties)
        self.condition = self.config.get(CONF_CONDITION)

        if not self.properties or not self.condition:
            raise RuleConfigurationError(
                "Invalid cross-property validation config: missing properties or condition"
            )

    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Check condition across the configured properties.

        Args:
            value: The entity being validated
            context: Validation context

        Returns:
            ValidationResult indicating if the condition is met
        """
        eval_context = {name: getattr(value, name) for name in self.properties}

        if not evaluate_condition(self.condition, eval_context):
            return self.fail(**eval_context)

        return ValidationResult.success()
