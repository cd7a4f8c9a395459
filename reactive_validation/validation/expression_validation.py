"""Expression Validation rule.

Validate using a custom Python expression.
"""

import logging
from typing import Any, Optional

from ..const import CONF_CONDITION, CONF_VARIABLES
from ..domain.exceptions import RuleConfigurationError
from .validation_context import ValidationContext
from .validation_result import ValidationResult
from .validation_rule import SyncValidationRule

_LOGGER = logging.getLogger(__name__)


def evaluate_condition(condition: str, eval_context: dict[str, Any]) -> bool:
    """Evaluate a restricted expression (no builtins) against named values."""
    result = eval(condition, {"__builtins__": {}}, eval_context)
    _LOGGER.debug("Condition '%s' evaluated to %s", condition, result)
    return bool(result)


class ExpressionValidation(SyncValidationRule):
    """Validate using a custom Python expression.

    The expression sees the validated ``value`` plus one name per entry
    in ``variables``, each bound to another property of the entity.
    Errors raised while evaluating the expression propagate as rule
    faults.

    YAML configuration:
        type: expression
        condition: "value < current * 100"
        variables:
          current: CurrentBid
        error: "Your bid surpasses the current bid by a 100 times. Are you sure?"
        level: warning
    """

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.condition = self.config.get(CONF_CONDITION)
        self.variables: dict[str, str] = dict(self.config.get(CONF_VARIABLES, {}))

        if not self.condition:
            raise RuleConfigurationError(
                "Invalid expression validation config: missing condition"
            )

    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Evaluate custom Python expression.

        Args:
            value: Value to validate
            context: Validation context used to resolve variables

        Returns:
            ValidationResult indicating if expression evaluates to True
        """
        eval_context = {"value": value}
        for var_name, property_name in self.variables.items():
            eval_context[var_name] = context.get_property_value(property_name)

        if not evaluate_condition(self.condition, eval_context):
            return self.fail(**eval_context)

        return ValidationResult.success()
