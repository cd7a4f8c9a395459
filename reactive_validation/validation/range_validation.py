"""Range Validation rule.

Validate that value is within a specified range.
"""

from typing import Any

from ..const import CONF_MAX, CONF_MIN
from .validation_context import ValidationContext
from .validation_result import ValidationResult
from .validation_rule import SyncValidationRule


class RangeValidation(SyncValidationRule):
    """Validate that value is within a specified range.

    A missing value (None) is not checked; combine with a required rule
    if the property must be set.

    YAML configuration:
        type: range
        min: 0
        max: 100
        error: "Value must be between {min} and {max}"
    """

    DEFAULT_ERROR = "Value must be between {min} and {max}."

    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Check if value is within min/max bounds.

        Args:
            value: Numeric value to validate
            context: Validation context (unused)

        Returns:
            ValidationResult indicating if value is in range
        """
        if value is None:
            return ValidationResult.success()

        min_val = self.config.get(CONF_MIN)
        max_val = self.config.get(CONF_MAX)

        if (min_val is not None and value < min_val) or (
            max_val is not None and value > max_val
        ):
            return self.fail(value=value, min=min_val, max=max_val)

        return ValidationResult.success()
