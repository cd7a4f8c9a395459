"""Allowed values rule.

Validate that value is in an allowed set of values.
"""

from typing import Any

from ..const import CONF_ALLOWED
from .validation_context import ValidationContext
from .validation_result import ValidationResult
from .validation_rule import SyncValidationRule


class EnumValidation(SyncValidationRule):
    """Validate that value is in an allowed set of values.

    YAML configuration:
        type: enum
        allowed: [EUR, USD, GBP]
        error: "Bids are accepted in EUR, USD or GBP only."
        level: warning  # Optional: 'error' (default) or 'warning'
    """

    DEFAULT_ERROR = "Value {value} is not one of {allowed}."

    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Check if value is in allowed set.

        Args:
            value: Value to validate
            context: Validation context (unused)

        Returns:
            ValidationResult indicating if value is in allowed set
        """
        allowed = self.config.get(CONF_ALLOWED, [])

        if value not in allowed:
            return self.fail(value=value, allowed=allowed)

        return ValidationResult.success()
