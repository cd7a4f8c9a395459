"""Nested Entity Validation rule.

Validate a child entity held in a property.
"""

from typing import Any

from ..const import NESTED_ERROR_MESSAGE
from .validation_context import ValidationContext
from .validation_result import ValidationResult
from .validation_rule import AsyncValidationRule


class NestedEntityValidation(AsyncValidationRule):
    """Run full validation of a child entity.

    Values that are not validatable entities (including None) pass. The
    child is validated through its own validator, so its messages stay on
    the child; the parent property only reports that the child is invalid.

    YAML configuration:
        type: nested
        error: "{name} has one or more validation errors"
    """

    DEFAULT_ERROR = NESTED_ERROR_MESSAGE

    async def check_async(
        self, value: Any, context: ValidationContext
    ) -> ValidationResult:
        """Validate the child entity.

        Args:
            value: Child entity
            context: Validation context

        Returns:
            ValidationResult failing when the child has errors
        """
        from ..validatable_entity import ValidatableEntity

        # An entity referencing itself would wait on its own running pass
        if not isinstance(value, ValidatableEntity) or value is context.entity:
            return ValidationResult.success()

        if await value.validate():
            return ValidationResult.success()

        return self.fail(name=context.property_name, value=value)
