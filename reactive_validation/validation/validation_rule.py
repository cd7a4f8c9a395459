"""Validation Rule base classes.

Every rule is configured from a dictionary (the same shape the YAML rule
files use) and comes in one of two capability variants: checked
synchronously or asynchronously.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, Optional

from ..const import (
    CONF_ERROR,
    CONF_IMPLICIT,
    CONF_LEVEL,
    CONF_SHOW_IN_SUMMARY,
    CONF_SHOW_ON_PROPERTY,
    DEFAULT_ERROR_MESSAGE,
)
from ..domain.exceptions import RuleConfigurationError
from ..domain.interfaces import IValidationRule
from ..domain.value_objects import ValidationLevel
from .validation_context import ValidationContext
from .validation_result import ValidationResult

_LOGGER = logging.getLogger(__name__)


class _KeepMissing(dict):
    """Mapping leaving unknown placeholders in the formatted text."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class ValidationRule(IValidationRule):
    """Base class for validation rules.

    Subclasses derive from SyncValidationRule or AsyncValidationRule
    rather than from this class directly.

    Configuration keys:
        error: Message text, may contain ``{value}`` style placeholders
        level: 'error' (default) or 'warning'
        implicit: Whether property changes trigger the rule (default True)
        show_on_property: Show the message on the property (default True)
        show_in_summary: Show the message in a summary (default True)
    """

    DEFAULT_ERROR: str = DEFAULT_ERROR_MESSAGE

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        """Initialize validation rule.

        Args:
            config: Configuration dictionary (from YAML or code)

        Raises:
            RuleConfigurationError: If the level is not 'error' or 'warning'
        """
        self.config = dict(config or {})
        self.error_message: str = self.config.get(CONF_ERROR, self.DEFAULT_ERROR)

        level = self.config.get(CONF_LEVEL, ValidationLevel.ERROR)
        try:
            self._level = ValidationLevel(level)
        except ValueError as err:
            raise RuleConfigurationError(
                f"Invalid level '{level}' for {type(self).__name__}"
            ) from err

        self._use_in_implicit_validation = bool(self.config.get(CONF_IMPLICIT, True))
        self._show_on_property = bool(self.config.get(CONF_SHOW_ON_PROPERTY, True))
        self._show_in_summary = bool(self.config.get(CONF_SHOW_IN_SUMMARY, True))

    @property
    def level(self) -> ValidationLevel:
        return self._level

    @property
    def use_in_implicit_validation(self) -> bool:
        return self._use_in_implicit_validation

    @property
    def show_on_property(self) -> bool:
        return self._show_on_property

    @property
    def show_in_summary(self) -> bool:
        return self._show_in_summary

    def format_message(self, **values: Any) -> str:
        """Format the configured message with the given values.

        Placeholders without a value are kept as written. A message that
        is not a valid format string (e.g. "{0..100}") is used verbatim.
        """
        if "{" not in self.error_message:
            return self.error_message
        try:
            return self.error_message.format_map(_KeepMissing(values))
        except (IndexError, KeyError, ValueError, AttributeError) as err:
            _LOGGER.debug("Using unformatted message of %s: %s", type(self).__name__, err)
            return self.error_message

    def fail(self, **values: Any) -> ValidationResult:
        """Build a failing result carrying the formatted message."""
        return ValidationResult.failure(self.format_message(**values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self._level.value}, error={self.error_message!r})"


class SyncValidationRule(ValidationRule):
    """Rule checked synchronously.

    Example:
        >>> class MustBePositive(SyncValidationRule):
        ...     DEFAULT_ERROR = "Value must be greater 0."
        ...
        ...     def check(self, value, context):
        ...         return self.fail() if value <= 0 else ValidationResult.success()
    """

    @abstractmethod
    def check(self, value: Any, context: ValidationContext) -> ValidationResult:
        """Check a value against this rule.

        Args:
            value: The value to validate
            context: Validation context (entity, property name, shared items)

        Returns:
            ValidationResult with the reported message texts
        """


class AsyncValidationRule(ValidationRule):
    """Rule checked asynchronously, e.g. one that needs a remote lookup."""

    @abstractmethod
    async def check_async(
        self, value: Any, context: ValidationContext
    ) -> ValidationResult:
        """Check a value against this rule.

        Args:
            value: The value to validate
            context: Validation context (entity, property name, shared items)

        Returns:
            ValidationResult with the reported message texts
        """
