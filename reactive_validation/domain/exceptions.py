"""Custom exceptions for the reactive validation engine.

A rule judging a value invalid is not an error: it produces a normal
ValidationMessage. The exceptions below cover caller mistakes, faults in
rule implementations and broken rule configuration.
"""

from __future__ import annotations

from typing import Any


class ValidationError(Exception):
    """Base class for all validation engine errors."""


class ValidationUsageError(ValidationError, ValueError):
    """Caller passed invalid arguments.

    Raised synchronously by the call that received the bad argument.
    Usage errors are never queued into the validation chain.

    Example:
        >>> validator.validate_property("")
        Traceback (most recent call last):
        ...
        ValidationUsageError: Property name must not be empty
    """


class UnknownPropertyError(ValidationUsageError):
    """Property name is neither registered nor present on the entity."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"Invalid property name: {property_name}")
        self.property_name = property_name


class RuleExecutionError(ValidationError):
    """Rule logic raised while being evaluated.

    The original exception is chained as ``__cause__``. Only the request
    whose evaluation raised fails; nothing it evaluated is written to the
    message store and later queued requests still run.
    """

    def __init__(self, rule: Any, property_name: str | None, err: BaseException) -> None:
        where = f"property '{property_name}'" if property_name else "entity"
        super().__init__(
            f"Rule {type(rule).__name__} failed on {where}: {str(err) or type(err).__name__}"
        )
        self.rule = rule
        self.property_name = property_name


class RuleConfigurationError(ValidationError):
    """Rule registry or rule configuration is invalid."""


class ValidationChainAbortedError(ValidationError):
    """Queued request was dropped because an earlier request failed.

    Only raised when the sequencer was created with
    ``continue_on_error=False``. The earlier failure is chained as
    ``__cause__``.
    """
