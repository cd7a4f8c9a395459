"""Reactive validation engine for bound entities.

Entities declare sync and async rules per property and group rules
spanning several properties. The engine evaluates them on demand, keeps
the current messages per property and notifies subscribers only when
the messages actually change.

Architecture:
- domain: Messages, targets, requests, rule contracts and exceptions
- validation: Rule capability classes, built-in rules and RuleRegistry
- application.services: Evaluator, message store, sequencer and notifier
- BindableValidator: Facade composing the services for one entity
- ValidatableEntity: Base class owning a validator per instance
"""

from .bindable_validator import BindableValidator
from .config_loader import async_load_rule_config, load_rule_config, load_rule_registry
from .domain.exceptions import (
    RuleConfigurationError,
    RuleExecutionError,
    UnknownPropertyError,
    ValidationChainAbortedError,
    ValidationError,
    ValidationUsageError,
)
from .domain.value_objects import (
    ENTITY,
    EntityScoped,
    MessagesChangedEvent,
    MessageTarget,
    PropertyScoped,
    ValidationLevel,
    ValidationMessage,
    ValidationMessageKind,
)
from .validatable_entity import ValidatableEntity
from .validation import (
    AsyncGroupValidationRule,
    AsyncValidationRule,
    RuleRegistry,
    SyncGroupValidationRule,
    SyncValidationRule,
    ValidationContext,
    ValidationResult,
)

__all__ = [
    "BindableValidator",
    "ValidatableEntity",
    "RuleRegistry",
    "SyncValidationRule",
    "AsyncValidationRule",
    "SyncGroupValidationRule",
    "AsyncGroupValidationRule",
    "ValidationContext",
    "ValidationResult",
    "ValidationMessage",
    "ValidationLevel",
    "ValidationMessageKind",
    "MessagesChangedEvent",
    "MessageTarget",
    "PropertyScoped",
    "EntityScoped",
    "ENTITY",
    "ValidationError",
    "ValidationUsageError",
    "UnknownPropertyError",
    "RuleExecutionError",
    "RuleConfigurationError",
    "ValidationChainAbortedError",
    "load_rule_config",
    "async_load_rule_config",
    "load_rule_registry",
]
