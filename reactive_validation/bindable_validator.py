"""BindableValidator facade.

Composes the rule evaluator, message store, sequencer and change notifier
for one entity. This is the surface a UI binds to: indexable messages,
change subscriptions and the validation entry points.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .application.services import (
    ENTITY_MESSAGE_KEY,
    ApplyMode,
    ChangeNotifierService,
    MessageStoreService,
    RuleEvaluatorService,
    ValidationSequencerService,
)
from .const import DEFAULT_CONTINUE_ON_ERROR, DEFAULT_IMPLICIT_VALIDATION
from .domain.entities import RequestKind
from .domain.exceptions import UnknownPropertyError, ValidationUsageError
from .domain.value_objects import (
    ENTITY,
    EntityScoped,
    MessagesChangedEvent,
    MessageTarget,
    PropertyScoped,
    ValidationMessage,
)
from .validation import RuleRegistry

_LOGGER = logging.getLogger(__name__)


class BindableValidator:
    """Validator of one entity.

    All validation requests of the entity run one at a time in issue
    order. Each request returns its own future, resolving to whether the
    evaluated rules passed once its results are applied.

    Usage errors (bad property names, bad messages) are raised by the
    call itself and never reach the request queue.

    Example:
        >>> validator = BindableValidator(bid, registry)
        >>> unsubscribe = validator.subscribe(on_changed, "NewBid")
        >>> await validator.validate_property("NewBid")
        False
        >>> validator["NewBid"]
        (ValidationMessage(level=<ValidationLevel.ERROR: 'error'>, text='Value must be greater 0.', ...),)
    """

    def __init__(
        self,
        entity: Any,
        registry: RuleRegistry,
        *,
        continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
    ) -> None:
        """Initialize validator.

        Args:
            entity: Entity to validate (read only)
            registry: Rules of the entity type
            continue_on_error: Keep running queued requests after a failure

        Raises:
            ValidationUsageError: If entity is None or registry is not a RuleRegistry
        """
        if entity is None:
            raise ValidationUsageError("entity must not be None")
        if not isinstance(registry, RuleRegistry):
            raise ValidationUsageError(
                f"registry must be RuleRegistry, got {type(registry).__name__}"
            )

        self._entity = entity
        self._registry = registry
        self._evaluator = RuleEvaluatorService(registry)
        self._store = MessageStoreService()
        self._notifier = ChangeNotifierService()
        self._sequencer = ValidationSequencerService(
            continue_on_error=continue_on_error,
            on_busy_changed=self._notifier.notify_validating,
        )
        self.implicit_validation_enabled = DEFAULT_IMPLICIT_VALIDATION

    @property
    def entity(self) -> Any:
        return self._entity

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def is_validating(self) -> bool:
        """Check if a validation request is queued or running."""
        return self._sequencer.is_validating

    # ------------------------------------------------------------------
    # Validation entry points
    # ------------------------------------------------------------------

    def validate(self) -> asyncio.Future:
        """Validate every property with all rules.

        Returns:
            Future resolving to True if every rule passed

        Raises:
            RuntimeError: If called without a running event loop
        """
        return self._sequencer.submit(RequestKind.ENTITY, self._validate_entity)

    def validate_property(
        self,
        property_name: str,
        remove_only: bool = False,
        include_all_rules: bool = False,
    ) -> asyncio.Future:
        """Validate one property.

        Args:
            property_name: Property to validate
            remove_only: Only drop messages that are no longer reported
            include_all_rules: Also run rules not used in implicit validation

        Returns:
            Future resolving to True if every evaluated rule passed

        Raises:
            ValidationUsageError: If the property name is empty or not a string
            UnknownPropertyError: If the property is neither registered nor
                an attribute of the entity
            RuntimeError: If called without a running event loop
        """
        self._check_property_name(property_name)
        return self._sequencer.submit(
            RequestKind.PROPERTY,
            partial(self._validate_property, property_name, remove_only, include_all_rules),
            property_name,
        )

    async def _validate_entity(self) -> bool:
        """Full pass: evaluate everything, then apply everything."""
        seen_groups: dict = {}
        items: dict[str, Any] = {}
        evaluations = []

        for name in self._registry.property_names():
            evaluations.append(
                await self._evaluator.evaluate_property(
                    self._entity,
                    name,
                    include_all_rules=True,
                    seen_groups=seen_groups,
                    items=items,
                )
            )
        groups_valid = await self._evaluator.evaluate_group_rules(
            self._entity,
            self._registry.group_rules(),
            seen_groups,
            include_all_rules=True,
            items=items,
        )

        changed: list[MessageTarget] = []
        for evaluation in evaluations:
            if self._store.apply_property_result(
                evaluation.property_name, evaluation.messages, ApplyMode.REPLACE
            ):
                changed.append(PropertyScoped(evaluation.property_name))

        # Manual messages on properties without rules
        for name in self._store.property_names():
            if not self._registry.has_property(name) and self._store.apply_property_result(
                name, (), ApplyMode.REPLACE
            ):
                changed.append(PropertyScoped(name))

        for rule, message in seen_groups.items():
            if self._store.apply_group_result(rule, message):
                changed.extend(self._store.targets_for(rule))

        is_valid = groups_valid and all(evaluation.is_valid for evaluation in evaluations)
        _LOGGER.debug(
            "Validated %s: valid=%s, %d targets changed",
            type(self._entity).__name__,
            is_valid,
            len(changed),
        )
        self._notifier.notify(changed)
        return is_valid

    async def _validate_property(
        self, property_name: str, remove_only: bool, include_all_rules: bool
    ) -> bool:
        """Single-property pass."""
        evaluation = await self._evaluator.evaluate_property(
            self._entity,
            property_name,
            include_all_rules=include_all_rules,
        )

        changed: list[MessageTarget] = []
        mode = ApplyMode.REMOVE_ONLY if remove_only else ApplyMode.REPLACE
        if self._store.apply_property_result(property_name, evaluation.messages, mode):
            changed.append(PropertyScoped(property_name))

        for rule, message in evaluation.group_messages.items():
            # Remove-only passes clear group messages but never set them
            if remove_only and (message is not None or not self._store.has_group_message(rule)):
                continue
            if self._store.apply_group_result(rule, message):
                changed.extend(self._store.targets_for(rule))

        self._notifier.notify(changed)
        return evaluation.is_valid

    # ------------------------------------------------------------------
    # Reading messages
    # ------------------------------------------------------------------

    def __getitem__(self, key: Union[str, MessageTarget]) -> tuple[ValidationMessage, ...]:
        """Merged messages of a property (by name) or of a target."""
        return self._store.messages_for(self._to_target(key))

    @property
    def entity_messages(self) -> tuple[ValidationMessage, ...]:
        """Messages attributed to the entity as a whole."""
        return self._store.messages_for(ENTITY)

    @property
    def all_messages(self) -> Mapping[MessageTarget, tuple[ValidationMessage, ...]]:
        """Read-only snapshot of the merged view."""
        return self._store.all_messages()

    @property
    def has_errors(self) -> bool:
        """Check if any current message has error level."""
        return any(
            message.is_error
            for messages in self._store.all_messages().values()
            for message in messages
        )

    def summary_messages(self) -> list[ValidationMessage]:
        """Messages to show in a summary, each finding once."""
        result: list[ValidationMessage] = []
        for messages in self._store.all_messages().values():
            for message in messages:
                if message.show_in_summary and message not in result:
                    result.append(message)
        return result

    def property_display_messages(self, property_name: str) -> list[ValidationMessage]:
        """Messages to show next to a property."""
        return [message for message in self[property_name] if message.show_on_property]

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(
        self,
        callback: Callable[[MessagesChangedEvent], None],
        target: Union[str, MessageTarget, None] = None,
    ) -> Callable[[], None]:
        """Subscribe to message changes of a target, or of the aggregate view.

        Returns:
            Function removing the subscription
        """
        return self._notifier.subscribe(callback, target)

    def subscribe_validating(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        """Subscribe to changes of ``is_validating``.

        Returns:
            Function removing the subscription
        """
        return self._notifier.subscribe_validating(callback)

    # ------------------------------------------------------------------
    # Manual messages
    # ------------------------------------------------------------------

    def add_message(
        self, message: ValidationMessage, property_name: Optional[str] = None
    ) -> bool:
        """Add a message outside the rule system.

        A property message is added to the property's messages. Without a
        property name (None or "") the message becomes the entity-wide manual
        message, replacing the previous one.

        Returns:
            True if the messages changed
        """
        target = self._add_message(message, property_name)
        if target is None:
            return False
        self._notifier.notify([target])
        return True

    def add_messages(
        self, messages: Iterable[tuple[Optional[str], ValidationMessage]]
    ) -> bool:
        """Add several messages, notifying once.

        Every pair is checked before any message is added.

        Args:
            messages: Pairs of property name (None or "" for the entity) and message

        Returns:
            True if any messages changed

        Raises:
            ValidationUsageError: If messages is None or holds a malformed pair
        """
        if messages is None:
            raise ValidationUsageError("messages must not be None")

        entries = []
        for entry in messages:
            try:
                property_name, message = entry
            except (TypeError, ValueError) as err:
                raise ValidationUsageError(
                    f"Expected a (property name, message) pair, got {entry!r}"
                ) from err
            property_name = _entity_if_empty(property_name)
            self._check_message(message)
            if property_name is not None:
                self._check_property_name(property_name)
            entries.append((property_name, message))

        changed = [
            target
            for target in (self._add_message(message, name) for name, message in entries)
            if target is not None
        ]
        self._notifier.notify(changed)
        return bool(changed)

    def clear_messages(self) -> None:
        """Remove every message, notifying each target that had messages."""
        self._notifier.notify(self._store.clear())

    def _add_message(
        self, message: ValidationMessage, property_name: Optional[str]
    ) -> Optional[MessageTarget]:
        self._check_message(message)
        property_name = _entity_if_empty(property_name)
        if property_name is None:
            changed = self._store.apply_group_result(ENTITY_MESSAGE_KEY, message)
            return ENTITY if changed else None

        self._check_property_name(property_name)
        changed = self._store.apply_property_result(property_name, [message], ApplyMode.MERGE)
        return PropertyScoped(property_name) if changed else None

    # ------------------------------------------------------------------
    # Argument checks
    # ------------------------------------------------------------------

    def _check_property_name(self, property_name: Any) -> None:
        if not isinstance(property_name, str) or not property_name:
            raise ValidationUsageError(
                f"Property name must be a non-empty string, got {property_name!r}"
            )
        if not self._registry.has_property(property_name) and not hasattr(
            self._entity, property_name
        ):
            raise UnknownPropertyError(property_name)

    @staticmethod
    def _check_message(message: Any) -> None:
        if not isinstance(message, ValidationMessage):
            raise ValidationUsageError(
                f"message must be ValidationMessage, got {type(message).__name__}"
            )

    def _to_target(self, key: Union[str, MessageTarget]) -> MessageTarget:
        if isinstance(key, (PropertyScoped, EntityScoped)):
            return key
        self._check_property_name(key)
        return PropertyScoped(key)

    def __repr__(self) -> str:
        return (
            f"BindableValidator(entity={type(self._entity).__name__}, "
            f"validating={self.is_validating})"
        )


def _entity_if_empty(property_name: Optional[str]) -> Optional[str]:
    """Map an empty property name to the entity (None)."""
    return None if property_name == "" else property_name
