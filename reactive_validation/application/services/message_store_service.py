"""MessageStoreService holding the current validation messages.

This service is the single owner of the validation state of one entity:
- Property messages: property name -> messages of its own rules
- Group messages: group rule -> its current message

Every write reports whether the stored content changed, comparing
message sets by text, so that an unchanged violation reported again by
a fresh pass does not count as a change.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from ...domain.value_objects import (
    ENTITY,
    MessageTarget,
    PropertyScoped,
    ValidationMessage,
    ValidationMessageKind,
)
from .apply_mode import ApplyMode

_LOGGER = logging.getLogger(__name__)


class _EntityMessageKey:
    """Group key of the single manually added entity-wide message."""

    affected_properties: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return "ENTITY_MESSAGE_KEY"


ENTITY_MESSAGE_KEY = _EntityMessageKey()


class MessageStoreService:
    """Service storing messages and computing the merged view.

    Group keys are compared by identity and must expose
    ``affected_properties``. A group key without affected properties
    reports on the entity as a whole.

    All reads and writes go through one lock, so a merged view is always
    a consistent snapshot of both maps.

    Example:
        >>> store = MessageStoreService()
        >>> store.apply_property_result("Bid", [ValidationMessage.error("Too low")])
        True
        >>> store.apply_property_result("Bid", [ValidationMessage.error("Too low")])
        False
        >>> store.all_messages()[PropertyScoped("Bid")]
        (ValidationMessage(level=<ValidationLevel.ERROR: 'error'>, text='Too low', ...),)
    """

    def __init__(self) -> None:
        """Initialize empty message store."""
        self._lock = threading.Lock()
        self._property_messages: dict[str, tuple[ValidationMessage, ...]] = {}
        self._group_messages: dict[Any, ValidationMessage] = {}

    def apply_property_result(
        self,
        property_name: str,
        messages: Iterable[ValidationMessage],
        mode: ApplyMode = ApplyMode.REPLACE,
    ) -> bool:
        """Write the messages of one property.

        Args:
            property_name: Property the messages belong to
            messages: Messages reported for the property
            mode: How to combine them with the stored messages

        Returns:
            True if the set of stored messages changed
        """
        new_messages = list(messages)

        with self._lock:
            old = self._property_messages.get(property_name, ())

            if mode == ApplyMode.MERGE:
                merged = self._distinct([*old, *new_messages])
            elif mode == ApplyMode.REMOVE_ONLY:
                merged = [message for message in old if message in new_messages]
            else:
                merged = self._distinct(new_messages)

            if merged:
                self._property_messages[property_name] = tuple(merged)
            else:
                self._property_messages.pop(property_name, None)

            changed = set(old) != set(merged)

        if changed:
            _LOGGER.debug(
                "Messages of '%s' changed: %d -> %d",
                property_name,
                len(old),
                len(merged),
            )
        return changed

    def apply_group_result(
        self, group_key: Any, message: Optional[ValidationMessage]
    ) -> bool:
        """Set or clear the message of one group rule.

        Args:
            group_key: Group rule (or ENTITY_MESSAGE_KEY)
            message: New message, None if the rule passed

        Returns:
            True if the group message changed
        """
        with self._lock:
            old = self._group_messages.get(group_key)
            if message is None:
                self._group_messages.pop(group_key, None)
            else:
                self._group_messages[group_key] = message
            changed = old != message

        if changed:
            _LOGGER.debug("Group message of %r changed: %s -> %s", group_key, old, message)
        return changed

    def has_group_message(self, group_key: Any) -> bool:
        with self._lock:
            return group_key in self._group_messages

    def property_names(self) -> list[str]:
        """Names of properties holding their own messages."""
        with self._lock:
            return list(self._property_messages)

    def all_messages(self) -> Mapping[MessageTarget, tuple[ValidationMessage, ...]]:
        """Compute the merged view.

        Property messages are tagged PROPERTY. Each group message is
        tagged GROUP and added to every affected property, or to the
        entity when the group has no affected properties.

        Returns:
            Read-only mapping of target -> messages
        """
        with self._lock:
            property_messages = list(self._property_messages.items())
            group_messages = list(self._group_messages.items())

        view: dict[MessageTarget, list[ValidationMessage]] = {}
        for name, messages in property_messages:
            view[PropertyScoped(name)] = [
                message.with_kind(ValidationMessageKind.PROPERTY) for message in messages
            ]
        for group_key, message in group_messages:
            tagged = message.with_kind(ValidationMessageKind.GROUP)
            for target in self.targets_for(group_key):
                view.setdefault(target, []).append(tagged)

        return MappingProxyType({target: tuple(messages) for target, messages in view.items()})

    def messages_for(self, target: MessageTarget) -> tuple[ValidationMessage, ...]:
        """Merged messages of one property or of the entity."""
        return self.all_messages().get(target, ())

    def clear(self) -> list[MessageTarget]:
        """Remove every message.

        Returns:
            Targets that had messages before clearing
        """
        with self._lock:
            property_names = list(self._property_messages)
            group_keys = list(self._group_messages)
            self._property_messages.clear()
            self._group_messages.clear()

        targets: list[MessageTarget] = [PropertyScoped(name) for name in property_names]
        for group_key in group_keys:
            for target in self.targets_for(group_key):
                if target not in targets:
                    targets.append(target)

        _LOGGER.debug("Cleared messages of %d targets", len(targets))
        return targets

    @staticmethod
    def targets_for(group_key: Any) -> list[MessageTarget]:
        """Targets a group message is reported on."""
        affected = getattr(group_key, "affected_properties", ())
        if not affected:
            return [ENTITY]
        return [PropertyScoped(name) for name in affected]

    @staticmethod
    def _distinct(messages: list[ValidationMessage]) -> list[ValidationMessage]:
        result: list[ValidationMessage] = []
        for message in messages:
            if message not in result:
                result.append(message)
        return result
