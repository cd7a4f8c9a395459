"""ChangeNotifierService for message change events."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Union

from ...domain.value_objects import MessagesChangedEvent, MessageTarget, PropertyScoped
from ...infrastructure.decorators import log_validation_errors

_LOGGER = logging.getLogger(__name__)

MessagesChangedCallback = Callable[[MessagesChangedEvent], None]
ValidatingCallback = Callable[[bool], None]


@log_validation_errors("Change listener", logger=_LOGGER, reraise=False)
def _invoke_listener(callback: Callable[[Any], None], argument: Any) -> None:
    callback(argument)


class ChangeNotifierService:
    """Service dispatching change events to subscribers.

    Listeners subscribe to one target (a property or the entity) or, with
    ``target=None``, to the aggregate view. A listener that raises is
    logged and does not keep the other listeners from being called.

    Example:
        >>> notifier = ChangeNotifierService()
        >>> unsubscribe = notifier.subscribe(print, "NewBid")
        >>> notifier.notify([PropertyScoped("NewBid")])
        MessagesChangedEvent(target=PropertyScoped(name='NewBid'))
        >>> unsubscribe()
    """

    def __init__(self) -> None:
        """Initialize notifier without listeners."""
        self._listeners: list[tuple[Optional[MessageTarget], MessagesChangedCallback]] = []
        self._validating_listeners: list[ValidatingCallback] = []

    def subscribe(
        self,
        callback: MessagesChangedCallback,
        target: Union[MessageTarget, str, None] = None,
    ) -> Callable[[], None]:
        """Subscribe to message changes.

        Args:
            callback: Called with a MessagesChangedEvent
            target: Property name, MessageTarget, or None for the aggregate view

        Returns:
            Function removing the subscription
        """
        if isinstance(target, str):
            target = PropertyScoped(target)
        entry = (target, callback)
        self._listeners.append(entry)

        def unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return unsubscribe

    def subscribe_validating(self, callback: ValidatingCallback) -> Callable[[], None]:
        """Subscribe to busy state changes.

        Returns:
            Function removing the subscription
        """
        self._validating_listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._validating_listeners:
                self._validating_listeners.remove(callback)

        return unsubscribe

    def notify(self, targets: Iterable[MessageTarget]) -> None:
        """Send one event per changed target, then one aggregate event.

        Duplicate targets are sent once, in order of first occurrence.
        Nothing is sent when no target changed.

        Args:
            targets: Targets whose messages changed in this pass
        """
        changed: list[MessageTarget] = []
        for target in targets:
            if target not in changed:
                changed.append(target)
        if not changed:
            return

        _LOGGER.debug("Messages changed for %s", ", ".join(str(target) for target in changed))
        listeners = list(self._listeners)
        for target in changed:
            self._dispatch(listeners, target)
        self._dispatch(listeners, None)

    def notify_validating(self, is_validating: bool) -> None:
        """Tell busy state listeners the new state."""
        for callback in list(self._validating_listeners):
            _invoke_listener(callback, is_validating)

    @staticmethod
    def _dispatch(listeners: list, target: Optional[MessageTarget]) -> None:
        event = MessagesChangedEvent(target)
        for listener_target, callback in listeners:
            if listener_target == target:
                _invoke_listener(callback, event)
