"""ValidatableEntity base class.

Entities derive from this class to own a validator and to validate a
property implicitly when a new value is assigned to it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, ClassVar, Optional

from .bindable_validator import BindableValidator
from .const import DEFAULT_CONTINUE_ON_ERROR
from .validation import RuleRegistry

_LOGGER = logging.getLogger(__name__)

_MISSING = object()


class ValidatableEntity:
    """Base class for entities with declared validation rules.

    Subclasses declare their rules once, as a class attribute, and must
    call ``super().__init__()`` before assigning their properties.

    Example:
        >>> class AuctionBid(ValidatableEntity):
        ...     validation_rules = RuleRegistry(
        ...         properties={"NewBid": [RangeValidation({"min": 0})]},
        ...     )
        ...
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.NewBid = 0
        ...
        >>> bid = AuctionBid()
        >>> bid.is_implicit_validation_enabled = True
        >>> bid.NewBid = -5  # queues validate_property("NewBid")
    """

    validation_rules: ClassVar[Optional[RuleRegistry]] = None

    def __init__(self, *, continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR) -> None:
        registry = type(self).validation_rules or RuleRegistry()
        self._validator = BindableValidator(
            self, registry, continue_on_error=continue_on_error
        )

    @property
    def validation_messages(self) -> BindableValidator:
        """Validator holding the messages of this entity."""
        return self._validator

    @property
    def is_implicit_validation_enabled(self) -> bool:
        return self._validator.implicit_validation_enabled

    @is_implicit_validation_enabled.setter
    def is_implicit_validation_enabled(self, value: bool) -> None:
        self._validator.implicit_validation_enabled = bool(value)

    @property
    def is_validating(self) -> bool:
        return self._validator.is_validating

    async def validate(self) -> bool:
        """Validate every property with all rules.

        Returns:
            True if every rule passed
        """
        return await self._validator.validate()

    def __setattr__(self, name: str, value: Any) -> None:
        validator: Optional[BindableValidator] = self.__dict__.get("_validator")
        if validator is None or name.startswith("_"):
            super().__setattr__(name, value)
            return

        old_value = getattr(self, name, _MISSING)
        super().__setattr__(name, value)

        if (
            validator.implicit_validation_enabled
            and validator.registry.has_property(name)
            and (old_value is _MISSING or old_value != value)
        ):
            self._validate_implicitly(name)

    def _validate_implicitly(self, name: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            _LOGGER.warning(
                "No running event loop, skipping implicit validation of %s.%s",
                type(self).__name__,
                name,
            )
            return

        future = self._validator.validate_property(name)
        future.add_done_callback(
            lambda done: _log_implicit_failure(type(self).__name__, name, done)
        )


def _log_implicit_failure(entity_name: str, name: str, future: asyncio.Future) -> None:
    if future.cancelled():
        return
    err = future.exception()
    if err is not None:
        # Already logged as a fault where it was raised
        _LOGGER.debug("Implicit validation of %s.%s failed: %s", entity_name, name, err)
