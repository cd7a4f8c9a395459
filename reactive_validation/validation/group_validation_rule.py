"""Group Validation Rule base classes.

Group rules are the same two capability variants as single-property
rules, but they check the whole entity instead of one value.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..const import CONF_AFFECTED, CONF_CAUSATIVE
from ..domain.exceptions import RuleConfigurationError
from ..domain.interfaces import IGroupValidationRule
from .validation_rule import AsyncValidationRule, SyncValidationRule


def _property_names(names: Optional[Iterable[str]], key: str, rule: Any) -> tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        names = [names]
    result = tuple(names)
    for name in result:
        if not isinstance(name, str) or not name:
            raise RuleConfigurationError(
                f"{type(rule).__name__}: '{key}' must contain property names, got {name!r}"
            )
    return result


class _GroupRuleProperties(IGroupValidationRule):
    """Affected/causative property handling shared by both variants.

    Causative properties default to the affected properties. Subclasses
    can declare ``AFFECTED_PROPERTIES``/``CAUSATIVE_PROPERTIES`` instead
    of passing them in the configuration.
    """

    AFFECTED_PROPERTIES: tuple[str, ...] = ()
    CAUSATIVE_PROPERTIES: Optional[tuple[str, ...]] = None

    def _init_group(self) -> None:
        affected = self.config.get(CONF_AFFECTED, self.AFFECTED_PROPERTIES)
        causative = self.config.get(CONF_CAUSATIVE, self.CAUSATIVE_PROPERTIES)
        self._affected = _property_names(affected, CONF_AFFECTED, self)
        self._causative = (
            self._affected
            if causative is None
            else _property_names(causative, CONF_CAUSATIVE, self)
        )

    @property
    def affected_properties(self) -> tuple[str, ...]:
        return self._affected

    @property
    def causative_properties(self) -> tuple[str, ...]:
        return self._causative


class SyncGroupValidationRule(_GroupRuleProperties, SyncValidationRule):
    """Group rule checked synchronously; ``value`` is the entity."""

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        SyncValidationRule.__init__(self, config)
        self._init_group()


class AsyncGroupValidationRule(_GroupRuleProperties, AsyncValidationRule):
    """Group rule checked asynchronously; ``value`` is the entity."""

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        AsyncValidationRule.__init__(self, config)
        self._init_group()
