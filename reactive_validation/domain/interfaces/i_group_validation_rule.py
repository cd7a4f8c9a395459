"""IGroupValidationRule interface for rules spanning several properties."""

from abc import abstractmethod

from .i_validation_rule import IValidationRule


class IGroupValidationRule(IValidationRule):
    """Interface for group validation rules.

    A group rule checks the whole entity. It is re-evaluated when any of
    its causative properties is validated and its single message is
    reported on every affected property. A group rule without affected
    properties reports on the entity as a whole.

    Group rules are keyed by instance identity: one rule instance can be
    registered once per entity type.
    """

    @property
    @abstractmethod
    def affected_properties(self) -> tuple[str, ...]:
        """Names of properties the rule's message is shown on."""

    @property
    @abstractmethod
    def causative_properties(self) -> tuple[str, ...]:
        """Names of properties whose validation re-evaluates the rule."""
