"""IValidationRule interface shared by every rule variant."""

from abc import ABC, abstractmethod

from ..value_objects import ValidationLevel


class IValidationRule(ABC):
    """Interface for validation rules.

    A rule exposes how its findings are reported. Whether it is checked
    synchronously or asynchronously is decided by the capability class it
    derives from (``SyncValidationRule`` or ``AsyncValidationRule``).

    Example:
        >>> rule = RangeValidation({"min": 0, "error": "Value must be greater 0."})
        >>> rule.level
        <ValidationLevel.ERROR: 'error'>
        >>> rule.use_in_implicit_validation
        True
    """

    @property
    @abstractmethod
    def level(self) -> ValidationLevel:
        """Severity of messages produced by this rule."""

    @property
    @abstractmethod
    def use_in_implicit_validation(self) -> bool:
        """Whether a property change triggers this rule.

        Rules that return False only run during explicit validation.
        """

    @property
    @abstractmethod
    def show_on_property(self) -> bool:
        """Whether messages are shown next to the property."""

    @property
    @abstractmethod
    def show_in_summary(self) -> bool:
        """Whether messages are shown in a summary."""
