"""ValidationMessage value object.

Represents one finding produced by a rule or added manually.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .validation_level import ValidationLevel
from .validation_message_kind import ValidationMessageKind


@dataclass(frozen=True, eq=False)
class ValidationMessage:
    """Immutable validation finding.

    Two messages are the same finding when their text is the same, even
    if they were constructed independently or carry different display
    flags. Every validation pass builds fresh messages, so the store
    compares by text to decide whether anything actually changed.

    Attributes:
        level: Severity (error or warning)
        text: Message text
        show_on_property: Whether the message is shown next to the property
        show_in_summary: Whether the message is shown in a summary
        kind: Origin in the merged view, unset until the view is built

    Example:
        >>> first = ValidationMessage(ValidationLevel.ERROR, "Value must be greater 0.")
        >>> second = ValidationMessage(ValidationLevel.WARNING, "Value must be greater 0.")
        >>> assert first == second
        >>> assert len({first, second}) == 1
    """

    level: ValidationLevel
    text: str
    show_on_property: bool = True
    show_in_summary: bool = True
    kind: Optional[ValidationMessageKind] = None

    def __post_init__(self) -> None:
        """Validate message fields.

        Raises:
            TypeError: If level is not a ValidationLevel or text is not a string
            ValueError: If text is empty
        """
        if not isinstance(self.level, ValidationLevel):
            raise TypeError(
                f"level must be ValidationLevel, got {type(self.level).__name__}"
            )
        if not isinstance(self.text, str):
            raise TypeError(f"text must be str, got {type(self.text).__name__}")
        if not self.text:
            raise ValueError("Message text must not be empty")

    @classmethod
    def error(cls, text: str, **kwargs) -> ValidationMessage:
        """Create an error-level message."""
        return cls(ValidationLevel.ERROR, text, **kwargs)

    @classmethod
    def warning(cls, text: str, **kwargs) -> ValidationMessage:
        """Create a warning-level message."""
        return cls(ValidationLevel.WARNING, text, **kwargs)

    @property
    def is_error(self) -> bool:
        return self.level == ValidationLevel.ERROR

    def with_kind(self, kind: ValidationMessageKind) -> ValidationMessage:
        """Return a copy tagged with the given origin kind."""
        if self.kind == kind:
            return self
        return replace(self, kind=kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationMessage):
            return NotImplemented
        return self.text == other.text

    def __hash__(self) -> int:
        return hash(self.text)

    def __str__(self) -> str:
        return f"[{self.level.value}] {self.text}"
