"""Validation Result data class.

Outcome of checking one rule: whether it passed and, if not, the
message texts it reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ValidationResult:
    """Result of a rule check.

    A failing single-property rule turns every error text into one
    ValidationMessage carrying the rule's level and display flags.

    Attributes:
        valid: Whether the rule passed
        errors: Message texts reported by a failing rule
    """

    valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def success(cls) -> ValidationResult:
        """Create a passing result."""
        return cls(valid=True)

    @classmethod
    def failure(cls, *messages: str) -> ValidationResult:
        """Create a failing result with the given message texts."""
        return cls(valid=False, errors=list(messages))

    def merge(self, other: ValidationResult) -> None:
        """Merge another validation result into this one.

        Args:
            other: ValidationResult to merge
        """
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)

    def __str__(self) -> str:
        """Return string representation of validation result."""
        if self.errors:
            return f"Errors: {', '.join(self.errors)}"
        return "Valid" if self.valid else "Invalid"
