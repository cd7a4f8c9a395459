"""Validation level enum."""

from enum import Enum


class ValidationLevel(Enum):
    """Severity of a validation message."""

    ERROR = "error"  # Blocks: the entity is not valid
    WARNING = "warning"  # Informs: shown, but does not block
