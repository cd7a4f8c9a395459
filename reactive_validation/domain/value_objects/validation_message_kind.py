"""Validation message kind enum."""

from enum import Enum


class ValidationMessageKind(Enum):
    """Where a message in the merged view came from."""

    PROPERTY = "property"  # Single-property rule or manual property message
    GROUP = "group"  # Group rule or manual entity-wide message
