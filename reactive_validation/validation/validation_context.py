"""Validation context passed to every rule check."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ValidationContext:
    """What a rule can see besides the value it checks.

    Attributes:
        entity: The entity being validated (read-only for rules)
        property_name: Property under validation, None for entity-wide checks
        items: Scratch space shared by all rules of one validation pass
    """

    entity: Any
    property_name: Optional[str] = None
    items: dict[str, Any] = field(default_factory=dict)

    def get_property_value(self, name: str) -> Any:
        """Read another property of the entity.

        Raises:
            AttributeError: If the entity has no such property
        """
        return getattr(self.entity, name)
