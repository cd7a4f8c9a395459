"""PropertyEvaluation DTO returned by the rule evaluator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...domain.interfaces import IGroupValidationRule
from ...domain.value_objects import ValidationMessage


@dataclass
class PropertyEvaluation:
    """Outcome of evaluating one property.

    Attributes:
        property_name: Evaluated property
        messages: Messages of the failing single-property rules
        group_messages: Group rule -> its message, None if the rule passed
        is_valid: Whether every evaluated rule passed
    """

    property_name: str
    messages: list[ValidationMessage] = field(default_factory=list)
    group_messages: dict[IGroupValidationRule, Optional[ValidationMessage]] = field(
        default_factory=dict
    )
    is_valid: bool = True
