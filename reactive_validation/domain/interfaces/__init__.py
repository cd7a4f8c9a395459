"""Domain interfaces for the validation engine.

This module defines the contracts rule implementations must fulfill.
The engine only depends on these contracts, which makes rules easy to
fake in tests and lets applications bring their own rules.
"""

from .i_validation_rule import IValidationRule
from .i_group_validation_rule import IGroupValidationRule

__all__ = [
    "IValidationRule",
    "IGroupValidationRule",
]
