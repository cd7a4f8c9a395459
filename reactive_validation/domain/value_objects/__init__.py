"""Value Objects for the validation domain.

Value Objects are immutable domain primitives that:
- Have no identity (equality based on value, not reference)
- Are immutable (cannot be changed after creation)
- Validate their invariants at construction
"""

from .validation_level import ValidationLevel
from .validation_message_kind import ValidationMessageKind
from .message_target import ENTITY, EntityScoped, MessageTarget, PropertyScoped
from .validation_message import ValidationMessage
from .messages_changed_event import MessagesChangedEvent

__all__ = [
    "ValidationLevel",
    "ValidationMessageKind",
    "ENTITY",
    "EntityScoped",
    "MessageTarget",
    "PropertyScoped",
    "ValidationMessage",
    "MessagesChangedEvent",
]
