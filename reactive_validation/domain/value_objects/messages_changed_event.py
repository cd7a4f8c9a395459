"""MessagesChangedEvent value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .message_target import MessageTarget


@dataclass(frozen=True)
class MessagesChangedEvent:
    """Notification that the messages of one target changed.

    One event is sent per changed target, followed by a single aggregate
    event (``target`` is None) for the merged view as a whole.

    Attributes:
        target: Property or entity whose messages changed, None for the
            aggregate view
    """

    target: Optional[MessageTarget] = None

    @property
    def is_aggregate(self) -> bool:
        return self.target is None
