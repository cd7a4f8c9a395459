"""Domain entities for the validation engine.

Entities have identity and a lifecycle. A ValidationRequest is created
when a caller asks for validation and moves through its states until the
sequencer has applied (or failed) it.
"""

from .request_state import RequestKind, RequestState
from .validation_request import ValidationRequest

__all__ = [
    "RequestKind",
    "RequestState",
    "ValidationRequest",
]
