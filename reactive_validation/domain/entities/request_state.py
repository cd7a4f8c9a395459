"""Request state enums for validation requests."""

from enum import Enum


class RequestState(Enum):
    """Validation request states."""

    QUEUED = "queued"  # Issued, waiting for earlier requests
    RUNNING = "running"  # Rules are being evaluated
    APPLIED = "applied"  # Results written to the message store
    COMPLETED = "completed"  # Caller's future resolved
    FAILED = "failed"  # Evaluation raised or the chain was aborted


class RequestKind(Enum):
    """What a validation request validates."""

    ENTITY = "entity"  # Whole entity, every rule
    PROPERTY = "property"  # One property and its group rules
