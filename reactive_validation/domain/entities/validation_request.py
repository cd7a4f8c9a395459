"""ValidationRequest entity for sequenced validation passes.

A ValidationRequest represents one call to ``validate()`` or
``validate_property()``. The sequencer runs requests strictly one at a
time in issue order; the request tracks where it is in that process.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional

from .request_state import RequestKind, RequestState

_REQUEST_IDS = itertools.count(1)


@dataclass(eq=False)
class ValidationRequest:
    """Domain entity representing one queued validation pass.

    State management:
        QUEUED -> RUNNING -> APPLIED -> COMPLETED
        QUEUED -> FAILED (chain aborted)
        RUNNING -> FAILED (rule raised)

    There is no retry and no cancellation: once issued, a request runs
    when its turn arrives.

    Attributes:
        kind: Whole-entity or single-property request
        step: Coroutine factory performing evaluation and applying results
        future: Completion signal handed to the caller
        property_name: Target property for PROPERTY requests
        request_id: Monotonic identifier, reflects issue order
        state: Current request state
        created_at: When the request was issued
        completed_at: When the request completed or failed
        error_message: Failure description if failed

    Example:
        >>> request = ValidationRequest(RequestKind.PROPERTY, step, future, "Bid")
        >>> request.mark_running()
        >>> request.mark_applied()
        >>> request.mark_completed()
        >>> assert request.is_completed
    """

    kind: RequestKind
    step: Callable[[], Awaitable[Any]]
    future: "asyncio.Future[Any]"
    property_name: Optional[str] = None
    request_id: int = field(default_factory=lambda: next(_REQUEST_IDS))
    state: RequestState = RequestState.QUEUED
    created_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate request after initialization."""
        if not isinstance(self.kind, RequestKind):
            raise TypeError(f"kind must be RequestKind, got {type(self.kind).__name__}")
        if self.kind == RequestKind.PROPERTY and not self.property_name:
            raise ValueError("PROPERTY requests require a property name")

    @property
    def is_queued(self) -> bool:
        return self.state == RequestState.QUEUED

    @property
    def is_running(self) -> bool:
        return self.state == RequestState.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.state == RequestState.COMPLETED

    @property
    def is_failure(self) -> bool:
        return self.state == RequestState.FAILED

    @property
    def is_finished(self) -> bool:
        """Check if request reached a terminal state.

        Returns:
            True if state is COMPLETED or FAILED
        """
        return self.state in (RequestState.COMPLETED, RequestState.FAILED)

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.created_at).total_seconds()

    def mark_running(self) -> None:
        """Mark request as running.

        Raises:
            ValueError: If request is not QUEUED
        """
        if not self.is_queued:
            raise ValueError(f"Cannot run request in {self.state.value} state")
        self.state = RequestState.RUNNING

    def mark_applied(self) -> None:
        """Mark request results as written to the store.

        Raises:
            ValueError: If request is not RUNNING
        """
        if not self.is_running:
            raise ValueError(f"Cannot apply request in {self.state.value} state")
        self.state = RequestState.APPLIED

    def mark_completed(self) -> None:
        """Mark request as completed.

        Raises:
            ValueError: If request results were not applied
        """
        if self.state != RequestState.APPLIED:
            raise ValueError(f"Cannot complete request in {self.state.value} state")
        self.state = RequestState.COMPLETED
        self.completed_at = datetime.now()

    def mark_failed(self, error_message: str) -> None:
        """Mark request as failed.

        Args:
            error_message: Description of failure

        Raises:
            ValueError: If request already finished or was applied
        """
        if self.state not in (RequestState.QUEUED, RequestState.RUNNING):
            raise ValueError(f"Cannot fail request in {self.state.value} state")
        self.state = RequestState.FAILED
        self.error_message = error_message
        self.completed_at = datetime.now()

    def describe(self) -> str:
        """Short description for logging."""
        if self.kind == RequestKind.PROPERTY:
            return f"#{self.request_id} property '{self.property_name}'"
        return f"#{self.request_id} entity"

    def __str__(self) -> str:
        return f"ValidationRequest({self.describe()}, state={self.state.value})"
