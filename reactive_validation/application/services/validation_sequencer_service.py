"""ValidationSequencerService for serializing validation requests.

This service runs the validation requests of one entity strictly one at
a time, in the order they were issued. It handles:
- Request queue management
- A single worker task draining the queue
- One completion future per request
- Failure isolation (or aborting the queue, if configured)
- The "currently validating" busy state
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from ...const import DEFAULT_CONTINUE_ON_ERROR
from ...domain.entities import RequestKind, ValidationRequest
from ...domain.exceptions import ValidationChainAbortedError

_LOGGER = logging.getLogger(__name__)


class ValidationSequencerService:
    """Service running validation requests in issue order.

    Requests are queued and drained by one worker task, which is started
    when a request arrives and exits once the queue is empty. A request
    never overlaps with another request of the same sequencer.

    A failing request fails only its own future. Later requests still run
    unless the sequencer was created with ``continue_on_error=False``, in
    which case the requests queued at that moment fail with
    ValidationChainAbortedError instead of running.

    Example:
        >>> sequencer = ValidationSequencerService()
        >>> first = sequencer.submit(RequestKind.PROPERTY, step, "Bid")
        >>> second = sequencer.submit(RequestKind.ENTITY, full_pass)
        >>> await first  # completes before second starts
    """

    def __init__(
        self,
        continue_on_error: bool = DEFAULT_CONTINUE_ON_ERROR,
        on_busy_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        """Initialize sequencer.

        Args:
            continue_on_error: Keep running queued requests after a failure
            on_busy_changed: Called with the new busy state when it changes
        """
        self._continue_on_error = continue_on_error
        self._on_busy_changed = on_busy_changed
        self._queue: asyncio.Queue[ValidationRequest] = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None
        self._pending = 0
        self._current: Optional[ValidationRequest] = None

    @property
    def continue_on_error(self) -> bool:
        return self._continue_on_error

    @property
    def is_validating(self) -> bool:
        """Check if a request is queued or running.

        Returns:
            True while at least one request has not finished
        """
        return self._pending > 0

    @property
    def pending_count(self) -> int:
        """Number of queued or running requests."""
        return self._pending

    @property
    def current_request(self) -> Optional[ValidationRequest]:
        return self._current

    def submit(
        self,
        kind: RequestKind,
        step: Callable[[], Awaitable[Any]],
        property_name: Optional[str] = None,
    ) -> asyncio.Future:
        """Queue a validation request.

        Args:
            kind: Whole-entity or single-property request
            step: Coroutine function evaluating and applying the results
            property_name: Target property for PROPERTY requests

        Returns:
            Future resolving to the step's result once it is applied

        Raises:
            RuntimeError: If called without a running event loop
        """
        loop = asyncio.get_running_loop()
        request = ValidationRequest(kind, step, loop.create_future(), property_name)

        self._queue.put_nowait(request)
        self._pending += 1
        _LOGGER.debug("Queued validation request %s (%d pending)", request.describe(), self._pending)
        if self._pending == 1:
            self._set_busy(True)

        if self._worker is None or self._worker.done():
            self._worker = loop.create_task(self._drain())

        return request.future

    async def _drain(self) -> None:
        """Run queued requests until the queue is empty."""
        try:
            while not self._queue.empty():
                request = self._queue.get_nowait()
                try:
                    failure = await self._run(request)
                finally:
                    self._pending -= 1

                if failure is not None and not self._continue_on_error:
                    self._abort_queued(failure)

                if self._pending == 0:
                    self._set_busy(False)
        except asyncio.CancelledError:
            self._cancel_queued()
            raise

    async def _run(self, request: ValidationRequest) -> Optional[BaseException]:
        """Run one request and resolve its future.

        Returns:
            The exception the request failed with, None on success
        """
        request.mark_running()
        self._current = request
        _LOGGER.debug("Running validation request %s", request.describe())

        try:
            result = await request.step()
        except asyncio.CancelledError as err:
            request.mark_failed("cancelled")
            request.future.cancel()
            if _worker_cancelling():
                raise
            # Cancelled from inside the step, e.g. an awaited lookup was cancelled
            _LOGGER.debug("Validation request %s was cancelled", request.describe())
            return err
        except Exception as err:
            request.mark_failed(str(err))
            _LOGGER.debug("Validation request %s failed: %s", request.describe(), err)
            # The caller may have stopped waiting (timeout), the future is done then
            if not request.future.done():
                request.future.set_exception(err)
            return err
        finally:
            self._current = None

        request.mark_applied()
        request.mark_completed()
        _LOGGER.debug(
            "Completed validation request %s in %.3fs",
            request.describe(),
            request.duration_seconds,
        )
        if not request.future.done():
            request.future.set_result(result)
        return None

    def _abort_queued(self, cause: BaseException) -> None:
        """Fail every queued request because an earlier one failed."""
        aborted = 0
        while not self._queue.empty():
            request = self._queue.get_nowait()
            request.mark_failed(f"aborted after earlier failure: {cause}")
            error = ValidationChainAbortedError(
                f"Validation request {request.describe()} aborted: an earlier request failed"
            )
            error.__cause__ = cause
            if not request.future.done():
                request.future.set_exception(error)
            self._pending -= 1
            aborted += 1

        if aborted:
            _LOGGER.warning("Aborted %d queued validation requests after failure: %s", aborted, cause)

    def _set_busy(self, is_validating: bool) -> None:
        if self._on_busy_changed is not None:
            self._on_busy_changed(is_validating)

    def _cancel_queued(self) -> None:
        """Cancel every queued request because the worker was cancelled."""
        while not self._queue.empty():
            request = self._queue.get_nowait()
            request.mark_failed("cancelled")
            request.future.cancel()
            self._pending -= 1
        if self._pending == 0:
            self._set_busy(False)


def _worker_cancelling() -> bool:
    """Check if the running task itself has a pending cancellation."""
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0
