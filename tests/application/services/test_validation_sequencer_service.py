"""Tests for ValidationSequencerService."""

import asyncio
import logging

import pytest

from reactive_validation.application.services import ValidationSequencerService
from reactive_validation.domain.entities import RequestKind
from reactive_validation.domain.exceptions import ValidationChainAbortedError


class TestValidationSequencerService:
    """Test suite for sequential request execution."""

    @pytest.fixture
    def busy_states(self):
        """Collect busy state changes."""
        return []

    @pytest.fixture
    def sequencer(self, busy_states):
        """Create sequencer recording busy state changes."""
        return ValidationSequencerService(on_busy_changed=busy_states.append)

    @staticmethod
    def _step(log, name, result=True, gate=None, error=None):
        async def step():
            log.append(f"start {name}")
            if gate is not None:
                await gate.wait()
            else:
                await asyncio.sleep(0)
            log.append(f"end {name}")
            if error is not None:
                raise error
            return result

        return step

    @pytest.mark.asyncio
    async def test_single_request(self, sequencer):
        """Test that a request resolves to its step's result."""
        log = []

        future = sequencer.submit(RequestKind.PROPERTY, self._step(log, "a", False), "new_bid")

        assert await future is False
        assert log == ["start a", "end a"]

    @pytest.mark.asyncio
    async def test_requests_never_overlap(self, sequencer):
        """Test that requests run one at a time in issue order."""
        log = []
        gate = asyncio.Event()

        first = sequencer.submit(RequestKind.PROPERTY, self._step(log, "a", gate=gate), "new_bid")
        second = sequencer.submit(RequestKind.ENTITY, self._step(log, "b"))
        third = sequencer.submit(RequestKind.PROPERTY, self._step(log, "c"), "new_bid")

        await asyncio.sleep(0.01)
        assert log == ["start a"]
        assert not first.done()

        gate.set()
        await asyncio.gather(first, second, third)

        assert log == ["start a", "end a", "start b", "end b", "start c", "end c"]

    @pytest.mark.asyncio
    async def test_each_request_has_own_future(self, sequencer):
        """Test distinct completions for back-to-back requests."""
        first = sequencer.submit(RequestKind.PROPERTY, self._step([], "a", "first"), "new_bid")
        second = sequencer.submit(RequestKind.PROPERTY, self._step([], "b", "second"), "new_bid")

        assert first is not second
        assert await first == "first"
        assert await second == "second"

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_chain(self, sequencer):
        """Test that later requests run after a failing one."""
        log = []

        first = sequencer.submit(
            RequestKind.PROPERTY, self._step(log, "a", error=ValueError("boom")), "new_bid"
        )
        second = sequencer.submit(RequestKind.ENTITY, self._step(log, "b"))

        with pytest.raises(ValueError, match="boom"):
            await first
        assert await second is True
        assert log == ["start a", "end a", "start b", "end b"]

    @pytest.mark.asyncio
    async def test_cancelled_step_fails_only_its_request(self, sequencer, busy_states):
        """Test that a step cancelled from inside does not stop the worker."""
        log = []

        async def cancelled_lookup():
            lookup = asyncio.get_running_loop().create_future()
            lookup.cancel()
            await lookup

        first = sequencer.submit(RequestKind.PROPERTY, cancelled_lookup, "new_bid")
        second = sequencer.submit(RequestKind.PROPERTY, self._step(log, "b"), "max_new_bid")

        assert await asyncio.wait_for(second, timeout=1.0) is True
        assert first.cancelled()
        assert log == ["start b", "end b"]
        await asyncio.sleep(0)
        assert not sequencer.is_validating
        assert busy_states == [True, False]

    @pytest.mark.asyncio
    async def test_worker_cancellation_cancels_queued_requests(self, sequencer, busy_states):
        """Test that cancelling the worker resolves every pending future."""
        gate = asyncio.Event()

        first = sequencer.submit(RequestKind.ENTITY, self._step([], "a", gate=gate))
        second = sequencer.submit(RequestKind.ENTITY, self._step([], "b"))
        await asyncio.sleep(0)

        sequencer._worker.cancel()
        with pytest.raises(asyncio.CancelledError):
            await sequencer._worker

        assert first.cancelled()
        assert second.cancelled()
        assert sequencer.pending_count == 0
        assert busy_states == [True, False]

    @pytest.mark.asyncio
    async def test_abort_queued_requests(self, caplog):
        """Test opting out of failure isolation."""
        sequencer = ValidationSequencerService(continue_on_error=False)
        log = []
        gate = asyncio.Event()

        first = sequencer.submit(
            RequestKind.PROPERTY,
            self._step(log, "a", gate=gate, error=ValueError("boom")),
            "new_bid",
        )
        second = sequencer.submit(RequestKind.ENTITY, self._step(log, "b"))
        gate.set()

        with caplog.at_level(logging.WARNING):
            with pytest.raises(ValueError):
                await first
            with pytest.raises(ValidationChainAbortedError) as exc_info:
                await second

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert "start b" not in log
        assert "Aborted 1 queued validation requests" in caplog.text
        assert not sequencer.is_validating

        # A new request starts a new chain
        assert await sequencer.submit(RequestKind.ENTITY, self._step(log, "c")) is True

    @pytest.mark.asyncio
    async def test_busy_state(self, sequencer, busy_states):
        """Test is_validating covers queued and running requests."""
        gate = asyncio.Event()

        first = sequencer.submit(RequestKind.ENTITY, self._step([], "a", gate=gate))
        second = sequencer.submit(RequestKind.ENTITY, self._step([], "b"))

        assert sequencer.is_validating
        assert sequencer.pending_count == 2

        gate.set()
        await first
        assert sequencer.is_validating
        await second
        await asyncio.sleep(0)

        assert not sequencer.is_validating
        assert busy_states == [True, False]

    @pytest.mark.asyncio
    async def test_caller_timeout_does_not_stop_request(self, sequencer):
        """Test that a request keeps running after its caller gave up."""
        log = []
        gate = asyncio.Event()

        first = sequencer.submit(RequestKind.ENTITY, self._step(log, "a", gate=gate))
        second = sequencer.submit(RequestKind.ENTITY, self._step(log, "b"))

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(first, timeout=0.01)

        gate.set()
        assert await second is True
        assert log == ["start a", "end a", "start b", "end b"]

    def test_submit_requires_running_loop(self, sequencer):
        """Test that submitting outside an event loop fails."""

        async def step():
            return True

        with pytest.raises(RuntimeError):
            sequencer.submit(RequestKind.ENTITY, step)
