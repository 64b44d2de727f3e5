"""Unit tests for the Saga executor."""

from __future__ import annotations

import asyncio

import pytest

from tabex.application.saga import Saga, SagaState


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Journal:
    """Records the order in which actions and compensations ran."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def action(self, name: str, exc: BaseException | None = None):
        async def run() -> None:
            self.events.append(f"do:{name}")
            if exc is not None:
                raise exc

        return run

    def compensation(self, name: str, exc: BaseException | None = None):
        async def run() -> None:
            self.events.append(f"undo:{name}")
            if exc is not None:
                raise exc

        return run


def build(journal: Journal, failing: str | None = None, error: BaseException | None = None) -> Saga:
    saga = Saga("test")
    for name in ("a", "b", "c"):
        saga.add_step(
            journal.action(name, error if name == failing else None),
            journal.compensation(name),
            name=name,
        )
    return saga


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class TestSagaBuilder:
    def test_add_step_is_chainable(self) -> None:
        j = Journal()
        saga = Saga().add_step(j.action("a"), j.compensation("a")).add_step(j.action("b"), j.compensation("b"))
        assert len(saga.steps) == 2

    def test_default_step_names(self) -> None:
        j = Journal()
        saga = Saga().add_step(j.action("a"), j.compensation("a")).add_step(j.action("b"), j.compensation("b"))
        assert [s.name for s in saga.steps] == ["step-1", "step-2"]

    def test_compensations_index_aligned(self) -> None:
        j = Journal()
        undo_a, undo_b = j.compensation("a"), j.compensation("b")
        saga = Saga().add_step(j.action("a"), undo_a).add_step(j.action("b"), undo_b)
        assert saga.compensations == (undo_a, undo_b)
        assert len(saga.compensations) == len(saga.steps)

    def test_initial_state_idle(self) -> None:
        assert Saga().state is SagaState.IDLE

    def test_cannot_add_after_execute(self) -> None:
        j = Journal()
        saga = build(j)
        asyncio.run(saga.execute())
        with pytest.raises(RuntimeError):
            saga.add_step(j.action("d"), j.compensation("d"))


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


class TestSagaExecution:
    def test_steps_run_in_order(self) -> None:
        j = Journal()
        saga = build(j)
        asyncio.run(saga.execute())
        assert j.events == ["do:a", "do:b", "do:c"]
        assert saga.state is SagaState.COMMITTED
        assert saga.executed_steps == 3

    def test_empty_saga_commits(self) -> None:
        saga = Saga()
        asyncio.run(saga.execute())
        assert saga.state is SagaState.COMMITTED

    def test_single_use(self) -> None:
        saga = build(Journal())
        asyncio.run(saga.execute())
        with pytest.raises(RuntimeError):
            asyncio.run(saga.execute())

    def test_failure_compensates_in_reverse(self) -> None:
        j = Journal()
        saga = build(j, failing="c", error=ValueError("boom"))
        with pytest.raises(ValueError):
            asyncio.run(saga.execute())
        assert j.events == ["do:a", "do:b", "do:c", "undo:b", "undo:a"]
        assert saga.compensated == ("b", "a")
        assert saga.state is SagaState.FAILED

    def test_failing_step_not_compensated(self) -> None:
        j = Journal()
        saga = build(j, failing="b", error=ValueError("boom"))
        with pytest.raises(ValueError):
            asyncio.run(saga.execute())
        assert "undo:b" not in j.events
        assert "do:c" not in j.events

    def test_first_step_failure_runs_no_compensation(self) -> None:
        j = Journal()
        saga = build(j, failing="a", error=ValueError("boom"))
        with pytest.raises(ValueError):
            asyncio.run(saga.execute())
        assert j.events == ["do:a"]
        assert saga.compensated == ()

    def test_original_exception_object_reraised(self) -> None:
        error = KeyError("original")
        saga = build(Journal(), failing="b", error=error)
        with pytest.raises(KeyError) as exc_info:
            asyncio.run(saga.execute())
        assert exc_info.value is error

    def test_compensation_failure_is_swallowed(self) -> None:
        j = Journal()
        saga = Saga()
        saga.add_step(j.action("a"), j.compensation("a"), name="a")
        saga.add_step(j.action("b"), j.compensation("b", RuntimeError("undo failed")), name="b")
        saga.add_step(j.action("c", ValueError("boom")), j.compensation("c"), name="c")
        with pytest.raises(ValueError):
            asyncio.run(saga.execute())
        assert j.events[-2:] == ["undo:b", "undo:a"]
        assert saga.compensated == ("b", "a")

    def test_cancellation_compensates_then_propagates(self) -> None:
        j = Journal()
        gate = asyncio.Event()

        async def block() -> None:
            j.events.append("do:block")
            await gate.wait()

        saga = Saga()
        saga.add_step(j.action("a"), j.compensation("a"), name="a")
        saga.add_step(block, j.compensation("block"), name="block")

        async def run() -> None:
            task = asyncio.create_task(saga.execute())
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert j.events == ["do:a", "do:block", "undo:a"]
        assert saga.state is SagaState.FAILED

    def test_logging_step_failure_clears_generated_buffer(self) -> None:
        """Generate, then a failing log step: buffer cleared, nothing sent."""
        state: dict[str, object] = {"buffer": None, "sent": False}
        log_error = RuntimeError("log sink down")

        async def generate() -> None:
            state["buffer"] = b"a\r\n1\r\n"

        async def clear() -> None:
            state["buffer"] = None

        async def log() -> None:
            raise log_error

        async def noop() -> None:
            pass

        async def respond() -> None:
            state["sent"] = True

        saga = Saga().add_step(generate, clear).add_step(log, noop).add_step(respond, noop)
        with pytest.raises(RuntimeError) as exc_info:
            asyncio.run(saga.execute())
        assert exc_info.value is log_error
        assert state == {"buffer": None, "sent": False}


class TestSagaState:
    def test_terminal_states(self) -> None:
        assert SagaState.COMMITTED.is_terminal
        assert SagaState.FAILED.is_terminal
        assert not SagaState.RUNNING.is_terminal
        assert not SagaState.COMPENSATING.is_terminal
