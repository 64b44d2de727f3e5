"""Application saga – Saga executor."""

from __future__ import annotations

import asyncio

from tabex.application.saga.state import SagaState
from tabex.application.saga.step import Action, Compensation, SagaStep
from tabex.observability.logging import get_logger

logger = get_logger(__name__)


class Saga:
    """Executes registered steps in order and compensates on failure.

    On success every step's action is awaited in registration order and the
    saga ends :attr:`~SagaState.COMMITTED`.

    When the action of step *k* raises, the compensations of steps
    ``0..k-1`` run last-executed-first.  A failing compensation is logged
    and skipped so the remaining ones still run.  The original exception is
    then re-raised unchanged and the saga ends :attr:`~SagaState.FAILED`.
    The failing step's own compensation never runs.

    Task cancellation (client disconnect) is handled like a failure: the
    executed steps are compensated before ``CancelledError`` propagates.

    A saga is single-use.

    Example::

        saga = Saga("export-csv")
        saga.add_step(generate, clear_buffer).add_step(log_start, log_revert)
        await saga.execute()
    """

    def __init__(self, name: str = "saga") -> None:
        self.name = name
        self._steps: list[SagaStep] = []
        self._state = SagaState.IDLE
        self._executed = 0
        self._compensated: list[str] = []

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def add_step(
        self,
        action: Action,
        compensation: Compensation,
        *,
        name: str | None = None,
    ) -> "Saga":
        if self._state is not SagaState.IDLE:
            raise RuntimeError(f"Saga '{self.name}' cannot accept steps in state {self._state.value}")
        index = len(self._steps)
        self._steps.append(
            SagaStep(
                index=index,
                name=name or f"step-{index + 1}",
                action=action,
                compensation=compensation,
            )
        )
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def state(self) -> SagaState:
        return self._state

    @property
    def steps(self) -> tuple[SagaStep, ...]:
        return tuple(self._steps)

    @property
    def compensations(self) -> tuple[Compensation, ...]:
        """Compensations indexed by step number (same length as :attr:`steps`)."""
        return tuple(step.compensation for step in self._steps)

    @property
    def executed_steps(self) -> int:
        return self._executed

    @property
    def compensated(self) -> tuple[str, ...]:
        """Names of steps whose compensation ran, in execution order."""
        return tuple(self._compensated)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def execute(self) -> None:
        if self._state is not SagaState.IDLE:
            raise RuntimeError(f"Saga '{self.name}' already executed (state {self._state.value})")
        self._state = SagaState.RUNNING

        for step in self._steps:
            try:
                await step.action()
            except (Exception, asyncio.CancelledError) as exc:
                logger.warning(
                    "saga.step_failed",
                    saga=self.name,
                    step=step.name,
                    error=repr(exc),
                )
                self._state = SagaState.COMPENSATING
                await self._compensate()
                self._state = SagaState.FAILED
                raise
            self._executed += 1

        self._state = SagaState.COMMITTED

    async def _compensate(self) -> None:
        for step in reversed(self._steps[: self._executed]):
            try:
                await step.compensation()
            except Exception as comp_exc:  # noqa: BLE001
                logger.error(
                    "saga.compensation_failed",
                    saga=self.name,
                    step=step.name,
                    error=repr(comp_exc),
                )
            self._compensated.append(step.name)

    def __repr__(self) -> str:
        return f"Saga(name={self.name!r}, state={self._state.value}, steps={len(self._steps)})"


__all__ = ["Saga"]
