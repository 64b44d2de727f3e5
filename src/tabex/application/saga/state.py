"""Application saga – SagaState enum."""

from __future__ import annotations

import enum


class SagaState(enum.Enum):
    """Lifecycle states of a saga execution.

    ``IDLE → RUNNING → COMMITTED`` on success,
    ``IDLE → RUNNING → COMPENSATING → FAILED`` when a step raises.
    """

    IDLE = "IDLE"
    """Steps are being registered; nothing has run."""

    RUNNING = "RUNNING"
    """Forward actions are executing in registration order."""

    COMMITTED = "COMMITTED"
    """Every action completed."""

    COMPENSATING = "COMPENSATING"
    """An action failed; compensations of earlier steps run in reverse."""

    FAILED = "FAILED"
    """Compensation finished and the original error was re-raised."""

    @property
    def is_terminal(self) -> bool:
        return self in (SagaState.COMMITTED, SagaState.FAILED)


__all__ = ["SagaState"]
