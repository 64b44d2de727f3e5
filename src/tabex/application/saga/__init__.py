"""Application — Saga executor with per-step compensation."""

from tabex.application.saga.saga import Saga
from tabex.application.saga.state import SagaState
from tabex.application.saga.step import Action, Compensation, SagaStep

__all__ = [
    "Action",
    "Compensation",
    "Saga",
    "SagaState",
    "SagaStep",
]
