"""Resilience – timeout policies."""
from tabex.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
