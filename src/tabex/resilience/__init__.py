"""Resilience – bulkhead and timeouts."""

from tabex.resilience.bulkhead import QueueLimiter
from tabex.resilience.timeouts import TimeoutPolicy

__all__ = ["QueueLimiter", "TimeoutPolicy"]
