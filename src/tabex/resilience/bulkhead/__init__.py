"""Resilience – bulkhead (concurrency + queue limiting)."""
from tabex.resilience.bulkhead.limiters import QueueLimiter

__all__ = ["QueueLimiter"]
