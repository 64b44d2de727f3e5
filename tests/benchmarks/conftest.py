"""conftest.py for benchmarks.

Provides a reusable event loop and shared record batches.

The ``event_loop`` fixture is session-scoped so every benchmark in the
session shares a single asyncio event loop, which gives more stable timing
than ``asyncio.run`` per round.
"""

from __future__ import annotations

import asyncio

import pytest


@pytest.fixture(scope="session")
def event_loop():
    """Session-scoped event loop shared by all async benchmark helpers."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture(scope="session")
def run_async(event_loop):
    """Helper that executes a coroutine factory in the session event loop.

    Usage inside a benchmark::

        def test_something(benchmark, run_async):
            benchmark(run_async, lambda: encode(records))
    """

    def _run(factory):
        return event_loop.run_until_complete(factory())

    return _run


@pytest.fixture(scope="session")
def records_10k() -> list[dict[str, object]]:
    return [
        {"id": i, "name": f"User {i}", "email": f"user{i}@example.com", "city": "Chicago, IL"}
        for i in range(10_000)
    ]
