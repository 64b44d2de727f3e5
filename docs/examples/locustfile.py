"""Locust load-test: export/import traffic against a running tabex service.

Every export posts a 10 000-record batch, the same payload the service is
sized for.  The mix is weighted towards CSV, which is the cheapest format
and the most common request in practice.

Run with::

    pip install locust
    python -m tabex &
    locust -f docs/examples/locustfile.py --host=http://localhost:3000

Headless, at a fixed concurrency::

    locust -f docs/examples/locustfile.py \\
        --host=http://localhost:3000 \\
        --users=10 --spawn-rate=2 \\
        --run-time=30s --headless

Rate limits (``EXPORT_RATE_LIMIT`` / ``IMPORT_RATE_LIMIT``) apply per
client IP, so raise them for load runs or expect 429s to be counted as
throttled rather than failed.

Metrics to watch
----------------
- p50, p95, p99 latency per format
- Requests/second at target concurrency
- 429 share (bulkhead + rate limit) vs. 5xx share (should be 0)
"""

from __future__ import annotations

import csv
import io
import random

try:
    from locust import HttpUser, between, task
except ImportError as exc:
    raise SystemExit(
        "locust is not installed.  Install it with:  pip install locust"
    ) from exc


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

RECORDS = 10_000
CSV_WEIGHT = 6
REPORT_WEIGHT = 2
IMAGE_WEIGHT = 1
IMPORT_WEIGHT = 1

_CITIES = ("New York", "Los Angeles", "Chicago", "Houston")

_DATA: list[dict[str, object]] = [
    {
        "id": i,
        "name": f"User {i}",
        "email": f"user{i}@example.com",
        "age": random.randint(18, 67),
        "city": random.choice(_CITIES),
    }
    for i in range(RECORDS)
]


def _csv_upload() -> bytes:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(_DATA[0]))
    writer.writeheader()
    writer.writerows(_DATA)
    return buf.getvalue().encode("utf-8")


_UPLOAD = _csv_upload()
_OK = (200,)
_THROTTLED = (429,)


# ---------------------------------------------------------------------------
# User behaviour
# ---------------------------------------------------------------------------


class ExportImportUser(HttpUser):
    """Posts large export batches and CSV uploads with short think time."""

    wait_time = between(0.05, 0.5)

    def _export(self, path: str, name: str, config: dict[str, object] | None = None) -> None:
        payload: dict[str, object] = {"data": _DATA}
        if config:
            payload["config"] = config
        with self.client.post(path, json=payload, name=name, catch_response=True) as resp:
            if resp.status_code in _THROTTLED:
                resp.success()
            elif resp.status_code not in _OK:
                resp.failure(f"Unexpected status: {resp.status_code}")

    @task(CSV_WEIGHT)
    def export_csv(self) -> None:
        self._export("/api/v1/export/csv", "/export/csv [10k]")

    @task(REPORT_WEIGHT)
    def export_report(self) -> None:
        self._export("/api/v1/export/pdf", "/export/pdf [10k]", {"title": "Load test"})

    @task(IMAGE_WEIGHT)
    def export_image(self) -> None:
        self._export("/api/v1/export/image", "/export/image [10k svg]")

    @task(IMPORT_WEIGHT)
    def import_csv(self) -> None:
        files = {"file": ("load.csv", _UPLOAD, "text/csv")}
        with self.client.post(
            "/api/v1/import/csv",
            files=files,
            name="/import/csv [10k]",
            catch_response=True,
        ) as resp:
            if resp.status_code in _THROTTLED:
                resp.success()
            elif resp.status_code not in _OK:
                resp.failure(f"Unexpected status: {resp.status_code}")
            elif resp.json()["metadata"]["rowCount"] != RECORDS:
                resp.failure("Row count mismatch")

    def on_start(self) -> None:
        """Probe /health before the test starts; abort if unavailable."""
        resp = self.client.get("/health", name="/health [probe]")
        if resp.status_code != 200:
            self.environment.runner.quit()
