"""FastAPI adapter – export, import and health routers."""
from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response, StreamingResponse

from tabex import __version__
from tabex.adapters.fastapi.deps import rate_limit_dep
from tabex.adapters.fastapi.schemas import ExportPayload
from tabex.application.export import ExportKind, ExportService
from tabex.application.files import UploadedFile
from tabex.application.imports import ImportService
from tabex.application.rate_limit import Quota
from tabex.application.streaming import BufferTransport, StreamingTransport
from tabex.kernel.errors import ProcessingError
from tabex.resilience.timeouts import TimeoutPolicy

SERVICE_NAME = "tabex"


async def stream_export(request: Request, kind: ExportKind, payload: ExportPayload) -> StreamingResponse:
    """Run an export saga in its own task and stream its transport.

    Errors raised before headers are sent (validation, overload, timeout)
    surface here and become JSON error responses.  Closing the response
    body cancels the task, which compensates the saga.
    """
    state = request.app.state
    service: ExportService = state.export_service
    timeout: TimeoutPolicy = state.timeout_policy

    config = service.resolve_config(payload.config)
    transport = StreamingTransport(service.settings.stream_high_water_chunks)
    task = asyncio.create_task(service.export(kind, payload.data, config, transport))
    transport.attach(task)
    try:
        head = await timeout.execute(transport.wait_started)
    except BaseException:
        transport.close()
        raise
    return StreamingResponse(
        transport.body(),
        status_code=head.status_code,
        media_type=head.media_type,
        headers=dict(head.headers),
    )


def ExportRouter(quota: Quota, prefix: str = "/api/v1/export") -> APIRouter:
    """Return the export router; every route shares *quota*."""
    router = APIRouter(prefix=prefix, tags=["export"], dependencies=[Depends(rate_limit_dep(quota))])

    @router.post("")
    async def export_default(request: Request, payload: ExportPayload) -> StreamingResponse:
        return await stream_export(request, ExportKind.CSV, payload)

    @router.post("/csv")
    async def export_csv(request: Request, payload: ExportPayload) -> StreamingResponse:
        return await stream_export(request, ExportKind.CSV, payload)

    @router.post("/html")
    async def export_html(request: Request, payload: ExportPayload) -> StreamingResponse:
        return await stream_export(request, ExportKind.HTML, payload)

    @router.post("/pdf")
    async def export_pdf(request: Request, payload: ExportPayload) -> StreamingResponse:
        """Paginated PDF document laid out by ``pageSize`` and ``margin``."""
        return await stream_export(request, ExportKind.PDF, payload)

    @router.post("/image")
    async def export_image(request: Request, payload: ExportPayload) -> StreamingResponse:
        """SVG by default; ``imageFormat=png`` selects the PNG/JPEG renderer."""
        return await stream_export(request, ExportKind.IMAGE, payload)

    return router


def ImportRouter(quota: Quota, prefix: str = "/api/v1/import") -> APIRouter:
    router = APIRouter(prefix=prefix, tags=["import"], dependencies=[Depends(rate_limit_dep(quota))])

    @router.post("/csv")
    async def import_csv(request: Request, file: UploadFile | None = File(default=None)) -> Response:
        state = request.app.state
        service: ImportService = state.import_service
        timeout: TimeoutPolicy = state.timeout_policy

        upload: UploadedFile | None = None
        if file is not None:
            upload = UploadedFile.from_bytes(file.filename, file.content_type, await file.read())

        transport = BufferTransport()
        await timeout.execute(lambda: service.import_csv(upload, transport))
        if transport.head is None:
            raise ProcessingError("Import finished without a response", stage="respond")
        return Response(
            content=transport.body,
            status_code=transport.head.status_code,
            media_type=transport.head.media_type,
        )

    return router


def HealthRouter(path: str = "/health") -> APIRouter:
    router = APIRouter(tags=["ops"])

    @router.get(path)
    async def health(request: Request) -> dict[str, Any]:
        state = request.app.state
        return {
            "status": "OK",
            "service": SERVICE_NAME,
            "version": __version__,
            "environment": state.settings.environment,
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(state.performance.uptime_seconds(), 3),
            "metrics": state.performance.snapshot(),
        }

    return router


__all__ = ["ExportRouter", "HealthRouter", "ImportRouter", "stream_export"]
