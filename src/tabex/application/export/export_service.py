"""Application export – ExportService (saga orchestration of one export)."""
from __future__ import annotations

import contextlib
import dataclasses
import time
from collections.abc import Mapping
from enum import Enum
from typing import Any, AsyncIterator, Callable, Sequence

from tabex.application.export.config import ExportConfig
from tabex.application.export.csv_export import CsvEncoder, CsvOptions
from tabex.application.export.html_export import HtmlReportEncoder
from tabex.application.export.pdf_export import PdfReportEncoder
from tabex.application.export.raster_export import PngRenderer
from tabex.application.export.svg_export import SvgEncoder
from tabex.application.export.table import TableData
from tabex.application.saga import Saga
from tabex.application.streaming import ResponseHead, ResponseTransport, RowSource
from tabex.config.settings import AppSettings
from tabex.kernel.errors import InputError, ProcessingError
from tabex.kernel.types import Record, infer_headers
from tabex.observability.logging import get_logger
from tabex.resilience.bulkhead import QueueLimiter

__all__ = ["ExportKind", "ExportService", "validate_records"]

logger = get_logger(__name__)

_MAX_REPORTED_ERRORS = 10


class ExportKind(str, Enum):
    CSV = "csv"
    HTML = "html"
    PDF = "pdf"
    IMAGE = "image"


@dataclasses.dataclass(frozen=True)
class _Artifact:
    media_type: str
    extension: str
    open: Callable[[], AsyncIterator[bytes]]


@dataclasses.dataclass
class _ExportState:
    stream: AsyncIterator[bytes] | None = None
    log_id: str | None = None


def validate_records(data: Any, *, allow_empty: bool = False) -> list[Record]:  # noqa: ANN401
    """Return *data* as a list of records or raise :class:`InputError`."""
    if not isinstance(data, list) or (not data and not allow_empty):
        raise InputError(
            "Invalid or empty data array",
            errors=[{"field": "data", "message": "must be a non-empty array of objects"}],
        )
    errors = [
        {"field": f"data[{i}]", "message": "must be an object"}
        for i, item in enumerate(data)
        if not isinstance(item, Mapping)
    ]
    if errors:
        raise InputError("Invalid or empty data array", errors=errors[:_MAX_REPORTED_ERRORS])
    return data


class ExportService:
    """Runs one export as a three-step saga: generate, log, respond.

    *generate* prepares a lazy encoder stream; nothing is rendered yet.
    *log* records the export under a log id.
    *respond* sends headers and pumps encoder chunks into the transport, so
    generation is paced by the consumer.

    A failure (or cancellation on client disconnect) compensates the steps
    already run in reverse order: the log entry is reverted and the encoder
    stream is closed.  The original error then propagates to the caller.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        bulkhead: QueueLimiter | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._bulkhead = bulkhead

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def resolve_config(self, raw: Mapping[str, Any] | None) -> ExportConfig:
        return ExportConfig.from_mapping(raw, self._settings)

    async def export(
        self,
        kind: ExportKind,
        data: Any,  # noqa: ANN401
        config: ExportConfig | None,
        transport: ResponseTransport,
    ) -> None:
        config = config or ExportConfig.defaults(self._settings)
        records = validate_records(data, allow_empty=config.headers is not None)
        artifact = self._artifact(kind, records, config)
        state = _ExportState()

        async def generate() -> None:
            state.stream = artifact.open()

        async def discard_stream() -> None:
            if state.stream is not None:
                await state.stream.aclose()  # type: ignore[attr-defined]
                state.stream = None

        async def log_export() -> None:
            state.log_id = f"export-{kind.value}-{int(time.time() * 1000)}"
            logger.info(
                "export.started",
                log_id=state.log_id,
                format=artifact.extension,
                records=len(records),
            )

        async def revert_log() -> None:
            if state.log_id is not None:
                logger.warning("export.reverted", log_id=state.log_id)

        async def respond() -> None:
            if state.stream is None:
                raise ProcessingError("Export stream was not generated", stage="respond")
            filename = config.filename.with_extension(artifact.extension)
            await transport.start(
                ResponseHead(
                    media_type=artifact.media_type,
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'},
                )
            )
            async for chunk in state.stream:
                await transport.send(chunk)
            await transport.finish()
            logger.info("export.completed", log_id=state.log_id)

        async def unsend() -> None:
            logger.warning("export.respond_compensation", detail="cannot unsend response")

        saga = (
            Saga(f"export-{kind.value}")
            .add_step(generate, discard_stream, name="generate")
            .add_step(log_export, revert_log, name="log")
            .add_step(respond, unsend, name="respond")
        )
        limiter = self._bulkhead if self._bulkhead is not None else contextlib.nullcontext()
        async with limiter:
            await saga.execute()

    # ------------------------------------------------------------------
    # Encoder selection
    # ------------------------------------------------------------------

    def _artifact(self, kind: ExportKind, records: Sequence[Record], config: ExportConfig) -> _Artifact:
        yield_every = self._settings.yield_every_chunks

        if kind is ExportKind.CSV:
            encoder = CsvEncoder(CsvOptions.from_config(config))
            headers = infer_headers(records, config.headers)
            return _Artifact(
                "text/csv",
                "csv",
                lambda: encoder.encode(RowSource(records, config.chunk_size, yield_every), headers),
            )

        table = TableData.build(records, title=config.title, headers=config.headers)

        if kind is ExportKind.HTML:
            report = HtmlReportEncoder.from_config(config, yield_every=yield_every)
            return _Artifact("text/html", "html", lambda: report.encode(table))

        if kind is ExportKind.PDF:
            document = PdfReportEncoder.from_config(config)
            return _Artifact(document.media_type, document.extension, lambda: document.encode(table))

        if config.image_format == "png":
            renderer = PngRenderer.from_config(config)
            return _Artifact(renderer.media_type, renderer.extension, lambda: renderer.encode(table))

        svg = SvgEncoder.from_config(
            config,
            min_height=self._settings.image_min_height,
            yield_every=yield_every,
        )
        return _Artifact("image/svg+xml", "svg", lambda: svg.encode(table))
