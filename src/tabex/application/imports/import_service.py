"""Application imports – ImportService (saga orchestration of one import)."""
from __future__ import annotations

import contextlib
import json
import time

from tabex.application.files import FileValidator, UploadedFile
from tabex.application.imports.csv_import import CsvDecoder
from tabex.application.imports.result import ImportResult
from tabex.application.saga import Saga
from tabex.application.streaming import ResponseHead, ResponseTransport
from tabex.config.settings import AppSettings
from tabex.observability.logging import get_logger
from tabex.resilience.bulkhead import QueueLimiter

__all__ = ["ImportService"]

logger = get_logger(__name__)


class ImportService:
    """Parses a CSV upload and writes the JSON result through a transport.

    Steps: *parse* (compensation clears accumulated records and errors),
    *log*, *respond*.  The upload is validated before the saga starts.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        validator: FileValidator | None = None,
        decoder: CsvDecoder | None = None,
        bulkhead: QueueLimiter | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._validator = validator or FileValidator(self._settings.max_file_size_bytes)
        self._decoder = decoder or CsvDecoder(
            max_row_bytes=self._settings.max_row_bytes,
            chunk_size=self._settings.chunk_size,
        )
        self._bulkhead = bulkhead

    async def import_csv(self, file: UploadedFile | None, transport: ResponseTransport) -> ImportResult:
        upload = self._validator.validate(file)
        result = ImportResult()
        log_id: str | None = None

        async def parse() -> None:
            nonlocal result
            result = await self._decoder.decode(upload.data)

        async def clear() -> None:
            result.clear()

        async def log_import() -> None:
            nonlocal log_id
            log_id = f"import-csv-{int(time.time() * 1000)}"
            logger.info(
                "import.started",
                log_id=log_id,
                filename=upload.filename,
                rows=result.row_count,
                row_errors=len(result.errors),
            )

        async def revert_log() -> None:
            if log_id is not None:
                logger.warning("import.reverted", log_id=log_id)

        async def respond() -> None:
            body = json.dumps(result.to_response(upload.filename or None), ensure_ascii=False, default=str)
            await transport.start(ResponseHead(media_type="application/json"))
            await transport.send(body.encode("utf-8"))
            await transport.finish()

        async def unsend() -> None:
            logger.warning("import.respond_compensation", detail="cannot unsend response")

        saga = (
            Saga("import-csv")
            .add_step(parse, clear, name="parse")
            .add_step(log_import, revert_log, name="log")
            .add_step(respond, unsend, name="respond")
        )
        limiter = self._bulkhead if self._bulkhead is not None else contextlib.nullcontext()
        async with limiter:
            await saga.execute()
        return result
