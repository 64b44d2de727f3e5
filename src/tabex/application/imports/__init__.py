"""Application imports – CSV decoding and the import saga."""
from tabex.application.imports.csv_import import CsvDecoder
from tabex.application.imports.import_service import ImportService
from tabex.application.imports.result import ImportResult, throughput

__all__ = ["CsvDecoder", "ImportResult", "ImportService", "throughput"]
