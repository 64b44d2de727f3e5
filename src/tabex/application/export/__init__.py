"""Application export – config, format encoders and the export saga."""
from tabex.application.export.config import ExportConfig
from tabex.application.export.csv_export import CRLF, CsvEncoder, CsvOptions
from tabex.application.export.export_service import ExportKind, ExportService, validate_records
from tabex.application.export.html_export import HtmlReportEncoder
from tabex.application.export.pdf_export import PdfReportEncoder
from tabex.application.export.raster_export import PngRenderer
from tabex.application.export.svg_export import SvgEncoder, column_width, compute_height
from tabex.application.export.table import DEFAULT_TITLE, NO_DATA_TEXT, TableData, generated_timestamp

__all__ = [
    "CRLF",
    "CsvEncoder",
    "CsvOptions",
    "DEFAULT_TITLE",
    "ExportConfig",
    "ExportKind",
    "ExportService",
    "HtmlReportEncoder",
    "NO_DATA_TEXT",
    "PdfReportEncoder",
    "PngRenderer",
    "SvgEncoder",
    "TableData",
    "column_width",
    "compute_height",
    "generated_timestamp",
    "validate_records",
]
