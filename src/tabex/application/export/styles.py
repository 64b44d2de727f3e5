"""Application export – report stylesheet."""
from __future__ import annotations

_BASE = """
* { box-sizing: border-box; margin: 0; padding: 0; }
body { font: 13px/1.5 'Inter', 'Segoe UI', Arial, sans-serif; color: #1e293b; background: #fff; }
.container { max-width: 100%; overflow-x: auto; padding: 20px; }
h1 { font-size: 20px; text-align: center; margin: 0 0 30px; color: #1e293b; font-weight: 600; letter-spacing: 0.5px; }
.table-wrapper { overflow-x: auto; margin: 20px 0; }
table { width: 100%; border-collapse: separate; border-spacing: 0; font-size: 13px; table-layout: auto; border-radius: 8px; overflow: hidden; }
th { background: linear-gradient(135deg, #4f46e5 0%, #3730a3 100%); color: #fff; font-weight: 600; padding: 16px 24px; text-align: left; position: sticky; top: 0; font-size: 14px; letter-spacing: 0.3px; }
td { padding: 16px 24px; border-bottom: 1px solid #e2e8f0; word-wrap: break-word; max-width: 200px; font-size: 13px; }
tbody tr { background: #ffffff; }
tbody tr.alt { background: #f8fafc; }
tbody tr:hover { background: #f1f5f9; }
td.empty { text-align: center; color: #64748b; font-style: italic; }
.footer { margin-top: 20px; text-align: center; font-size: 11px; color: #64748b; font-weight: 500; padding: 16px; background: linear-gradient(135deg, #ffffff 0%, #f8fafc 100%); border-radius: 8px; }
@media print {
  body { margin: 0; -webkit-print-color-adjust: exact; }
  table { page-break-inside: auto; }
  tr { page-break-inside: avoid; page-break-after: auto; }
  thead { display: table-header-group; }
  th { background: #4f46e5 !important; color: #fff !important; }
}
@media screen and (max-width: 768px) {
  table { font-size: 12px; }
  th, td { padding: 12px 16px; }
  .container { padding: 10px; }
}
""".strip()


def report_stylesheet(page_size: str = "A4", margin: int = 50) -> str:
    """Return the report CSS with an ``@page`` rule for *page_size*/*margin* (px)."""
    return f"@page {{ size: {page_size}; margin: {margin}px; }}\n{_BASE}"


__all__ = ["report_stylesheet"]
