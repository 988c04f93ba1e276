"""
Dashboard business logic services.
"""
from .export import (
    build_export_rows,
    render_export,
    export_order_summary,
    resolve_order_name,
    ExportError,
)
from .render import render_order_summary_html, build_table_row

__all__ = [
    "build_export_rows",
    "render_export",
    "export_order_summary",
    "resolve_order_name",
    "ExportError",
    "render_order_summary_html",
    "build_table_row",
]
