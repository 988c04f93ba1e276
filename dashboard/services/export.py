"""
Export service: product list → flat export rows → CSV / XLSX.

build_export_rows() only selects fields and computes figures; it keeps
absent values as None and does no formatting or role filtering.  The
writer (render_export / export_order_summary) owns formatting and the
role-gated supplier columns.
"""
import csv
import io
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from config import DEFAULT_ADMIN_ROLE, DEFAULT_CURRENCY, DEFAULT_EXPORT_DIR, DEFAULT_ORDER_NAME
from models.product import ProductItem
from models.result import ExportRow, OrderSummary
from ordering.price_math import price_figures

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "xlsx"]

MEDIA_TYPES = {
    "csv":  "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


class ExportError(ValueError):
    """Raised when an export cannot be produced (e.g. unsupported format)."""


# ---------------------------------------------------------------------------
# Row adapter
# ---------------------------------------------------------------------------

def resolve_order_name(name: Optional[str], default: str = DEFAULT_ORDER_NAME) -> str:
    name = (name or "").strip()
    return name or default


def build_export_rows(products: Sequence[ProductItem], order_name: Optional[str] = None) -> list[ExportRow]:
    """
    One ExportRow per product, in input order.

    Optional inputs (average price, tiers, public price, VAT) are carried
    through as-is, None when absent.
    """
    title = resolve_order_name(order_name)
    rows = []
    for product in products:
        figures = price_figures(product)
        rows.append(ExportRow(
            order_name=title,
            id=product.id,
            name=product.name,
            code=product.code,
            quantity=product.quantity,
            unit_price=product.unit_price,
            average_price=product.average_price,
            price_breakdowns=product.price_breakdowns,
            public_price=product.public_price,
            vat=product.vat,
            **figures.model_dump(),
        ))
    return rows


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------

# (header, kind, getter); kind drives formatting: text | int | money | percent | tiers
Column = tuple[str, str, Callable[[ExportRow], Any]]


def _if_public(value_of: Callable[[ExportRow], Any]) -> Callable[[ExportRow], Any]:
    return lambda r: value_of(r) if r.public_price is not None else None


def _if_net(value_of: Callable[[ExportRow], Any]) -> Callable[[ExportRow], Any]:
    return lambda r: value_of(r) if r.net_public_price is not None else None


BASE_COLUMNS: list[Column] = [
    ("Order",                    "text",    lambda r: r.order_name),
    ("Product ID",               "text",    lambda r: r.id),
    ("Product",                  "text",    lambda r: r.name),
    ("Code",                     "text",    lambda r: r.code),
    ("Quantity",                 "int",     lambda r: r.quantity),
    ("Unit Price",               "money",   lambda r: r.unit_price),
    ("Line Total",               "money",   lambda r: r.line_total),
    ("Average Price",            "money",   lambda r: r.average_price),
    ("Savings vs Average",       "money",   lambda r: r.savings_vs_average if r.average_price is not None else None),
    ("Public Price (VAT incl.)", "money",   lambda r: r.public_price),
    ("VAT %",                    "percent", lambda r: r.vat),
    ("Public Price (VAT excl.)", "money",   lambda r: r.net_public_price),
    ("Gross Discount",           "money",   _if_public(lambda r: r.gross_discount)),
    ("Gross Discount %",         "percent", _if_public(lambda r: r.gross_discount_percent)),
    ("Net Discount",             "money",   _if_net(lambda r: r.net_discount)),
    ("Net Discount %",           "percent", _if_net(lambda r: r.net_discount_percent)),
    ("Price Tiers",              "tiers",   lambda r: r.price_breakdowns),
]

# Supplier-identifying columns, admin role only
ADMIN_COLUMNS: list[Column] = [
    ("Tier Suppliers",           "text",    lambda r: "; ".join(t.supplier for t in r.price_breakdowns or []) or None),
]


def export_columns(role: str, admin_role: str = DEFAULT_ADMIN_ROLE) -> list[Column]:
    """Columns visible to *role*.  Role match is exact and case-sensitive."""
    if role == admin_role:
        return BASE_COLUMNS + ADMIN_COLUMNS
    return list(BASE_COLUMNS)


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------

def format_money(value: float, currency: str = DEFAULT_CURRENCY) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{currency}{abs(value):,.2f}"


def _tiers_text(tiers, currency: str) -> Optional[str]:
    if not tiers:
        return None
    return "; ".join(
        f"{t.quantity} @ {format_money(t.unit_price, currency)} (stock {t.stock})" for t in tiers
    )


def _format_text(kind: str, value: Any, currency: str) -> str:
    if value is None:
        return ""
    if kind == "money":
        return format_money(value, currency)
    if kind == "percent":
        return f"{value:.2f}"
    if kind == "tiers":
        return _tiers_text(value, currency) or ""
    return str(value)


def _render_csv(rows: Sequence[ExportRow], columns: list[Column], currency: str) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow([header for header, _, _ in columns])
    for row in rows:
        writer.writerow([_format_text(kind, get(row), currency) for _, kind, get in columns])
    # BOM so spreadsheet apps detect UTF-8 (currency symbols)
    return buf.getvalue().encode("utf-8-sig")


def _render_xlsx(
    title: str,
    rows: Sequence[ExportRow],
    columns: list[Column],
    currency: str,
    summary: Optional[OrderSummary],
) -> bytes:
    money_fmt = f'"{currency}"#,##0.00'
    number_formats = {"money": money_fmt, "percent": "0.00", "int": "0"}

    wb = Workbook()
    ws = wb.active
    ws.title = "Products"
    ws.append([title])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append([header for header, _, _ in columns])
    for cell in ws[2]:
        cell.font = Font(bold=True)

    for row in rows:
        values = []
        for _, kind, get in columns:
            value = get(row)
            values.append(_tiers_text(value, currency) if kind == "tiers" else value)
        ws.append(values)
        for cell, (_, kind, _) in zip(ws[ws.max_row], columns):
            fmt = number_formats.get(kind)
            if fmt and cell.value is not None:
                cell.number_format = fmt

    if summary is not None:
        ss = wb.create_sheet("Summary")
        ss.append(["Products", summary.product_count])
        ss.append(["Total Quantity", summary.total_quantity])
        ss.append(["Suppliers", summary.unique_supplier_count])
        ss.append(["Savings vs Average", summary.total_savings_vs_average])
        ss["B4"].number_format = money_fmt
        ss.append(["Average Discount %", summary.average_discount_percent])
        ss["B5"].number_format = "0.00"
        ss.append(["Total", summary.total_amount])
        ss["B6"].number_format = money_fmt
        ss["A6"].font = Font(bold=True)

    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


def render_export(
    title: str,
    rows: Sequence[ExportRow],
    fmt: str,
    role: str,
    currency: str = DEFAULT_CURRENCY,
    admin_role: str = DEFAULT_ADMIN_ROLE,
    summary: Optional[OrderSummary] = None,
) -> bytes:
    """Render *rows* in *fmt* ("csv" or "xlsx") and return the file bytes."""
    columns = export_columns(role, admin_role)
    if fmt == "csv":
        return _render_csv(rows, columns, currency)
    if fmt == "xlsx":
        return _render_xlsx(title, rows, columns, currency, summary)
    raise ExportError(f"Unsupported export format: {fmt!r}")


def export_filename(title: str, fmt: str, now: Optional[datetime] = None) -> str:
    """Filesystem-safe file name built from the order title and a UTC timestamp."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", title).strip("_.-") or "order"
    return f"{safe}_{stamp}.{fmt}"


def export_order_summary(
    title: str,
    rows: Sequence[ExportRow],
    fmt: str,
    role: str,
    export_dir: Path = DEFAULT_EXPORT_DIR,
    currency: str = DEFAULT_CURRENCY,
    admin_role: str = DEFAULT_ADMIN_ROLE,
    summary: Optional[OrderSummary] = None,
) -> Path:
    """
    Write the export file into *export_dir* and return its path.

    Raises ExportError for an unsupported format; I/O errors propagate.
    """
    content = render_export(title, rows, fmt, role, currency, admin_role, summary)
    export_dir.mkdir(parents=True, exist_ok=True)
    path = export_dir / export_filename(title, fmt)
    path.write_bytes(content)
    logger.info("Exported %d rows to %s", len(rows), path)
    return path
