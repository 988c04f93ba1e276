"""
Order Summary Dashboard — FastAPI backend.

Computes order confirmation figures for a posted product list and serves
the export download and an HTML preview.  Nothing is persisted; every
request carries its own products.

Endpoints
---------
  GET  /api/health                      → liveness probe
  POST /api/orders/summary              → order summary + per-product figures
  POST /api/orders/export?format=       → CSV / XLSX download
  POST /api/orders/preview              → HTML order confirmation preview
"""
import logging
import math
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response

from config import Config
from dashboard.models import ExportRequest, OrderRequest, PreviewRequest
from dashboard.services.export import (
    MEDIA_TYPES,
    ExportError,
    build_export_rows,
    export_filename,
    render_export,
    resolve_order_name,
)
from dashboard.services.render import render_order_summary_html
from models.result import OrderSummary
from ordering.aggregator import ProductAggregator
from ordering.price_math import line_total, price_figures

logger = logging.getLogger(__name__)

config = Config()

app = FastAPI(title="Order Summary Dashboard", docs_url=None, redoc_url=None)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Rejected inputs are not echoed back: NaN and infinity have no JSON form
    errors = [
        {k: v for k, v in err.items() if k not in ("input", "ctx")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


def _summarize(body: OrderRequest) -> OrderSummary:
    total = body.total_amount
    if total is None:
        total = math.fsum(line_total(p) for p in body.products)
    return ProductAggregator(config.total_tolerance).summarize(body.products, total)


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/orders/summary")
def order_summary(body: OrderRequest):
    summary = _summarize(body)
    return {
        "summary": summary.model_dump(),
        "products": [
            {"id": p.id, **price_figures(p).model_dump()} for p in body.products
        ],
    }


@app.post("/api/orders/export")
def export_order(
    body: ExportRequest,
    format: Literal["csv", "xlsx"] = Query("xlsx"),
):
    title = resolve_order_name(body.order_name, config.default_order_name)
    rows = build_export_rows(body.products, title)
    try:
        content = render_export(
            title, rows, format, body.user_role,
            currency=config.currency_symbol,
            admin_role=config.admin_role,
            summary=_summarize(body),
        )
    except ExportError as exc:
        raise HTTPException(400, str(exc))

    filename = export_filename(title, format)
    logger.info("Export %s: %d rows (%s)", filename, len(rows), body.user_role)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/api/orders/preview", response_class=HTMLResponse)
def preview_order(body: PreviewRequest):
    html = render_order_summary_html(
        body.products,
        _summarize(body),
        body.user_role,
        order=body.order,
        currency=config.currency_symbol,
        admin_role=config.admin_role,
    )
    return HTMLResponse(html)
