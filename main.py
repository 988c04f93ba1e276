#!/usr/bin/env python3
"""
Order Summary — CLI entry point.

Usage examples:
  python main.py summary order.json                       # Print order summary
  python main.py summary order.json --total 1250.00       # Override the order total
  python main.py export order.json --format xlsx --name "PO-42"
  python main.py export order.json --format csv --role Admin --output exports/
  python main.py preview order.json --out preview.html    # HTML confirmation preview

ORDER FILE is JSON: a list of products, or {"products": [...], "total_amount": ...}.
"""
import json
import logging
import math
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from config import Config
from dashboard.services.export import (
    ExportError,
    build_export_rows,
    export_order_summary,
    format_money,
    resolve_order_name,
)
from dashboard.services.render import render_order_summary_html
from ordering.aggregator import ProductAggregator
from ordering.price_math import price_figures
from ordering.product_loader import load_order_file


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quieten noisy third-party loggers
    logging.getLogger("openpyxl").setLevel(logging.WARNING)


def _load(order_file: str, total: float | None):
    if total is not None and not math.isfinite(total):
        raise click.BadParameter(f"must be a finite number, got {total}", param_hint="--total")
    try:
        products, file_total = load_order_file(Path(order_file))
    except (ValidationError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"Invalid order file '{order_file}': {exc}")
    return products, (total if total is not None else file_total)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Order Summary — pricing figures, totals and exports for purchase orders."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


# --------------------------------------------------------------------
# summary command
# --------------------------------------------------------------------

@cli.command()
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--total", "-t", default=None, type=float, help="Order total (default: from file or sum of lines)")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def summary(ctx: click.Context, order_file: str, total: float | None, as_json: bool) -> None:
    """Print the order summary and per-product discounts for ORDER_FILE."""
    config = Config()
    products, total = _load(order_file, total)
    result = ProductAggregator(config.total_tolerance).summarize(products, total)

    if as_json:
        click.echo(json.dumps({
            "summary": result.model_dump(),
            "products": [{"id": p.id, **price_figures(p).model_dump()} for p in products],
        }, indent=2))
        return

    money = lambda v: format_money(v, config.currency_symbol)  # noqa: E731

    click.echo("\n=== Order Summary ===\n")
    click.echo(f"  Products:        {result.product_count}")
    click.echo(f"  Total quantity:  {result.total_quantity} units")
    click.echo(f"  Suppliers:       {result.unique_supplier_count}")
    if result.shows_savings:
        click.echo(f"  Savings vs avg:  {money(result.total_savings_vs_average)}")
    if result.shows_average_discount:
        click.echo(f"  Avg discount:    {result.average_discount_percent:.1f}%")
    click.echo(f"  Total:           {money(result.total_amount)}")
    if result.total_mismatch:
        click.echo(f"  ⚠  Sum of lines is {money(result.line_total_sum)}")
    click.echo()

    for p in products:
        fig = price_figures(p)
        click.echo(f"  {p.name} ({p.code})  {p.quantity} × {money(p.unit_price)} = {money(fig.line_total)}")
        if fig.gross_discount > 0:
            click.echo(f"      gross discount {money(fig.gross_discount)} ({fig.gross_discount_percent:.1f}%)")
        if fig.net_discount > 0:
            click.echo(f"      net discount   {money(fig.net_discount)} ({fig.net_discount_percent:.1f}%)")
        if p.average_price is not None:
            click.echo(f"      vs average     {money(fig.savings_vs_average)}")
    click.echo()


# --------------------------------------------------------------------
# export command
# --------------------------------------------------------------------

@cli.command()
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "-f", "fmt", type=click.Choice(["csv", "xlsx"]), default="xlsx", show_default=True)
@click.option("--name", "-n", default="", help="Order name (default: Untitled Order)")
@click.option("--role", "-r", default="Buyer", show_default=True, help="Viewer role; Admin sees tier suppliers")
@click.option("--total", "-t", default=None, type=float, help="Order total for the summary sheet")
@click.option("--output", "-o", default=None, type=click.Path(), help="Export directory")
@click.pass_context
def export(
    ctx: click.Context,
    order_file: str,
    fmt: str,
    name: str,
    role: str,
    total: float | None,
    output: str | None,
) -> None:
    """Export ORDER_FILE as a CSV or Excel order summary."""
    config = Config()
    if output:
        config.export_dir = Path(output)

    products, total = _load(order_file, total)
    title = resolve_order_name(name, config.default_order_name)
    rows = build_export_rows(products, title)
    result = ProductAggregator(config.total_tolerance).summarize(products, total)

    try:
        path = export_order_summary(
            title, rows, fmt, role,
            export_dir=config.export_dir,
            currency=config.currency_symbol,
            admin_role=config.admin_role,
            summary=result,
        )
    except (ExportError, OSError) as exc:
        click.echo(f"✗ Export failed: {exc}", err=True)
        sys.exit(1)

    click.echo(f"✓ Exported {len(rows)} products to {path}")


# --------------------------------------------------------------------
# preview command
# --------------------------------------------------------------------

@cli.command()
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--role", "-r", default="Buyer", show_default=True, help="Viewer role; Admin sees tier suppliers")
@click.option("--total", "-t", default=None, type=float, help="Order total")
@click.option("--out", "out_file", default=None, type=click.Path(dir_okay=False), help="Write HTML here instead of stdout")
@click.pass_context
def preview(ctx: click.Context, order_file: str, role: str, total: float | None, out_file: str | None) -> None:
    """Render the order confirmation preview for ORDER_FILE as HTML."""
    config = Config()
    products, total = _load(order_file, total)
    result = ProductAggregator(config.total_tolerance).summarize(products, total)
    html = render_order_summary_html(
        products, result, role,
        currency=config.currency_symbol,
        admin_role=config.admin_role,
    )
    if out_file:
        Path(out_file).write_text(html, encoding="utf-8")
        click.echo(f"✓ Preview written to {out_file}")
    else:
        click.echo(html)


if __name__ == "__main__":
    cli()
