"""
HTML preview of the order confirmation: summary panel, product table with
per-product details and price tiers, and the order details.

Display rules:
  - savings are shown only when positive
  - the average discount is shown only when applicable and positive
  - gross / net discount lines are shown only when positive
  - the tier supplier column is shown to the admin role only
"""
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import BaseLoader, Environment, FileSystemLoader

from config import DEFAULT_ADMIN_ROLE, DEFAULT_CURRENCY
from dashboard.models import TableCell, TableRow
from dashboard.services.export import format_money
from models.order import OrderData
from models.product import ProductItem
from models.result import OrderSummary
from ordering.price_math import best_tier, price_figures

DEFAULT_ORDER_SUMMARY_TEMPLATE = """\
{%- macro table_row(row) -%}
<tr class="{{ row.css_classes }}"{% if row.has_warning and row.warning_message %} title="{{ row.warning_message }}"{% endif %}>
{%- for cell in row.cells %}
  <td class="{{ cell.css_classes }}" style="width: {{ cell.width }}"{% if cell.tooltip %} title="{{ cell.tooltip }}"{% endif %}>
    {{ cell.content }}{% if cell.caption %}<br><small>{{ cell.caption }}</small>{% endif %}
  </td>
{%- endfor %}
</tr>
{%- endmacro -%}
<section class="order-summary">
  <h2>Order Summary</h2>
  {% if order %}
  <dl class="order-details">
    <dt>Order Name</dt><dd>{{ order.order_name }}</dd>
    <dt>Expected Delivery</dt><dd>{{ order.expected_delivery_date }}</dd>
    <dt>Priority</dt><dd>{{ order.priority | capitalize }}</dd>
    <dt>Payment Method</dt><dd>{{ order.payment_method }}</dd>
    {% if order.notes %}<dt>Notes</dt><dd>{{ order.notes }}</dd>{% endif %}
  </dl>
  {% endif %}

  <dl class="totals">
    <dt>Products</dt><dd>{{ summary.product_count }}</dd>
    <dt>Total Quantity</dt><dd>{{ summary.total_quantity }} units</dd>
    <dt>Suppliers</dt><dd>{{ summary.unique_supplier_count }}</dd>
    {% if summary.shows_savings %}<dt>Savings vs Avg</dt><dd class="positive">{{ money(summary.total_savings_vs_average) }}</dd>{% endif %}
    {% if summary.shows_average_discount %}<dt>Avg Discount</dt><dd class="positive">{{ "%.1f" | format(summary.average_discount_percent) }}%</dd>{% endif %}
    <dt>Total</dt><dd class="total">{{ money(summary.total_amount) }}</dd>
  </dl>

  <table class="products">
    <thead><tr><th>Product</th><th>Qty</th><th>Price</th><th>Total</th></tr></thead>
    <tbody>
    {% for entry in entries %}
      {{ table_row(entry.row) }}
      <tr class="details"><td colspan="4">
        {% if entry.details %}
        <ul>{% for label, value in entry.details %}<li>{{ label }}: {{ value }}</li>{% endfor %}</ul>
        {% endif %}
        {% if entry.tiers %}
        <table class="tiers">
          <thead><tr><th>Qty</th><th>Unit Price</th><th>Available</th>{% if is_admin %}<th>Supplier</th>{% endif %}</tr></thead>
          <tbody>
          {% for tier in entry.tiers %}
            <tr{% if tier is sameas entry.best %} class="best-price"{% endif %}><td>{{ tier.quantity }}</td><td>{{ money(tier.unit_price) }}</td><td>{{ tier.stock }}</td>{% if is_admin %}<td>{{ tier.supplier }}</td>{% endif %}</tr>
          {% endfor %}
          </tbody>
        </table>
        {% endif %}
      </td></tr>
    {% endfor %}
      <tr class="grand-total"><td colspan="3">Total</td><td class="text-right">{{ money(summary.total_amount) }}</td></tr>
    </tbody>
  </table>
</section>
"""


def build_table_row(
    cells: Sequence[TableCell],
    clickable: bool = False,
    is_highlighted: bool = False,
    is_selected: bool = False,
    is_last: bool = False,
    has_warning: bool = False,
    warning_message: str = "",
) -> TableRow:
    return TableRow(
        cells=list(cells),
        clickable=clickable,
        is_highlighted=is_highlighted,
        is_selected=is_selected,
        is_last=is_last,
        has_warning=has_warning,
        warning_message=warning_message,
    )


def _product_entry(product: ProductItem, is_last: bool, currency: str) -> dict:
    def money(value: float) -> str:
        return format_money(value, currency)

    fig = price_figures(product)

    name_caption = product.code
    if product.public_price is not None:
        name_caption += f" · {fig.gross_discount_percent:.1f}% discount"
        if product.vat is not None:
            name_caption += f" · VAT {product.vat:g}%"

    price_caption = None
    if product.average_price is not None and product.average_price != product.unit_price:
        price_caption = f"Avg: {money(product.average_price)}"

    row = build_table_row(
        [
            TableCell(content=product.name, caption=name_caption, width="40%"),
            TableCell(content=str(product.quantity), align="center", width="10%"),
            TableCell(content=money(product.unit_price), caption=price_caption, align="right", width="20%"),
            TableCell(
                content=money(fig.line_total),
                caption=f"Save: {money(fig.savings_vs_average)}" if fig.savings_vs_average > 0 else None,
                align="right",
                width="30%",
            ),
        ],
        clickable=True,
        is_last=is_last,
        has_warning=fig.savings_vs_average < 0,
        warning_message="Price is above the average purchase price" if fig.savings_vs_average < 0 else "",
    )

    details = []
    if product.public_price is not None:
        details.append(("Public Price (VAT incl.)", money(product.public_price)))
        if fig.net_public_price is not None:
            details.append(("Public Price (VAT excl.)", money(fig.net_public_price)))
    if fig.gross_discount > 0:
        details.append(("Gross Discount", f"{money(fig.gross_discount)} ({fig.gross_discount_percent:.1f}%)"))
        if fig.net_discount > 0:
            details.append(("Net Discount", f"{money(fig.net_discount)} ({fig.net_discount_percent:.1f}%)"))
    if product.average_price is not None:
        details.append(("Savings vs Average", money(fig.savings_vs_average)))
        details.append(("Average Purchase Price", money(product.average_price)))

    return {
        "row": row,
        "details": details,
        "tiers": product.price_breakdowns or [],
        "best": best_tier(product),
    }


def render_order_summary_html(
    products: Sequence[ProductItem],
    summary: OrderSummary,
    role: str,
    order: Optional[OrderData] = None,
    currency: str = DEFAULT_CURRENCY,
    admin_role: str = DEFAULT_ADMIN_ROLE,
    template_file: Optional[Path] = None,
) -> str:
    """
    Render the order confirmation preview as HTML.

    Args:
        template_file: Optional path to a custom Jinja2 template file
    """
    if template_file and template_file.exists():
        env = Environment(
            loader=FileSystemLoader(str(template_file.parent)),
            autoescape=True,
            keep_trailing_newline=True,
        )
        tmpl = env.get_template(template_file.name)
    else:
        env = Environment(loader=BaseLoader(), autoescape=True, keep_trailing_newline=True)
        tmpl = env.from_string(DEFAULT_ORDER_SUMMARY_TEMPLATE)

    entries = [
        _product_entry(p, is_last=(i == len(products) - 1), currency=currency)
        for i, p in enumerate(products)
    ]
    return tmpl.render(
        summary=summary,
        entries=entries,
        order=order,
        is_admin=(role == admin_role),
        money=lambda value: format_money(value, currency),
    )
