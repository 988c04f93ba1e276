"""
Per-product pricing figures.

All functions are pure and operate on one ProductItem.  Missing optional
inputs degrade to 0 (or None where a figure is not applicable); every
division is guarded so no NaN or infinity can be returned.

  Line total:       quantity × unit_price
  Savings vs avg:   (average_price − unit_price) × quantity      (signed)
  Gross discount:   public_price − unit_price                    (public price is VAT incl.)
  Net public price: public_price / (1 + vat/100)                 (None unless both present)
  Net discount:     net_public_price − unit_price
"""
from typing import Optional

from models.product import PriceBreakdown, ProductItem
from models.result import PriceFigures


def line_total(product: ProductItem) -> float:
    return product.quantity * product.unit_price


def savings_vs_average(product: ProductItem) -> float:
    """Savings against the historical average price.  Negative when the current price is worse."""
    if product.average_price is None:
        return 0.0
    return (product.average_price - product.unit_price) * product.quantity


def gross_discount(product: ProductItem) -> float:
    if product.public_price is None:
        return 0.0
    return product.public_price - product.unit_price


def gross_discount_percent(product: ProductItem) -> float:
    if not product.public_price:        # absent or zero
        return 0.0
    return gross_discount(product) / product.public_price * 100


def net_public_price(product: ProductItem) -> Optional[float]:
    """
    Public price with VAT removed, or None when not applicable.

    Requires both public_price and vat.  VAT is a percentage, so the divisor
    is (1 + vat/100); a divisor of zero (vat = -100) is also not applicable.
    """
    if product.public_price is None or product.vat is None:
        return None
    divisor = 1 + product.vat / 100
    if divisor == 0:
        return None
    return product.public_price / divisor


def net_discount(product: ProductItem) -> float:
    net = net_public_price(product)
    if net is None:
        return 0.0
    return net - product.unit_price


def net_discount_percent(product: ProductItem) -> float:
    net = net_public_price(product)
    if not net:                         # not applicable or zero
        return 0.0
    return (net - product.unit_price) / net * 100


def best_tier(product: ProductItem) -> Optional[PriceBreakdown]:
    """Tier 0 of the supplier price table (the cheapest by convention)."""
    if not product.price_breakdowns:
        return None
    return product.price_breakdowns[0]


def price_figures(product: ProductItem) -> PriceFigures:
    return PriceFigures(
        line_total=line_total(product),
        savings_vs_average=savings_vs_average(product),
        gross_discount=gross_discount(product),
        gross_discount_percent=gross_discount_percent(product),
        net_public_price=net_public_price(product),
        net_discount=net_discount(product),
        net_discount_percent=net_discount_percent(product),
    )
