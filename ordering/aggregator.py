"""
Order-level aggregation over a product list.

The order total is supplied by the caller (it may include order-level
adjustments the lines do not carry) and is reported unchanged.  The sum of
line totals is computed alongside it and a mismatch is flagged and logged,
never corrected.
"""
import logging
import math
from typing import Iterable, Optional, Sequence

from models.product import ProductItem
from models.result import OrderSummary
from .price_math import gross_discount_percent, line_total, savings_vs_average

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = 0.01   # absolute tolerance for caller total vs line totals


def unique_supplier_count(products: Iterable[ProductItem]) -> int:
    return len({p.supplier for p in products})


def total_quantity(products: Iterable[ProductItem]) -> int:
    return sum(p.quantity for p in products)


def total_savings_vs_average(products: Iterable[ProductItem]) -> float:
    return math.fsum(savings_vs_average(p) for p in products)


def average_discount_percent(products: Iterable[ProductItem]) -> Optional[float]:
    """
    Mean gross discount percent over products that carry a public price.
    Returns None when no product has one.
    """
    eligible = [gross_discount_percent(p) for p in products if p.public_price is not None]
    if not eligible:
        return None
    return math.fsum(eligible) / len(eligible)


class ProductAggregator:
    """
    Folds a product list into an OrderSummary.

    Usage:
        aggregator = ProductAggregator()
        summary = aggregator.summarize(products, total_amount=123.45)
    """

    def __init__(self, total_tolerance: float = TOTAL_TOLERANCE):
        self.total_tolerance = total_tolerance

    def summarize(self, products: Sequence[ProductItem], total_amount: float) -> OrderSummary:
        line_sum = math.fsum(line_total(p) for p in products)
        mismatch = abs(line_sum - total_amount) > self.total_tolerance
        if mismatch:
            logger.warning(
                "Order total %.2f differs from sum of line totals %.2f",
                total_amount, line_sum,
            )

        return OrderSummary(
            product_count=len(products),
            total_quantity=total_quantity(products),
            unique_supplier_count=unique_supplier_count(products),
            total_amount=total_amount,
            total_savings_vs_average=total_savings_vs_average(products),
            average_discount_percent=average_discount_percent(products),
            line_total_sum=line_sum,
            total_mismatch=mismatch,
        )
