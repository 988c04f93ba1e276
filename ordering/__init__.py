from .price_math import (
    line_total, savings_vs_average, gross_discount, gross_discount_percent,
    net_public_price, net_discount, net_discount_percent, best_tier, price_figures,
)
from .aggregator import ProductAggregator
from .order_form import OrderForm
from .product_loader import load_products, load_order_file

__all__ = [
    "line_total", "savings_vs_average", "gross_discount", "gross_discount_percent",
    "net_public_price", "net_discount", "net_discount_percent", "best_tier", "price_figures",
    "ProductAggregator", "OrderForm", "load_products", "load_order_file",
]
