from .product import PriceBreakdown, ProductItem
from .order import OrderData, Priority, PAYMENT_METHODS, PRIORITIES
from .result import PriceFigures, OrderSummary, ExportRow

__all__ = [
    "PriceBreakdown", "ProductItem",
    "OrderData", "Priority", "PAYMENT_METHODS", "PRIORITIES",
    "PriceFigures", "OrderSummary", "ExportRow",
]
