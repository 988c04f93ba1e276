from pydantic import BaseModel
from typing import Optional, List

from .product import PriceBreakdown


class PriceFigures(BaseModel):
    """
    Derived pricing figures for one product.

    net_public_price is None when it is not applicable (public price or VAT
    missing); the other figures fall back to 0.
    """
    line_total: float
    savings_vs_average: float               # signed; negative = worse than average
    gross_discount: float
    gross_discount_percent: float
    net_public_price: Optional[float] = None
    net_discount: float = 0.0
    net_discount_percent: float = 0.0


class OrderSummary(BaseModel):
    """Order-level statistics over a product list.  Recomputed, never stored."""
    product_count: int = 0
    total_quantity: int = 0
    unique_supplier_count: int = 0
    total_amount: float = 0.0               # as supplied by the caller
    total_savings_vs_average: float = 0.0
    average_discount_percent: Optional[float] = None   # None = no product has a public price

    # --- Reconciliation against the line data ---
    line_total_sum: float = 0.0
    total_mismatch: bool = False

    @property
    def shows_savings(self) -> bool:
        return self.total_savings_vs_average > 0

    @property
    def shows_average_discount(self) -> bool:
        return self.average_discount_percent is not None and self.average_discount_percent > 0


class ExportRow(BaseModel):
    """
    A flat export row for one product.
    Optional inputs stay None when absent; formatting is left to the writer.
    """
    order_name: str
    id: str
    name: str
    code: str
    quantity: int
    unit_price: float
    average_price: Optional[float] = None
    price_breakdowns: Optional[List[PriceBreakdown]] = None
    public_price: Optional[float] = None
    vat: Optional[float] = None

    # --- Computed figures ---
    line_total: float
    savings_vs_average: float
    gross_discount: float
    gross_discount_percent: float
    net_public_price: Optional[float] = None
    net_discount: float = 0.0
    net_discount_percent: float = 0.0
