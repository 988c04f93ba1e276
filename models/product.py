from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, List


def _field(name: str, camel: str, **kwargs):
    """Field that accepts both the snake_case and the UI's camelCase key."""
    return Field(validation_alias=AliasChoices(name, camel), **kwargs)


class PriceBreakdown(BaseModel):
    """
    One tier of a supplier's quantity-based pricing for a product.
    Tiers are ordered by ascending unit price; tier 0 is the best price.
    """
    model_config = ConfigDict(allow_inf_nan=False, populate_by_name=True)

    quantity: int = Field(gt=0)
    unit_price: float = _field("unit_price", "unitPrice", ge=0)
    supplier: str
    stock: int = Field(ge=0)


class ProductItem(BaseModel):
    """
    A single product line on an order.

    unit_price is the price actually charged for this line.  The optional
    pricing fields are independent of each other: none implies another.
    """
    model_config = ConfigDict(allow_inf_nan=False, populate_by_name=True)

    id: str
    name: str
    code: str
    supplier: str
    quantity: int = Field(gt=0)                  # ordered amount
    unit_price: float = _field("unit_price", "unitPrice", ge=0)
    price_breakdowns: Optional[List[PriceBreakdown]] = _field(
        "price_breakdowns", "priceBreakdowns", default=None
    )
    average_price: Optional[float] = _field("average_price", "averagePrice", default=None)
    public_price: Optional[float] = _field("public_price", "publicPrice", default=None)  # VAT incl.
    vat: Optional[float] = None                  # percentage, e.g. 20 = 20%
