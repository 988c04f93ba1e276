"""
Pydantic models for dashboard API requests and table rendering.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

from models.order import OrderData
from models.product import ProductItem


class OrderRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    products: List[ProductItem] = Field(default_factory=list)
    total_amount: Optional[float] = None    # defaults to the sum of line totals
    user_role: str = "Buyer"


class ExportRequest(OrderRequest):
    order_name: str = ""


class PreviewRequest(OrderRequest):
    order: Optional[OrderData] = None


class TableCell(BaseModel):
    content: str
    width: str = "auto"
    align: Literal["left", "center", "right"] = "left"
    caption: Optional[str] = None       # secondary line under the content
    tooltip: Optional[str] = None
    custom_classes: str = ""

    @property
    def css_classes(self) -> str:
        classes = [f"text-{self.align}"] if self.align != "left" else []
        if self.custom_classes:
            classes.append(self.custom_classes)
        return " ".join(classes)


class TableRow(BaseModel):
    cells: List[TableCell]
    clickable: bool = False
    is_highlighted: bool = False
    is_selected: bool = False
    is_last: bool = False
    has_warning: bool = False
    warning_message: str = ""

    @property
    def css_classes(self) -> str:
        classes = ["row"]
        if self.is_last:
            classes.append("row-last")
        if self.is_selected:
            classes.append("row-selected")
        if self.has_warning:
            classes.append("row-warning")
        if not self.is_selected and not self.has_warning:
            classes.append("row-highlighted" if self.is_highlighted else "row-hover")
        if self.clickable:
            classes.append("row-clickable")
        return " ".join(classes)
