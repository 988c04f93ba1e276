from datetime import date
from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


Priority = Literal["standard", "urgent", "scheduled"]

PRIORITIES: tuple[str, ...] = ("standard", "urgent", "scheduled")

PAYMENT_METHODS: tuple[str, ...] = (
    "Invoice 30 days",
    "Invoice 60 days",
    "Credit Card",
    "Bank Transfer",
)


class OrderData(BaseModel):
    """
    Order metadata entered on the confirmation form.
    Only order_name is required (non-blank) to submit.  Field types are
    checked on assignment; values are otherwise unconstrained.
    """
    model_config = ConfigDict(validate_assignment=True)

    order_name: str = ""
    expected_delivery_date: str = Field(
        default_factory=lambda: date.today().isoformat()   # YYYY-MM-DD
    )
    notes: str = ""
    priority: Priority = "urgent"
    payment_method: str = "Invoice 30 days"                 # one of PAYMENT_METHODS
    save_as_template: bool = False
    notify_on_delivery: bool = False
