"""
Order metadata form state for the confirmation step.

Each input event updates exactly one field.  The terminal actions hand the
order off through caller-supplied callbacks:

  submit()      only when the order name is non-blank; on_submit(OrderData) then on_close()
  save_draft()  always; on_save_draft() then on_close()
  dismiss()     on_close()
"""
import logging
from datetime import date
from typing import Callable, Optional

from config import Config
from models.order import OrderData, PRIORITIES

logger = logging.getLogger(__name__)

TEXT_FIELDS   = ("order_name", "expected_delivery_date", "notes")
SELECT_FIELDS = ("payment_method",)
FLAG_FIELDS   = ("save_as_template", "notify_on_delivery")


class OrderForm:
    """
    Holds the OrderData for one confirmation session.

    Usage:
        form = OrderForm(on_submit=send, on_save_draft=keep, on_close=hide)
        form.set_text("order_name", "PO-42")
        form.submit()
    """

    def __init__(
        self,
        on_submit: Callable[[OrderData], None],
        on_save_draft: Callable[[], None],
        on_close: Callable[[], None],
        today: Optional[date] = None,
        config: Optional[Config] = None,
    ):
        self.on_submit = on_submit
        self.on_save_draft = on_save_draft
        self.on_close = on_close

        cfg = config or Config()
        self.data = OrderData(
            expected_delivery_date=(today or date.today()).isoformat(),
            priority=cfg.default_priority,
            payment_method=cfg.default_payment_method,
        )

    # ------------------------------------------------------------------
    # Field updates
    # ------------------------------------------------------------------

    def set_text(self, name: str, value: str) -> None:
        self._set(name, value, TEXT_FIELDS)

    def set_select(self, name: str, value: str) -> None:
        self._set(name, value, SELECT_FIELDS)

    def set_flag(self, name: str, checked: bool) -> None:
        self._set(name, bool(checked), FLAG_FIELDS)

    def set_priority(self, value: str) -> None:
        if value not in PRIORITIES:
            raise ValueError(f"Unknown priority: {value!r}")
        self.data.priority = value

    def _set(self, name: str, value, allowed: tuple[str, ...]) -> None:
        if name not in allowed:
            raise KeyError(name)
        setattr(self.data, name, value)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @property
    def can_submit(self) -> bool:
        return bool(self.data.order_name.strip())

    def submit(self) -> bool:
        """Hand a snapshot of the order to on_submit and close.  No-op while the name is blank."""
        if not self.can_submit:
            logger.info("Submit ignored: order name is blank")
            return False
        self.on_submit(self.data.model_copy(deep=True))
        self.on_close()
        return True

    def save_draft(self) -> None:
        self.on_save_draft()
        self.on_close()

    def dismiss(self) -> None:
        self.on_close()
