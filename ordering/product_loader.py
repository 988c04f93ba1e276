"""
Load product lists from JSON files.

Accepted layouts:
  [ {product}, ... ]
  { "products": [ {product}, ... ], "total_amount": 123.45 }

Product keys may use snake_case or the UI's camelCase names.
"""
import json
import logging
import math
from pathlib import Path
from typing import Optional

from pydantic import FiniteFloat, TypeAdapter

from models.product import ProductItem
from .price_math import line_total

logger = logging.getLogger(__name__)

_PRODUCT_LIST = TypeAdapter(list[ProductItem])
_TOTAL = TypeAdapter(Optional[FiniteFloat])


def _read(path: Path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _split(raw) -> tuple[list, Optional[float]]:
    if isinstance(raw, dict):
        total = raw.get("total_amount", raw.get("totalAmount"))
        return raw.get("products") or [], _TOTAL.validate_python(total)
    return raw, None


def load_products(path: Path) -> list[ProductItem]:
    """Return validated products from *path*.  Raises ValidationError on bad input."""
    products, _ = load_order_file(path)
    return products


def load_order_file(path: Path) -> tuple[list[ProductItem], float]:
    """
    Return (products, total_amount).

    When the file carries no total, the sum of line totals is used.
    """
    items, total = _split(_read(path))
    products = _PRODUCT_LIST.validate_python(items)
    if total is None:
        total = math.fsum(line_total(p) for p in products)
    logger.debug("Loaded %d products from %s", len(products), path)
    return products, total
