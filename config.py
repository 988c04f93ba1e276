"""
Central configuration for the order summary tooling.

Display, role and export settings are defined here.
Override via environment variables or by passing a Config instance directly.

Settings priority (highest wins):
  1. Environment variables
  2. config/order_settings.json  (admin-editable, persisted)
  3. Hardcoded defaults in this file
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from models.order import PRIORITIES

logger = logging.getLogger(__name__)

# Project root (directory containing this file)
PROJECT_ROOT = Path(__file__).parent

# Default data locations (relative to project root)
DEFAULT_OUTPUT_DIR     = PROJECT_ROOT / "output"
DEFAULT_EXPORT_DIR     = DEFAULT_OUTPUT_DIR / "export"

DEFAULT_ORDER_NAME     = "Untitled Order"
DEFAULT_ADMIN_ROLE     = "Admin"
DEFAULT_CURRENCY       = "€"


@dataclass
class Config:
    # --- Display ---
    currency_symbol: str = field(
        default_factory=lambda: os.getenv("CURRENCY_SYMBOL", DEFAULT_CURRENCY)
    )

    # --- Roles ---
    # Only this exact role string (case-sensitive) sees supplier-identifying columns.
    admin_role: str = field(
        default_factory=lambda: os.getenv("ADMIN_ROLE", DEFAULT_ADMIN_ROLE)
    )

    # --- Order form defaults ---
    default_order_name:     str = DEFAULT_ORDER_NAME   # export title when the name is blank
    default_priority:       str = "urgent"
    default_payment_method: str = "Invoice 30 days"

    # --- Summary reconciliation ---
    total_tolerance: float = 0.01   # caller total vs sum of line totals

    # --- Output settings ---
    output_dir:   Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)
    export_dir:   Path = field(
        default_factory=lambda: Path(os.getenv("EXPORT_DIR", str(DEFAULT_EXPORT_DIR)))
    )

    def __post_init__(self) -> None:
        """Overlay runtime-tunable settings from order_settings.json if present."""
        config_dir = Path(os.getenv("CONFIG_DIR", str(PROJECT_ROOT / "config")))
        settings_file = config_dir / "order_settings.json"
        if not settings_file.exists():
            return
        _type_map: dict[str, type] = {
            "currency_symbol":         str,
            "admin_role":              str,
            "default_order_name":      str,
            "default_priority":        str,
            "default_payment_method":  str,
            "total_tolerance":         float,
        }
        try:
            with open(settings_file, encoding="utf-8") as f:
                overrides = {k: v for k, v in json.load(f).items() if not k.startswith("_")}
            for key, val in overrides.items():
                if key in _type_map and hasattr(self, key):
                    setattr(self, key, _type_map[key](val))
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Failed to load order_settings.json: %s", exc)
        if self.default_priority not in PRIORITIES:
            logger.warning("Ignoring unknown default_priority %r", self.default_priority)
            self.default_priority = "urgent"

    def ensure_output_dir(self) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.export_dir.mkdir(parents=True, exist_ok=True)
