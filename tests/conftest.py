"""
Pytest configuration and shared fixtures for the order summary test suite.
"""
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from models.product import PriceBreakdown, ProductItem

PROJECT_ROOT = Path(__file__).parent.parent
os.chdir(PROJECT_ROOT)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files."""
    tmp_path = tempfile.mkdtemp(prefix="ordersummary_test_")
    yield Path(tmp_path)
    shutil.rmtree(tmp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path, monkeypatch) -> "Config":
    """Provide a test configuration with isolated directories and no settings file."""
    monkeypatch.setenv("CONFIG_DIR", str(temp_dir / "config"))
    monkeypatch.delenv("CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("ADMIN_ROLE", raising=False)
    from config import Config

    config = Config()
    config.output_dir = temp_dir / "output"
    config.export_dir = temp_dir / "output" / "export"
    return config


@pytest.fixture
def discounted_product() -> ProductItem:
    """Product with public price and VAT: gross 5, net public 12.5, net discount 2.5."""
    return ProductItem(
        id="P-1",
        name="Nitrile Gloves (box of 100)",
        code="GLV-100",
        supplier="MedSupply",
        quantity=3,
        unit_price=10.0,
        public_price=15.0,
        vat=20.0,
    )


@pytest.fixture
def sample_products() -> list[ProductItem]:
    """A mixed order: tiers, averages, public prices and bare products."""
    return [
        ProductItem(
            id="P-1",
            name="Nitrile Gloves (box of 100)",
            code="GLV-100",
            supplier="MedSupply",
            quantity=3,
            unit_price=10.0,
            public_price=15.0,
            vat=20.0,
            average_price=11.0,
            price_breakdowns=[
                PriceBreakdown(quantity=2, unit_price=10.0, supplier="MedSupply", stock=40),
                PriceBreakdown(quantity=1, unit_price=12.5, supplier="CareDirect", stock=5),
            ],
        ),
        ProductItem(
            id="P-2",
            name="Surgical Masks",
            code="MSK-50",
            supplier="CareDirect",
            quantity=10,
            unit_price=4.0,
            public_price=5.0,
        ),
        ProductItem(
            id="P-3",
            name="Hand Sanitiser 500ml",
            code="SAN-500",
            supplier="MedSupply",
            quantity=2,
            unit_price=6.0,
            average_price=5.0,
        ),
    ]


@pytest.fixture
def order_file(temp_dir: Path) -> Path:
    """Order JSON file in the UI's camelCase layout."""
    path = temp_dir / "order.json"
    path.write_text(json.dumps({
        "products": [
            {
                "id": "P-1", "name": "Nitrile Gloves", "code": "GLV-100",
                "supplier": "MedSupply", "quantity": 3, "unitPrice": 10,
                "publicPrice": 15, "vat": 20, "averagePrice": 11,
                "priceBreakdowns": [
                    {"quantity": 3, "unitPrice": 10, "supplier": "MedSupply", "stock": 40},
                ],
            },
            {
                "id": "P-2", "name": "Surgical Masks", "code": "MSK-50",
                "supplier": "CareDirect", "quantity": 10, "unitPrice": 4,
            },
        ],
        "totalAmount": 70.0,
    }), encoding="utf-8")
    return path


# Configure pytest markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: API tests")
