"""Shared test fixtures."""

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from salesreport.api import create_app
from salesreport.config import reload_config
from salesreport.strategies import AnalyzerOptions

CONFIG_ENV_VARS = (
    "TOP_PRODUCTS_LIMIT",
    "FIRST_PLACE_RATE",
    "RUNNER_UP_RATE",
    "LAST_PLACE_RATE",
    "DEFAULT_RATE",
    "LOG_LEVEL",
    "API_HOST",
    "API_PORT",
)


@pytest.fixture
def sample_dataset() -> dict[str, Any]:
    """Three sellers; the last one has no purchase records."""
    return {
        "sellers": [
            {"id": "seller_1", "first_name": "Alexey", "last_name": "Petrov"},
            {"id": "seller_2", "first_name": "Ivan", "last_name": "Ivanov"},
            {"id": "seller_3", "first_name": "Maria", "last_name": "Smirnova"},
        ],
        "products": [
            {"sku": "SKU_001", "name": "Kettle", "purchase_price": 10},
            {"sku": "SKU_002", "name": "Mug", "purchase_price": 5},
            {"sku": "SKU_003", "name": "Spoon", "purchase_price": 2},
        ],
        "customers": [
            {"id": "customer_1", "first_name": "Olga", "last_name": "Orlova"},
        ],
        "purchase_records": [
            {
                "receipt_id": "receipt_1",
                "date": "2023-12-04",
                "seller_id": "seller_1",
                "customer_id": "customer_1",
                "total_amount": 76.0,
                "items": [
                    {"sku": "SKU_001", "quantity": 2, "sale_price": 20, "discount": 0},
                    {"sku": "SKU_002", "quantity": 4, "sale_price": 10, "discount": 10},
                ],
            },
            {
                "receipt_id": "receipt_2",
                "seller_id": "seller_2",
                "customer_id": "customer_1",
                "total_amount": 30.0,
                "items": [
                    {"sku": "SKU_003", "quantity": 10, "sale_price": 3, "discount": 0},
                ],
            },
            {
                "receipt_id": "receipt_3",
                "seller_id": "seller_1",
                "customer_id": "customer_1",
                "total_amount": 20.0,
                "items": [
                    {"sku": "SKU_003", "quantity": 5, "sale_price": 4, "discount": 0},
                ],
            },
        ],
    }


@pytest.fixture
def default_options() -> AnalyzerOptions:
    """Default revenue and bonus calculators."""
    return AnalyzerOptions()


@pytest.fixture
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the config singleton around a test."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_config()
    yield
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_config()


@pytest.fixture
def api_client(clean_config: None) -> Generator[TestClient, None, None]:
    """Create a TestClient for a fresh API app."""
    with TestClient(create_app()) as client:
        yield client
