"""Pytest configuration and fixtures."""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

from src.models.inventory import Category, InventoryRecord, Product, Warehouse, WarehouseStock


@pytest.fixture
def today():
    """Fixed reference date for expiration arithmetic."""
    return date(2024, 6, 15)


@pytest.fixture
def sample_product():
    """Create a sample Product for testing."""
    return Product(
        public_id="p-001",
        name="Apple",
        sku="A1",
        category_id=1,
        unit="kg",
        price=Decimal("1.50"),
        expiration_required=True
    )


@pytest.fixture
def sample_products():
    """Create multiple sample Products for testing."""
    return [
        Product(public_id="p-1", name="Widget", sku="W-100", category_id=2, price=Decimal("9.99")),
        Product(public_id="p-2", name="apple juice", sku="AJ-1", category_id=1, price=Decimal("3.25")),
        Product(public_id="p-3", name="Bolt", sku="B-7", category_id=2, price=Decimal("0.10")),
        Product(public_id="p-4", name="Apricot", sku="AP-9", category_id=1, price=Decimal("4.00")),
    ]


@pytest.fixture
def make_record(today):
    """Factory for stock records expiring a number of days from ``today``."""
    def _make(public_id, offset_days=None, name=None, quantity=5):
        expiration = today + timedelta(days=offset_days) if offset_days is not None else None
        product = Product(public_id=public_id, name=name or public_id, sku=f"SKU-{public_id}")
        return InventoryRecord(
            product_public_id=public_id,
            quantity=quantity,
            product=product,
            storage_location="Aisle 1",
            expiration_date=expiration
        )
    return _make


@pytest.fixture
def sample_inventory_payload():
    """A WarehouseInventoryDTO as the backend sends it."""
    return {
        "productPublicId": "p-001",
        "quantity": 12,
        "storageLocation": "Aisle 3, Shelf B",
        "expirationDate": "2024-07-01",
        "product": {
            "publicId": "p-001",
            "name": "Apple",
            "sku": "A1",
            "description": "Red apples",
            "categoryId": 1,
            "unit": "kg",
            "price": 1.5,
            "isHazardous": False,
            "expirationRequired": True
        }
    }


@pytest.fixture
def sample_warehouses():
    return [
        Warehouse(warehouse_id=1, name="Main", location="Kingston", max_capacity=100, current_capacity=40),
        Warehouse(warehouse_id=2, name="North", location="Montego Bay", max_capacity=50, current_capacity=50),
        Warehouse(warehouse_id=3, name="Overflow", location="Spanish Town", max_capacity=0),
    ]


@pytest.fixture
def mock_inventory_client(sample_products, sample_warehouses):
    """Create a mock InventoryClient."""
    client = MagicMock()
    client.get_all_products.return_value = sample_products
    client.get_all_warehouses.return_value = sample_warehouses
    client.get_all_categories.return_value = [Category(id=1, name="Produce"), Category(id=2, name="Hardware")]
    client.get_all_inventory.return_value = []
    client.get_inventory_by_warehouse.return_value = WarehouseStock(warehouse_name="Main", warehouse_location="Kingston")
    client.transfer_inventory.return_value = None
    return client
