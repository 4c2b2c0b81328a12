"""Tests for data models."""

import pytest
from datetime import date
from decimal import Decimal

from src.models.alerts import AlertPartition
from src.models.inventory import (
    Category,
    InventoryRecord,
    InventoryTransfer,
    Product,
    Warehouse,
    WarehouseStock,
    category_name,
)
from src.utils.exceptions import InvalidDateError


class TestProduct:
    """Tests for Product model."""

    def test_from_dict(self, sample_inventory_payload):
        product = Product.from_dict(sample_inventory_payload["product"])

        assert product.public_id == "p-001"
        assert product.sku == "A1"
        assert product.category_id == 1
        assert product.price == Decimal("1.5")
        assert product.expiration_required is True
        assert product.is_hazardous is False

    def test_from_dict_missing_category(self):
        product = Product.from_dict({"publicId": "x", "name": "Thing", "sku": "T"})

        assert product.category_id is None
        assert product.price == Decimal("0")

    def test_negative_price(self):
        """Test that negative price raises ValueError."""
        with pytest.raises(ValueError, match="Price cannot be negative"):
            Product(public_id="x", name="Thing", sku="T", price=Decimal("-1"))

    def test_to_dict_uses_backend_field_names(self, sample_product):
        data = sample_product.to_dict()

        assert data["publicId"] == "p-001"
        assert data["categoryId"] == 1
        assert data["price"] == 1.5
        assert data["expirationRequired"] is True


class TestInventoryRecord:
    """Tests for InventoryRecord model."""

    def test_from_dict(self, sample_inventory_payload):
        record = InventoryRecord.from_dict(sample_inventory_payload)

        assert record.product_public_id == "p-001"
        assert record.quantity == 12
        assert record.storage_location == "Aisle 3, Shelf B"
        assert record.expiration_date == date(2024, 7, 1)
        assert record.product.name == "Apple"

    def test_from_dict_without_expiration(self, sample_inventory_payload):
        sample_inventory_payload["expirationDate"] = None

        record = InventoryRecord.from_dict(sample_inventory_payload)

        assert record.expiration_date is None

    def test_from_dict_invalid_expiration(self, sample_inventory_payload):
        sample_inventory_payload["expirationDate"] = "2024-02-30"

        with pytest.raises(InvalidDateError):
            InventoryRecord.from_dict(sample_inventory_payload)

    def test_negative_quantity(self):
        """Test that negative quantity raises ValueError."""
        with pytest.raises(ValueError, match="Quantity cannot be negative"):
            InventoryRecord(product_public_id="p-1", quantity=-1)

    def test_to_dict(self, sample_inventory_payload):
        record = InventoryRecord.from_dict(sample_inventory_payload)

        data = record.to_dict()

        assert data["expirationDate"] == "2024-07-01"
        assert data["product"]["sku"] == "A1"


class TestWarehouse:
    """Tests for Warehouse model."""

    def test_from_dict_with_embedded_inventory(self, sample_inventory_payload):
        warehouse = Warehouse.from_dict({
            "warehouseId": 4,
            "name": "Main",
            "location": "Kingston",
            "maxCapacity": 200,
            "currentCapacity": 12,
            "inventory": [sample_inventory_payload]
        })

        assert warehouse.warehouse_id == 4
        assert len(warehouse.inventory) == 1
        assert warehouse.inventory[0].quantity == 12

    def test_capacity_properties(self, sample_warehouses):
        main, full, empty = sample_warehouses

        assert main.utilization_percent == 40.0
        assert main.available_capacity == 60
        assert full.available_capacity == 0
        assert empty.utilization_percent == 0.0

    def test_to_dict_sends_editable_fields(self, sample_warehouses):
        assert sample_warehouses[0].to_dict() == {"name": "Main", "location": "Kingston", "maxCapacity": 100}


class TestWarehouseStock:
    """Tests for WarehouseStock model."""

    def test_from_dict(self, sample_inventory_payload):
        stock = WarehouseStock.from_dict({
            "warehouseName": "Main",
            "warehouseLocation": "Kingston",
            "inventory": [sample_inventory_payload]
        })

        assert stock.warehouse_name == "Main"
        assert stock.warehouse_location == "Kingston"
        assert stock.inventory[0].expiration_date == date(2024, 7, 1)

    def test_from_dict_empty(self):
        stock = WarehouseStock.from_dict({"warehouseName": "North", "inventory": None})

        assert stock.inventory == []
        assert stock.find("p-001") is None

    def test_find(self, sample_inventory_payload):
        stock = WarehouseStock.from_dict({"warehouseName": "Main", "inventory": [sample_inventory_payload]})

        assert stock.find("p-001").quantity == 12
        assert stock.find("p-404") is None


class TestInventoryTransfer:
    """Tests for InventoryTransfer model."""

    def test_to_dict(self):
        transfer = InventoryTransfer("p-1", 1, 2, "rebalancing")

        assert transfer.to_dict() == {
            "productPublicId": "p-1",
            "sourceWarehouseId": 1,
            "destinationWarehouseId": 2,
            "transferNotes": "rebalancing"
        }

    def test_same_source_and_destination(self):
        with pytest.raises(ValueError, match="must differ"):
            InventoryTransfer("p-1", 3, 3)

    def test_empty_product(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            InventoryTransfer("", 1, 2)


class TestCategory:

    def test_category_name_lookup(self):
        categories = [Category(id=1, name="Produce"), Category.from_dict({"id": 2, "name": "Hardware"})]

        assert category_name(categories, 2) == "Hardware"
        assert category_name(categories, 9) == "N/A"
        assert category_name(categories, None) == "N/A"


class TestAlertPartition:
    """Tests for AlertPartition model."""

    def test_empty(self):
        partition = AlertPartition(window_days=30)

        assert partition.total == 0
        assert partition.is_empty is True

    def test_summary(self, make_record):
        partition = AlertPartition(window_days=14, expired=[make_record("a", -1)], nearing=[])

        summary = partition.get_summary()

        assert "Already expired: 1" in summary
        assert "next 14 days" in summary
        assert partition.to_dict()["total"] == 1
