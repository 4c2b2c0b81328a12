"""Tests for the inventory backend client."""

import json
import pytest
import httpx
from types import SimpleNamespace

from src.api.inventory_client import InventoryClient
from src.models.inventory import InventoryTransfer
from src.utils.config import APIConfig
from src.utils.exceptions import InventoryAPIError, InvalidDateError, ResourceNotFoundError

BASE_URL = "https://inventory.test"


class Recorder:
    """Mock transport handler that records requests and replays canned responses."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, text="not found")
        status, body = self.routes[key]
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def make_client(routes):
    recorder = Recorder(routes)
    client = InventoryClient(base_url=BASE_URL, transport=httpx.MockTransport(recorder))
    return client, recorder


class TestReads:
    """Tests for read endpoints."""

    def test_get_all_products(self, sample_inventory_payload):
        client, recorder = make_client({
            ("GET", "/api/warehouse/products"): (200, [sample_inventory_payload["product"]])
        })

        with client:
            products = client.get_all_products()

        assert [p.sku for p in products] == ["A1"]
        assert recorder.requests[0].headers["Content-Type"] == "application/json"

    def test_get_all_inventory_uses_flat_endpoint(self, sample_inventory_payload):
        client, recorder = make_client({
            ("GET", "/warehouses/inventory"): (200, [sample_inventory_payload])
        })

        with client:
            records = client.get_all_inventory()

        assert records[0].quantity == 12
        assert recorder.requests[0].url.path == "/warehouses/inventory"

    def test_get_inventory_by_warehouse(self, sample_inventory_payload):
        client, _ = make_client({
            ("GET", "/warehouses/inventory/7"): (200, {
                "warehouseName": "Main",
                "warehouseLocation": "Kingston",
                "inventory": [sample_inventory_payload]
            })
        })

        with client:
            stock = client.get_inventory_by_warehouse(7)

        assert stock.warehouse_name == "Main"
        assert stock.warehouse_location == "Kingston"
        assert stock.inventory[0].product.name == "Apple"
        assert stock.find("p-001").quantity == 12

    def test_get_all_warehouses(self):
        client, _ = make_client({
            ("GET", "/warehouses"): (200, [
                {"warehouseId": 1, "name": "Main", "maxCapacity": 10, "currentCapacity": 5, "inventory": []}
            ])
        })

        with client:
            warehouses = client.get_all_warehouses()

        assert warehouses[0].utilization_percent == 50.0

    def test_get_all_categories(self):
        client, _ = make_client({
            ("GET", "/api/categories"): (200, [{"id": 1, "name": "Produce", "description": None}])
        })

        with client:
            assert client.get_all_categories()[0].name == "Produce"

    def test_expiration_alert_endpoints(self, sample_inventory_payload):
        client, recorder = make_client({
            ("GET", "/warehouses/inventory/alerts/expiring/30"): (200, [sample_inventory_payload]),
            ("GET", "/warehouses/inventory/alerts/expired"): (200, []),
        })

        with client:
            nearing = client.get_nearing_expiration_alerts(30)
            expired = client.get_expired_inventory()

        assert len(nearing) == 1
        assert expired == []

    def test_invalid_date_in_payload(self, sample_inventory_payload):
        sample_inventory_payload["expirationDate"] = "soon"
        client, _ = make_client({
            ("GET", "/warehouses/inventory"): (200, [sample_inventory_payload])
        })

        with client, pytest.raises(InvalidDateError):
            client.get_all_inventory()


class TestWrites:
    """Tests for mutating endpoints."""

    def test_add_product_to_warehouse(self, sample_inventory_payload):
        client, recorder = make_client({
            ("POST", "/warehouses/inventory/3"): (201, sample_inventory_payload)
        })
        dto = {"productPublicId": "p-001", "quantity": 12, "expirationDate": "2024-07-01"}

        with client:
            record = client.add_product_to_warehouse(3, dto)

        assert record.product_public_id == "p-001"
        assert json.loads(recorder.requests[0].content) == dto

    def test_update_inventory(self, sample_inventory_payload):
        client, recorder = make_client({
            ("PUT", "/warehouses/inventory/3/p-001"): (200, sample_inventory_payload)
        })

        with client:
            client.update_inventory(3, "p-001", {"quantity": 12})

        assert recorder.requests[0].method == "PUT"

    def test_delete_inventory_no_content(self):
        client, recorder = make_client({
            ("DELETE", "/warehouses/inventory/3/p-001"): (204, None)
        })

        with client:
            assert client.delete_inventory(3, "p-001") is None

        assert len(recorder.requests) == 1

    def test_transfer_inventory(self):
        client, recorder = make_client({
            ("POST", "/warehouses/inventory/transfer"): (200, None)
        })

        with client:
            client.transfer_inventory(InventoryTransfer("p-001", 1, 2))

        assert json.loads(recorder.requests[0].content) == {
            "productPublicId": "p-001",
            "sourceWarehouseId": 1,
            "destinationWarehouseId": 2,
            "transferNotes": None
        }

    def test_warehouse_crud(self):
        warehouse = {"warehouseId": 9, "name": "New", "location": "Here", "maxCapacity": 20}
        client, recorder = make_client({
            ("POST", "/warehouses"): (201, warehouse),
            ("PUT", "/warehouses/9"): (200, warehouse),
            ("PATCH", "/warehouses/9"): (200, warehouse),
            ("DELETE", "/warehouses/9"): (204, None),
        })

        with client:
            assert client.create_warehouse({"name": "New"}).warehouse_id == 9
            client.update_warehouse(9, {"name": "New"})
            client.patch_warehouse(9, {"maxCapacity": 20})
            client.delete_warehouse(9)

        assert [r.method for r in recorder.requests] == ["POST", "PUT", "PATCH", "DELETE"]

    def test_product_crud(self, sample_inventory_payload):
        product = sample_inventory_payload["product"]
        client, _ = make_client({
            ("POST", "/api/warehouse/products"): (201, product),
            ("PUT", "/api/warehouse/products/p-001"): (200, None),
            ("DELETE", "/api/warehouse/products/p-001"): (204, None),
        })

        with client:
            assert client.create_product(product).sku == "A1"
            assert client.update_product("p-001", product) is None
            client.delete_product("p-001")


class TestErrors:
    """Tests for error mapping."""

    def test_not_found(self):
        client, _ = make_client({})

        with client, pytest.raises(ResourceNotFoundError):
            client.get_inventory_by_warehouse(404)

    def test_server_error(self):
        client, _ = make_client({
            ("GET", "/api/categories"): (500, {"error": "boom"})
        })

        with client, pytest.raises(InventoryAPIError) as exc_info:
            client.get_all_categories()

        assert exc_info.value.details["status_code"] == 500

    def test_transport_error_retried_then_wrapped(self, monkeypatch):
        fake_config = SimpleNamespace(api=APIConfig(max_retries=2, exponential_backoff=False))
        monkeypatch.setattr("src.api.base_client.get_config", lambda: fake_config)
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = InventoryClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))

        with client, pytest.raises(InventoryAPIError, match="connection refused"):
            client.get_all_products()

        assert len(calls) == 2
