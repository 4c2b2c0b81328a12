"""Client for the warehouse inventory REST backend."""

from typing import List, Dict, Any, Optional, Union

import httpx

from .base_client import BaseClient
from ..utils.config import get_config
from ..models.inventory import (
    Category,
    InventoryRecord,
    InventoryTransfer,
    Product,
    Warehouse,
    WarehouseStock,
)

Identifier = Union[int, str]


class InventoryClient(BaseClient):
    """Client for warehouse, catalog, stock and expiration-alert endpoints."""

    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the client.

        Args:
            base_url: Backend URL; defaults to ``INVENTORY_API_URL`` from the environment
            transport: Optional httpx transport (used by tests)
        """
        config = get_config()
        super().__init__(base_url=base_url or config.env.inventory_api_url, transport=transport)

    # ------------------------------------------------------------------
    # Warehouses
    # ------------------------------------------------------------------

    def get_all_warehouses(self) -> List[Warehouse]:
        """Fetch every warehouse with its embedded stock."""
        data = self.get("/warehouses") or []
        return [Warehouse.from_dict(item) for item in data]

    def create_warehouse(self, dto: Dict[str, Any]) -> Warehouse:
        """Create a warehouse from ``name``, ``location`` and ``maxCapacity``."""
        data = self.post("/warehouses", json=dto)
        self.logger.info(f"Created warehouse {data.get('warehouseId')}")
        return Warehouse.from_dict(data)

    def update_warehouse(self, warehouse_id: Identifier, dto: Dict[str, Any]) -> Warehouse:
        """Replace a warehouse record."""
        data = self.put(f"/warehouses/{warehouse_id}", json=dto)
        return Warehouse.from_dict(data)

    def patch_warehouse(self, warehouse_id: Identifier, dto: Dict[str, Any]) -> Warehouse:
        """Partially update a warehouse record."""
        data = self.patch(f"/warehouses/{warehouse_id}", json=dto)
        return Warehouse.from_dict(data)

    def delete_warehouse(self, warehouse_id: Identifier) -> None:
        self.delete(f"/warehouses/{warehouse_id}")
        self.logger.info(f"Deleted warehouse {warehouse_id}")

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def get_all_categories(self) -> List[Category]:
        data = self.get("/api/categories") or []
        return [Category.from_dict(item) for item in data]

    def get_all_products(self) -> List[Product]:
        data = self.get("/api/warehouse/products") or []
        return [Product.from_dict(item) for item in data]

    def create_product(self, dto: Dict[str, Any]) -> Product:
        """Create a catalog product."""
        data = self.post("/api/warehouse/products", json=dto)
        self.logger.info(f"Created product {data.get('sku')}")
        return Product.from_dict(data)

    def update_product(self, public_id: str, dto: Dict[str, Any]) -> Optional[Product]:
        """Replace a catalog product. Returns ``None`` when the backend sends no body."""
        data = self.put(f"/api/warehouse/products/{public_id}", json=dto)
        return Product.from_dict(data) if data else None

    def delete_product(self, public_id: str) -> None:
        self.delete(f"/api/warehouse/products/{public_id}")
        self.logger.info(f"Deleted product {public_id}")

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def get_all_inventory(self) -> List[InventoryRecord]:
        """Fetch the flat stock list across all warehouses."""
        data = self.get("/warehouses/inventory") or []
        return [InventoryRecord.from_dict(item) for item in data]

    def get_inventory_by_warehouse(self, warehouse_id: Identifier) -> WarehouseStock:
        """Fetch one warehouse's name, location and stock list."""
        data = self.get(f"/warehouses/inventory/{warehouse_id}") or {}
        return WarehouseStock.from_dict(data)

    def add_product_to_warehouse(self, warehouse_id: Identifier, dto: Dict[str, Any]) -> InventoryRecord:
        """
        Place stock of a product in a warehouse.

        Args:
            warehouse_id: Target warehouse
            dto: ``productPublicId``, ``quantity`` and optional
                 ``storageLocation`` / ``expirationDate``
        """
        data = self.post(f"/warehouses/inventory/{warehouse_id}", json=dto)
        self.logger.info(
            f"Placed {dto.get('quantity')} of {dto.get('productPublicId')} in warehouse {warehouse_id}"
        )
        return InventoryRecord.from_dict(data)

    def update_inventory(self, warehouse_id: Identifier, public_id: str, dto: Dict[str, Any]) -> InventoryRecord:
        """
        Update quantity, location or expiration of a stock record.

        Backends that do not map this path answer 404 or 405, which surface
        as ``ResourceNotFoundError`` / ``InventoryAPIError``.
        """
        data = self.put(f"/warehouses/inventory/{warehouse_id}/{public_id}", json=dto)
        return InventoryRecord.from_dict(data)

    def delete_inventory(self, warehouse_id: Identifier, public_id: str) -> None:
        self.delete(f"/warehouses/inventory/{warehouse_id}/{public_id}")
        self.logger.info(f"Removed {public_id} from warehouse {warehouse_id}")

    def transfer_inventory(self, transfer: InventoryTransfer) -> None:
        """Move a product's stock from one warehouse to another."""
        self.post("/warehouses/inventory/transfer", json=transfer.to_dict())
        self.logger.info(
            f"Transferred {transfer.product_public_id} from warehouse "
            f"{transfer.source_warehouse_id} to {transfer.destination_warehouse_id}"
        )

    # ------------------------------------------------------------------
    # Expiration alerts
    # ------------------------------------------------------------------

    def get_nearing_expiration_alerts(self, days: int) -> List[InventoryRecord]:
        """Stock the backend reports as expiring within ``days``."""
        data = self.get(f"/warehouses/inventory/alerts/expiring/{days}") or []
        return [InventoryRecord.from_dict(item) for item in data]

    def get_expired_inventory(self) -> List[InventoryRecord]:
        data = self.get("/warehouses/inventory/alerts/expired") or []
        return [InventoryRecord.from_dict(item) for item in data]
