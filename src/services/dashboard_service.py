"""Dashboard orchestrator: fetch from the backend, transform locally."""

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from .alerts import partition_alerts
from .query import INVENTORY_FIELDS, PRODUCT_FIELDS, QueryOptions, filter_and_sort
from ..api.inventory_client import InventoryClient
from ..models.alerts import AlertPartition
from ..models.inventory import (
    Category,
    InventoryRecord,
    InventoryTransfer,
    Product,
    Warehouse,
    WarehouseStock,
)
from ..utils.config import get_config
from ..utils.dates import parse_calendar_date
from ..utils.exceptions import BaseAppException, InvalidArgumentError, ResourceNotFoundError
from ..utils.logger import get_dashboard_logger, get_error_logger

DateInput = Union[str, date, None]


def _provided(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` values so they leave the current field unchanged."""
    return {key: value for key, value in changes.items() if value is not None}


def _stock_payload(record: InventoryRecord) -> Dict[str, Any]:
    payload = record.to_dict()
    payload.pop("product")
    return payload


class DashboardService:
    """
    Data source for the presentation layer.

    Every call fetches a fresh snapshot from the backend; nothing is cached
    between calls. Writes validate their input before anything is sent.
    """

    def __init__(self, client: Optional[InventoryClient] = None):
        self.config = get_config()
        self.logger = get_dashboard_logger()
        self.error_logger = get_error_logger()
        self.client = client or InventoryClient()

    # ------------------------------------------------------------------
    # Warehouses
    # ------------------------------------------------------------------

    def list_warehouses(self) -> List[Warehouse]:
        return self.client.get_all_warehouses()

    def other_warehouses(self, warehouse_id: int) -> List[Warehouse]:
        """Warehouses a stock record in ``warehouse_id`` can be transferred to."""
        return [w for w in self.client.get_all_warehouses() if w.warehouse_id != warehouse_id]

    def _find_warehouse(self, warehouse_id: int) -> Warehouse:
        for warehouse in self.client.get_all_warehouses():
            if warehouse.warehouse_id == warehouse_id:
                return warehouse
        raise ResourceNotFoundError(
            f"Warehouse {warehouse_id} not found",
            details={"warehouse_id": warehouse_id}
        )

    @staticmethod
    def _check_warehouse(warehouse: Warehouse):
        if not warehouse.name or not warehouse.location:
            raise InvalidArgumentError("Warehouse name and location are required")
        if warehouse.max_capacity < 1:
            raise InvalidArgumentError(
                "Max capacity must be at least 1",
                details={"max_capacity": warehouse.max_capacity}
            )

    def create_warehouse(self, name: str, location: str, max_capacity: int) -> Warehouse:
        warehouse = Warehouse(warehouse_id=0, name=name, location=location, max_capacity=max_capacity)
        self._check_warehouse(warehouse)
        created = self.client.create_warehouse(warehouse.to_dict())
        self.logger.info(f"Warehouse '{name}' created")
        return created

    def update_warehouse(
        self,
        warehouse_id: int,
        name: Optional[str] = None,
        location: Optional[str] = None,
        max_capacity: Optional[int] = None
    ) -> Warehouse:
        """Replace a warehouse's fields; fields passed as ``None`` keep their value."""
        current = self._find_warehouse(warehouse_id)
        updated = replace(current, **_provided({
            "name": name,
            "location": location,
            "max_capacity": max_capacity
        }))
        self._check_warehouse(updated)
        return self.client.update_warehouse(warehouse_id, updated.to_dict())

    def delete_warehouse(self, warehouse_id: int) -> None:
        self.client.delete_warehouse(warehouse_id)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def list_categories(self) -> List[Category]:
        return self.client.get_all_categories()

    def search_products(self, options: Optional[QueryOptions] = None) -> List[Product]:
        """Search, filter and sort the product catalog."""
        products = self.client.get_all_products()
        result = filter_and_sort(products, options, PRODUCT_FIELDS)
        self.logger.info(f"Product query matched {len(result)} of {len(products)}")
        return result

    def _find_product(self, public_id: str) -> Product:
        for product in self.client.get_all_products():
            if product.public_id == public_id:
                return product
        raise ResourceNotFoundError(
            f"Product {public_id} not found",
            details={"public_id": public_id}
        )

    @staticmethod
    def _check_product(product: Product):
        if not product.name or not product.sku:
            raise InvalidArgumentError("Product name and SKU are required")

    def create_product(
        self,
        name: str,
        sku: str,
        price: Decimal,
        category_id: Optional[int] = None,
        description: str = "",
        unit: str = "",
        is_hazardous: bool = False,
        expiration_required: bool = False
    ) -> Product:
        """
        Add a product to the catalog.

        Raises:
            InvalidArgumentError: If name or SKU is empty
            ValueError: If the price is negative
        """
        product = Product(
            public_id="",
            name=name,
            sku=sku,
            description=description,
            category_id=category_id,
            unit=unit,
            price=Decimal(str(price)),
            is_hazardous=is_hazardous,
            expiration_required=expiration_required
        )
        self._check_product(product)

        payload = product.to_dict()
        payload.pop("publicId")
        created = self.client.create_product(payload)
        self.logger.info(f"Product {sku} created")
        return created

    def update_product(self, public_id: str, **changes: Any) -> Product:
        """
        Replace a catalog product, applying ``changes`` to its current fields.

        ``changes`` use ``Product`` field names; ``None`` values are ignored.
        """
        current = self._find_product(public_id)
        if changes.get("price") is not None:
            changes["price"] = Decimal(str(changes["price"]))
        updated = replace(current, **_provided(changes))
        self._check_product(updated)

        returned = self.client.update_product(public_id, updated.to_dict())
        return returned or updated

    def delete_product(self, public_id: str) -> None:
        self.client.delete_product(public_id)

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def search_inventory(
        self,
        warehouse_id: int,
        options: Optional[QueryOptions] = None
    ) -> WarehouseStock:
        """Search, filter and sort the stock held in one warehouse."""
        stock = self.client.get_inventory_by_warehouse(warehouse_id)
        result = filter_and_sort(stock.inventory, options, INVENTORY_FIELDS)
        self.logger.info(
            f"Inventory query for warehouse {warehouse_id} matched {len(result)} of {len(stock.inventory)}"
        )
        return replace(stock, inventory=result)

    @staticmethod
    def _check_quantity(quantity: int):
        if quantity < 1:
            raise InvalidArgumentError(
                "Quantity must be at least 1",
                details={"quantity": quantity}
            )

    def place_stock(
        self,
        warehouse_id: int,
        product_public_id: str,
        quantity: int,
        storage_location: Optional[str] = None,
        expiration_date: DateInput = None
    ) -> InventoryRecord:
        """
        Put a quantity of a product into a warehouse.

        Raises:
            InvalidArgumentError: If the quantity is below 1
            InvalidDateError: If the expiration date is not ``YYYY-MM-DD``
        """
        self._check_quantity(quantity)
        record = InventoryRecord(
            product_public_id=product_public_id,
            quantity=quantity,
            storage_location=storage_location or None,
            expiration_date=parse_calendar_date(expiration_date)
        )
        return self.client.add_product_to_warehouse(warehouse_id, _stock_payload(record))

    def update_stock(
        self,
        warehouse_id: int,
        product_public_id: str,
        quantity: Optional[int] = None,
        storage_location: Optional[str] = None,
        expiration_date: DateInput = None
    ) -> InventoryRecord:
        """Change quantity, location or expiration of an existing stock record."""
        stock = self.client.get_inventory_by_warehouse(warehouse_id)
        current = stock.find(product_public_id)
        if current is None:
            raise ResourceNotFoundError(
                f"Product {product_public_id} is not stocked in warehouse {warehouse_id}",
                details={"warehouse_id": warehouse_id, "public_id": product_public_id}
            )

        updated = replace(current, **_provided({
            "quantity": quantity,
            "storage_location": storage_location,
            "expiration_date": parse_calendar_date(expiration_date)
        }))
        self._check_quantity(updated.quantity)
        return self.client.update_inventory(warehouse_id, product_public_id, _stock_payload(updated))

    def remove_stock(self, warehouse_id: int, product_public_id: str) -> None:
        self.client.delete_inventory(warehouse_id, product_public_id)

    def transfer(self, transfer: InventoryTransfer) -> None:
        """
        Move a product's stock between warehouses.

        Raises:
            InvalidArgumentError: If the destination is not another known warehouse
        """
        destinations = {w.warehouse_id for w in self.other_warehouses(transfer.source_warehouse_id)}
        if transfer.destination_warehouse_id not in destinations:
            raise InvalidArgumentError(
                f"Warehouse {transfer.destination_warehouse_id} is not a valid destination",
                details={"destination_warehouse_id": transfer.destination_warehouse_id}
            )

        try:
            self.client.transfer_inventory(transfer)
        except BaseAppException as e:
            self.error_logger.error(
                f"Transfer of {transfer.product_public_id} failed: {e.message}",
                extra={"details": e.details}
            )
            raise

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def expiration_alerts(
        self,
        window_days: Optional[int] = None,
        now: Union[date, datetime, None] = None
    ) -> AlertPartition:
        """
        Expired and nearing-expiration stock across all warehouses.

        Args:
            window_days: Lookahead horizon; defaults to ``alerts.window_days``
            now: Reference time; defaults to today
        """
        if window_days is None:
            window_days = self.config.alerts.window_days

        records = self.client.get_all_inventory()
        try:
            partition = partition_alerts(records, window_days, now)
        except BaseAppException as e:
            self.error_logger.error(f"Expiration alerts failed: {e.message}", extra={"details": e.details})
            raise

        self.logger.info(
            f"Expiration alerts: {len(partition.expired)} expired, "
            f"{len(partition.nearing)} within {window_days} days"
        )
        return partition

    def test_connection(self) -> dict:
        """Check that the backend answers."""
        self.logger.info("Testing backend connection...")
        result = {"success": False, "error": None}

        try:
            self.client.get_all_categories()
            result["success"] = True
            self.logger.info("Backend connection successful")
        except BaseAppException as e:
            result["error"] = e.message
            self.error_logger.error(f"Backend connection failed: {e.message}")

        return result

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
