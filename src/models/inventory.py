"""Catalog, stock and warehouse data models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Dict, Any, List

from ..utils.dates import parse_calendar_date


def _to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


@dataclass(frozen=True)
class Category:
    """A flat product category."""

    id: int
    name: str
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        """Create instance from dictionary."""
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            description=data.get("description")
        )


def category_name(categories: List[Category], category_id: Optional[int]) -> str:
    """Look up a category name, ``"N/A"`` when unknown."""
    for category in categories:
        if category.id == category_id:
            return category.name
    return "N/A"


@dataclass(frozen=True)
class Product:
    """A catalog entry."""

    public_id: str
    name: str
    sku: str
    description: str = ""
    category_id: Optional[int] = None
    unit: str = ""
    price: Decimal = Decimal("0")
    is_hazardous: bool = False
    expiration_required: bool = False

    def __post_init__(self):
        """Validate data."""
        if self.price < 0:
            raise ValueError("Price cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's JSON shape."""
        return {
            "publicId": self.public_id,
            "name": self.name,
            "sku": self.sku,
            "description": self.description,
            "categoryId": self.category_id,
            "unit": self.unit,
            "price": float(self.price),
            "isHazardous": self.is_hazardous,
            "expirationRequired": self.expiration_required
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Create instance from a backend ProductDTO."""
        category_id = data.get("categoryId")
        return cls(
            public_id=data.get("publicId") or "",
            name=data.get("name") or "",
            sku=data.get("sku") or "",
            description=data.get("description") or "",
            category_id=int(category_id) if category_id is not None else None,
            unit=data.get("unit") or "",
            price=_to_decimal(data.get("price")),
            is_hazardous=bool(data.get("isHazardous")),
            expiration_required=bool(data.get("expirationRequired"))
        )


@dataclass(frozen=True)
class InventoryRecord:
    """One stock placement of one product in one warehouse."""

    product_public_id: str
    quantity: int
    product: Optional[Product] = None
    storage_location: Optional[str] = None
    expiration_date: Optional[date] = None

    def __post_init__(self):
        """Validate data."""
        if self.quantity < 0:
            raise ValueError("Quantity cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's JSON shape."""
        return {
            "productPublicId": self.product_public_id,
            "quantity": self.quantity,
            "storageLocation": self.storage_location,
            "expirationDate": self.expiration_date.isoformat() if self.expiration_date else None,
            "product": self.product.to_dict() if self.product else None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryRecord":
        """
        Create instance from a backend WarehouseInventoryDTO.

        Raises:
            InvalidDateError: If ``expirationDate`` is present but malformed.
        """
        product_data = data.get("product")
        product = Product.from_dict(product_data) if product_data else None

        public_id = data.get("productPublicId")
        if not public_id and product:
            public_id = product.public_id

        return cls(
            product_public_id=public_id or "",
            quantity=int(data.get("quantity") or 0),
            product=product,
            storage_location=data.get("storageLocation") or None,
            expiration_date=parse_calendar_date(data.get("expirationDate"))
        )


@dataclass(frozen=True)
class Warehouse:
    """A warehouse with its embedded stock."""

    warehouse_id: int
    name: str
    location: str = ""
    max_capacity: int = 0
    current_capacity: int = 0
    inventory: List[InventoryRecord] = field(default_factory=list)

    @property
    def available_capacity(self) -> int:
        return max(self.max_capacity - self.current_capacity, 0)

    @property
    def utilization_percent(self) -> float:
        if self.max_capacity <= 0:
            return 0.0
        return (self.current_capacity / self.max_capacity) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the fields the backend accepts on create and update."""
        return {
            "name": self.name,
            "location": self.location,
            "maxCapacity": self.max_capacity
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Warehouse":
        """Create instance from a backend WarehouseDTO."""
        return cls(
            warehouse_id=int(data["warehouseId"]),
            name=data.get("name") or "",
            location=data.get("location") or "",
            max_capacity=int(data.get("maxCapacity") or 0),
            current_capacity=int(data.get("currentCapacity") or 0),
            inventory=[InventoryRecord.from_dict(item) for item in data.get("inventory") or []]
        )


@dataclass(frozen=True)
class WarehouseStock:
    """The stock list of one warehouse, labelled with the warehouse it belongs to."""

    warehouse_name: str
    warehouse_location: str = ""
    inventory: List[InventoryRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WarehouseStock":
        """Create instance from a backend WarehouseInventoryByWarehouseDTO."""
        return cls(
            warehouse_name=data.get("warehouseName") or "",
            warehouse_location=data.get("warehouseLocation") or "",
            inventory=[InventoryRecord.from_dict(item) for item in data.get("inventory") or []]
        )

    def find(self, product_public_id: str) -> Optional[InventoryRecord]:
        for record in self.inventory:
            if record.product_public_id == product_public_id:
                return record
        return None


@dataclass(frozen=True)
class InventoryTransfer:
    """A request to move a product's stock between two warehouses."""

    product_public_id: str
    source_warehouse_id: int
    destination_warehouse_id: int
    transfer_notes: Optional[str] = None

    def __post_init__(self):
        """Validate data."""
        if not self.product_public_id:
            raise ValueError("Product public ID cannot be empty")

        if self.source_warehouse_id == self.destination_warehouse_id:
            raise ValueError("Source and destination warehouses must differ")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the backend's InventoryTransferDTO shape."""
        return {
            "productPublicId": self.product_public_id,
            "sourceWarehouseId": self.source_warehouse_id,
            "destinationWarehouseId": self.destination_warehouse_id,
            "transferNotes": self.transfer_notes
        }
