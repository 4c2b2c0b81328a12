"""Search, category filter and sort over product and stock lists."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Optional, TypeVar, Union

from ..models.inventory import InventoryRecord, Product
from ..utils.exceptions import InvalidArgumentError

T = TypeVar("T")

ALL_CATEGORIES = "all"
SORT_FIELDS = ("name", "sku", "price")

_DIRECTIONS = {
    "ascending": "ascending",
    "asc": "ascending",
    "descending": "descending",
    "desc": "descending",
}


@dataclass(frozen=True)
class FieldAccessor:
    """
    Reads the queryable fields of one record shape.

    Lets the same engine serve flat product lists and stock records that
    embed their product.
    """

    name: Callable[[Any], str]
    sku: Callable[[Any], str]
    price: Callable[[Any], Decimal]
    category_id: Callable[[Any], Optional[int]]


def _embedded(getter: Callable[[Product], Any], default: Any) -> Callable[[InventoryRecord], Any]:
    def read(record: InventoryRecord) -> Any:
        if record.product is None:
            return default
        value = getter(record.product)
        return default if value is None else value
    return read


PRODUCT_FIELDS = FieldAccessor(
    name=lambda product: product.name or "",
    sku=lambda product: product.sku or "",
    price=lambda product: product.price if product.price is not None else Decimal("0"),
    category_id=lambda product: product.category_id,
)

INVENTORY_FIELDS = FieldAccessor(
    name=_embedded(lambda product: product.name, ""),
    sku=_embedded(lambda product: product.sku, ""),
    price=_embedded(lambda product: product.price, Decimal("0")),
    category_id=_embedded(lambda product: product.category_id, None),
)


@dataclass(frozen=True)
class QueryOptions:
    """Search, filter and sort settings for ``filter_and_sort``."""

    search_text: str = ""
    category_id: Union[int, str] = ALL_CATEGORIES
    sort_field: str = "name"
    sort_direction: str = "ascending"

    def __post_init__(self):
        """Validate and normalize options."""
        object.__setattr__(self, "search_text", self.search_text or "")
        object.__setattr__(self, "category_id", self._normalize_category(self.category_id))

        if self.sort_field not in SORT_FIELDS:
            raise InvalidArgumentError(
                f"Sort field must be one of {', '.join(SORT_FIELDS)}",
                details={"sort_field": self.sort_field}
            )

        direction = _DIRECTIONS.get(str(self.sort_direction).lower())
        if direction is None:
            raise InvalidArgumentError(
                "Sort direction must be 'ascending' or 'descending'",
                details={"sort_direction": self.sort_direction}
            )
        object.__setattr__(self, "sort_direction", direction)

    @staticmethod
    def _normalize_category(category_id: Union[int, str, None]) -> Union[int, str]:
        if category_id is None or category_id == ALL_CATEGORIES:
            return ALL_CATEGORIES
        if isinstance(category_id, bool):
            raise InvalidArgumentError("Category must be an integer or 'all'")
        if isinstance(category_id, int):
            return category_id
        if isinstance(category_id, str) and category_id.strip().lstrip("-").isdigit():
            return int(category_id)
        raise InvalidArgumentError(
            "Category must be an integer or 'all'",
            details={"category_id": category_id}
        )

    @property
    def descending(self) -> bool:
        return self.sort_direction == "descending"


def filter_and_sort(
    records: Iterable[T],
    options: Optional[QueryOptions] = None,
    accessor: FieldAccessor = PRODUCT_FIELDS
) -> List[T]:
    """
    Apply text search, category filter and a stable sort, in that order.

    The search is a case-insensitive substring match against name or SKU.
    String sort keys compare case-insensitively, price compares numerically.
    Records with equal keys keep their input order in both directions.
    A new list is returned; ``records`` is left untouched.
    """
    options = options or QueryOptions()
    term = options.search_text.lower()

    matched = [
        record for record in records
        if term in accessor.name(record).lower() or term in accessor.sku(record).lower()
    ]

    if options.category_id != ALL_CATEGORIES:
        matched = [
            record for record in matched
            if accessor.category_id(record) == options.category_id
        ]

    if options.sort_field == "price":
        key = accessor.price
    else:
        field_getter = getattr(accessor, options.sort_field)
        key = lambda record: field_getter(record).lower()

    # sorted(reverse=True) keeps equal keys in input order.
    return sorted(matched, key=key, reverse=options.descending)
