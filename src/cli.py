"""Command-line dashboard for warehouse inventory."""

import sys
from datetime import date
from typing import List, Optional

import click

from .models.alerts import Severity
from .models.inventory import InventoryRecord, InventoryTransfer, category_name
from .services.dashboard_service import DashboardService
from .services.expiration import days_remaining, severity_of, status_text
from .services.query import SORT_FIELDS, QueryOptions
from .utils.config import get_config
from .utils.exceptions import BaseAppException
from .utils.logger import enable_verbose

SEVERITY_COLORS = {
    Severity.EXPIRED: "red",
    Severity.CRITICAL: "yellow",
    Severity.NEAR_TERM: "blue",
    Severity.NORMAL: None,
}


def _fail(message: str):
    click.echo(click.style(f"✗ {message}", fg="red"), err=True)
    sys.exit(1)


def _done(message: str):
    click.echo(click.style(f"✓ {message}", fg="green", bold=True))


def query_options(func):
    """Shared search/filter/sort options."""
    func = click.option(
        "--direction",
        type=click.Choice(["asc", "desc"]),
        default="asc",
        show_default=True,
        help="Sort direction"
    )(func)
    func = click.option(
        "--sort",
        "sort_field",
        type=click.Choice(SORT_FIELDS),
        default="name",
        show_default=True,
        help="Sort field"
    )(func)
    func = click.option(
        "--category",
        default="all",
        show_default=True,
        help="Category ID, or 'all'"
    )(func)
    func = click.option(
        "--search",
        default="",
        help="Case-insensitive match on name or SKU"
    )(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Print debug logs to stderr")
def cli(verbose: bool):
    """
    Reliable warehouse inventory dashboard.

    Browse warehouses, products and stock, and review expiration alerts.
    """
    if verbose:
        enable_verbose()


@cli.command()
def warehouses():
    """List warehouses with their capacity usage."""
    try:
        with DashboardService() as service:
            rows = service.list_warehouses()
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    if not rows:
        click.echo("No warehouses found.")
        return

    for warehouse in rows:
        click.echo(
            f"[{warehouse.warehouse_id}] {warehouse.name} ({warehouse.location or 'N/A'})  "
            f"Capacity: {warehouse.current_capacity} / {warehouse.max_capacity} "
            f"({warehouse.utilization_percent:.1f}%)"
        )


@cli.command()
@query_options
def products(search: str, category: str, sort_field: str, direction: str):
    """Search and sort the product catalog."""
    try:
        options = QueryOptions(
            search_text=search,
            category_id=category,
            sort_field=sort_field,
            sort_direction=direction
        )
        with DashboardService() as service:
            categories = service.list_categories()
            rows = service.search_products(options)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    if not rows:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<16}{'Name':<32}{'Category':<20}{'Price':>10}")
    click.echo("─" * 78)
    for product in rows:
        click.echo(
            f"{product.sku:<16}{product.name[:31]:<32}"
            f"{category_name(categories, product.category_id)[:19]:<20}{product.price:>10.2f}"
        )


@cli.command()
@click.argument("warehouse_id", type=int)
@query_options
def inventory(warehouse_id: int, search: str, category: str, sort_field: str, direction: str):
    """
    Show stock held in one warehouse.

    WAREHOUSE_ID: Warehouse to list
    """
    try:
        options = QueryOptions(
            search_text=search,
            category_id=category,
            sort_field=sort_field,
            sort_direction=direction
        )
        with DashboardService() as service:
            stock = service.search_inventory(warehouse_id, options)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    click.echo(click.style(f"{stock.warehouse_name} ({stock.warehouse_location or 'N/A'})", bold=True))
    if not stock.inventory:
        click.echo("No stock in this warehouse matches.")
        return

    click.echo(f"{'SKU':<16}{'Name':<32}{'Qty':>6}  {'Location':<16}{'Expires':<12}")
    click.echo("─" * 82)
    for record in stock.inventory:
        product = record.product
        expires = record.expiration_date.isoformat() if record.expiration_date else "-"
        click.echo(
            f"{(product.sku if product else ''):<16}{(product.name if product else '')[:31]:<32}"
            f"{record.quantity:>6}  {(record.storage_location or 'N/A')[:15]:<16}{expires:<12}"
        )


def _render_alerts(records: List[InventoryRecord], today: date):
    for record in records:
        days = days_remaining(record.expiration_date, today)
        color = SEVERITY_COLORS[severity_of(days)]
        name = record.product.name if record.product else record.product_public_id
        sku = record.product.sku if record.product else "?"
        badge = click.style(f"[{status_text(days)}]", fg=color, bold=True)
        click.echo(
            f"  {badge} {name}  SKU: {sku} | Location: {record.storage_location or 'N/A'} "
            f"| Qty: {record.quantity}"
        )


@cli.command()
@click.option("--days", type=int, default=None, help="Lookahead window in days")
def alerts(days: Optional[int]):
    """Show expired and soon-to-expire stock."""
    today = date.today()
    try:
        with DashboardService() as service:
            partition = service.expiration_alerts(window_days=days, now=today)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    headline_color = "red" if partition.total > 0 else "green"
    click.echo(click.style(f"Expiration Alerts: {partition.total} items", fg=headline_color, bold=True))
    click.echo()

    click.echo(click.style(f"Already Expired Stock ({len(partition.expired)})", fg="red", bold=True))
    if partition.expired:
        _render_alerts(partition.expired, today)
    else:
        click.echo("  No items currently expired!")
    click.echo()

    click.echo(click.style(
        f"Nearing Expiration (Next {partition.window_days} Days) ({len(partition.nearing)})",
        fg="yellow",
        bold=True
    ))
    if partition.nearing:
        _render_alerts(partition.nearing, today)
    else:
        click.echo("  No items expiring soon.")


@cli.command()
@click.argument("product_id")
@click.argument("source", type=int)
@click.argument("destination", type=int)
@click.option("--notes", default=None, help="Reason for the transfer")
def transfer(product_id: str, source: int, destination: int, notes: Optional[str]):
    """
    Move a product's stock from SOURCE to DESTINATION warehouse.

    PRODUCT_ID: Public ID of the product
    """
    try:
        request = InventoryTransfer(
            product_public_id=product_id,
            source_warehouse_id=source,
            destination_warehouse_id=destination,
            transfer_notes=notes
        )
        with DashboardService() as service:
            service.transfer(request)
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Transferred {product_id} from warehouse {source} to {destination}")


@cli.group()
def warehouse():
    """Create, update and delete warehouses."""


@warehouse.command("create")
@click.option("--name", required=True, help="Warehouse name")
@click.option("--location", required=True, help="Warehouse address or city")
@click.option("--capacity", type=int, required=True, help="Maximum number of units")
def warehouse_create(name: str, location: str, capacity: int):
    """Add a warehouse."""
    try:
        with DashboardService() as service:
            created = service.create_warehouse(name, location, capacity)
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Created warehouse [{created.warehouse_id}] {created.name}")


@warehouse.command("update")
@click.argument("warehouse_id", type=int)
@click.option("--name", default=None, help="New name")
@click.option("--location", default=None, help="New location")
@click.option("--capacity", type=int, default=None, help="New maximum capacity")
def warehouse_update(warehouse_id: int, name: Optional[str], location: Optional[str], capacity: Optional[int]):
    """
    Change a warehouse's name, location or capacity.

    WAREHOUSE_ID: Warehouse to update
    """
    try:
        with DashboardService() as service:
            updated = service.update_warehouse(warehouse_id, name=name, location=location, max_capacity=capacity)
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Updated warehouse [{warehouse_id}] {updated.name}")


@warehouse.command("delete")
@click.argument("warehouse_id", type=int)
@click.confirmation_option(prompt="Delete this warehouse?")
def warehouse_delete(warehouse_id: int):
    """
    Delete a warehouse.

    WAREHOUSE_ID: Warehouse to delete
    """
    try:
        with DashboardService() as service:
            service.delete_warehouse(warehouse_id)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Deleted warehouse {warehouse_id}")


@cli.group()
def product():
    """Create, update and delete catalog products."""


@product.command("create")
@click.option("--name", required=True, help="Product name")
@click.option("--sku", required=True, help="Stock keeping unit")
@click.option("--price", type=float, required=True, help="Unit price")
@click.option("--category", "category_id", type=int, default=None, help="Category ID")
@click.option("--description", default="", help="Free-text description")
@click.option("--unit", default="", help="Unit of measure, e.g. kg")
@click.option("--hazardous", is_flag=True, help="Mark as hazardous")
@click.option("--expiration-required", is_flag=True, help="Stock must carry an expiration date")
def product_create(
    name: str,
    sku: str,
    price: float,
    category_id: Optional[int],
    description: str,
    unit: str,
    hazardous: bool,
    expiration_required: bool
):
    """Add a product to the catalog."""
    try:
        with DashboardService() as service:
            created = service.create_product(
                name,
                sku,
                price,
                category_id=category_id,
                description=description,
                unit=unit,
                is_hazardous=hazardous,
                expiration_required=expiration_required
            )
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Created product {created.sku} ({created.public_id})")


@product.command("update")
@click.argument("public_id")
@click.option("--name", default=None, help="New name")
@click.option("--sku", default=None, help="New SKU")
@click.option("--price", type=float, default=None, help="New unit price")
@click.option("--category", "category_id", type=int, default=None, help="New category ID")
@click.option("--description", default=None, help="New description")
@click.option("--unit", default=None, help="New unit of measure")
@click.option("--hazardous/--not-hazardous", default=None, help="Hazard flag")
@click.option("--expiration-required/--no-expiration-required", default=None, help="Expiration flag")
def product_update(public_id: str, **changes):
    """
    Change fields of a catalog product.

    PUBLIC_ID: Public ID of the product
    """
    try:
        with DashboardService() as service:
            updated = service.update_product(
                public_id,
                name=changes["name"],
                sku=changes["sku"],
                price=changes["price"],
                category_id=changes["category_id"],
                description=changes["description"],
                unit=changes["unit"],
                is_hazardous=changes["hazardous"],
                expiration_required=changes["expiration_required"]
            )
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Updated product {updated.sku}")


@product.command("delete")
@click.argument("public_id")
@click.confirmation_option(prompt="Delete this product?")
def product_delete(public_id: str):
    """
    Remove a product from the catalog.

    PUBLIC_ID: Public ID of the product
    """
    try:
        with DashboardService() as service:
            service.delete_product(public_id)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Deleted product {public_id}")


@cli.group()
def stock():
    """Add, update and remove stock held in a warehouse."""


@stock.command("add")
@click.argument("warehouse_id", type=int)
@click.argument("product_id")
@click.option("--quantity", type=int, required=True, help="Units to place")
@click.option("--location", default=None, help="Storage location, e.g. 'Aisle 3, Shelf B'")
@click.option("--expires", default=None, help="Expiration date, YYYY-MM-DD")
def stock_add(warehouse_id: int, product_id: str, quantity: int, location: Optional[str], expires: Optional[str]):
    """
    Place a product into a warehouse.

    WAREHOUSE_ID: Target warehouse
    PRODUCT_ID: Public ID of the product
    """
    try:
        with DashboardService() as service:
            service.place_stock(warehouse_id, product_id, quantity, storage_location=location, expiration_date=expires)
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Added {quantity} of {product_id} to warehouse {warehouse_id}")


@stock.command("update")
@click.argument("warehouse_id", type=int)
@click.argument("product_id")
@click.option("--quantity", type=int, default=None, help="New quantity")
@click.option("--location", default=None, help="New storage location")
@click.option("--expires", default=None, help="New expiration date, YYYY-MM-DD")
def stock_update(
    warehouse_id: int,
    product_id: str,
    quantity: Optional[int],
    location: Optional[str],
    expires: Optional[str]
):
    """
    Change quantity, location or expiration of stock in a warehouse.

    WAREHOUSE_ID: Warehouse holding the stock
    PRODUCT_ID: Public ID of the product
    """
    try:
        with DashboardService() as service:
            service.update_stock(
                warehouse_id,
                product_id,
                quantity=quantity,
                storage_location=location,
                expiration_date=expires
            )
    except BaseAppException as e:
        _fail(e.message)
    except ValueError as e:
        _fail(str(e))
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Updated {product_id} in warehouse {warehouse_id}")


@stock.command("remove")
@click.argument("warehouse_id", type=int)
@click.argument("product_id")
@click.confirmation_option(prompt="Remove this stock record?")
def stock_remove(warehouse_id: int, product_id: str):
    """
    Remove a product's stock from a warehouse.

    WAREHOUSE_ID: Warehouse holding the stock
    PRODUCT_ID: Public ID of the product
    """
    try:
        with DashboardService() as service:
            service.remove_stock(warehouse_id, product_id)
    except BaseAppException as e:
        _fail(e.message)
    except Exception as e:
        _fail(f"Unexpected error: {str(e)}")

    _done(f"Removed {product_id} from warehouse {warehouse_id}")


@cli.command("test-connection")
def test_connection():
    """Check that the inventory backend is reachable."""
    click.echo("Testing backend connection...")

    try:
        with DashboardService() as service:
            result = service.test_connection()
    except Exception as e:
        _fail(f"Error: {str(e)}")

    if result["success"]:
        click.echo(click.style("✓ Connected successfully", fg="green"))
        sys.exit(0)

    click.echo(click.style(f"✗ Connection failed: {result['error']}", fg="red"))
    sys.exit(1)


@cli.command("config-info")
def config_info():
    """Display current configuration settings."""
    try:
        config = get_config()

        click.echo("Configuration Settings:")
        click.echo("=" * 60)
        click.echo(f"  Environment:     {config.env.environment}")
        click.echo(f"  Log level:       {config.logging.level}")
        click.echo(f"  Backend URL:     {config.env.inventory_api_url}")
        click.echo(f"  Timeout:         {config.api.timeout}s")
        click.echo(f"  Max retries:     {config.api.max_retries}")
        click.echo(f"  Alert window:    {config.alerts.window_days} days")

    except Exception as e:
        _fail(f"Error loading config: {str(e)}")


if __name__ == "__main__":
    cli()
