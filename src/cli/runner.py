# src/cli/runner.py

"""Headless catalog commands: list, show, delete, categories."""

import json
import logging
import sys

from rich.console import Console
from rich.table import Table

from src.models.product import Product, display_category, format_price
from src.services.catalog_service import CatalogService

logger = logging.getLogger("catalog_manager.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [p.to_dict() for p in products]


def _print_table(products: list[Product]) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title="Products",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating", justify="center")
    table.add_column("Category", style="magenta")

    for p in products:
        table.add_row(
            str(p.id),
            p.title[:60],
            format_price(p.price),
            f"{p.rating.rate} ({p.rating.count})",
            display_category(p.category),
        )

    Console().print(table)


def _dump_json(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def run_list(
    search: str,
    category: str | None,
    output_format: str,
    service: CatalogService | None = None,
) -> int:
    """Print the filtered catalog and return an exit code (0=ok, 1=fail)."""
    service = service or CatalogService()
    if not service.load_catalog():
        _err.print("[red]Could not load products.[/red]")
        return 1

    view = service.view(search, category)
    _err.print(f"[green]{view.summary}[/green]")

    if output_format == "table":
        _print_table(view.products)
    else:
        _dump_json(_products_to_dicts(view.products))
    return 0


def run_categories(service: CatalogService | None = None) -> int:
    """Print the distinct categories of the live catalog."""
    service = service or CatalogService()
    if not service.load_catalog():
        _err.print("[red]Could not load products.[/red]")
        return 1
    _dump_json(service.view().categories)
    return 0


def run_show(product_id: int, service: CatalogService | None = None) -> int:
    """Print one product as JSON."""
    service = service or CatalogService()
    product = service.get_product(product_id)
    if product is None:
        _err.print(f"[red]Product {product_id} not found.[/red]")
        return 1
    _dump_json(product.to_dict())
    return 0


def run_delete(product_id: int, service: CatalogService | None = None) -> int:
    """Delete one product through the API."""
    service = service or CatalogService()
    if not service.delete(product_id):
        logger.error("CLI delete of product %d failed", product_id)
        _err.print(f"[red]Failed to delete product {product_id}.[/red]")
        return 1
    _err.print(f"[green]✓ Product {product_id} deleted successfully![/green]")
    return 0
