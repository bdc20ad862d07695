"""CLI commands for the Product entity."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

import click

from catalog.application.dto import ProductDTO, SearchParams, SearchResponseDTO
from catalog.application.product_service import ProductService
from catalog.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    RepositoryError,
    ValidationError,
)
from catalog.infrastructure.bootstrap import Container

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_CHOICES = click.Choice(
    ["active", "inactive", "pending", "discontinued"], case_sensitive=False
)


class CatalogCommandError(click.ClickException):
    """ClickException with a per-category exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive a use case to completion and translate domain errors."""
    try:
        return asyncio.run(coro)
    except RepositoryError as exc:
        logger.error("Catalog storage failure: %s", exc, exc_info=exc)
        raise CatalogCommandError(
            "An error occurred while reading or writing the catalog", exit_code=1
        )
    except EntityNotFoundError as exc:
        raise CatalogCommandError(str(exc), exit_code=3)
    except ValidationError as exc:
        raise CatalogCommandError(str(exc), exit_code=2)
    except DomainException as exc:
        raise CatalogCommandError(str(exc))


# --- Display ------------------------------------------------------------------


def _display_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Title':<30} {'Price':>16} {'Stock':>6} {'Status':<12}")
    click.echo("-" * 106)
    for p in products:
        click.echo(
            f"{p.id:<38} {p.title[:30]:<30} {p.price.formatted:>16} "
            f"{p.stock.quantity:>6} {p.status:<12}"
        )


def _display_page(response: SearchResponseDTO) -> None:
    _display_products(response.products)
    page = response.pagination
    more = f", more from offset {page.next_offset}" if page.has_more else ""
    click.echo(f"\nlimit={page.limit} offset={page.offset}{more}")


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  (status={dto.status})")
    click.echo(f"Title:     {dto.title}")
    click.echo(f"Category:  {dto.category_id}")
    click.echo(f"Price:     {dto.price.formatted}")
    if dto.price.discount_percentage:
        click.echo(f"Discount:  {dto.price.discount_percentage}%")
    click.echo(f"Stock:     {dto.stock.quantity}")
    click.echo(f"Available: {'yes' if dto.is_available else 'no'}")
    click.echo(f"Updated:   {dto.updated_at}")
    if dto.description:
        click.echo()
        click.echo(dto.description)


def _echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


# --- Read commands ------------------------------------------------------------


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
@click.pass_obj
def product_show(container: Container, product_id: str, as_json: bool) -> None:
    """Show one product."""
    dto = _run(container.product_service.get_product_detail(product_id))
    if as_json:
        _echo_json(dto.to_dict())
    else:
        _display_product(dto)


@click.command("search")
@click.option("--category", "category_id", default=None, help="Category ID filter.")
@click.option("--limit", type=int, default=None, help="Page size (1-100).")
@click.option("--offset", type=int, default=None, help="Number of products to skip.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
@click.pass_obj
def product_search(
    container: Container,
    category_id: str | None,
    limit: int | None,
    offset: int | None,
    as_json: bool,
) -> None:
    """Search available products, optionally within a category."""
    service: ProductService = container.product_service
    params = SearchParams(category_id=category_id, limit=limit, offset=offset)
    response = _run(service.search_products(params))
    if as_json:
        _echo_json(response.to_dict())
    else:
        _display_page(response)


@click.command("related")
@click.option("--id", "product_id", required=True, help="Source product ID.")
@click.option("--limit", type=int, default=None, help="How many related products (1-20).")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
@click.pass_obj
def product_related(
    container: Container, product_id: str, limit: int | None, as_json: bool
) -> None:
    """List available products from the same category."""
    if limit is None:
        limit = container.settings.related_limit
    response = _run(container.product_service.get_related_products(product_id, limit))
    if as_json:
        _echo_json(response.to_dict())
    else:
        _display_page(response)


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List every product in the catalog, including unavailable ones."""
    products = _run(container.product_repository.find_all())
    _display_products([ProductService.to_dto(p) for p in products])


# --- Write commands -----------------------------------------------------------


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--description", default="", help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--original-price", default=None, help="Price before discount.")
@click.option("--currency", default="ARS", show_default=True, help="Currency code.")
@click.option("--category", "category_id", required=True, help="Category ID.")
@click.option("--quantity", type=int, default=0, show_default=True, help="Units in stock.")
@click.option("--status", type=STATUS_CHOICES, default="active", show_default=True)
@click.pass_obj
def product_add(
    container: Container,
    title: str,
    description: str,
    price: str,
    original_price: str | None,
    currency: str,
    category_id: str,
    quantity: int,
    status: str,
) -> None:
    """Add a new product to the catalog."""
    product = _run(
        container.add_product.handle(
            title=title,
            description=description,
            amount=price,
            currency=currency,
            category_id=category_id,
            quantity=quantity,
            status=status,
            original_amount=original_price,
        )
    )
    click.echo(f"Product {product.id} '{product.title}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price.")
@click.option("--original-price", default=None, help="New price before discount.")
@click.option("--quantity", type=int, default=None, help="New stock level.")
@click.option("--status", type=STATUS_CHOICES, default=None)
@click.pass_obj
def product_update(
    container: Container,
    product_id: str,
    price: str | None,
    original_price: str | None,
    quantity: int | None,
    status: str | None,
) -> None:
    """Change price, stock or status of a product."""
    product = _run(
        container.update_product.handle(
            product_id,
            amount=price,
            original_amount=original_price,
            quantity=quantity,
            status=status,
        )
    )
    click.echo(
        f"Product {product.id} updated: {product.price}, "
        f"stock={product.stock}, status={product.status}"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(container: Container, product_id: str) -> None:
    """Remove a product from the catalog (a backup of the file is kept)."""
    _run(container.delete_product.handle(product_id))
    click.echo(f"Product {product_id} deleted.")
