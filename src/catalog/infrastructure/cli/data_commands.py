"""CLI commands that generate or reset the catalog data files."""

from __future__ import annotations

import asyncio
import random

import click

from catalog.infrastructure.bootstrap import Container
from catalog.infrastructure.persistence.file_store import FileOperationError
from catalog.infrastructure.persistence.sample_data import (
    DEFAULT_PRODUCT_COUNT,
    clean_catalog,
    generate_catalog,
)


@click.command("generate")
@click.option(
    "--count",
    type=click.IntRange(min=0),
    default=DEFAULT_PRODUCT_COUNT,
    show_default=True,
    help="Number of products to generate.",
)
@click.option("--seed", type=int, default=None, help="Random seed for a reproducible catalog.")
@click.pass_obj
def data_generate(container: Container, count: int, seed: int | None) -> None:
    """Replace products and categories with a generated sample catalog."""
    settings = container.settings
    rng = random.Random(seed) if seed is not None else None
    try:
        categories, products = asyncio.run(
            generate_catalog(
                container.file_store,
                count,
                products_file=settings.products_file,
                categories_file=settings.categories_file,
                rng=rng,
            )
        )
    except FileOperationError as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Generated {categories} categories and {products} products in {settings.data_dir}"
    )


@click.command("clean")
@click.pass_obj
def data_clean(container: Container) -> None:
    """Reset products and categories to empty lists (backups are kept)."""
    settings = container.settings
    try:
        asyncio.run(
            clean_catalog(
                container.file_store, settings.products_file, settings.categories_file
            )
        )
    except FileOperationError as exc:
        raise click.ClickException(str(exc))

    container.product_repository.clear_cache()
    click.echo(f"Catalog data in {settings.data_dir} reset to empty.")
