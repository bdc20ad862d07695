from pathlib import Path

import click
from pydantic import ValidationError as SettingsError

from catalog.infrastructure.bootstrap import build_container
from catalog.infrastructure.cli.data_commands import data_clean, data_generate
from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_related,
    product_search,
    product_show,
    product_update,
)
from catalog.infrastructure.config import CatalogSettings
from catalog.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding products.json (overrides CATALOG_DATA_DIR).",
)
@click.option("--log-level", default=None, help="Logging level (overrides CATALOG_LOG_LEVEL).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """Catalog: product catalog backend"""
    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if log_level is not None:
        overrides["log_level"] = log_level
    try:
        settings = CatalogSettings(**overrides)
    except SettingsError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")

    configure_logging(settings.log_level)
    ctx.obj = build_container(settings)


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def data() -> None:
    """Generate or reset the catalog data files."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_related)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_update)
data.add_command(data_clean)
data.add_command(data_generate)
