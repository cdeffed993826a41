from __future__ import annotations

from pathlib import Path

import click

from stockroom.infrastructure.bootstrap import Settings, build_services
from stockroom.infrastructure.cli.asset_commands import asset_list, asset_upload
from stockroom.infrastructure.cli.errors import domain_errors
from stockroom.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_sell,
    product_show,
)
from stockroom.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    envvar="STOCKROOM_DATA_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("data"),
    show_default=True,
    help="Directory holding products.json, uploads.json and blobs/.",
)
@click.option(
    "--blob-base-url",
    envvar="STOCKROOM_BLOB_BASE_URL",
    default=None,
    help="Public URL prefix for stored blobs (default: file:// URIs).",
)
@click.option(
    "--lock-timeout",
    envvar="STOCKROOM_LOCK_TIMEOUT",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds to wait for a busy product before giving up.",
)
@click.option("-v", "--verbose", count=True, help="Show info (-v) or debug (-vv) logs.")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Path,
    blob_base_url: str | None,
    lock_timeout: float | None,
    verbose: int,
) -> None:
    """Stockroom — shop catalog and inventory ledger"""
    configure_logging(verbose)
    settings = Settings(
        data_dir=data_dir,
        blob_base_url=blob_base_url,
        lock_timeout=lock_timeout,
    )
    with domain_errors():
        ctx.obj = build_services(settings)


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def asset() -> None:
    """Upload and list image/PDF assets."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_sell)
product.add_command(product_show)

asset.add_command(asset_list)
asset.add_command(asset_upload)
