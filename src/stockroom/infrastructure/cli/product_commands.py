"""CLI commands for products and stock."""

from __future__ import annotations

from pathlib import Path

import click

from stockroom.application.dto import ProductDTO
from stockroom.application.list_products import ListProductsHandler
from stockroom.application.restock_product import RestockProductHandler
from stockroom.application.sell_product import SellProductHandler
from stockroom.application.show_product import ShowProductHandler
from stockroom.application.upload_asset import UploadAssetHandler
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.cli.asset_commands import guess_content_type
from stockroom.infrastructure.cli.errors import domain_errors


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product:     {dto.name}")
    click.echo(f"Price:       {dto.price}")
    click.echo(f"Quantity:    {dto.quantity}")
    if dto.description:
        click.echo(f"Description: {dto.description}")
    if dto.image_ref:
        click.echo(f"Image:       {dto.image_ref}")


@click.command("list")
@click.pass_obj
def product_list(services: Services) -> None:
    """List all products in the catalog."""
    handler = ListProductsHandler(catalog=services.catalog)
    with domain_errors():
        catalog = handler.handle()

    if not catalog.products:
        click.echo("No products found.")
        return

    click.echo(f"{'Name':<24} {'Qty':>6} {'Price':>10}")
    click.echo("-" * 42)
    for p in catalog.products:
        click.echo(f"{p.name:<24} {p.quantity:>6} {p.price:>10}")
    click.echo("-" * 42)
    click.echo(f"{'Stock value':<31} {catalog.stock_value:>10}")


@click.command("show")
@click.option("--name", required=True, help="Product name.")
@click.pass_obj
def product_show(services: Services, name: str) -> None:
    """Show a single product."""
    handler = ShowProductHandler(catalog=services.catalog)
    with domain_errors():
        dto = handler.handle(name)
    _display_product(dto)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.option("--price", default=None, help="Price (e.g. 15.00); required for new products.")
@click.option("--description", default=None, help="Description for new products.")
@click.option(
    "--image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Image or PDF to upload and attach to a new product.",
)
@click.pass_obj
def product_add(
    services: Services,
    name: str,
    quantity: int,
    price: str | None,
    description: str | None,
    image: Path | None,
) -> None:
    """Add stock, creating the product if it does not exist yet."""
    image_ref = None
    with domain_errors():
        if image is not None:
            upload = UploadAssetHandler(
                resolver=services.blob_resolver,
                upload_repo=services.upload_repo,
            ).handle(image.read_bytes(), guess_content_type(image))
            image_ref = upload.file_url

        dto = RestockProductHandler(ledger=services.ledger).handle(
            name,
            quantity,
            price=price,
            description=description,
            image_ref=image_ref,
        )
    click.echo(f"'{dto.name}' now has {dto.quantity} in stock at {dto.price}")


@click.command("sell")
@click.option("--name", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units to sell.")
@click.pass_obj
def product_sell(services: Services, name: str, quantity: int) -> None:
    """Sell stock of an existing product."""
    handler = SellProductHandler(ledger=services.ledger)
    with domain_errors():
        dto = handler.handle(name, quantity)
    click.echo(f"Sold {quantity} of '{dto.name}', {dto.quantity} left")
