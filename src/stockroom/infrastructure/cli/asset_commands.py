"""CLI commands for uploaded assets."""

from __future__ import annotations

import mimetypes
from pathlib import Path

import click

from stockroom.application.list_uploads import ListUploadsHandler
from stockroom.application.upload_asset import UploadAssetHandler
from stockroom.infrastructure.bootstrap import Services
from stockroom.infrastructure.cli.errors import domain_errors


def guess_content_type(path: Path) -> str:
    return mimetypes.guess_type(path.name)[0] or "application/octet-stream"


@click.command("upload")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--content-type",
    default=None,
    help="MIME type of the file (guessed from its name if omitted).",
)
@click.pass_obj
def asset_upload(services: Services, file: Path, content_type: str | None) -> None:
    """Upload an image or PDF and record its URL."""
    content_type = content_type or guess_content_type(file)
    handler = UploadAssetHandler(
        resolver=services.blob_resolver,
        upload_repo=services.upload_repo,
    )
    with domain_errors():
        dto = handler.handle(file.read_bytes(), content_type)
    click.echo("File uploaded successfully!")
    click.echo(dto.file_url)


@click.command("list")
@click.pass_obj
def asset_list(services: Services) -> None:
    """List recorded uploads."""
    handler = ListUploadsHandler(upload_repo=services.upload_repo)
    with domain_errors():
        uploads = handler.handle()

    if not uploads:
        click.echo("No uploads found.")
        return

    click.echo(f"{'Uploaded':<20} {'Type':<16} {'Bytes':>9}  URL")
    click.echo("-" * 60)
    for u in uploads:
        click.echo(f"{u.uploaded_at:<20} {u.content_type:<16} {u.size:>9}  {u.file_url}")
