"""CLI commands for running the HTTP service."""

from __future__ import annotations

import click

from catalog.domain.exceptions import CatalogError
from catalog.infrastructure.bootstrap import product_store, web_app
from catalog.infrastructure.config import Settings
from catalog.infrastructure.logging_config import configure_logging


@click.command("init")
def init_data() -> None:
    """Create an empty product file if it does not exist."""
    store = product_store()
    try:
        created = store.initialize()
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    if created:
        click.echo(f"Created {store.file_path}")
    else:
        click.echo(f"{store.file_path} already exists")


@click.command("serve")
@click.option("--host", default=None, help="Interface to bind (default from HOST).")
@click.option("--port", type=int, default=None, help="Port to listen on (default from PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the product HTTP service."""
    try:
        settings = Settings.from_env()
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level)
    app = web_app(settings)
    host = host or settings.host
    port = port or settings.port
    click.echo(f"Server listening on port {port}")
    app.run(host=host, port=port, threaded=True)
