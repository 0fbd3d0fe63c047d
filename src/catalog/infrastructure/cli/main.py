import click

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from catalog.infrastructure.cli.server_commands import init_data, serve


@click.group()
def cli() -> None:
    """Catalog: JSON-backed product service"""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
cli.add_command(init_data)
cli.add_command(serve)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
