"""CLI commands for the product collection."""

from __future__ import annotations

import json
from typing import Any

import click

from catalog.domain.exceptions import CatalogError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductQuery
from catalog.infrastructure.bootstrap import product_repository


def _parse_fields(raw: str) -> dict[str, Any]:
    """Parse '{"name": "Widget"}' into a field mapping."""
    try:
        fields = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}", param_hint="--data")
    if not isinstance(fields, dict):
        raise click.BadParameter("Expected a JSON object.", param_hint="--data")
    return fields


def _format_tags(product: Product) -> str:
    titles = []
    for tag in product.tags:
        if isinstance(tag, dict):
            titles.append(str(tag.get("title", "")))
        else:
            titles.append(str(tag))
    return ", ".join(titles)


def _echo_product(product: Product) -> None:
    click.echo(json.dumps(product.to_dict(), indent=2, ensure_ascii=False))


@click.command("list")
@click.option("--tag", default=None, help="Case-insensitive tag substring.")
@click.option("--offset", default=None, help="Records to skip (default 0).")
@click.option("--limit", default=None, help="Page size (default 25).")
def product_list(tag: str | None, offset: str | None, limit: str | None) -> None:
    """List products, optionally filtered by tag."""
    query = ProductQuery.from_params(tag=tag, offset=offset, limit=limit)
    try:
        products = product_repository().list(query)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<22} {'Name':<24} {'Tags':<30} {'Updated':<24}")
    click.echo("-" * 103)
    for p in products:
        name = str(p.attributes.get("name", ""))
        click.echo(f"{p.id:<22} {name:<24} {_format_tags(p):<30} {p.updated_at or '':<24}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a single product as JSON."""
    try:
        product = product_repository().get(product_id)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    _echo_product(product)


@click.command("add")
@click.option("--data", "raw_data", required=True, help="Fields as a JSON object.")
def product_add(raw_data: str) -> None:
    """Add a new product to the collection."""
    fields = _parse_fields(raw_data)
    try:
        product = product_repository().create(fields)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} created")
    _echo_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--data", "raw_data", required=True, help="Fields to merge, as a JSON object.")
def product_update(product_id: str, raw_data: str) -> None:
    """Merge fields into an existing product."""
    fields = _parse_fields(raw_data)
    try:
        product = product_repository().update(product_id, fields)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated")
    _echo_product(product)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the collection."""
    try:
        product = product_repository().delete(product_id)
    except CatalogError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} deleted")
