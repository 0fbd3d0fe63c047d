"""Domain service: tag filtering and pagination over a product list.

Pure functions. The input list is never modified; every function
returns a new list.
"""

from __future__ import annotations

from typing import Any, Sequence

from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Page, ProductQuery


def _tag_text(tag: Any) -> str | None:
    """Plain string tags match on themselves, object tags on their title."""
    if isinstance(tag, str):
        return tag
    if isinstance(tag, dict) and isinstance(tag.get("title"), str):
        return tag["title"]
    return None


def matches_tag(product: Product, tag: str) -> bool:
    needle = tag.lower()
    for item in product.tags:
        text = _tag_text(item)
        if text is not None and needle in text.lower():
            return True
    return False


def filter_by_tag(products: Sequence[Product], tag: str | None) -> list[Product]:
    if not tag:
        return list(products)
    return [p for p in products if matches_tag(p, tag)]


def paginate(products: Sequence[Product], page: Page) -> list[Product]:
    return page.window(products)


def apply_query(products: Sequence[Product], query: ProductQuery) -> list[Product]:
    """Filter by tag first, then cut the requested page."""
    return paginate(filter_by_tag(products, query.tag), query.page)
