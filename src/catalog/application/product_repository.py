"""Application service: the product collection use cases.

Each operation is one load -> compute -> (save) -> return cycle over the
whole collection. Nothing is cached between calls and nothing is locked:
two concurrent writers can each load the same collection and the later
save wins, silently dropping the earlier change (lost update). Callers
that need stronger guarantees must serialize writes themselves.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from catalog.domain.exceptions import EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductQuery
from catalog.domain.repository.product_store import ProductStore
from catalog.domain.service.id_generator import IdGenerator
from catalog.domain.service.product_query import apply_query

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProductRepository:

    def __init__(
        self,
        store: ProductStore,
        id_generator: IdGenerator | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._id_generator = id_generator or IdGenerator()
        self._clock = clock

    # --- Queries --------------------------------------------------------------

    def list(self, query: ProductQuery | None = None) -> list[Product]:
        """Return the products matching ``query`` (default: first page, no filter)."""
        return apply_query(self._store.load(), query or ProductQuery())

    def get(self, product_id: str) -> Product:
        products = self._store.load()
        return products[self._index_of(products, product_id)]

    # --- Commands -------------------------------------------------------------

    def create(self, fields: Mapping[str, Any]) -> Product:
        """Append a new product built from ``fields``.

        The generated id and timestamps always replace any the caller sent.
        """
        products = self._store.load()
        product = Product.create(self._id_generator.generate(), fields, self._clock())
        products.append(product)
        self._store.save(products)
        logger.info("Created product %s", product.id)
        return product

    def update(self, product_id: str, fields: Mapping[str, Any]) -> Product:
        products = self._store.load()
        index = self._index_of(products, product_id)
        updated = products[index].merged_with(fields, self._clock())
        products[index] = updated
        self._store.save(products)
        logger.info("Updated product %s", product_id)
        return updated

    def delete(self, product_id: str) -> Product:
        products = self._store.load()
        removed = products.pop(self._index_of(products, product_id))
        self._store.save(products)
        logger.info("Deleted product %s", product_id)
        return removed

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _index_of(products: list[Product], product_id: str) -> int:
        for i, product in enumerate(products):
            if product.id == product_id:
                return i
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
