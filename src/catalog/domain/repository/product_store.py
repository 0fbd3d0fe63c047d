"""Abstract storage for the product collection.

Defined in the domain layer so the domain never depends on
infrastructure. The collection is always read and written whole:
there is no per-record I/O.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductStore(ABC):

    @abstractmethod
    def load(self) -> list[Product]:
        """Return the full collection in stored order.

        Raises StorageReadError if the document is missing or malformed.
        """

    @abstractmethod
    def save(self, products: list[Product]) -> None:
        """Replace the stored collection with ``products``.

        Raises StorageWriteError if the document cannot be written.
        """
