"""JSON-file-backed implementation of ProductStore."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path

from catalog.domain.exceptions import StorageReadError, StorageWriteError, ValidationError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_store import ProductStore

logger = logging.getLogger(__name__)


class JsonProductStore(ProductStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- ProductStore interface -----------------------------------------------

    def load(self) -> list[Product]:
        raw = self._load_raw()
        if not isinstance(raw, list):
            raise StorageReadError(
                f"{self._file_path} must contain a JSON array, got {type(raw).__name__}"
            )
        products = []
        for index, item in enumerate(raw):
            try:
                products.append(Product.from_dict(item))
            except ValidationError as exc:
                raise StorageReadError(
                    f"{self._file_path}: record {index} is malformed: {exc}"
                ) from exc
        return products

    def save(self, products: list[Product]) -> None:
        payload = json.dumps(
            [p.to_dict() for p in products], indent=2, ensure_ascii=False
        ) + "\n"
        # Each save gets its own temp file next to the target, then renames
        # it over the target, so readers only ever see a complete document.
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent,
                prefix=self._file_path.name + ".",
                suffix=".tmp",
            )
            if self._file_path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self._file_path.stat().st_mode))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            if tmp_name is not None:
                self._discard(Path(tmp_name))
            raise StorageWriteError(
                f"Cannot write {self._file_path}: {exc.strerror or exc}"
            ) from exc
        logger.debug("Wrote %d products to %s", len(products), self._file_path)

    # --- File helpers ---------------------------------------------------------

    def initialize(self) -> bool:
        """Create an empty collection document if none exists yet."""
        if self._file_path.exists():
            return False
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]\n", encoding="utf-8")
        except OSError as exc:
            raise StorageWriteError(
                f"Cannot create {self._file_path}: {exc.strerror or exc}"
            ) from exc
        logger.info("Created empty product file %s", self._file_path)
        return True

    def _load_raw(self) -> object:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StorageReadError(f"Product file not found: {self._file_path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(f"Cannot read {self._file_path}: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageReadError(f"Invalid JSON in {self._file_path}: {exc}") from exc

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not remove temp file %s: %s", path, exc)
