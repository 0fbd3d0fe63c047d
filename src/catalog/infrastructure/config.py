"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from catalog.domain.exceptions import ValidationError

# Resolve defaults relative to the project root.
# When installed in editable mode the project root is the repo root.
PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_DATA_FILE = PROJECT_ROOT / "data" / "full-products.json"
DEFAULT_PUBLIC_DIR = PROJECT_ROOT / "public"
DEFAULT_INDEX_FILE = PROJECT_ROOT / "index.html"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:

    data_file: Path = DEFAULT_DATA_FILE
    public_dir: Path = DEFAULT_PUBLIC_DIR
    index_file: Path = DEFAULT_INDEX_FILE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``CATALOG_*``, ``HOST`` and ``PORT`` variables.

        Values already present in the process environment take precedence
        over those in a .env file.
        """
        load_dotenv()
        raw_port = os.getenv("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ValidationError(f"PORT must be an integer, got {raw_port!r}") from exc

        return cls(
            data_file=Path(os.getenv("CATALOG_DATA_FILE", str(DEFAULT_DATA_FILE))),
            public_dir=Path(os.getenv("CATALOG_PUBLIC_DIR", str(DEFAULT_PUBLIC_DIR))),
            index_file=Path(os.getenv("CATALOG_INDEX_FILE", str(DEFAULT_INDEX_FILE))),
            host=os.getenv("HOST", DEFAULT_HOST),
            port=port,
            log_level=os.getenv("CATALOG_LOG_LEVEL", "INFO").upper(),
        )
