"""HTTP adapter: maps routes to ProductRepository calls.

Catalog errors become JSON ``{"error": ...}`` bodies: a missing product
is a 404, a storage failure a 500 carrying the underlying message.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from flask import Flask, g, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from catalog.application.product_repository import ProductRepository
from catalog.domain.exceptions import EntityNotFoundError, StorageError
from catalog.domain.model.value_objects import ProductQuery
from catalog.infrastructure.config import Settings

logger = logging.getLogger(__name__)


def _request_fields() -> dict[str, Any]:
    """The JSON object body, or an empty mapping for anything else."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def create_app(repository: ProductRepository, settings: Settings) -> Flask:
    app = Flask(
        __name__,
        static_folder=str(settings.public_dir),
        static_url_path="",
    )
    app.json.sort_keys = False  # type: ignore[attr-defined]

    # --- Middleware -----------------------------------------------------------

    @app.before_request
    def log_request() -> None:
        g.request_time = time.time()
        logger.info("%s %s", request.method, request.path)

    @app.errorhandler(EntityNotFoundError)
    def handle_not_found(exc: EntityNotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(StorageError)
    def handle_storage_error(exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Something went wrong!"}), 500

    # --- Routes ---------------------------------------------------------------

    @app.get("/")
    def index():
        return send_from_directory(settings.index_file.parent, settings.index_file.name)

    @app.get("/products")
    def list_products():
        query = ProductQuery.from_params(
            tag=request.args.get("tag"),
            offset=request.args.get("offset"),
            limit=request.args.get("limit"),
        )
        return jsonify([p.to_dict() for p in repository.list(query)])

    @app.get("/products/<product_id>")
    def get_product(product_id: str):
        return jsonify(repository.get(product_id).to_dict())

    @app.post("/products")
    def create_product():
        product = repository.create(_request_fields())
        return jsonify(product.to_dict()), 201

    @app.put("/products/<product_id>")
    def update_product(product_id: str):
        product = repository.update(product_id, _request_fields())
        return jsonify(product.to_dict())

    @app.delete("/products/<product_id>")
    def delete_product(product_id: str):
        product = repository.delete(product_id)
        return jsonify({
            "message": "Product deleted successfully",
            "product": product.to_dict(),
        })

    return app
