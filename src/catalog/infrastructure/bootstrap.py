"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from flask import Flask

from catalog.application.product_repository import ProductRepository
from catalog.infrastructure.config import Settings
from catalog.infrastructure.http.app import create_app
from catalog.infrastructure.persistence.json_product_store import JsonProductStore


def product_store(settings: Settings | None = None) -> JsonProductStore:
    settings = settings or Settings.from_env()
    return JsonProductStore(settings.data_file)


def product_repository(settings: Settings | None = None) -> ProductRepository:
    return ProductRepository(product_store(settings))


def web_app(settings: Settings | None = None) -> Flask:
    settings = settings or Settings.from_env()
    return create_app(product_repository(settings), settings)
