"""Tests for the Flask adapter, using Flask's test client."""

import json

import pytest

from catalog.application.product_repository import ProductRepository
from catalog.domain.model.product import Product
from catalog.infrastructure.config import Settings
from catalog.infrastructure.http.app import create_app
from catalog.infrastructure.persistence.json_product_store import JsonProductStore
from tests.fakes import InMemoryProductStore, SequentialIdGenerator, TickingClock


@pytest.fixture
def settings(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "styles.css").write_text("body {}", encoding="utf-8")
    index = tmp_path / "index.html"
    index.write_text("<h1>Catalog</h1>", encoding="utf-8")
    return Settings(
        data_file=tmp_path / "products.json",
        public_dir=public,
        index_file=index,
    )


@pytest.fixture
def store():
    return InMemoryProductStore([
        Product(id="a", attributes={"name": "Widget", "tags": ["red", {"title": "Blue Widget"}]}),
        Product(id="b", attributes={"name": "Hose", "tags": ["garden"]}),
    ])


@pytest.fixture
def client(store, settings):
    repo = ProductRepository(store, id_generator=SequentialIdGenerator(), clock=TickingClock())
    app = create_app(repo, settings)
    app.testing = True
    return app.test_client()


class TestListProducts:

    def test_all(self, client):
        resp = client.get("/products")
        assert resp.status_code == 200
        assert [p["id"] for p in resp.get_json()] == ["a", "b"]

    def test_tag_filter(self, client):
        resp = client.get("/products?tag=WIDGET")
        assert [p["id"] for p in resp.get_json()] == ["a"]

    def test_pagination(self, client):
        resp = client.get("/products?offset=1&limit=1")
        assert [p["id"] for p in resp.get_json()] == ["b"]

    def test_bad_pagination_uses_defaults(self, client):
        resp = client.get("/products?offset=abc&limit=-4")
        assert resp.status_code == 200
        assert len(resp.get_json()) == 2

    def test_storage_error(self, client, store):
        store.fail_reads = True
        resp = client.get("/products")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "simulated read failure"}


class TestSingleProduct:

    def test_get(self, client):
        resp = client.get("/products/a")
        assert resp.status_code == 200
        assert resp.get_json()["name"] == "Widget"

    def test_get_missing(self, client):
        resp = client.get("/products/zzz")
        assert resp.status_code == 404
        assert "not found" in resp.get_json()["error"]

    def test_create(self, client):
        resp = client.post("/products", json={"name": "Lamp", "id": "ignored"})
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["id"] == "p1"
        assert body["created_at"] == body["updated_at"]
        assert client.get("/products/p1").get_json() == body

    def test_create_keeps_field_order(self, client):
        resp = client.post("/products", json={"zeta": 1, "alpha": 2})
        assert list(json.loads(resp.data)) == ["id", "zeta", "alpha", "created_at", "updated_at"]

    def test_create_without_json_body(self, client):
        resp = client.post("/products", data="not json")
        assert resp.status_code == 201
        assert set(resp.get_json()) == {"id", "created_at", "updated_at"}

    def test_create_write_error(self, client, store):
        store.fail_writes = True
        resp = client.post("/products", json={"name": "Lamp"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "simulated write failure"}

    def test_update(self, client):
        resp = client.put("/products/b", json={"price": 9})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["name"] == "Hose"
        assert body["price"] == 9

    def test_update_missing(self, client):
        resp = client.put("/products/zzz", json={})
        assert resp.status_code == 404

    def test_delete(self, client):
        resp = client.delete("/products/a")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["message"] == "Product deleted successfully"
        assert body["product"]["id"] == "a"
        assert client.get("/products/a").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete("/products/zzz").status_code == 404


class TestStaticAndErrors:

    def test_index(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"Catalog" in resp.data

    def test_static_file(self, client):
        resp = client.get("/styles.css")
        assert resp.status_code == 200
        assert resp.data == b"body {}"

    def test_unknown_route(self, client):
        resp = client.get("/nope/nothing")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_method_not_allowed(self, client):
        resp = client.patch("/products/a")
        assert resp.status_code == 405
        assert "error" in resp.get_json()


class TestWithJsonStore:

    def test_scenario_from_empty_file(self, settings):
        store = JsonProductStore(settings.data_file)
        store.initialize()
        app = create_app(ProductRepository(store), settings)
        client = app.test_client()

        created = client.post("/products", json={"name": "Widget"}).get_json()
        listed = client.get("/products").get_json()

        assert listed == [created]
        assert json.loads(settings.data_file.read_text(encoding="utf-8")) == [created]
