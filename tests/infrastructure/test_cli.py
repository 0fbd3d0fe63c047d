"""Tests for the click CLI, run against a temporary data file."""

import json

import pytest
from click.testing import CliRunner

from catalog.infrastructure.cli.main import cli


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "products.json"


@pytest.fixture
def invoke(data_file):
    runner = CliRunner()

    def _invoke(*args):
        return runner.invoke(cli, list(args), env={"CATALOG_DATA_FILE": str(data_file)})

    return _invoke


def _add(invoke, fields: dict) -> dict:
    result = invoke("product", "add", "--data", json.dumps(fields))
    assert result.exit_code == 0, result.output
    # First line is the confirmation, the rest is the record.
    return json.loads(result.output.split("\n", 1)[1])


class TestInit:

    def test_creates_file(self, invoke, data_file):
        result = invoke("init")
        assert result.exit_code == 0
        assert "Created" in result.output
        assert json.loads(data_file.read_text(encoding="utf-8")) == []

    def test_existing_file(self, invoke, data_file):
        data_file.write_text("[]", encoding="utf-8")
        result = invoke("init")
        assert result.exit_code == 0
        assert "already exists" in result.output


class TestProductCommands:

    def test_list_empty(self, invoke):
        invoke("init")
        result = invoke("product", "list")
        assert result.exit_code == 0
        assert "No products found." in result.output

    def test_add_then_list_and_show(self, invoke):
        invoke("init")
        created = _add(invoke, {"name": "Widget", "tags": [{"title": "Blue"}]})

        listed = invoke("product", "list", "--tag", "blue")
        assert created["id"] in listed.output
        assert "Widget" in listed.output

        shown = invoke("product", "show", "--id", created["id"])
        assert json.loads(shown.output) == created

    def test_list_with_loose_paging(self, invoke):
        invoke("init")
        _add(invoke, {"name": "Widget"})
        result = invoke("product", "list", "--offset", "oops", "--limit", "0")
        assert result.exit_code == 0
        assert "Widget" in result.output

    def test_update(self, invoke):
        invoke("init")
        created = _add(invoke, {"name": "Widget", "price": 5})
        result = invoke("product", "update", "--id", created["id"], "--data", '{"price": 9}')
        assert result.exit_code == 0
        updated = json.loads(result.output.split("\n", 1)[1])
        assert updated["name"] == "Widget"
        assert updated["price"] == 9

    def test_delete(self, invoke, data_file):
        invoke("init")
        created = _add(invoke, {"name": "Widget"})
        result = invoke("product", "delete", "--id", created["id"])
        assert result.exit_code == 0
        assert json.loads(data_file.read_text(encoding="utf-8")) == []

    def test_missing_product(self, invoke):
        invoke("init")
        result = invoke("product", "show", "--id", "missing-id")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_data_file(self, invoke):
        result = invoke("product", "list")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_data(self, invoke):
        invoke("init")
        result = invoke("product", "add", "--data", "[1, 2]")
        assert result.exit_code == 2
        assert "Expected a JSON object" in result.output
