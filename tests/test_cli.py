"""Tests for the command-line interface."""

import json

import pytest

from src.cli import main


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([
        {
            "id": "p1",
            "name": "Chicken Recipe",
            "brand": "Acme",
            "contains_grain": False,
            "protein_sources": ["chicken"],
            "ingredients_list": "chicken;peas;chicken_meal",
        },
        {
            "id": "p2",
            "name": "Beef Dinner",
            "brand": "Acme",
            "contains_grain": True,
            "protein_sources": ["beef"],
            "ingredients_list": "beef;barley",
        },
    ]))
    return str(path)


class TestCli:
    """Tests for main()."""

    def test_markdown_search(self, catalog_path, capsys):
        code = main(["grain", "free", "chicken", "--catalog", catalog_path])
        out = capsys.readouterr().out
        assert code == 0
        assert "Chicken Recipe" in out
        assert "Beef Dinner" not in out

    def test_json_search(self, catalog_path, capsys):
        code = main(["--catalog", catalog_path, "--output", "json", "--", "-beef"])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert [r["product"]["id"] for r in data["results"]] == ["p1"]

    def test_quoted_query(self, catalog_path, capsys):
        main(["grain chicken", "--catalog", catalog_path, "--output", "json"])
        data = json.loads(capsys.readouterr().out)
        # grain-free p1 is gated out; p2 matches "grain" only
        assert [r["product"]["id"] for r in data["results"]] == ["p2"]
        assert data["results"][0]["match"] == 50

    def test_empty_query(self, catalog_path, capsys):
        code = main(["--catalog", catalog_path])
        assert code == 0
        assert "start typing to see matches" in capsys.readouterr().out

    def test_limit(self, catalog_path, capsys):
        main(["acme", "--catalog", catalog_path, "--limit", "1", "--output", "json"])
        data = json.loads(capsys.readouterr().out)
        assert data["shown"] == 1
        assert data["total_matches"] == 2

    def test_missing_catalog(self, tmp_path, capsys):
        code = main(["chicken", "--catalog", str(tmp_path / "missing.json")])
        assert code == 1
        assert "Catalog file not found" in capsys.readouterr().err

    def test_invalid_config(self, catalog_path, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("synonyms: [1, 2]\n")
        code = main(["chicken", "--catalog", catalog_path, "--config", str(config)])
        assert code == 1
        assert "Invalid search config" in capsys.readouterr().err
