"""Tests for loading the product catalog."""
import pytest
import json
from pathlib import Path
from tempfile import NamedTemporaryFile

from src.data_layer.catalog_db import CatalogDB
from src.data_layer.exceptions import CatalogLoadError


def _write_catalog(data) -> str:
    with NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
        return f.name


class TestCatalogDB:
    """Tests for CatalogDB."""

    def test_load_products_from_list(self):
        """Test loading a bare list of products."""
        temp_path = _write_catalog([
            {
                "id": "p1",
                "name": "Chicken Recipe",
                "brand": "Acme",
                "contains_grain": False,
                "protein_sources": ["chicken"],
                "ingredients_list": "chicken;peas;chicken_meal",
            }
        ])

        try:
            db = CatalogDB(temp_path)
            products = db.get_all_products()
            assert len(products) == 1
            assert products[0].id == "p1"
            assert products[0].contains_grain is False
            assert products[0].protein_sources == ["chicken"]
        finally:
            Path(temp_path).unlink()

    def test_load_products_from_object(self):
        """Test loading an object with a "products" list."""
        temp_path = _write_catalog({"products": [{"id": "a"}, {"id": "b"}]})

        try:
            db = CatalogDB(temp_path)
            assert [p.id for p in db.get_all_products()] == ["a", "b"]
        finally:
            Path(temp_path).unlink()

    def test_non_object_entries_skipped(self, caplog):
        temp_path = _write_catalog([{"id": "a"}, "oops", 3])

        try:
            db = CatalogDB(temp_path)
            assert [p.id for p in db.get_all_products()] == ["a"]
            assert "Skipping catalog entry 1" in caplog.text
        finally:
            Path(temp_path).unlink()

    def test_get_product_by_id(self):
        temp_path = _write_catalog([{"id": "a", "name": "Alpha"}])

        try:
            db = CatalogDB(temp_path)
            assert db.get_product_by_id("a").name == "Alpha"
            assert db.get_product_by_id("missing") is None
        finally:
            Path(temp_path).unlink()

    def test_get_all_products_returns_copy(self):
        temp_path = _write_catalog([{"id": "a"}])

        try:
            db = CatalogDB(temp_path)
            db.get_all_products().clear()
            assert len(db.get_all_products()) == 1
        finally:
            Path(temp_path).unlink()

    def test_missing_file(self):
        with pytest.raises(CatalogLoadError, match="file not found"):
            CatalogDB("/nonexistent/products.json")

    def test_invalid_json(self):
        temp_path = _write_catalog("{not json")

        try:
            with pytest.raises(CatalogLoadError, match="invalid JSON"):
                CatalogDB(temp_path)
        finally:
            Path(temp_path).unlink()

    def test_wrong_shape(self):
        temp_path = _write_catalog({"products": "nope"})

        try:
            with pytest.raises(CatalogLoadError, match="expected a list"):
                CatalogDB(temp_path)
        finally:
            Path(temp_path).unlink()

    def test_sample_catalog_loads(self):
        """Test that the bundled sample catalog is valid."""
        sample = Path(__file__).resolve().parent.parent / "data" / "products.json"
        db = CatalogDB(str(sample))
        assert len(db.get_all_products()) > 0
