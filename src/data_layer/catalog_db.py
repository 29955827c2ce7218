"""Product catalog for loading pet food products from JSON."""
import json
import logging
from pathlib import Path
from typing import List, Optional

from src.data_layer.exceptions import CatalogLoadError
from src.data_layer.models import ProductRecord

logger = logging.getLogger(__name__)


class CatalogDB:
    """Database for managing products loaded from JSON.

    The file may hold either a bare list of product objects or an object
    with a "products" list.
    """

    def __init__(self, json_path: str):
        """Initialize catalog from JSON file.

        Args:
            json_path: Path to JSON file containing products

        Raises:
            CatalogLoadError: If the file is missing, unreadable, or not a catalog
        """
        self.json_path = Path(json_path)
        self._products: List[ProductRecord] = []
        self._load_products()

    def _load_products(self):
        """Load products from JSON file."""
        try:
            with open(self.json_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise CatalogLoadError(str(self.json_path), "file not found") from exc
        except json.JSONDecodeError as exc:
            raise CatalogLoadError(str(self.json_path), f"invalid JSON ({exc.msg})") from exc

        if isinstance(data, dict):
            data = data.get("products", [])
        if not isinstance(data, list):
            raise CatalogLoadError(str(self.json_path), "expected a list of products")

        for position, entry in enumerate(data):
            if not isinstance(entry, dict):
                logger.warning("Skipping catalog entry %d: not an object", position)
                continue
            self._products.append(ProductRecord.from_dict(entry))

        logger.debug("Loaded %d products from %s", len(self._products), self.json_path)

    def get_all_products(self) -> List[ProductRecord]:
        """Get all products in the catalog.

        Returns:
            List of all ProductRecord objects
        """
        return self._products.copy()

    def get_product_by_id(self, product_id: str) -> Optional[ProductRecord]:
        """Get a product by its ID.

        Args:
            product_id: Unique product identifier

        Returns:
            ProductRecord if found, None otherwise
        """
        for product in self._products:
            if product.id == product_id:
                return product
        return None
