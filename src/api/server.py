"""FastAPI server for the pet food product filter."""

import logging
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from src.data_layer.catalog_db import CatalogDB
from src.data_layer.exceptions import CatalogLoadError
from src.output.formatters import format_results_json
from src.scoring.match_ranker import DEFAULT_RESULT_LIMIT, search
from src.scoring.protein_purity import evaluate_protein_purity

logger = logging.getLogger(__name__)

catalog_path = "data/products.json"

app = FastAPI(title="Pet Food Filter API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Local development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ProductSummary(BaseModel):
    id: str
    name: str
    brand: str


class PurityResponse(BaseModel):
    id: str
    percent: int
    tier: str


def _load_catalog() -> CatalogDB:
    try:
        return CatalogDB(catalog_path)
    except CatalogLoadError as exc:
        logger.error("Catalog load failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.get("/api/search")
def search_products(
    q: str = "",
    limit: Optional[int] = Query(DEFAULT_RESULT_LIMIT, ge=0),
) -> Dict[str, Any]:
    catalog = _load_catalog()
    results = search(catalog.get_all_products(), q, limit=limit or None)
    return format_results_json(results)


@app.get("/api/products", response_model=List[ProductSummary])
def list_products() -> List[ProductSummary]:
    catalog = _load_catalog()
    return [
        ProductSummary(id=p.id, name=p.name, brand=p.brand)
        for p in catalog.get_all_products()
    ]


@app.get("/api/products/{product_id}/purity", response_model=PurityResponse)
def product_purity(product_id: str) -> PurityResponse:
    catalog = _load_catalog()
    product = catalog.get_product_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    purity = evaluate_protein_purity(product.protein_sources)
    return PurityResponse(id=product.id, percent=purity.percent, tier=purity.tier)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
