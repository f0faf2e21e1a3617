"""
Catalogue print-on-demand.

GET /api/printify/shops   → boutiques (mock sans token)
GET /api/products         → produits de la première boutique
GET /api/products/{id}    → produit | 404
"""
from fastapi import APIRouter

from ... import catalog

router = APIRouter(tags=["Products"])


@router.get("/api/printify/shops")
def shops():
    return catalog.get_shops()


@router.get("/api/products")
def products():
    return [p.model_dump() for p in catalog.get_products()]


@router.get("/api/products/{product_id}")
def product(product_id: str):
    return catalog.get_product(product_id).model_dump()
