"""
Module CATALOG — Catalogue print-on-demand (Printify)
Shops + Products via API REST v1, catalogue mock si aucun token n'est configuré.
"""
import logging, os
from typing import Dict, List, Optional

import requests

from page_builder.core.schemas import Product, ProductVariant

from .errors import NotFoundError, UpstreamError

log = logging.getLogger(__name__)

_API_BASE   = "https://api.printify.com/v1"
_MAX_IMAGES = 5

MOCK_SHOP = {"id": 0, "title": "Mock Shop"}

MOCK_PRODUCTS: List[Product] = [
    Product(
        id="mock-1",
        title="Sample T-Shirt",
        description="Configure your Printify API token to see real products",
        images=["https://via.placeholder.com/600x600?text=Sample+T-Shirt"],
        variants=[
            ProductVariant(id=1, title="Black / M", price=2499, options={"color": "Black", "size": "M"}),
            ProductVariant(id=2, title="White / M", price=2499, options={"color": "White", "size": "M"}),
            ProductVariant(id=3, title="Black / L", price=2699, options={"color": "Black", "size": "L"}),
        ],
        tags=["sample"],
    ),
    Product(
        id="mock-2",
        title="Sample Hoodie",
        description="Configure your Printify API token to see real products",
        images=["https://via.placeholder.com/600x600?text=Sample+Hoodie"],
        variants=[
            ProductVariant(id=4, title="Gray / M", price=3999, options={"color": "Gray", "size": "M"}),
            ProductVariant(id=5, title="Navy / M", price=3999, options={"color": "Navy", "size": "M"}),
        ],
        tags=["sample"],
    ),
]


def _token() -> Optional[str]:
    return os.getenv("PRINTIFY_API_TOKEN") or None


def _fetch(endpoint: str, token: str):
    """GET authentifié ; toute erreur réseau ou HTTP devient UpstreamError."""
    try:
        resp = requests.get(
            f"{_API_BASE}{endpoint}",
            headers={"Authorization": f"Bearer {token}", "Content-Type": "application/json"},
            timeout=15,
        )
    except requests.RequestException as e:
        log.error("Printify %s injoignable : %s", endpoint, e)
        raise UpstreamError(f"Printify API unreachable: {e}") from e
    if resp.status_code == 404:
        raise NotFoundError(f"Printify resource not found: {endpoint}")
    if not resp.ok:
        log.error("Printify %s status=%s body=%s", endpoint, resp.status_code, resp.text[:200])
        raise UpstreamError(f"Printify API error: {resp.status_code}")
    return resp.json()


# ── Normalisation ─────────────────────────────────────────────────────────

def _images(raw: List[dict]) -> List[str]:
    """Image(s) par défaut d'abord, puis les autres, 5 au maximum."""
    first = [i["src"] for i in raw if i.get("is_default") or str(i.get("position")) == "0"]
    rest  = [i["src"] for i in raw if not (i.get("is_default") or str(i.get("position")) == "0")]
    return (first + rest)[:_MAX_IMAGES]


def _options(raw) -> Dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): str(v) for k, v in raw.items()}


def normalize_product(raw: dict) -> Product:
    return Product(
        id=str(raw["id"]),
        title=raw.get("title", ""),
        description=raw.get("description") or "",
        images=_images(raw.get("images") or []),
        variants=[
            ProductVariant(
                id=v["id"],
                title=v.get("title", ""),
                price=v.get("price", 0),
                is_enabled=v.get("is_enabled", True),
                options=_options(v.get("options")),
            )
            for v in raw.get("variants") or []
        ],
        tags=raw.get("tags") or [],
    )


# ── API publique ──────────────────────────────────────────────────────────

def get_shops() -> List[dict]:
    token = _token()
    if not token:
        log.warning("PRINTIFY_API_TOKEN non configuré — shop mock")
        return [MOCK_SHOP]
    return _fetch("/shops.json", token)


def get_products(shop_id: Optional[int] = None) -> List[Product]:
    token = _token()
    if not token:
        log.warning("PRINTIFY_API_TOKEN non configuré — produits mock")
        return list(MOCK_PRODUCTS)
    if shop_id is None:
        shop_id = _first_shop_id()
    data = _fetch(f"/shops/{shop_id}/products.json", token)
    return [normalize_product(p) for p in data.get("data", [])]


def get_product(product_id: str, shop_id: Optional[int] = None) -> Product:
    token = _token()
    if not token:
        for p in MOCK_PRODUCTS:
            if p.id == product_id:
                return p
        raise NotFoundError(f"Produit {product_id} introuvable")
    if shop_id is None:
        shop_id = _first_shop_id()
    return normalize_product(_fetch(f"/shops/{shop_id}/products/{product_id}.json", token))


def _first_shop_id() -> int:
    shops = get_shops()
    if not shops:
        raise UpstreamError("Aucune boutique Printify")
    return shops[0]["id"]


# ── Choix de variante ─────────────────────────────────────────────────────

def option_types(product: Product) -> List[str]:
    """Clés d'options (color, size…) dans l'ordre d'apparition."""
    keys: List[str] = []
    for v in product.enabled_variants():
        for k in v.options:
            if k not in keys:
                keys.append(k)
    return keys


def option_values(product: Product, key: str) -> List[str]:
    values: List[str] = []
    for v in product.enabled_variants():
        val = v.options.get(key)
        if val is not None and val not in values:
            values.append(val)
    return values


def find_matching_variant(product: Product, options: Dict[str, str]) -> Optional[ProductVariant]:
    """Première variante active dont toutes les options demandées correspondent."""
    for v in product.enabled_variants():
        if all(v.options.get(k) == val for k, val in options.items()):
            return v
    return None


def min_price(product: Product) -> Optional[int]:
    return product.min_price()
