"""
Pages HTML publiques : site, boutique, checkout.

GET /                         → page "home"/"site" (sinon la première)
GET /shop?page=&cart=         → n'importe quelle page + navigation + badge panier
GET /checkout?cart=           → récapitulatif de commande
"""
import html
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from page_builder import PageConfig, format_price, render_page
from page_builder.renderer.chrome import document

from ... import catalog
from ...database import get_db
from ...errors import BuilderError, NotFoundError
from ...store import CartStore, PageStore

log = logging.getLogger(__name__)

router = APIRouter(tags=["Site"])

_HOME_NAMES = {"home", "site"}


def _active(flag: bool) -> str:
    return ' class="active"' if flag else ""


def pick_home(pages: List[PageConfig]) -> Optional[PageConfig]:
    for p in pages:
        if (p.name or "").strip().lower() in _HOME_NAMES:
            return p
    return pages[0] if pages else None


def _catalog_for(page: Optional[PageConfig]):
    """(produits, erreur) — le catalogue n'est interrogé que si la page a une grille."""
    if page is None or not any(c.type == "productGrid" for c in page.components):
        return [], False
    try:
        return catalog.get_products(), False
    except BuilderError as e:
        log.error("Catalogue indisponible : %s", e.detail)
        return [], True


def _render(page: Optional[PageConfig], header_html: str = "", extra_css: str = "") -> str:
    products, error = _catalog_for(page)
    return render_page(
        page.components if page else [],
        title=page.name if page else "Jaki Global",
        products=products,
        catalog_error=error,
        header_html=header_html,
        extra_css=extra_css,
    )


@router.get("/", response_class=HTMLResponse)
def home(db: Session = Depends(get_db)):
    return HTMLResponse(_render(pick_home(PageStore(db).list())))


# ── Boutique ─────────────────────────────────────────────────────────────────

_SHOP_CSS = """
    .shop-nav { position: sticky; top: 0; z-index: 10; background: rgba(255,255,255,.92); border-bottom: 1px solid #e4e4e7; }
    .shop-nav .inner { max-width: 72rem; margin: 0 auto; padding: 12px 24px; display: flex; gap: 8px; align-items: center; }
    .shop-nav a { padding: 6px 12px; border-radius: 6px; text-decoration: none; color: #18181b; font-size: 14px; }
    .shop-nav a.active { background: #3b82f6; color: #fff; }
    .shop-nav .cart { margin-left: auto; }"""


def _cart_count(db: Session, cart_id: Optional[str]) -> int:
    if not cart_id:
        return 0
    try:
        return sum(i["quantity"] for i in CartStore(db).get(cart_id)["items"])
    except NotFoundError:
        return 0


def shop_nav(pages: List[PageConfig], current_id: Optional[str], cart_id: Optional[str], count: int) -> str:
    cart_q = f"&amp;cart={html.escape(cart_id)}" if cart_id else ""
    links = "".join(
        f'<a href="/shop?page={html.escape(p.id)}{cart_q}"'
        f'{_active(p.id == current_id)}>{html.escape(p.name)}</a>'
        for p in pages
    )
    checkout = f"/checkout?cart={html.escape(cart_id)}" if cart_id else "/checkout"
    return (f'<header class="shop-nav"><div class="inner">{links}'
            f'<a class="cart" href="{checkout}">Cart ({count})</a></div></header>')


@router.get("/shop", response_class=HTMLResponse)
def shop(page: Optional[str] = None, cart: Optional[str] = None, db: Session = Depends(get_db)):
    pages = PageStore(db).list()
    if page:
        current = next((p for p in pages if p.id == page), None)
        if current is None:
            raise NotFoundError(f"Page {page} introuvable")
    else:
        current = pages[0] if pages else None
    nav = shop_nav(pages, current.id if current else None, cart, _cart_count(db, cart))
    return HTMLResponse(_render(current, header_html=nav, extra_css=_SHOP_CSS))


# ── Checkout ─────────────────────────────────────────────────────────────────

_CHECKOUT_CSS = """
    .checkout { max-width: 40rem; margin: 40px auto; padding: 0 24px; }
    .checkout h2 { font-size: 28px; margin-bottom: 16px; }
    .summary { border: 1px solid #e4e4e7; border-radius: 8px; padding: 20px; }
    .line, .subtotal, .total { display: flex; justify-content: space-between; padding: 6px 0; }
    .total { font-weight: 700; font-size: 18px; border-top: 1px solid #e4e4e7; margin-top: 8px; padding-top: 12px; }
    .muted { color: #71717a; text-align: center; padding: 16px 0; }"""


def checkout_body(cart: Optional[dict]) -> str:
    items = cart["items"] if cart else []
    if not items:
        lines = '<p class="muted">Your cart is empty</p>'
    else:
        rows = "".join(
            f'<div class="line"><span>{html.escape(i["productTitle"])}'
            f'{" — " + html.escape(i["variantTitle"]) if i.get("variantTitle") else ""} × {i["quantity"]}</span>'
            f'<span>{format_price(i["price"] * i["quantity"])}</span></div>'
            for i in items
        )
        total = format_price(cart["total"])
        lines = (f'{rows}<div class="subtotal"><span>Subtotal:</span><span>{total}</span></div>'
                 f'<div class="total"><span>Total:</span><span>{total}</span></div>')
    return (f'<main class="checkout"><h2>Complete Your Order</h2>'
            f'<section class="summary"><h3>Order Summary</h3>{lines}</section></main>')


@router.get("/checkout", response_class=HTMLResponse)
def checkout(cart: Optional[str] = None, db: Session = Depends(get_db)):
    data = None
    if cart:
        try:
            data = CartStore(db).get(cart)
        except NotFoundError:
            log.info("Checkout : panier %s introuvable", cart)
    return HTMLResponse(document(checkout_body(data), title="Checkout — Jaki Global",
                                 extra_css=_CHECKOUT_CSS))
