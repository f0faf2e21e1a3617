"""Tests pages HTML — site public, boutique, checkout."""
from unittest.mock import patch

from src.errors import UpstreamError


def _page(admin, name, components=()):
    return admin.post("/api/pages", json={"name": name, "components": list(components)}).json()


def _comp(cid, type_, order=0, content="", **style):
    return {"id": cid, "type": type_, "content": content, "style": style, "order": order}


# ── Site public ──────────────────────────────────────────────────────────

def test_home_without_pages_shows_empty_card(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "This page is empty." in r.text
    assert "Please donate:" in r.text
    assert "$26KG1" in r.text


def test_home_prefers_page_named_home(admin):
    _page(admin, "About", [_comp("a", "header", content="About us")])
    _page(admin, " Home ", [_comp("h", "header", content="Welcome home")])
    text = admin.get("/").text
    assert "Welcome home" in text
    assert "About us" not in text


def test_home_falls_back_to_first_page(admin):
    _page(admin, "Landing", [_comp("t", "text", content="First page")])
    _page(admin, "Other", [_comp("o", "text", content="Second page")])
    assert "First page" in admin.get("/").text


def test_home_renders_backdrop_as_container(admin):
    _page(admin, "Home", [
        _comp("bg", "background", 0, backgroundColor="#222222"),
        _comp("h", "header", 1, content="Hi"),
    ])
    text = admin.get("/").text
    assert 'class="page-container" style="background-color: #222222' in text
    assert 'data-component-id="bg"' not in text
    assert 'class="select-overlay"' not in text
    assert 'class="canvas-clear"' not in text


def test_home_escapes_content(admin):
    _page(admin, "Home", [_comp("t", "text", content="<script>alert(1)</script>")])
    text = admin.get("/").text
    assert "<script>alert(1)</script>" not in text
    assert "&lt;script&gt;" in text


def test_product_grid_uses_mock_catalog(admin):
    _page(admin, "Home", [_comp("g", "productGrid")])
    text = admin.get("/").text
    assert "Sample T-Shirt" in text
    assert "From $24.99" in text
    assert "3 variants available" in text


def test_product_grid_catalog_error(admin):
    _page(admin, "Home", [_comp("g", "productGrid")])
    with patch("src.catalog.get_products", side_effect=UpstreamError("down")):
        r = admin.get("/")
    assert r.status_code == 200
    assert "Products are unavailable right now." in r.text


def test_catalog_not_fetched_without_grid(admin):
    _page(admin, "Home", [_comp("t", "text", content="plain")])
    with patch("src.catalog.get_products") as get:
        admin.get("/")
    get.assert_not_called()


# ── Boutique ─────────────────────────────────────────────────────────────

def test_shop_navigation_and_cart_badge(admin):
    first = _page(admin, "Home", [_comp("t", "text", content="Home body")])
    second = _page(admin, "Shop", [_comp("t2", "text", content="Shop body")])
    cart = admin.post("/api/cart", json={"items": [{
        "productId": "mock-1", "variantId": 1, "productTitle": "Sample T-Shirt",
        "price": 2499, "quantity": 3}]}).json()

    text = admin.get(f"/shop?page={second['id']}&cart={cart['id']}").text
    assert "Shop body" in text
    assert "Home body" not in text
    assert "Cart (3)" in text
    assert f'href="/shop?page={first["id"]}&amp;cart={cart["id"]}"' in text
    assert f'href="/checkout?cart={cart["id"]}"' in text


def test_shop_defaults_to_first_page(admin):
    _page(admin, "Home", [_comp("t", "text", content="Home body")])
    text = admin.get("/shop").text
    assert "Home body" in text
    assert "Cart (0)" in text


def test_shop_unknown_page_is_404(client):
    assert client.get("/shop?page=nope").status_code == 404


# ── Checkout ─────────────────────────────────────────────────────────────

def test_checkout_empty(client):
    text = client.get("/checkout").text
    assert "Complete Your Order" in text
    assert "Your cart is empty" in text


def test_checkout_unknown_cart_is_empty(client):
    assert "Your cart is empty" in client.get("/checkout?cart=nope").text


def test_checkout_summary(client):
    cart = client.post("/api/cart", json={"items": [
        {"productId": "p", "variantId": 1, "productTitle": "Tee", "variantTitle": "M", "price": 500, "quantity": 3},
        {"productId": "p", "variantId": 2, "productTitle": "Tee", "price": 250, "quantity": 1},
    ]}).json()
    text = client.get(f"/checkout?cart={cart['id']}").text
    assert "Order Summary" in text
    assert "$15.00" in text
    assert "$17.50" in text
