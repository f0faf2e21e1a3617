"""Tests export — document autonome, règles par type, backdrop, déterminisme."""
from fastapi import FastAPI
from fastapi.testclient import TestClient

from page_builder import EXPORT_FILENAME, PageComponent, export_page
from page_builder.router import router


def _c(cid, ctype, order, **kw):
    return PageComponent(id=cid, type=ctype, order=order, **kw)


def test_export_document_shell():
    html = export_page([])
    assert html.startswith("<!DOCTYPE html>")
    assert '<meta charset="UTF-8">' in html
    assert 'name="viewport"' in html
    assert "family=Inter:wght@400;500;600;700&amp;family=Montserrat" in html
    assert "margin: 0;" in html
    assert "<footer" in html and "$26KG1" in html


def test_export_filename():
    assert EXPORT_FILENAME == "jaki-global-site.html"


def test_export_header_style_kebab_case_in_order():
    c = _c("h", "header", 0, content="Hello", style={"fontSize": "48px", "textAlign": "center"})
    assert '<h1 style="font-size: 48px; text-align: center">Hello</h1>' in export_page([c])


def test_export_text_and_button():
    html = export_page([
        _c("t", "text", 0, content="Body", style={"color": "#111"}),
        _c("b", "button", 1, content="Go"),
    ])
    assert '<p style="color: #111">Body</p>' in html
    assert '<button style="padding: 12px 24px; border-radius: 6px; border: 1px solid currentColor">Go</button>' in html


def test_export_image_only_with_content():
    assert "<img" not in export_page([_c("i", "image", 0)])
    html = export_page([_c("i", "image", 0, content="/objects/1", style={"width": "100%"})])
    assert '<img src="/objects/1" style="width: 100%" alt="Image" />' in html


def test_export_inline_background_appends_image_clause():
    html = export_page([
        _c("bg1", "background", 0),
        _c("bg2", "background", 1, content="Promo",
           style={"backgroundColor": "#000", "backgroundImage": "url(http://x/y.png)"}),
    ])
    assert ("background-color: #000; background-image: url(&quot;http://x/y.png&quot;); "
            "background-size: cover") in html
    assert "Promo</div>" in html


def test_export_background_image_url_escaped_like_live_render():
    bg = _c("bg", "background", 0, style={"backgroundImage": 'http://x/a b(1)".png'})
    html = export_page([bg, _c("t", "text", 1, content="x")])
    assert 'background-image: url(&quot;http://x/a b(1)\\&quot;.png&quot;); background-size: cover' in html


def test_export_product_grid_placeholder():
    html = export_page([_c("g", "productGrid", 0)])
    assert "<p>Product grid will be populated from Printify</p>" in html


def test_export_applies_backdrop_to_main():
    html = export_page([
        _c("h", "header", 1, content="Hi"),
        _c("bg", "background", 0, style={"backgroundColor": "#eee"}, content="BACKDROP"),
        _c("t", "text", 2, content="Body"),
    ])
    assert '<main style="background-color: #eee; padding: 0; min-height: 100%">' in html
    assert "BACKDROP" not in html
    assert html.index("Hi</h1>") < html.index("Body</p>")


def test_export_is_deterministic():
    comps = [_c("t", "text", 1, content="b"), _c("h", "header", 0, content="a")]
    assert export_page(comps) == export_page(list(reversed(comps)))


def test_export_escapes_content():
    html = export_page([_c("t", "text", 0, content="<script>x</script>")])
    assert "<script>" not in html


# ── Router ──────────────────────────────────────────────────────────────────

def _client():
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def test_router_catalog():
    data = _client().get("/page-builder/catalog").json()
    assert [c["type"] for c in data["components"]][0] == "header"
    assert len(data["presets"]["colors"]) == 18
    assert len(data["presets"]["metallic_colors"]) == 8


def test_router_validate():
    client = _client()
    ok = client.post("/page-builder/validate", json=[{"id": "a", "type": "text"}]).json()
    assert ok == {"valid": True}
    bad = client.post("/page-builder/validate", json=[{"id": "a", "type": "carousel"}]).json()
    assert bad["valid"] is False
    assert bad["errors"]


def test_router_render_and_export():
    client = _client()
    body = [{"id": "h", "type": "header", "content": "Hi", "order": 0}]
    r = client.post("/page-builder/render", json=body)
    assert r.status_code == 200
    assert "Hi" in r.text
    r = client.post("/page-builder/export", json=body)
    assert r.headers["content-disposition"] == f'attachment; filename="{EXPORT_FILENAME}"'
    assert "Hi</h1>" in r.text
