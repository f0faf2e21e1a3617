"""Tests blocs — défauts de création, rendu live par type, toolbox."""
import re

import pytest

from page_builder import (
    BLOCK_REGISTRY,
    COMPONENT_TYPES,
    CanvasLinks,
    PageComponent,
    Product,
    ProductVariant,
    RenderContext,
    create_component,
    export_page,
    toolbox,
)
from page_builder.blocks import check_registry


def _render(comp, **ctx):
    return BLOCK_REGISTRY[comp.type].render(comp, RenderContext(**ctx))


# ── Création ────────────────────────────────────────────────────────────────

def test_registry_covers_every_type():
    assert set(BLOCK_REGISTRY) == set(COMPONENT_TYPES)


def test_registry_gap_raises():
    partial = {k: v for k, v in BLOCK_REGISTRY.items() if k != "button"}
    with pytest.raises(RuntimeError, match="button"):
        check_registry(partial)


def test_create_header_defaults():
    c = create_component("header", order=4)
    assert c.type == "header"
    assert c.order == 4
    assert c.content == "Jaki Global"
    assert c.style.fontSize == "48px"
    assert c.style.fontWeight == "700"
    assert c.style.textAlign == "center"
    assert c.id.startswith("header-")


def test_create_background_defaults():
    c = create_component("background", order=0)
    assert c.content == ""
    assert c.style.backgroundColor == "#f5f5f5"
    assert c.style.padding == "64px 32px"


def test_create_button_defaults():
    c = create_component("button", order=0)
    assert c.content == "Click Here"
    assert c.style.backgroundColor == "#3b82f6"
    assert c.style.color == "#ffffff"


def test_created_ids_unique():
    ids = {create_component("text", order=i).id for i in range(50)}
    assert len(ids) == 50


def test_defaults_are_independent_copies():
    a = create_component("text", order=0)
    b = create_component("text", order=1)
    a.style = a.style.merged({"color": "#ff0000"})
    assert b.style.color == "#000000"


def test_create_unknown_type_raises():
    with pytest.raises(KeyError):
        create_component("carousel", order=0)


def test_toolbox_labels():
    labels = [entry["label"] for entry in toolbox()]
    assert labels == ["Header", "Text Box", "Image", "Background", "Button", "Product Grid"]


# ── Rendu live ──────────────────────────────────────────────────────────────

def test_header_placeholder_when_empty():
    html = _render(PageComponent(id="h", type="header"))
    assert "<h1" in html
    assert "Header Text" in html
    assert "font-size: 32px" in html


def test_header_content_escaped():
    html = _render(PageComponent(id="h", type="header", content="<b>Hi</b>"))
    assert "&lt;b&gt;Hi&lt;/b&gt;" in html
    assert "<b>" not in html


def test_text_placeholder():
    assert "Text content goes here..." in _render(PageComponent(id="t", type="text"))


def test_image_with_url():
    html = _render(PageComponent(id="i", type="image", content="/objects/abc"))
    assert '<img src="/objects/abc"' in html
    assert "max-width: 100%" in html


def test_image_without_url_shows_placeholder():
    html = _render(PageComponent(id="i", type="image"))
    assert "<img" not in html
    assert "No image URL set" in html


def test_inline_background_section():
    comp = PageComponent(id="bg2", type="background", content="Sale",
                         style={"backgroundImage": 'url("http://x/y.png")'})
    html = _render(comp)
    assert html.startswith("<section")
    assert "background-image: url(&quot;http://x/y.png&quot;)" in html
    assert "min-height: 200px" in html
    assert "Sale" in html


def test_background_placeholder_only_in_editor():
    comp = PageComponent(id="bg", type="background")
    assert "Background section" in _render(comp, editable=True)
    assert "Background section" not in _render(comp)


def test_button_chrome():
    html = _render(PageComponent(id="b", type="button"))
    assert '<button type="button"' in html
    assert "border-radius: 6px" in html
    assert ">Button</button>" in html


def _button_style(html):
    return re.search(r'<button[^>]* style="([^"]*)"', html).group(1)


def test_button_fill_matches_between_editor_and_export():
    comp = create_component("button", order=0)
    live = _render(comp, editable=True)
    exported = export_page([comp])
    for style in (_button_style(live), _button_style(exported)):
        assert "background-color: #3b82f6" in style
        assert "color: #ffffff" in style
        assert "padding: 12px 32px" in style
    assert _button_style(live) == _button_style(exported).replace("; margin: 16px 0", "")
    wrapper = re.search(r'<div data-component-id="[^"]+" data-component-type="button" style="([^"]*)"', live)
    assert "background-color" not in wrapper.group(1)
    assert "margin: 16px 0" in wrapper.group(1)


def test_product_grid_placeholder_in_editor():
    html = _render(PageComponent(id="g", type="productGrid"), editable=True)
    assert "Products from Printify will be displayed here" in html


def test_product_grid_cards_in_public_page():
    product = Product(id="p1", title="Tee", images=["http://img/1.png"], variants=[
        ProductVariant(id=1, price=2999), ProductVariant(id=2, price=3499),
    ])
    html = _render(PageComponent(id="g", type="productGrid"), products=[product])
    assert 'data-product-id="p1"' in html
    assert "From $29.99" in html
    assert "2 variants available" in html


def test_product_grid_catalog_error_notice():
    html = _render(PageComponent(id="g", type="productGrid"), catalog_error=True)
    assert "unavailable" in html


# ── Sélection ───────────────────────────────────────────────────────────────

def test_selected_component_outlined_with_delete_chip():
    comp = PageComponent(id="t1", type="text")
    html = _render(comp, editable=True, selected_id="t1")
    assert "outline: 2px solid #3b82f6" in html
    assert '<form class="delete-chip" method="post" action="?delete=t1">' in html
    assert '<button type="submit" aria-label="Delete component"' in html


def test_unselected_component_has_no_chip():
    html = _render(PageComponent(id="t1", type="text"), editable=True, selected_id="other")
    assert "outline: none" in html
    assert 'class="delete-chip"' not in html
    assert '<a class="select-overlay" href="?selected=t1" aria-label="Select Text Box">' in html


def test_public_render_has_no_selection_affordances():
    html = _render(PageComponent(id="t1", type="text"), selected_id="t1")
    assert "outline" not in html
    assert "select-overlay" not in html
    assert "delete-chip" not in html


def test_canvas_links_fill_encoded_component_id():
    links = CanvasLinks(select="/builder?page=p1&selected={id}", delete="/builder/pages/p1/components/{id}/delete")
    html = _render(PageComponent(id="a b&c", type="text"), editable=True, selected_id="a b&c", links=links)
    assert 'href="/builder?page=p1&amp;selected=a%20b%26c"' in html
    assert 'action="/builder/pages/p1/components/a%20b%26c/delete"' in html
