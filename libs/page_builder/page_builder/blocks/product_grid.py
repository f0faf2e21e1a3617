"""
ProductGridBlock — grille du catalogue print-on-demand.

Canvas : emplacement réservé. Page publique : cartes produits fournies par le
contexte de rendu (le bloc ne va jamais chercher le catalogue lui-même).
Export : texte statique, le catalogue live ne peut pas être embarqué.
"""
from ..core.schemas import ComponentStyle, PageComponent, Product, format_price
from .base import BaseBlock, RenderContext, esc, style_attr

NO_IMAGE = "https://via.placeholder.com/400x400?text=No+Image"
EXPORT_TEXT = "Product grid will be populated from Printify"


class ProductGridBlock(BaseBlock):
    component_type = "productGrid"
    label          = "Product Grid"
    description    = "Display Printify products"
    placeholder    = "Products from Printify will be displayed here"

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(padding="32px 0", width="100%")

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        if ctx.editable:
            return (
                '<div class="placeholder product-grid-placeholder">'
                '<p class="placeholder-title">Product Grid</p>'
                f'<p>{esc(self.placeholder)}</p></div>'
            )
        if ctx.catalog_error:
            return '<div class="product-grid-notice"><p>Products are unavailable right now.</p></div>'
        if not ctx.products:
            return '<div class="product-grid-notice"><p>No products available at this time.</p></div>'
        cards = "\n".join(render_product_card(p) for p in ctx.products)
        return f'<div class="product-grid">\n{cards}\n</div>'

    def export(self, comp: PageComponent) -> str:
        return f"<div{style_attr(self.declarations(comp))}><p>{EXPORT_TEXT}</p></div>"


def render_product_card(product: Product) -> str:
    image = product.images[0] if product.images else NO_IMAGE
    enabled = product.enabled_variants()
    price = product.min_price()
    price_html = f'<div class="product-price">From {format_price(price)}</div>' if price is not None else ""
    count = f'<p class="product-variants">{len(enabled)} variants available</p>' if len(enabled) > 1 else ""
    return (
        f'<article class="product-card" data-product-id="{esc(product.id)}">'
        f'<img src="{esc(image)}" alt="{esc(product.title)}" />'
        f'<h3>{esc(product.title)}</h3>{count}{price_html}'
        f'</article>'
    )
