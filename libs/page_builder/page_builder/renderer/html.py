"""
Renderer HTML live — canvas éditable et page publique.

Pipeline commun :
  tri stable par order → partition (backdrop, contenu) → style du conteneur
  → dispatch par type via BLOCK_REGISTRY
Un type inconnu ne lève jamais : il est ignoré.
"""
import logging
from typing import Iterable, List, Optional

from ..blocks import BLOCK_REGISTRY, CanvasLinks, RenderContext
from ..blocks.base import esc, style_attr
from ..core.schemas import PageComponent, Product
from .chrome import LIVE_CSS, SITE_TITLE, document
from .css import container_declarations
from .layout import partition

log = logging.getLogger(__name__)

EMPTY_CANVAS = (
    '<div class="empty-state"><div>'
    '<p>Your canvas is empty</p>'
    '<p>Click on components from the toolbox to add them to your page</p>'
    '</div></div>'
)
EMPTY_PAGE_CARD = (
    '<div class="empty-card">'
    '<h2>This page is empty.</h2>'
    '<p>Add content in the builder and click Save to publish.</p>'
    '</div>'
)


def render_components(components: Iterable[PageComponent], ctx: RenderContext) -> List[str]:
    """Fragments HTML des composants de contenu, dans l'ordre donné."""
    parts = []
    for comp in components:
        block = BLOCK_REGISTRY.get(comp.type)
        if block is None:
            log.debug("type de composant inconnu ignoré : %s (%s)", comp.type, comp.id)
            continue
        parts.append(block.render(comp, ctx))
    return parts


def render_container(components: Iterable[PageComponent], ctx: RenderContext) -> str:
    """Conteneur de page (backdrop appliqué) + contenu ou état vide."""
    backdrop, content = partition(components)
    attrs = ' class="page-container"'
    head = ""
    if ctx.editable:
        attrs = ' class="page-container editing"'
        # clic dans le vide du canvas : désélection
        head = f'<a class="canvas-clear" href="{esc(ctx.links.select_url(None))}" aria-label="Clear selection"></a>'
        if backdrop is not None:
            selected = " selected" if ctx.selected_id == backdrop.id else ""
            head += (
                '<div style="position: relative">'
                f'<a class="backdrop-select{selected}" href="{esc(ctx.links.select_url(backdrop.id))}" '
                'title="Select page background">Canvas Background</a>'
                '</div>'
            )
    if content:
        body = "\n".join(render_components(content, ctx))
    else:
        body = EMPTY_CANVAS if ctx.editable else EMPTY_PAGE_CARD
    return f"<div{attrs}{style_attr(container_declarations(backdrop))}>\n{head}{body}\n</div>"


def render_canvas(
    components: Iterable[PageComponent],
    selected_id: Optional[str] = None,
    links: Optional[CanvasLinks] = None,
) -> str:
    """Fragment du canvas éditable (sans document autour)."""
    ctx = RenderContext(editable=True, selected_id=selected_id, links=links or CanvasLinks())
    return render_container(components, ctx)


def render_page(
    components: Iterable[PageComponent],
    title: str = SITE_TITLE,
    products: Optional[List[Product]] = None,
    catalog_error: bool = False,
    header_html: str = "",
    extra_css: str = "",
) -> str:
    """Document public complet. Une page sans aucun composant affiche la carte vide."""
    components = list(components)
    if not components:
        main = EMPTY_PAGE_CARD
    else:
        ctx = RenderContext(products=products or [], catalog_error=catalog_error)
        main = render_container(components, ctx)
    return document(f"{header_html}<main>\n{main}\n</main>", title=title, extra_css=LIVE_CSS + extra_css)
