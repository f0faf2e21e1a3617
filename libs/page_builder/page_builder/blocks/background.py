"""
BackgroundBlock — section à fond couleur/image.

Le premier `background` d'une page n'est pas rendu ici : il devient le
backdrop du conteneur (voir renderer.layout). Les suivants passent par ce bloc.
"""
from typing import List

from ..core.schemas import ComponentStyle, PageComponent
from ..renderer.css import Declaration, background_image_css, style_declarations
from .base import BaseBlock, RenderContext, esc, style_attr


class BackgroundBlock(BaseBlock):
    component_type = "background"
    label          = "Background"
    description    = "Background section with color or image"
    placeholder    = "Background section - add content or image"
    wrapper_tag    = "section"

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(backgroundColor="#f5f5f5", padding="64px 32px", width="100%")

    def declarations(self, comp: PageComponent) -> List[Declaration]:
        decls = style_declarations(comp.style, skip=("backgroundImage", "height"))
        image = background_image_css(comp.style.backgroundImage)
        if image:
            decls += [("background-image", image), ("background-size", "cover"),
                      ("background-position", "center")]
        decls.append(("min-height", comp.style.height or "200px"))
        return decls

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        text = comp.content or (self.placeholder if ctx.editable else "")
        return f'<div style="padding: 32px">{esc(text)}</div>'

    def export(self, comp: PageComponent) -> str:
        return f"<div{style_attr(self.declarations(comp))}>{esc(comp.content)}</div>"
