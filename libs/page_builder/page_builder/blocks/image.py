"""ImageBlock — image pleine largeur, ratio conservé. `content` = URL."""
from ..core.schemas import ComponentStyle, PageComponent
from .base import BaseBlock, RenderContext, esc, style_attr

_IMG_DECLS = [("max-width", "100%"), ("height", "auto"), ("display", "block")]


class ImageBlock(BaseBlock):
    component_type = "image"
    label          = "Image"
    description    = "Upload or link an image"
    placeholder    = "No image URL set"

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(width="100%", padding="16px")

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        if not comp.content:
            return (
                '<div class="placeholder image-placeholder">'
                f'<p>{esc(self.placeholder)}</p></div>'
            )
        drag = ' draggable="false"' if ctx.editable else ""
        return f'<img src="{esc(comp.content)}" alt="Image"{style_attr(_IMG_DECLS)}{drag} />'

    def export(self, comp: PageComponent) -> str:
        if not comp.content:
            return ""
        return f'<img src="{esc(comp.content)}"{style_attr(self.declarations(comp))} alt="Image" />'
