"""HeaderBlock — titre principal (h1)."""
from ..core.schemas import ComponentStyle, PageComponent
from .base import BaseBlock, RenderContext, esc, style_attr


class HeaderBlock(BaseBlock):
    component_type  = "header"
    label           = "Header"
    description     = "Large heading text"
    default_content = "Jaki Global"
    placeholder     = "Header Text"

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(
            fontFamily="Montserrat, sans-serif",
            fontSize="48px",
            fontWeight="700",
            color="#000000",
            backgroundColor="transparent",
            padding="32px 0",
            textAlign="center",
        )

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        s = comp.style
        decls = [
            ("font-family", s.fontFamily),
            ("font-size", s.fontSize or "32px"),
            ("font-weight", s.fontWeight or "700"),
        ]
        decls = [(k, v) for k, v in decls if v]
        return f"<h1{style_attr(decls)}>{self.text_or_placeholder(comp)}</h1>"

    def export(self, comp: PageComponent) -> str:
        return f"<h1{style_attr(self.declarations(comp))}>{esc(comp.content)}</h1>"
