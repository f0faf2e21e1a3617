"""TextBlock — paragraphe."""
from ..core.schemas import ComponentStyle, PageComponent
from .base import BaseBlock, RenderContext, esc, style_attr


class TextBlock(BaseBlock):
    component_type  = "text"
    label           = "Text Box"
    description     = "Paragraph text"
    default_content = "Your text here..."
    placeholder     = "Text content goes here..."

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(
            fontFamily="Inter, sans-serif",
            fontSize="16px",
            fontWeight="400",
            color="#000000",
            backgroundColor="transparent",
            padding="16px",
        )

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        decls = [("font-family", comp.style.fontFamily)] if comp.style.fontFamily else []
        return f"<p{style_attr(decls)}>{self.text_or_placeholder(comp)}</p>"

    def export(self, comp: PageComponent) -> str:
        return f"<p{style_attr(self.declarations(comp))}>{esc(comp.content)}</p>"
