"""
ButtonBlock — bouton décoratif (aucune navigation).

Le style complet (fond, couleur, padding, coins) est porté par le <button>
lui-même, en live comme à l'export ; le wrapper live ne garde que la marge.
"""
from typing import List

from ..core.schemas import ComponentStyle, PageComponent
from ..renderer.css import Declaration, style_declarations
from .base import BaseBlock, RenderContext, esc, style_attr

_CHROME_DEFAULTS = (
    ("padding", "12px 24px"),
    ("border-radius", "6px"),
    ("border", "1px solid currentColor"),
)


class ButtonBlock(BaseBlock):
    component_type  = "button"
    label           = "Button"
    description     = "Call-to-action button"
    default_content = "Click Here"
    placeholder     = "Button"

    def default_style(self) -> ComponentStyle:
        return ComponentStyle(
            fontFamily="Inter, sans-serif",
            fontSize="16px",
            fontWeight="600",
            color="#ffffff",
            backgroundColor="#3b82f6",
            padding="12px 32px",
            margin="16px 0",
        )

    def declarations(self, comp: PageComponent) -> List[Declaration]:
        decls = style_declarations(comp.style)
        present = {k for k, _ in decls}
        return decls + [(k, v) for k, v in _CHROME_DEFAULTS if k not in present]

    def button_declarations(self, comp: PageComponent) -> List[Declaration]:
        return [(k, v) for k, v in self.declarations(comp) if k != "margin"]

    def wrapper_style(self, comp: PageComponent) -> List[Declaration]:
        return [("margin", comp.style.margin)] if comp.style.margin else []

    def wrapper_declarations(self, ctx: RenderContext) -> List[Declaration]:
        # inline-block : la zone cliquable colle au bouton
        return [("display", "inline-block")] if ctx.editable else []

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        return (f'<button type="button"{style_attr(self.button_declarations(comp))}>'
                f'{self.text_or_placeholder(comp)}</button>')

    def export(self, comp: PageComponent) -> str:
        return f"<button{style_attr(self.declarations(comp))}>{esc(comp.content)}</button>"
