"""
Bloc de base page_builder.

Un bloc = une variante du type fermé de composant. Chaque variante porte
une seule fois : ses défauts de création, sa règle de rendu live et sa
règle d'export. Rendu et export partagent `declarations()`.
"""
import html
import uuid
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote

from ..core.schemas import ComponentStyle, PageComponent, Position, Product
from ..core.design_system import SELECTION_OUTLINE
from ..renderer.css import Declaration, serialize, style_declarations


@dataclass
class CanvasLinks:
    """
    Cibles des contrôles du canvas éditable. `{id}` est remplacé par l'id du
    composant, encodé pour l'URL. Par défaut : query string relative.
    """
    select: str = "?selected={id}"
    clear:  str = "?"
    delete: str = "?delete={id}"     # action POST du chip de suppression

    @staticmethod
    def _fill(template: str, component_id: str) -> str:
        return template.replace("{id}", quote(component_id, safe=""))

    def select_url(self, component_id: Optional[str]) -> str:
        return self._fill(self.select, component_id) if component_id else self.clear

    def delete_url(self, component_id: str) -> str:
        return self._fill(self.delete, component_id)


@dataclass
class RenderContext:
    """Contexte de rendu : canvas éditable (sélection, liens) ou page publique (catalogue)."""
    editable:      bool                    = False
    selected_id:   Optional[str]           = None
    products:      List[Product]           = field(default_factory=list)
    catalog_error: bool                    = False
    links:         CanvasLinks             = field(default_factory=CanvasLinks)


def esc(value) -> str:
    return html.escape(str(value), quote=True)


def style_attr(decls: List[Declaration]) -> str:
    css = serialize(decls)
    return f' style="{esc(css)}"' if css else ""


class BaseBlock:
    """Classe parente des six variantes de composant."""
    component_type:  str = ""
    label:           str = ""
    description:     str = ""
    default_content: str = ""
    placeholder:     str = ""
    wrapper_tag:     str = "div"

    # ── Création ────────────────────────────────────────────────────────────

    def default_style(self) -> ComponentStyle:
        return ComponentStyle()

    def create(self, order) -> PageComponent:
        """Nouveau composant : id frais, défauts du type, position (0, 0)."""
        return PageComponent(
            id=f"{self.component_type}-{uuid.uuid4().hex[:12]}",
            type=self.component_type,
            content=self.default_content,
            style=self.default_style(),
            position=Position(),
            order=order,
        )

    # ── Déclarations partagées ──────────────────────────────────────────────

    def declarations(self, comp: PageComponent) -> List[Declaration]:
        return style_declarations(comp.style)

    # ── Rendu live ──────────────────────────────────────────────────────────

    def render(self, comp: PageComponent, ctx: RenderContext) -> str:
        decls = self.wrapper_style(comp) + [("position", "relative")] + self.wrapper_declarations(ctx)
        attrs = f' data-component-id="{esc(comp.id)}" data-component-type="{comp.type}"'
        controls = ""
        if ctx.editable:
            selected = ctx.selected_id == comp.id
            decls += [
                ("outline", f"2px solid {SELECTION_OUTLINE}" if selected else "none"),
                ("outline-offset", "2px"),
            ]
            controls = (
                f'<a class="select-overlay" href="{esc(ctx.links.select_url(comp.id))}" '
                f'aria-label="Select {esc(self.label)}"></a>'
            )
            if selected:
                attrs += ' class="selected"'
                controls += (
                    f'<form class="delete-chip" method="post" action="{esc(ctx.links.delete_url(comp.id))}">'
                    '<button type="submit" aria-label="Delete component" title="Delete">&times;</button>'
                    '</form>'
                )
        inner = self.render_inner(comp, ctx)
        return f"<{self.wrapper_tag}{attrs}{style_attr(decls)}>{inner}{controls}</{self.wrapper_tag}>"

    def wrapper_style(self, comp: PageComponent) -> List[Declaration]:
        """Style porté par le wrapper live ; par défaut, tout le style du composant."""
        return self.declarations(comp)

    def wrapper_declarations(self, ctx: RenderContext) -> List[Declaration]:
        return []

    def render_inner(self, comp: PageComponent, ctx: RenderContext) -> str:
        raise NotImplementedError

    def text_or_placeholder(self, comp: PageComponent) -> str:
        return esc(comp.content or self.placeholder)

    # ── Export statique ─────────────────────────────────────────────────────

    def export(self, comp: PageComponent) -> str:
        raise NotImplementedError

    def catalog_entry(self) -> dict:
        """Entrée de la toolbox : libellé + défauts de création."""
        return {
            "type":            self.component_type,
            "label":           self.label,
            "description":     self.description,
            "default_content": self.default_content,
            "default_style":   self.default_style().model_dump(exclude_none=True),
        }
