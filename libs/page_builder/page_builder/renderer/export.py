"""
Export statique — document HTML autonome, styles inline, nom de fichier fixe.

Même règle de backdrop que le rendu live : le premier `background` colore
le <main> et n'est pas émis comme section. Chaque bloc fournit sa règle
d'export, partagée avec le rendu via BaseBlock.declarations().
"""
import logging
from typing import Iterable

from ..blocks import BLOCK_REGISTRY
from ..blocks.base import style_attr
from ..core.schemas import PageComponent
from .chrome import document
from .css import container_declarations
from .layout import partition

log = logging.getLogger(__name__)

EXPORT_FILENAME = "jaki-global-site.html"


def export_components(components: Iterable[PageComponent]) -> str:
    backdrop, content = partition(components)
    parts = []
    for comp in content:
        block = BLOCK_REGISTRY.get(comp.type)
        if block is None:
            log.debug("export : type inconnu ignoré : %s", comp.type)
            continue
        fragment = block.export(comp)
        if fragment:
            parts.append(f"    {fragment}")
    inner = "\n".join(parts)
    return f"  <main{style_attr(container_declarations(backdrop))}>\n{inner}\n  </main>"


def export_page(components: Iterable[PageComponent]) -> str:
    """Document complet prêt au téléchargement (déterministe pour une même entrée)."""
    return document(export_components(components))
