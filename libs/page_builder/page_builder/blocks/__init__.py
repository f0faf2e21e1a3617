"""
Blocs page_builder — une variante par type de composant.

BLOCK_REGISTRY : type → instance de bloc (rendu, export, défauts)
create_component(type, order) : nouveau composant avec les défauts du type
"""
from typing import Dict, Optional

from ..core.schemas import COMPONENT_TYPES, PageComponent
from .base import BaseBlock, CanvasLinks, RenderContext
from .header import HeaderBlock
from .text import TextBlock
from .image import ImageBlock
from .background import BackgroundBlock
from .button import ButtonBlock
from .product_grid import ProductGridBlock

BLOCK_REGISTRY: Dict[str, BaseBlock] = {
    b.component_type: b
    for b in (HeaderBlock(), TextBlock(), ImageBlock(), BackgroundBlock(), ButtonBlock(), ProductGridBlock())
}


def check_registry(registry: Dict[str, BaseBlock], types=COMPONENT_TYPES) -> None:
    """Lève RuntimeError si un type de composant n'a pas de bloc."""
    missing = set(types) - set(registry)
    if missing:
        raise RuntimeError(f"Types de composant sans bloc : {sorted(missing)}")


check_registry(BLOCK_REGISTRY)


def get_block(component_type: str) -> Optional[BaseBlock]:
    return BLOCK_REGISTRY.get(component_type)


def create_component(component_type: str, order) -> PageComponent:
    """Lève KeyError si le type est inconnu."""
    return BLOCK_REGISTRY[component_type].create(order)


def toolbox() -> list:
    return [BLOCK_REGISTRY[t].catalog_entry() for t in COMPONENT_TYPES]


__all__ = [
    "BaseBlock", "CanvasLinks", "RenderContext",
    "HeaderBlock", "TextBlock", "ImageBlock", "BackgroundBlock", "ButtonBlock", "ProductGridBlock",
    "BLOCK_REGISTRY", "check_registry", "get_block", "create_component", "toolbox",
]
