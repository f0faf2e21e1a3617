"""
Ordre et partition d'une liste de composants.

Tri stable par `order`, puis le premier `background` devient le backdrop de la
page et sort du flux de contenu. Les `background` suivants restent inline.
"""
from typing import Iterable, List, Optional, Tuple

from ..core.schemas import PageComponent


def sort_components(components: Iterable[PageComponent]) -> List[PageComponent]:
    return sorted(components, key=lambda c: c.order)


def partition(components: Iterable[PageComponent]) -> Tuple[Optional[PageComponent], List[PageComponent]]:
    """(backdrop, contenu) après tri stable."""
    ordered = sort_components(components)
    backdrop = next((c for c in ordered if c.type == "background"), None)
    if backdrop is None:
        return None, ordered
    return backdrop, [c for c in ordered if c is not backdrop]
