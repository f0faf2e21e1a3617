"""
Sérialisation CSS inline — partagée par le rendu live et l'export.

  style_declarations(style)      → [("font-size", "48px"), ...] (ordre des champs)
  serialize(decls)               → "font-size: 48px; color: #000000"
  container_declarations(bd)     → style du conteneur de page depuis le backdrop
"""
import re
from typing import Iterable, List, Optional, Tuple

from ..core.schemas import ComponentStyle, PageComponent, normalize_background_image

Declaration = Tuple[str, str]

_UPPER = re.compile(r"([A-Z])")


def to_kebab(key: str) -> str:
    """backgroundColor → background-color"""
    return _UPPER.sub(r"-\1", key).lower()


def css_string(value: str) -> str:
    """Chaîne CSS entre guillemets doubles ; antislash, guillemet et fins de ligne échappés."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\a ").replace("\r", "")
    return f'"{escaped}"'


def background_image_css(value: Optional[str]) -> Optional[str]:
    """Valeur CSS finale `url("...")` ; None si aucune image."""
    raw = normalize_background_image(value)
    if not raw:
        return None
    return f"url({css_string(raw)})"


def style_declarations(style: ComponentStyle, skip: Iterable[str] = ()) -> List[Declaration]:
    skipped = set(skip)
    decls: List[Declaration] = []
    for key, value in style.items():
        if key in skipped:
            continue
        if key == "backgroundImage":
            value = background_image_css(value)
            if value is None:
                continue
        decls.append((to_kebab(key), str(value)))
    return decls


def serialize(decls: Iterable[Declaration]) -> str:
    return "; ".join(f"{k}: {v}" for k, v in decls)


def container_declarations(backdrop: Optional[PageComponent]) -> List[Declaration]:
    """
    Style du conteneur de page.
    Sans backdrop : seulement min-height. Avec : couleur (transparent par défaut),
    image normalisée en cover/center, padding ("0" par défaut).
    """
    if backdrop is None:
        return [("min-height", "100%")]
    style = backdrop.style
    decls: List[Declaration] = [("background-color", style.backgroundColor or "transparent")]
    image = background_image_css(style.backgroundImage)
    if image:
        decls += [
            ("background-image", image),
            ("background-size", "cover"),
            ("background-position", "center"),
        ]
    decls += [("padding", style.padding or "0"), ("min-height", "100%")]
    return decls
