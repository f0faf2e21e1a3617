"""
Schémas Pydantic pour le Page Builder Jaki Global.
Structure plate : Page → [PageComponent] (trié par `order` au rendu)

PageComponent : type fermé (header, text, image, background, button, productGrid)
ComponentStyle : record explicite de champs optionnels, clés camelCase (format fil)
Product / ProductVariant : catalogue externe, lecture seule pour le builder
"""
import re
from typing import Dict, List, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

ComponentType = Literal["header", "text", "image", "background", "button", "productGrid"]
COMPONENT_TYPES: tuple = get_args(ComponentType)

TextAlign = Literal["left", "center", "right"]

_URL_WRAPPER = re.compile(r"url\((.*)\)", re.IGNORECASE)
_EDGE_QUOTES = re.compile(r"^['\"]|['\"]$")


def normalize_background_image(value: Optional[str]) -> Optional[str]:
    """
    Ramène une référence d'image de fond à l'URL nue.
    'url("http://x/y.png")', "url('http://x/y.png')" et 'http://x/y.png' → 'http://x/y.png'
    """
    if value is None:
        return None
    raw = value.strip()
    m = _URL_WRAPPER.search(raw)
    if m:
        raw = m.group(1).strip()
    return _EDGE_QUOTES.sub("", raw)


class ComponentStyle(BaseModel):
    """Attributs de présentation. Champ absent = défaut du type, appliqué au rendu seulement."""
    model_config = ConfigDict(extra="forbid")

    fontFamily:      Optional[str]       = None
    fontSize:        Optional[str]       = None
    fontWeight:      Optional[str]       = None
    color:           Optional[str]       = None
    backgroundColor: Optional[str]       = None
    padding:         Optional[str]       = None
    margin:          Optional[str]       = None
    textAlign:       Optional[TextAlign] = None
    width:           Optional[str]       = None
    height:          Optional[str]       = None
    backgroundImage: Optional[str]       = None
    borderRadius:    Optional[str]       = None
    border:          Optional[str]       = None

    @field_validator("backgroundImage")
    @classmethod
    def _normalize_background_image(cls, v: Optional[str]) -> Optional[str]:
        return normalize_background_image(v)

    def items(self) -> List[tuple]:
        """Paires (clé camelCase, valeur) renseignées, dans l'ordre des champs."""
        return list(self.model_dump(exclude_none=True).items())

    def merged(self, updates: dict) -> "ComponentStyle":
        """Fusionne `updates` dans le style courant (une valeur None efface la clé)."""
        data = self.model_dump(exclude_none=True)
        data.update(updates)
        return ComponentStyle(**data)


class Position(BaseModel):
    """Coordonnées conservées pour compat fil, jamais lues par le rendu."""
    x: Union[int, float] = 0
    y: Union[int, float] = 0


class PageComponent(BaseModel):
    """Bloc atomique d'une page."""
    id:       str                = Field(..., min_length=1)
    type:     ComponentType
    content:  str                = ""
    style:    ComponentStyle     = Field(default_factory=ComponentStyle)
    position: Position           = Field(default_factory=Position)
    order:    Union[int, float]  = 0

    def to_wire(self) -> dict:
        """Forme persistée / JSON (les champs de style absents sont omis)."""
        return self.model_dump(exclude_none=True)


class PageConfig(BaseModel):
    """Page nommée = liste ordonnée de composants."""
    id:         str
    name:       str
    components: List[PageComponent] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "components": [c.to_wire() for c in self.components],
        }


# ── Catalogue produits (collaborateur externe) ──────────────────────────────

class ProductVariant(BaseModel):
    """SKU achetable ; `options` sert au choix par correspondance (couleur, taille…)."""
    id:         int
    title:      str            = ""
    price:      int            = Field(..., ge=0, description="Prix en centimes")
    is_enabled: bool           = True
    options:    Dict[str, str] = Field(default_factory=dict)


class Product(BaseModel):
    id:          str
    title:       str
    description: str                  = ""
    images:      List[str]            = Field(default_factory=list)
    variants:    List[ProductVariant] = Field(default_factory=list)
    tags:        List[str]            = Field(default_factory=list)

    def enabled_variants(self) -> List[ProductVariant]:
        return [v for v in self.variants if v.is_enabled]

    def min_price(self) -> Optional[int]:
        """Prix le plus bas (centimes) parmi les variantes actives, None si aucune."""
        prices = [v.price for v in self.enabled_variants()]
        return min(prices) if prices else None


def format_price(cents: int) -> str:
    """1500 → '$15.00'"""
    return f"${cents / 100:.2f}"
