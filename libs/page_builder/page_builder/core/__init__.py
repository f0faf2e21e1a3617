"""Core module pour page_builder."""
from .schemas import (
    COMPONENT_TYPES,
    ComponentStyle,
    ComponentType,
    PageComponent,
    PageConfig,
    Position,
    Product,
    ProductVariant,
    format_price,
    normalize_background_image,
)

__all__ = [
    "COMPONENT_TYPES",
    "ComponentStyle",
    "ComponentType",
    "PageComponent",
    "PageConfig",
    "Position",
    "Product",
    "ProductVariant",
    "format_price",
    "normalize_background_image",
]
