"""
Jaki Global Page Builder — modèle de composants, rendu live, export statique.

Usage :
    >>> from page_builder import create_component, render_page, export_page
    >>> header = create_component("header", order=0)
    >>> html = render_page([header])
    >>> static = export_page([header])
"""
from .core.schemas import (
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
from .blocks import BLOCK_REGISTRY, BaseBlock, CanvasLinks, RenderContext, create_component, get_block, toolbox
from .renderer.layout import partition, sort_components
from .renderer.html import render_canvas, render_components, render_page
from .renderer.export import EXPORT_FILENAME, export_page

__version__ = "1.0.0"

__all__ = [
    "COMPONENT_TYPES", "ComponentStyle", "ComponentType", "PageComponent", "PageConfig",
    "Position", "Product", "ProductVariant", "format_price", "normalize_background_image",
    "BLOCK_REGISTRY", "BaseBlock", "CanvasLinks", "RenderContext", "create_component", "get_block", "toolbox",
    "partition", "sort_components",
    "render_canvas", "render_components", "render_page",
    "EXPORT_FILENAME", "export_page",
]
