"""Renderers page_builder : rendu live (html), export statique (export)."""
