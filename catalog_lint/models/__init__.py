"""Catalog data models."""

from catalog_lint.models.catalog import (
    CatalogModel,
    Coordinate,
    LibrarySpec,
    PluginSpec,
    ShapeIssue,
)

__all__ = [
    "CatalogModel",
    "Coordinate",
    "LibrarySpec",
    "PluginSpec",
    "ShapeIssue",
]
