"""Distro catalog: data model and loader for scorable Linux distributions."""

from .catalog import CatalogLoadError, load_catalog, load_default_catalog, validate_catalog_file
from .schema import DistroCatalog, DistroEntry, Trend

__all__ = [
    "CatalogLoadError",
    "DistroCatalog",
    "DistroEntry",
    "Trend",
    "load_catalog",
    "load_default_catalog",
    "validate_catalog_file",
]
