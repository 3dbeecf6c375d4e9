"""
Symbol catalog module.

Reads the ``value,label`` catalog from a file or URL and publishes it to
the parameter synchronizer as an immutable snapshot.
"""
from .loader import CatalogSnapshot, CatalogTask, load_catalog
from .sources import CatalogSource, FileCatalogSource, HttpCatalogSource, create_catalog_source

__all__ = [
    "CatalogSnapshot",
    "CatalogTask",
    "load_catalog",
    "CatalogSource",
    "FileCatalogSource",
    "HttpCatalogSource",
    "create_catalog_source",
]
