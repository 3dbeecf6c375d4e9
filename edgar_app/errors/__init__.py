"""
Error classification for plugin parameter handling.

This module provides the exception hierarchy for problems met while loading
option catalogs, decoding persisted parameters and resolving plugins.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
)
from .recovery import (
    CatalogFetchError,
    GracefulDegradationError,
    UnknownPluginError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    # Recovery Categories
    "GracefulDegradationError",
    "CatalogFetchError",
    "UnknownPluginError",
]
