"""
Recovery strategy classifications for error handling.

Errors here let the parameter form keep working with reduced functionality,
or report a lookup the caller has to handle.
"""

from typing import Optional


class GracefulDegradationError(Exception):
    """Mixin for errors that allow continued operation with reduced functionality."""

    def __init__(self, message: str, degraded_functionality: Optional[str] = None,
                 fallback_strategy: Optional[str] = None, **kwargs):
        super().__init__(message)
        self.degraded_functionality = degraded_functionality
        self.fallback_strategy = fallback_strategy
        self.allows_degradation = True


class CatalogFetchError(GracefulDegradationError):
    """The symbol catalog resource could not be read."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        kwargs.setdefault("degraded_functionality", "symbol_catalog")
        kwargs.setdefault("fallback_strategy", "empty_catalog")
        super().__init__(message, **kwargs)
        self.source = source


class UnknownPluginError(LookupError):
    """Plugin ID is not present in the registry."""

    def __init__(self, message: str, plugin_id: Optional[str] = None):
        super().__init__(message)
        self.plugin_id = plugin_id
        self.recoverable = False
