"""
Canonical data models for plugin parameters.

This module defines the immutable structures shared by the catalog loader,
the parameter synchronizer and the plugin registry.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

# Keys the EDGAR plugin persists in requiredKeys
SYMBOLS_KEY = "symbols"
FORM_TYPES_KEY = "formTypes"
START_DATE_KEY = "startDate"
END_DATE_KEY = "endDate"

REQUIRED_KEY_NAMES = (SYMBOLS_KEY, FORM_TYPES_KEY, START_DATE_KEY, END_DATE_KEY)
LIST_KEYS = frozenset({SYMBOLS_KEY, FORM_TYPES_KEY})

ParamValue = Union[tuple[str, ...], int]


@dataclass(frozen=True)
class CatalogEntry:
    """Selectable option within one dimension (symbol or form type)."""
    value: str
    label: Optional[str] = None    # None when the source line had no label


@dataclass(frozen=True)
class KeyValuePair:
    """One persisted plugin parameter."""
    key: str
    value: ParamValue

    def to_dict(self) -> dict:
        """Wire form, lists instead of tuples."""
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"key": self.key, "value": value}


class PluginID(str, Enum):
    """Stable plugin identifiers."""
    CHATGPT = "chatgpt"
    GOOGLE_SEARCH = "google-search"
    EDGAR = "edgar"


@dataclass(frozen=True)
class Plugin:
    """Chat plugin template or configured instance."""
    id: PluginID
    name: str
    required_keys: tuple[KeyValuePair, ...] = ()

    def with_required_keys(self, required_keys: tuple[KeyValuePair, ...]) -> "Plugin":
        """Copy of this plugin with ``required_keys`` replaced."""
        return replace(self, required_keys=tuple(required_keys))

    def get_param(self, key: str) -> Optional[ParamValue]:
        """Value stored under ``key``, None when absent."""
        for pair in self.required_keys:
            if pair.key == key:
                return pair.value
        return None


FORM_TYPES: tuple[CatalogEntry, ...] = (
    CatalogEntry(value="8-K", label="Current Report"),
    CatalogEntry(value="10-K", label="Annual Report"),
    CatalogEntry(value="10-Q", label="Quarterly Report"),
)
