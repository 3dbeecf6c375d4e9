"""Read-only registry of chat plugin templates."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator, Optional

from ..data.models import Plugin, PluginID
from ..errors import UnknownPluginError


class PluginRegistry(Mapping):
    """
    Immutable lookup ``PluginID -> Plugin``.

    Templates are never modified; configuring a plugin produces a copy.
    """

    def __init__(self, plugins: Mapping[PluginID, Plugin]):
        self._plugins = MappingProxyType({PluginID(key): plugin for key, plugin in plugins.items()})

    def __getitem__(self, plugin_id: str) -> Plugin:
        # Plain strings hash differently from the str-based enum members
        try:
            key = PluginID(plugin_id)
        except ValueError:
            raise KeyError(plugin_id) from None
        return self._plugins[key]

    def __iter__(self) -> Iterator[PluginID]:
        return iter(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def find(self, plugin_id: str) -> Optional[Plugin]:
        """Template for ``plugin_id``, None when unknown."""
        return self.get(plugin_id)

    def require(self, plugin_id: str) -> Plugin:
        """Template for ``plugin_id``; raises UnknownPluginError when unknown."""
        plugin = self.find(plugin_id)
        if plugin is None:
            raise UnknownPluginError(f"Unknown plugin: {plugin_id}", plugin_id=str(plugin_id))
        return plugin


def get_default_registry() -> PluginRegistry:
    """Registry with the plugins the chat application ships."""
    return PluginRegistry({
        PluginID.CHATGPT: Plugin(id=PluginID.CHATGPT, name="ChatGPT"),
        PluginID.GOOGLE_SEARCH: Plugin(id=PluginID.GOOGLE_SEARCH, name="Google Search"),
        PluginID.EDGAR: Plugin(id=PluginID.EDGAR, name="EDGAR"),
    })
