"""
Plugin selection for a conversation.

Picking EDGAR opens its parameter form instead of returning a plugin
directly; every other plugin is taken from the registry as is.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

import structlog

from ..catalog.sources import CatalogSource
from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import KeyValuePair, Plugin, PluginID
from ..params.synchronizer import ParameterSynchronizer
from .registry import PluginRegistry

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PickerOutcome:
    """Result of picking a plugin."""
    plugin: Optional[Plugin] = None
    synchronizer: Optional[ParameterSynchronizer] = None

    @property
    def shows_parameters(self) -> bool:
        """True when the caller has to show the parameter form."""
        return self.synchronizer is not None


class PluginPicker:
    """Routes plugin choices and saves the EDGAR parameter form."""

    def __init__(
        self,
        registry: PluginRegistry,
        config: Optional[DefaultConfig] = None,
        persisted: Optional[Sequence[KeyValuePair]] = None,
        catalog_source: Optional[CatalogSource] = None,
    ):
        self.registry = registry
        self.config = config or get_default_config()
        self.persisted = tuple(persisted) if persisted is not None else None
        self.catalog_source = catalog_source

    def select(self, plugin_id: str, today: Optional[date] = None) -> PickerOutcome:
        """
        Handle a plugin choice.

        For EDGAR the catalog load is started when a source is configured,
        which needs a running event loop.

        Args:
            plugin_id: Chosen plugin
            today: Reference day for default dates

        Returns:
            Outcome with either the plugin or a parameter synchronizer
        """
        if plugin_id == PluginID.EDGAR:
            synchronizer = ParameterSynchronizer.from_config(self.config, self.persisted, today)
            if self.catalog_source is not None:
                synchronizer.start_catalog_load(self.catalog_source)
            logger.info("Opening plugin parameters", plugin_id=PluginID.EDGAR.value)
            return PickerOutcome(synchronizer=synchronizer)

        plugin = self.registry.find(plugin_id)
        if plugin is None:
            logger.warning("Unknown plugin selected", plugin_id=str(plugin_id))
        else:
            logger.info("Plugin selected", plugin_id=plugin.id.value)
        return PickerOutcome(plugin=plugin)

    def save(self, synchronizer: ParameterSynchronizer) -> Plugin:
        """Configure the EDGAR template from the form and close the form."""
        plugin = synchronizer.apply_to(self.registry.require(PluginID.EDGAR))
        synchronizer.close()
        self.persisted = plugin.required_keys
        return plugin

    def back(self, synchronizer: ParameterSynchronizer) -> None:
        """Leave the parameter form without saving."""
        synchronizer.close()
