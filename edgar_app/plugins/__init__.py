"""
Chat plugin registry and picker.
"""
from .picker import PickerOutcome, PluginPicker
from .registry import PluginRegistry, get_default_registry

__all__ = ["PickerOutcome", "PluginPicker", "PluginRegistry", "get_default_registry"]
