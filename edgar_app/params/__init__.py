"""
Plugin parameter synchronization module.
"""
from .synchronizer import (
    ParameterSynchronizer,
    build_required_keys,
    build_selection,
    serialize_selection,
)

__all__ = [
    "ParameterSynchronizer",
    "build_required_keys",
    "build_selection",
    "serialize_selection",
]
