"""
Configuration module.

Frozen defaults, YAML overrides and validation for catalog loading,
default dates and logging.
"""
