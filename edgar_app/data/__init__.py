"""
Data models and parsing module.

Handles the catalog text format, persisted requiredKeys payloads and the
immutable records shared by the rest of the package.
"""
