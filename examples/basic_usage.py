#!/usr/bin/env python3
"""
Basic Usage Example - EDGAR Plugin Parameters

This script walks through one parameter form session. It shows how to:
- Load configuration and the symbol catalog
- Pick the EDGAR plugin and edit its parameters
- Save the configured plugin and persist its requiredKeys
- Reopen the form hydrated from the persisted values

Run: python examples/basic_usage.py
"""

import asyncio
from datetime import date

from edgar_app.catalog import create_catalog_source
from edgar_app.config.loader import ConfigLoader
from edgar_app.data.models import FORM_TYPES, PluginID
from edgar_app.data.parsers import decode_required_keys, encode_required_keys
from edgar_app.logging import configure_logging
from edgar_app.plugins import PluginPicker, get_default_registry


async def edit_and_save(picker: PluginPicker) -> bytes:
    """Pick EDGAR, choose two symbols and annual reports, save."""
    sync = picker.select(PluginID.EDGAR).synchronizer
    await sync.start_catalog_load(picker.catalog_source)
    print(f"Catalog loaded: {len(sync.catalog)} symbols")

    sync.select_symbols(sync.catalog[:2])
    sync.select_form_types([FORM_TYPES[1]])
    sync.set_start_date(date(2023, 1, 1))

    plugin = picker.save(sync)
    for pair in plugin.required_keys:
        print(f"  {pair.key}: {pair.value}")
    return encode_required_keys(plugin.required_keys)


async def reopen(picker: PluginPicker) -> None:
    """Reopen the form and show the hydrated selections."""
    sync = picker.select(PluginID.EDGAR).synchronizer
    await sync.start_catalog_load(picker.catalog_source)

    print("Reopened form:")
    print(f"  symbols: {[(e.value, e.label) for e in sync.selected_symbols]}")
    print(f"  form types: {[(e.value, e.label) for e in sync.selected_form_types]}")
    print(f"  dates: {sync.start_date} .. {sync.end_date}")


def main():
    config = ConfigLoader.create().load()
    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    source = create_catalog_source(config.catalog)
    registry = get_default_registry()

    picker = PluginPicker(registry, config, catalog_source=source)
    stored = asyncio.run(edit_and_save(picker))
    print(f"Persisted payload: {stored.decode()}")

    picker = PluginPicker(registry, config, persisted=decode_required_keys(stored),
                          catalog_source=source)
    asyncio.run(reopen(picker))


if __name__ == "__main__":
    main()
