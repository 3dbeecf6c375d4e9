"""Integration tests for the full plugin parameter flow."""

import asyncio
from datetime import date
from pathlib import Path

import pytest

from edgar_app.catalog import create_catalog_source
from edgar_app.config.loader import ConfigLoader
from edgar_app.data.models import FORM_TYPES, CatalogEntry, PluginID
from edgar_app.data.parsers import decode_required_keys, encode_required_keys
from edgar_app.plugins import PluginPicker, get_default_registry


@pytest.mark.integration
class TestFullPipeline:
    """Integration tests for pick, edit, save, persist and reopen."""

    def test_save_persist_and_reopen(self, tmp_path: Path, catalog_file: Path) -> None:
        (tmp_path / "settings.yaml").write_text(f"catalog:\n  path: {catalog_file}\n")
        config = ConfigLoader.create(tmp_path).load()
        source = create_catalog_source(config.catalog)
        registry = get_default_registry()

        async def first_session():
            picker = PluginPicker(registry, config, catalog_source=source)
            outcome = picker.select(PluginID.EDGAR, today=date(2024, 3, 15))
            sync = outcome.synchronizer
            await sync.start_catalog_load(source)

            sync.select_symbols([entry for entry in sync.catalog if entry.value == "TSLA"])
            sync.select_form_types([FORM_TYPES[1]])
            sync.set_end_date(date(2024, 1, 31))
            return picker.save(sync)

        plugin = asyncio.run(first_session())
        stored = encode_required_keys(plugin.required_keys)

        async def second_session():
            picker = PluginPicker(registry, config, persisted=decode_required_keys(stored),
                                  catalog_source=source)
            sync = picker.select(PluginID.EDGAR, today=date(2024, 6, 1)).synchronizer
            await sync.start_catalog_load(source)
            return sync

        sync = asyncio.run(second_session())

        assert sync.selected_symbols == (CatalogEntry("TSLA", "Tesla Inc."),)
        assert sync.selected_form_types == (CatalogEntry("10-K", "Annual Report"),)
        assert sync.start_date == date(2023, 3, 15)
        assert sync.end_date == date(2024, 1, 31)
        assert sync.serialize() == plugin.required_keys

    def test_untouched_form_saves_everything(self, catalog_file: Path) -> None:
        config = ConfigLoader.create(catalog_file.parent).load({"catalog": {"path": str(catalog_file)}})
        source = create_catalog_source(config.catalog)
        picker = PluginPicker(get_default_registry(), config, catalog_source=source)

        async def session():
            sync = picker.select(PluginID.EDGAR, today=date(2024, 3, 15)).synchronizer
            await sync.start_catalog_load(source)
            return picker.save(sync)

        plugin = asyncio.run(session())
        assert plugin.get_param("symbols") == ("AAPL", "MSFT", "TSLA")
        assert plugin.get_param("formTypes") == ("8-K", "10-K", "10-Q")
        assert plugin.get_param("startDate") == 20230315
        assert plugin.get_param("endDate") == 20240315
