"""
Tests for EDGAR parameter synchronization.

Covers serialization defaults, one-shot reconciliation from persisted
values, catalog label lookup, and the save path producing a new plugin instance.
"""

import asyncio
from datetime import date

import pytest

from edgar_app.catalog import CatalogSource
from edgar_app.config.defaults import get_default_config
from edgar_app.data.models import FORM_TYPES, CatalogEntry, KeyValuePair, Plugin, PluginID
from edgar_app.params import (
    ParameterSynchronizer,
    build_required_keys,
    build_selection,
    serialize_selection,
)


class StaticSource(CatalogSource):
    def __init__(self, text: str):
        super().__init__("static")
        self.text = text

    def fetch_text(self) -> str:
        return self.text


class PendingSource(CatalogSource):
    def __init__(self):
        super().__init__("pending")

    def fetch_text(self) -> str:
        raise AssertionError("read is overridden")

    async def read(self) -> str:
        await asyncio.Event().wait()
        return ""


def _values(selection):
    return [entry.value for entry in selection]


class TestSerializeSelection:
    """Test suite for per-dimension serialization."""

    def test_empty_selection_is_full_catalog(self, symbol_catalog):
        assert serialize_selection((), symbol_catalog) == ("AAPL", "MSFT")

    def test_selection_wins_over_catalog(self, symbol_catalog):
        selection = (CatalogEntry("AAPL", "Apple"),)
        assert serialize_selection(selection, symbol_catalog) == ("AAPL",)
        assert serialize_selection(selection, ()) == ("AAPL",)

    def test_selection_order_is_kept(self, symbol_catalog):
        selection = (CatalogEntry("MSFT", "Microsoft"), CatalogEntry("AAPL", "Apple"))
        assert serialize_selection(selection, symbol_catalog) == ("MSFT", "AAPL")

    def test_empty_catalog_and_selection(self):
        assert serialize_selection((), ()) == ()


class TestBuildSelection:
    """Test suite for rebuilding selections from persisted values."""

    def test_labels_come_from_catalog(self):
        selection = build_selection(["8-K"], FORM_TYPES)
        assert selection == (CatalogEntry("8-K", "Current Report"),)

    def test_unknown_value_keeps_value(self, symbol_catalog):
        selection = build_selection(["MSFT", "ZZZZ"], symbol_catalog)
        assert selection == (CatalogEntry("MSFT", "Microsoft"), CatalogEntry("ZZZZ", None))

    def test_first_catalog_match_wins(self):
        catalog = (CatalogEntry("A", "First"), CatalogEntry("A", "Second"))
        assert build_selection(["A", "B"], catalog) == (
            CatalogEntry("A", "First"),
            CatalogEntry("B", None),
        )


class TestBuildRequiredKeys:
    """Test suite for the full requiredKeys list."""

    def test_key_order_and_defaults(self, symbol_catalog):
        pairs = build_required_keys((), symbol_catalog, (), FORM_TYPES, None, None)
        assert pairs == (
            KeyValuePair("symbols", ("AAPL", "MSFT")),
            KeyValuePair("formTypes", ("8-K", "10-K", "10-Q")),
            KeyValuePair("startDate", 0),
            KeyValuePair("endDate", 0),
        )

    def test_dates_encoded(self, symbol_catalog):
        pairs = build_required_keys(
            (), symbol_catalog, (), FORM_TYPES, date(2023, 1, 5), date(2023, 12, 31)
        )
        assert pairs[2].value == 20230105
        assert pairs[3].value == 20231231


class TestReconciliation:
    """Test suite for hydrating selections from persisted values."""

    def test_form_types_hydrate_without_symbol_catalog(self):
        sync = ParameterSynchronizer(persisted=[KeyValuePair("formTypes", ("8-K",))])
        assert sync.selected_form_types == (CatalogEntry("8-K", "Current Report"),)
        assert sync.is_hydrated("formTypes")

    def test_symbols_wait_for_catalog(self, persisted_pairs, symbol_catalog):
        sync = ParameterSynchronizer(persisted=persisted_pairs)
        assert sync.selected_symbols == ()
        assert not sync.is_hydrated("symbols")

        sync.publish_catalog(symbol_catalog)
        assert sync.selected_symbols == (CatalogEntry("MSFT", "Microsoft"),)
        assert sync.is_hydrated("symbols")

    def test_persisted_after_catalog(self, persisted_pairs, symbol_catalog):
        sync = ParameterSynchronizer()
        sync.publish_catalog(symbol_catalog)
        assert sync.selected_symbols == ()

        sync.set_persisted(persisted_pairs)
        assert _values(sync.selected_symbols) == ["MSFT"]

    def test_reconciles_at_most_once(self, persisted_pairs, symbol_catalog):
        sync = ParameterSynchronizer(persisted=persisted_pairs)
        sync.publish_catalog(symbol_catalog)

        sync.set_persisted([KeyValuePair("symbols", ("AAPL",)), KeyValuePair("formTypes", ("10-Q",))])
        assert _values(sync.selected_symbols) == ["MSFT"]
        assert _values(sync.selected_form_types) == ["8-K"]

    def test_catalog_sized_reordering_hydrates(self):
        """A persisted list as long as the catalog still hydrates when it differs."""
        sync = ParameterSynchronizer(persisted=[KeyValuePair("formTypes", ("10-Q", "8-K", "10-K"))])
        assert _values(sync.selected_form_types) == ["10-Q", "8-K", "10-K"]

    def test_user_edit_blocks_late_persisted_values(self, symbol_catalog):
        sync = ParameterSynchronizer()
        sync.publish_catalog(symbol_catalog)
        sync.select_symbols([CatalogEntry("AAPL", "Apple")])
        sync.select_form_types([FORM_TYPES[1]])

        sync.set_persisted([KeyValuePair("symbols", ("MSFT",)), KeyValuePair("formTypes", ("8-K",))])
        assert _values(sync.selected_symbols) == ["AAPL"]
        assert _values(sync.selected_form_types) == ["10-K"]

    def test_full_catalog_leaves_selection_empty(self, symbol_catalog):
        sync = ParameterSynchronizer(persisted=[
            KeyValuePair("symbols", ("AAPL", "MSFT")),
            KeyValuePair("formTypes", ("8-K", "10-K", "10-Q")),
        ])
        sync.publish_catalog(symbol_catalog)

        assert sync.selected_symbols == ()
        assert sync.selected_form_types == ()
        assert sync.is_hydrated("symbols")
        assert sync.is_hydrated("formTypes")

    def test_empty_catalog_never_hydrates_symbols(self, persisted_pairs):
        sync = ParameterSynchronizer(persisted=persisted_pairs)
        sync.publish_catalog(())
        assert sync.selected_symbols == ()
        assert not sync.is_hydrated("symbols")

    def test_unknown_symbol_has_no_label(self, symbol_catalog):
        sync = ParameterSynchronizer(persisted=[KeyValuePair("symbols", ("DELISTED",))])
        sync.publish_catalog(symbol_catalog)
        assert sync.selected_symbols == (CatalogEntry("DELISTED", None),)

    def test_catalog_published_once(self, symbol_catalog):
        sync = ParameterSynchronizer()
        sync.publish_catalog(symbol_catalog)
        sync.publish_catalog((CatalogEntry("TSLA", "Tesla"),))
        assert sync.catalog == symbol_catalog


class TestDates:
    """Test suite for date state."""

    def test_defaults_without_persisted(self, today):
        sync = ParameterSynchronizer.from_config(get_default_config(), today=today)
        assert sync.start_date == date(2023, 3, 15)
        assert sync.end_date == today

    def test_persisted_dates_hydrate(self, persisted_pairs, today):
        sync = ParameterSynchronizer.from_config(get_default_config(), persisted_pairs, today)
        assert sync.start_date == date(2023, 1, 5)
        assert sync.end_date == date(2023, 12, 31)

    def test_sentinel_keeps_default(self, today):
        persisted = [KeyValuePair("startDate", 0), KeyValuePair("endDate", 20240101)]
        sync = ParameterSynchronizer.from_config(get_default_config(), persisted, today)
        assert sync.start_date == date(2023, 3, 15)
        assert sync.end_date == date(2024, 1, 1)

    def test_user_dates_win(self, persisted_pairs):
        sync = ParameterSynchronizer()
        sync.set_start_date(date(2020, 6, 1))
        sync.set_end_date(None)
        sync.set_persisted(persisted_pairs)

        assert sync.start_date == date(2020, 6, 1)
        assert sync.end_date is None
        assert sync.serialize()[3] == KeyValuePair("endDate", 0)


class TestSave:
    """Test suite for serializing back into a plugin."""

    def test_apply_to_copies_plugin(self, symbol_catalog):
        template = Plugin(id=PluginID.EDGAR, name="EDGAR")
        sync = ParameterSynchronizer(default_start=date(2023, 1, 5), default_end=date(2023, 12, 31))
        sync.publish_catalog(symbol_catalog)

        plugin = sync.apply_to(template)

        assert plugin is not template
        assert template.required_keys == ()
        assert plugin.id == PluginID.EDGAR
        assert plugin.name == "EDGAR"
        assert plugin.get_param("symbols") == ("AAPL", "MSFT")
        assert plugin.get_param("formTypes") == ("8-K", "10-K", "10-Q")
        assert plugin.get_param("startDate") == 20230105
        assert plugin.get_param("endDate") == 20231231

    def test_apply_to_replaces_existing_keys(self, symbol_catalog, persisted_pairs):
        configured = Plugin(id=PluginID.EDGAR, name="EDGAR", required_keys=tuple(persisted_pairs))
        sync = ParameterSynchronizer()
        sync.publish_catalog(symbol_catalog)
        sync.select_symbols([CatalogEntry("AAPL", "Apple")])

        plugin = sync.apply_to(configured)
        assert plugin.get_param("symbols") == ("AAPL",)
        assert len(plugin.required_keys) == 4

    def test_serialize_does_not_mutate(self, symbol_catalog):
        sync = ParameterSynchronizer()
        sync.publish_catalog(symbol_catalog)
        sync.serialize()
        assert sync.selected_symbols == ()

    def test_round_trip_through_reconciliation(self, symbol_catalog, today):
        sync = ParameterSynchronizer(default_start=date(2023, 1, 5), default_end=today)
        sync.publish_catalog(symbol_catalog)
        sync.select_symbols([CatalogEntry("MSFT", "Microsoft")])
        sync.select_form_types([FORM_TYPES[2], FORM_TYPES[0]])
        saved = sync.serialize()

        restored = ParameterSynchronizer(persisted=saved)
        restored.publish_catalog(symbol_catalog)

        assert restored.selected_symbols == sync.selected_symbols
        assert _values(restored.selected_form_types) == ["10-Q", "8-K"]
        assert restored.start_date == date(2023, 1, 5)
        assert restored.end_date == today
        assert restored.serialize() == saved


class TestCatalogLoad:
    """Test suite for the asynchronous catalog load."""

    def test_load_publishes_and_reconciles(self, persisted_pairs):
        sync = ParameterSynchronizer(persisted=persisted_pairs)

        async def run():
            await sync.start_catalog_load(StaticSource("MSFT,Microsoft\nAAPL,Apple\n"))

        asyncio.run(run())
        assert _values(sync.catalog) == ["AAPL", "MSFT"]
        assert sync.selected_symbols == (CatalogEntry("MSFT", "Microsoft"),)
        assert sync.hydrated

    def test_start_is_single_shot(self):
        sync = ParameterSynchronizer()

        async def run():
            first = sync.start_catalog_load(StaticSource("A,Alpha\n"))
            second = sync.start_catalog_load(StaticSource("B,Beta\n"))
            assert first is second
            await first

        asyncio.run(run())
        assert _values(sync.catalog) == ["A"]

    def test_failed_load_still_usable(self, tmp_path):
        from edgar_app.catalog import FileCatalogSource

        sync = ParameterSynchronizer()

        async def run():
            await sync.start_catalog_load(FileCatalogSource(tmp_path / "missing.csv"))

        asyncio.run(run())
        assert sync.catalog == ()
        assert sync.serialize()[0] == KeyValuePair("symbols", ())

    def test_close_cancels_pending_load(self):
        sync = ParameterSynchronizer()

        async def run():
            task = sync.start_catalog_load(PendingSource())
            await asyncio.sleep(0)
            sync.close()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run())
        assert sync.catalog == ()
