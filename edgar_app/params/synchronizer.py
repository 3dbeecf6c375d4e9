"""
EDGAR parameter synchronization.

This module keeps the parameter form state (selected symbols, selected
form types, start and end dates) in step with the generic requiredKeys
list stored on a plugin instance. Persisted values hydrate the form once;
saving serializes the form back into a new plugin instance.
"""

from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ..catalog.loader import CatalogSnapshot, CatalogTask
from ..data.models import (
    END_DATE_KEY,
    FORM_TYPES,
    FORM_TYPES_KEY,
    START_DATE_KEY,
    SYMBOLS_KEY,
    CatalogEntry,
    KeyValuePair,
    Plugin,
    PluginID,
)
from ..logging import get_sync_logger, log_reconciliation
from ..utils.dates import date_to_number, default_date_range, persisted_date

if TYPE_CHECKING:
    import asyncio

    from ..catalog.sources import CatalogSource
    from ..config.defaults import DefaultConfig

Selection = tuple[CatalogEntry, ...]


def build_selection(values: Iterable[str], catalog: Sequence[CatalogEntry]) -> Selection:
    """
    Rebuild a selection from persisted values.

    Labels always come from ``catalog``; a value the catalog does not know
    keeps its value with no label.
    """
    labels: dict[str, Optional[str]] = {}
    for entry in catalog:
        labels.setdefault(entry.value, entry.label)
    return tuple(CatalogEntry(value=value, label=labels.get(value)) for value in values)


def serialize_selection(selection: Sequence[CatalogEntry], catalog: Sequence[CatalogEntry]) -> tuple[str, ...]:
    """
    Values to persist for one dimension.

    An empty selection stands for the whole catalog. This also means
    "nothing chosen yet" and "everything chosen" persist identically;
    callers rely on that, so it is kept as is.
    """
    source = selection if selection else catalog
    return tuple(entry.value for entry in source)


def build_required_keys(
    selected_symbols: Sequence[CatalogEntry],
    symbol_catalog: Sequence[CatalogEntry],
    selected_form_types: Sequence[CatalogEntry],
    form_type_catalog: Sequence[CatalogEntry],
    start_date: Optional[date],
    end_date: Optional[date],
) -> tuple[KeyValuePair, ...]:
    """Flatten the parameter form into the persisted requiredKeys list."""
    return (
        KeyValuePair(SYMBOLS_KEY, serialize_selection(selected_symbols, symbol_catalog)),
        KeyValuePair(FORM_TYPES_KEY, serialize_selection(selected_form_types, form_type_catalog)),
        KeyValuePair(START_DATE_KEY, date_to_number(start_date)),
        KeyValuePair(END_DATE_KEY, date_to_number(end_date)),
    )


class ParameterSynchronizer:
    """
    State holder for one EDGAR parameter form.

    All mutation happens on the owner's event loop. The symbol catalog is
    published once by a catalog load and is immutable afterwards.

    Each dimension is reconciled from persisted values at most once: the
    first time both the persisted list and a non-empty catalog are
    available. A user edit of a dimension also counts, so persisted values
    arriving late never overwrite what the user picked.
    """

    def __init__(
        self,
        persisted: Optional[Sequence[KeyValuePair]] = None,
        form_types: Sequence[CatalogEntry] = FORM_TYPES,
        default_start: Optional[date] = None,
        default_end: Optional[date] = None,
        plugin_id: str = PluginID.EDGAR.value,
    ):
        self.logger = get_sync_logger(__name__, plugin_id=plugin_id)
        self.form_types: Selection = tuple(form_types)
        self.catalog: CatalogSnapshot = ()
        self.selected_symbols: Selection = ()
        self.selected_form_types: Selection = ()

        self._persisted: Optional[tuple[KeyValuePair, ...]] = None
        self._default_start = default_start
        self._default_end = default_end
        self.start_date: Optional[date] = default_start
        self.end_date: Optional[date] = default_end

        self._catalog_published = False
        self._catalog_task: Optional[CatalogTask] = None
        self._hydrated = {SYMBOLS_KEY: False, FORM_TYPES_KEY: False}
        self._dates_hydrated = False

        if persisted is not None:
            self.set_persisted(persisted)

    @classmethod
    def from_config(
        cls,
        config: "DefaultConfig",
        persisted: Optional[Sequence[KeyValuePair]] = None,
        today: Optional[date] = None,
    ) -> "ParameterSynchronizer":
        """Create a synchronizer whose default dates follow ``config``."""
        start, end = default_date_range(today, config.dates.lookback_years)
        return cls(persisted=persisted, default_start=start, default_end=end)

    @property
    def hydrated(self) -> bool:
        """True once every dimension has been reconciled or edited."""
        return all(self._hydrated.values()) and self._dates_hydrated

    def is_hydrated(self, key: str) -> bool:
        return self._hydrated[key]

    # Catalog

    def start_catalog_load(self, source: "CatalogSource") -> "asyncio.Task":
        """Start the one catalog load for this form; later calls reuse it."""
        if self._catalog_task is None:
            self._catalog_task = CatalogTask(source, self.publish_catalog)
        return self._catalog_task.start()

    def publish_catalog(self, snapshot: CatalogSnapshot) -> None:
        """Install the loaded symbol catalog and reconcile against it."""
        if self._catalog_published:
            self.logger.warning("Symbol catalog already published, ignoring reload",
                                entries=len(snapshot))
            return

        self._catalog_published = True
        self.catalog = tuple(snapshot)
        self.reconcile()

    def close(self) -> None:
        """Tear down: cancel a catalog load that has not finished yet."""
        if self._catalog_task is not None:
            self._catalog_task.cancel()

    # Persisted values

    def set_persisted(self, pairs: Sequence[KeyValuePair]) -> None:
        """Supply persisted requiredKeys and reconcile against them."""
        self._persisted = tuple(pairs)
        self.reconcile()

    def _persisted_value(self, key: str):
        for pair in self._persisted or ():
            if pair.key == key:
                return pair.value
        return None

    def reconcile(self) -> None:
        """Hydrate any dimension that is still waiting for persisted values."""
        self._reconcile_dimension(SYMBOLS_KEY, self.catalog, "selected_symbols")
        self._reconcile_dimension(FORM_TYPES_KEY, self.form_types, "selected_form_types")
        self._reconcile_dates()

    def _reconcile_dimension(self, key: str, catalog: Selection, attr: str) -> None:
        if self._hydrated[key]:
            return

        values = self._persisted_value(key)
        if values is None:
            log_reconciliation(self.logger, key, False, "no persisted values")
            return
        if not catalog:
            log_reconciliation(self.logger, key, False, "catalog not loaded")
            return

        self._hydrated[key] = True
        values = tuple(values)

        if values == tuple(entry.value for entry in catalog):
            # whole catalog persisted; an empty selection means the same thing
            log_reconciliation(self.logger, key, False, "persisted values cover full catalog")
            return

        selection = build_selection(values, catalog)
        setattr(self, attr, selection)

        unknown = [entry.value for entry in selection if entry.label is None]
        log_reconciliation(
            self.logger, key, True, "hydrated from persisted values",
            context={"count": len(selection), "unknown_values": unknown} if unknown else None,
        )

    def _reconcile_dates(self) -> None:
        if self._dates_hydrated or self._persisted is None:
            return

        self._dates_hydrated = True
        self.start_date = persisted_date(self._persisted, START_DATE_KEY, self._default_start)
        self.end_date = persisted_date(self._persisted, END_DATE_KEY, self._default_end)
        log_reconciliation(
            self.logger, "dates", True, "hydrated from persisted values",
            context={"start_date": date_to_number(self.start_date),
                     "end_date": date_to_number(self.end_date)},
        )

    # User edits

    def select_symbols(self, entries: Iterable[CatalogEntry]) -> None:
        self.selected_symbols = tuple(entries)
        self._hydrated[SYMBOLS_KEY] = True

    def select_form_types(self, entries: Iterable[CatalogEntry]) -> None:
        self.selected_form_types = tuple(entries)
        self._hydrated[FORM_TYPES_KEY] = True

    def set_start_date(self, value: Optional[date]) -> None:
        self.start_date = value
        self._dates_hydrated = True

    def set_end_date(self, value: Optional[date]) -> None:
        self.end_date = value
        self._dates_hydrated = True

    # Save

    def serialize(self) -> tuple[KeyValuePair, ...]:
        """Current form state as requiredKeys."""
        return build_required_keys(
            self.selected_symbols,
            self.catalog,
            self.selected_form_types,
            self.form_types,
            self.start_date,
            self.end_date,
        )

    def apply_to(self, plugin: Plugin) -> Plugin:
        """
        Copy ``plugin`` with requiredKeys taken from the current form.

        Args:
            plugin: Registry template or previously configured instance

        Returns:
            New plugin; all other fields are preserved
        """
        updated = plugin.with_required_keys(self.serialize())
        self.logger.info(
            "Plugin parameters saved",
            symbols=len(updated.get_param(SYMBOLS_KEY)),
            form_types=list(updated.get_param(FORM_TYPES_KEY)),
            start_date=updated.get_param(START_DATE_KEY),
            end_date=updated.get_param(END_DATE_KEY),
        )
        return updated
