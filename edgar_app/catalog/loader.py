"""
Single-shot asynchronous loading of the symbol catalog.

A load never fails from the caller's point of view: any error while
fetching or parsing is logged and the catalog degrades to empty, which
leaves the parameter form usable.
"""

import asyncio
from typing import Callable, Optional

import structlog

from ..data.models import CatalogEntry
from ..data.parsers import parse_catalog
from .sources import CatalogSource

logger = structlog.get_logger(__name__)

CatalogSnapshot = tuple[CatalogEntry, ...]


async def load_catalog(source: CatalogSource) -> CatalogSnapshot:
    """
    Fetch, parse and sort the catalog.

    Args:
        source: Where to read the catalog text from

    Returns:
        Label-sorted entries, empty on any failure
    """
    try:
        text = await source.read()
        entries = tuple(parse_catalog(text))
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.error(
            "Catalog load failed, continuing with empty catalog",
            catalog_source=source.name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return ()

    logger.info("Catalog loaded", catalog_source=source.name, entries=len(entries))
    return entries


class CatalogTask:
    """
    Runs one catalog load and publishes its snapshot.

    The task is started at most once. ``on_loaded`` receives the immutable
    snapshot when the load completes; it is never called after ``cancel``.
    """

    def __init__(self, source: CatalogSource, on_loaded: Callable[[CatalogSnapshot], None]):
        self.source = source
        self.on_loaded = on_loaded
        self._task: Optional[asyncio.Task] = None

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the load on the running event loop."""
        if self._task is not None:
            return self._task

        self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def wait(self) -> CatalogSnapshot:
        """Start if needed and wait for the snapshot."""
        return await self.start()

    def cancel(self) -> bool:
        """Cancel a pending load; returns False if nothing was cancelled."""
        if self._task is None or self._task.done():
            return False
        logger.debug("Cancelling catalog load", catalog_source=self.source.name)
        return self._task.cancel()

    async def _run(self) -> CatalogSnapshot:
        snapshot = await load_catalog(self.source)
        self.on_loaded(snapshot)
        return snapshot
