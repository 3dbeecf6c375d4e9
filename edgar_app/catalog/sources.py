"""Sources the symbol catalog text can be read from."""

import asyncio
import socket
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import CatalogParams
from ..errors import CatalogFetchError

logger = structlog.get_logger(__name__)


class CatalogSource(ABC):
    """Base class for catalog text sources."""

    def __init__(self, name: str, encoding: str = "utf-8"):
        self.name = name
        self.encoding = encoding
        self.logger = logger.bind(catalog_source=name)

    @abstractmethod
    def fetch_text(self) -> str:
        """
        Read the whole catalog resource.

        Returns:
            Raw catalog text

        Raises:
            CatalogFetchError: the resource could not be read
        """
        pass

    async def read(self) -> str:
        """Read the catalog without blocking the event loop."""
        return await asyncio.to_thread(self.fetch_text)


class FileCatalogSource(CatalogSource):
    """Catalog stored as a local file."""

    def __init__(self, path: Path, encoding: str = "utf-8"):
        super().__init__(str(path), encoding)
        self.path = Path(path)

    def fetch_text(self) -> str:
        try:
            return self.path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogFetchError(f"Cannot read catalog file: {e}", source=self.name) from e


class HttpCatalogSource(CatalogSource):
    """Catalog served over HTTP GET."""

    def __init__(self, url: str, timeout_seconds: float = 10.0, encoding: str = "utf-8"):
        super().__init__(url, encoding)
        self.url = url
        self.timeout_seconds = timeout_seconds

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise CatalogFetchError(f"Invalid URL: {url}", source=url)

    def fetch_text(self) -> str:
        req = Request(
            self.url,
            headers={'Accept': 'text/csv, text/plain', 'User-Agent': 'edgar-app/1.0'},
            method='GET'
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()
                body = response.read()

        except HTTPError as e:
            raise CatalogFetchError(f"HTTP {e.code}: {e.reason}", source=self.url) from e

        except (OSError, URLError, socket.timeout) as e:
            raise CatalogFetchError(f"Network error: {e}", source=self.url) from e

        if not 200 <= response_code < 300:
            raise CatalogFetchError(f"HTTP {response_code}", source=self.url)

        self.logger.debug("Catalog fetched", response_code=response_code, size=len(body))
        return body.decode(self.encoding)


def create_catalog_source(params: CatalogParams) -> CatalogSource:
    """Build the configured source; a URL wins over a file path."""
    if params.url:
        return HttpCatalogSource(params.url, params.timeout_seconds, params.encoding)
    return FileCatalogSource(Path(params.path), params.encoding)
