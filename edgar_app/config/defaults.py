"""Default configuration parameters for the EDGAR plugin parameters."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CatalogParams:
    """Symbol catalog resource parameters."""
    path: str = "public/symbols.csv"            # Local catalog file
    url: Optional[str] = None                   # Remote catalog, wins over path when set
    timeout_seconds: float = 10.0               # Socket timeout for remote fetch
    encoding: str = "utf-8"


@dataclass(frozen=True)
class DateParams:
    """Date range defaults for a fresh parameter form."""
    lookback_years: int = 1                     # Start date = today minus this many years


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    catalog: CatalogParams
    dates: DateParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        catalog=CatalogParams(),
        dates=DateParams(),
        logging=LoggingParams(),
    )
