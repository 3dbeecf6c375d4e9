"""
Integer date codec for persisted plugin parameters.

Calendar dates are stored on plugin instances as YYYYMMDD integers so the
generic key/value list stays JSON-friendly. This module converts between
that form and ``datetime.date`` and supplies the defaults a fresh
parameter form starts from.
"""

from datetime import date
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from ..data.models import KeyValuePair

UNSET_DATE = 0


def number_to_date(number: int) -> date:
    """
    Decode a YYYYMMDD integer into a calendar date.

    No bounds validation is done: digits that do not form a real date
    (month 13, day 32, year 0) are left to ``datetime.date``, which raises
    ``ValueError``. Only pass values produced by ``date_to_number`` or
    trusted persisted data.

    Args:
        number: Encoded date

    Returns:
        Date whose year, month and day match the digits of ``number``
    """
    year = number // 10000
    month = (number % 10000) // 100
    day = number % 100
    return date(year, month, day)


def date_to_number(value: Optional[date]) -> int:
    """
    Encode a calendar date as a YYYYMMDD integer.

    Args:
        value: Date to encode, None when no date is selected

    Returns:
        Encoded date, or ``UNSET_DATE`` (0) for None
    """
    if value is None:
        return UNSET_DATE

    # zero-pad so single-digit months and days never bleed into neighbours
    return int(f"{value.year}{value.month:02d}{value.day:02d}")


def years_before(value: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return value.replace(year=value.year - years)
    except ValueError:
        return value.replace(year=value.year - years, day=28)


def default_date_range(today: Optional[date] = None, lookback_years: int = 1) -> tuple[date, date]:
    """
    Date range a fresh parameter form starts with.

    Args:
        today: Reference day, defaults to the current local date
        lookback_years: Distance of the start date before ``today``

    Returns:
        Tuple of (start_date, end_date)
    """
    if today is None:
        today = date.today()

    return years_before(today, lookback_years), today


def persisted_date(
    pairs: Optional[Iterable["KeyValuePair"]],
    key: str,
    default: Optional[date] = None
) -> Optional[date]:
    """
    Read a date parameter back out of persisted key/value pairs.

    Args:
        pairs: Persisted key/value pairs
        key: Parameter key (``startDate`` or ``endDate``)
        default: Returned when the key is missing or holds the sentinel

    Returns:
        Decoded date or ``default``
    """
    for pair in pairs or ():
        if pair.key == key:
            return number_to_date(pair.value) if pair.value else default

    return default
