"""
Parsers for the symbol catalog resource and persisted parameter payloads.

The catalog is a plain ``value,label`` text file, one record per line. The
persisted payload is the JSON form of a plugin's requiredKeys list.
"""

import locale
import re
import unicodedata
from typing import Any, Iterable, Sequence, Union

import orjson
import structlog

from ..errors import MalformedDataError
from .models import LIST_KEYS, REQUIRED_KEY_NAMES, CatalogEntry, KeyValuePair

logger = structlog.get_logger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def parse_catalog_line(line: str) -> CatalogEntry:
    """
    Parse one catalog record.

    The first comma is the delimiter; anything after a second comma is
    ignored. A line with no comma yields an entry without a label.
    """
    fields = line.split(",")
    label = fields[1] if len(fields) > 1 else None
    return CatalogEntry(value=fields[0], label=label)


def fold_label(label: str) -> str:
    """Case- and accent-insensitive form of a label."""
    decomposed = unicodedata.normalize("NFKD", label)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def label_sort_key(entry: CatalogEntry) -> tuple[str, str]:
    """
    Collation key for catalog labels; missing labels sort as empty strings.

    The primary key ignores case and accents whatever the process locale is;
    ties fall back to the active LC_COLLATE order of the raw label.
    """
    label = entry.label or ""
    return fold_label(label), locale.strxfrm(label)


def sort_catalog(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Sort entries by label; ties keep input order."""
    return sorted(entries, key=label_sort_key)


def parse_catalog(text: str) -> list[CatalogEntry]:
    """
    Parse catalog text into label-sorted entries.

    Args:
        text: Newline-delimited ``value,label`` records, ``\\n`` or ``\\r\\n``

    Returns:
        Entries sorted by label
    """
    entries = [parse_catalog_line(line) for line in _LINE_SPLIT.split(text) if line]
    unlabeled = sum(1 for entry in entries if entry.label is None)
    if unlabeled:
        logger.warning("Catalog lines without label", count=unlabeled)
    return sort_catalog(entries)


def encode_required_keys(pairs: Sequence[KeyValuePair]) -> bytes:
    """Serialize requiredKeys for the external parameter store."""
    return orjson.dumps([pair.to_dict() for pair in pairs])


def decode_required_keys(raw: Union[bytes, str]) -> list[KeyValuePair]:
    """
    Deserialize requiredKeys from the external parameter store.

    Unknown keys are dropped with a warning.

    Raises:
        MalformedDataError: payload is not JSON or a value has the wrong type
    """
    try:
        payload = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedDataError(
            f"Persisted parameters are not valid JSON: {e}",
            raw_data=raw if isinstance(raw, str) else raw.decode("utf-8", "replace"),
            expected_format="json",
        ) from e

    if not isinstance(payload, list):
        raise MalformedDataError(
            "Persisted parameters must be a list of key/value objects",
            expected_format="list",
        )

    pairs = []
    for item in payload:
        if not isinstance(item, dict) or "key" not in item or "value" not in item:
            raise MalformedDataError(
                "Persisted parameter entry must have key and value",
                expected_format="{key, value}",
                context={"item": item},
            )

        key = item["key"]
        if key not in REQUIRED_KEY_NAMES:
            logger.warning("Dropping unknown persisted parameter", key=key)
            continue

        pairs.append(KeyValuePair(key=key, value=_coerce_value(key, item["value"])))

    return pairs


def _coerce_value(key: str, value: Any) -> Any:
    if key in LIST_KEYS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise MalformedDataError(
                f"Parameter {key} must be a list of strings",
                expected_format="list[str]",
                context={"key": key, "value": value},
            )
        return tuple(value)

    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedDataError(
            f"Parameter {key} must be an integer YYYYMMDD date",
            expected_format="int",
            context={"key": key, "value": value},
        )
    return value
