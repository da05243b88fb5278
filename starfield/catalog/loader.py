"""Star catalog loading from bundled resources, local files or URLs."""

import asyncio
import itertools
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import unquote, urlparse

import requests

from ..config import DEFAULT_CATALOG

logger = logging.getLogger(__name__)

BUNDLED_CATALOG_DIR = Path(__file__).resolve().parent / "data"

# Process-local record ids, handed out in load order
_record_ids = itertools.count(1)

# JSON key -> (StarRecord field, expected kind)
_FIELDS = (
    ('name', 'name', 'string'),
    ('rightAscension', 'right_ascension', 'number'),
    ('declination', 'declination', 'number'),
    ('distance', 'distance', 'number'),
    ('magnitude', 'magnitude', 'number'),
    ('color', 'color_hex', 'string'),
    ('type', 'spectral_type', 'string'),
    ('temperature', 'temperature', 'integer'),
)


class CatalogError(Exception):
    """Base class for catalog loading failures."""


class NotFound(CatalogError):
    """The catalog resource does not exist."""


class DecodeError(CatalogError):
    """The payload is not a well-formed star catalog."""


class FetchError(CatalogError):
    """A remote catalog could not be retrieved."""


@dataclass(frozen=True)
class StarRecord:
    """One immutable catalog entry. Equality and hashing use the id only."""

    id: int
    name: str = field(compare=False)
    right_ascension: float = field(compare=False)  # degrees
    declination: float = field(compare=False)  # degrees
    distance: float = field(compare=False)  # light years (or arbitrary units)
    magnitude: float = field(compare=False)  # lower = brighter
    color_hex: str = field(compare=False)  # e.g. "#ffffff"
    spectral_type: str = field(compare=False)  # e.g. "G2V"
    temperature: int = field(compare=False)  # Kelvin


def _reject_constant(name):
    raise ValueError(f"non-finite number {name} is not allowed")


def _coerce(kind: str, value, where: str):
    """Check a JSON value against the expected kind and normalize it."""
    if kind == 'string':
        if not isinstance(value, str):
            raise DecodeError(f"{where}: expected a string, got {type(value).__name__}")
        return value

    # bool is a subclass of int but never a valid catalog number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"{where}: expected a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise DecodeError(f"{where}: number must be finite")

    if kind == 'integer':
        if isinstance(value, float):
            if not value.is_integer():
                raise DecodeError(f"{where}: expected an integer, got {value}")
            value = int(value)
        return value

    return float(value)


def _decode_entry(index: int, entry) -> dict:
    if not isinstance(entry, dict):
        raise DecodeError(f"stars[{index}]: expected an object")

    values = {}
    for key, attr, kind in _FIELDS:
        where = f"stars[{index}].{key}"
        if key not in entry:
            raise DecodeError(f"{where}: missing required field")
        values[attr] = _coerce(kind, entry[key], where)

    if values['distance'] < 0:
        raise DecodeError(f"stars[{index}].distance: must be >= 0")
    if values['temperature'] < 0:
        raise DecodeError(f"stars[{index}].temperature: must be >= 0")
    return values


def parse_catalog(payload: Union[bytes, str]) -> List[StarRecord]:
    """
    Decode a catalog payload into StarRecords.

    The payload must be a JSON object with a "stars" array; unknown fields
    are ignored. Either every entry is valid and a full list is returned, or
    DecodeError is raised and no ids are consumed.

    Args:
        payload: Raw JSON bytes or text

    Returns:
        Records in catalog order with freshly assigned ids
    """
    try:
        document = json.loads(payload, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise DecodeError("catalog root must be an object")
    if 'stars' not in document:
        raise DecodeError("catalog is missing the 'stars' array")
    entries = document['stars']
    if not isinstance(entries, list):
        raise DecodeError("'stars' must be an array")

    decoded = [_decode_entry(i, entry) for i, entry in enumerate(entries)]
    return [StarRecord(id=next(_record_ids), **values) for values in decoded]


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as e:
        raise NotFound(f"catalog file not found: {path}") from e
    except IsADirectoryError as e:
        raise NotFound(f"catalog path is a directory: {path}") from e


def _fetch_url(url: str, timeout: Optional[float] = None) -> bytes:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.Timeout as e:
        raise FetchError(f"timed out after {timeout} s fetching {url}") from e
    except requests.RequestException as e:
        raise FetchError(f"could not fetch {url}: {e}") from e

    if response.status_code == 404:
        raise NotFound(f"catalog not found at {url}")
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise FetchError(f"could not fetch {url}: {e}") from e
    return response.content


def bundled_catalog_path(name: str = DEFAULT_CATALOG) -> Path:
    """Location of a bundled catalog; the .json suffix is optional."""
    if not name.endswith('.json'):
        name = f"{name}.json"
    return BUNDLED_CATALOG_DIR / name


async def load_catalog(
    source: Union[str, Path] = DEFAULT_CATALOG,
    timeout: Optional[float] = None,
) -> List[StarRecord]:
    """
    Load and validate a star catalog.

    Blocking I/O runs on a worker thread so the caller's event loop stays
    responsive. No retries.

    Args:
        source: http(s) URL, file:// URL, filesystem path, or the name of a
            bundled catalog (with or without .json)
        timeout: Seconds to wait on a remote server before giving up
            (None waits indefinitely). Local reads ignore it.

    Returns:
        Records in catalog order

    Raises:
        NotFound: The resource does not exist
        DecodeError: The payload is not a valid catalog
        FetchError: A remote source failed for another reason
    """
    if isinstance(source, Path):
        location = source
    else:
        parsed = urlparse(source)
        if parsed.scheme in ('http', 'https'):
            logger.info("Fetching star catalog from %s", source)
            payload = await asyncio.to_thread(_fetch_url, source, timeout)
            records = parse_catalog(payload)
            logger.info("Loaded %d stars from %s", len(records), source)
            return records
        if parsed.scheme == 'file':
            location = Path(unquote(parsed.path))
        elif Path(source).exists():
            location = Path(source)
        else:
            location = bundled_catalog_path(source)

    logger.info("Reading star catalog from %s", location)
    payload = await asyncio.to_thread(_read_file, location)
    records = parse_catalog(payload)
    logger.info("Loaded %d stars from %s", len(records), location)
    return records
