"""
xwing-data catalog loader.

Parses the data set's card files into CatalogRecords. The files carry a
.js extension but contain plain JSON arrays.

Repository: https://github.com/guidokessels/xwing-data
"""

import json
from pathlib import Path
from typing import Any

from vmodreskin.models.catalog import CatalogRecord
from vmodreskin.models.failure import CatalogError, FailureKind
from vmodreskin.services.catalog_index import CatalogIndex, CatalogSet

PILOTS_FILE = "pilots.js"
CONDITIONS_FILE = "conditions.js"
UPGRADES_FILE = "upgrades.js"
DAMAGE_CORE_FILE = "damage-deck-core.js"
DAMAGE_REVISED_FILE = "damage-deck-core-tfa.js"


def parse_record(raw: dict[str, Any], source: str) -> CatalogRecord:
    """
    Build a CatalogRecord from one data set entry.

    Identifier is "id" when present; damage decks have no ids, so "xws" and
    then "name" stand in.

    Raises:
        CatalogError: If the entry has no name
    """
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        raise CatalogError(source, "record without a name", detail=repr(raw)[:200])

    identifier = raw.get("id")
    if identifier is None:
        identifier = raw.get("xws") or name

    short_code = raw.get("xws")
    image = raw.get("image")

    return CatalogRecord(
        identifier=str(identifier),
        short_code=str(short_code) if short_code is not None else None,
        display_name=name,
        image_ref=str(image) if image else None,
        source=source,
    )


def load_records(path: Path) -> list[CatalogRecord]:
    """
    Load every record of one data file, in file order.

    Raises:
        CatalogError: If the file is missing, unreadable, or not a JSON array of objects
    """
    source = path.name.removesuffix(".js")
    if not path.exists():
        raise CatalogError(
            source,
            "catalog file not found",
            kind=FailureKind.NOT_FOUND,
            detail=str(path),
        )

    try:
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(source, "invalid JSON", detail=str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(source, "unreadable catalog file", detail=str(e)) from e

    if not isinstance(entries, list):
        raise CatalogError(source, f"expected a JSON array, got {type(entries).__name__}")

    records: list[CatalogRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise CatalogError(source, f"invalid record {entry!r}")
        records.append(parse_record(entry, source))
    return records


def load_catalog(path: Path) -> CatalogIndex:
    """Load one data file into an index."""
    return CatalogIndex(path.name.removesuffix(".js"), load_records(path))


def load_catalogs(xwing_data_dir: Path) -> CatalogSet:
    """
    Load every catalog the reconciliation needs.

    Args:
        xwing_data_dir: Root of an xwing-data checkout (contains data/ and images/)

    Returns:
        CatalogSet with pilots, conditions, upgrades and both damage decks

    Raises:
        CatalogError: If any catalog is missing or malformed
    """
    data_dir = xwing_data_dir / "data"
    return CatalogSet(
        pilots=load_catalog(data_dir / PILOTS_FILE),
        conditions=load_catalog(data_dir / CONDITIONS_FILE),
        upgrades=load_catalog(data_dir / UPGRADES_FILE),
        damage_core=load_catalog(data_dir / DAMAGE_CORE_FILE),
        damage_revised=load_catalog(data_dir / DAMAGE_REVISED_FILE),
    )
