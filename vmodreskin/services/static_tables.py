"""
Static configuration tables.

Hand-authored lookups that cover the filenames automatic normalization
gets wrong:

- Override tables: asset filename -> catalog identifier (one per category)
- Ignore set: asset filenames with no catalog counterpart
- Damage name corrections: asset filename -> corrected display name

Tables are loaded and validated ONCE, then injected into the resolver.
A malformed table is a ConfigurationError at load time, never a runtime skip.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from vmodreskin.models.catalog import AssetFilename, CardCategory
from vmodreskin.models.failure import ConfigurationError, FailureKind

logger = logging.getLogger(__name__)

OVERRIDE_TABLE_FILES: dict[CardCategory, str] = {
    CardCategory.PILOT: "pilot-mappings.json",
    CardCategory.CONDITION: "condition-mappings.json",
    CardCategory.DAMAGE: "damage-mappings.json",
    CardCategory.UPGRADE: "upgrade-mappings.json",
}
IGNORED_FILE = "ignored.json"
DAMAGE_NAME_CORRECTIONS_FILE = "damage-name-corrections.json"


class IgnoreSet:
    """Filenames known to be intentionally unmatched."""

    def __init__(self, filenames: Iterable[AssetFilename] = ()) -> None:
        self._filenames = frozenset(filenames)

    def is_ignored(self, filename: AssetFilename) -> bool:
        """Exact membership test; no normalization is applied."""
        return filename in self._filenames

    def __contains__(self, filename: object) -> bool:
        return filename in self._filenames

    def __len__(self) -> int:
        return len(self._filenames)


class OverrideTable:
    """Exact asset filename -> catalog identifier mapping for one category."""

    def __init__(self, category: CardCategory, mapping: Mapping[str, str] | None = None) -> None:
        self.category = category
        self._mapping: Mapping[str, str] = MappingProxyType(dict(mapping or {}))

    def lookup(self, filename: AssetFilename) -> str | None:
        """Identifier for an exact filename, or None."""
        return self._mapping.get(filename)

    def __contains__(self, filename: object) -> bool:
        return filename in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def items(self) -> Iterable[tuple[str, str]]:
        return self._mapping.items()


@dataclass(frozen=True)
class StaticTables:
    """All hand-authored tables, validated and read-only."""

    overrides: Mapping[CardCategory, OverrideTable] = field(default_factory=dict)
    ignored: IgnoreSet = field(default_factory=IgnoreSet)
    damage_name_corrections: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def override_table(self, category: CardCategory) -> OverrideTable:
        """Override table for a category; empty when none was configured."""
        table = self.overrides.get(category)
        if table is None:
            return OverrideTable(category)
        return table


def _reject_duplicates(table: str) -> Any:
    """Build a json object_pairs_hook that fails on repeated keys."""

    def hook(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in pairs:
            if key in result:
                raise ConfigurationError(
                    table,
                    f"duplicate key {key!r}",
                    kind=FailureKind.DUPLICATE_KEY,
                )
            result[key] = value
        return result

    return hook


def _read_json(path: Path) -> Any:
    table = path.name
    if not path.exists():
        raise ConfigurationError(table, "table file not found", detail=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f, object_pairs_hook=_reject_duplicates(table))
    except json.JSONDecodeError as e:
        raise ConfigurationError(table, "invalid JSON", detail=str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(table, "unreadable table file", detail=str(e)) from e


def parse_string_mapping(table: str, raw: Any) -> dict[str, str]:
    """
    Validate a filename -> value mapping.

    Integer values are accepted (the data set uses numeric ids) and
    converted to strings. Booleans, empty strings and nested values are not.

    Raises:
        ConfigurationError: If the mapping is malformed
    """
    if not isinstance(raw, dict):
        raise ConfigurationError(table, f"expected a JSON object, got {type(raw).__name__}")

    mapping: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ConfigurationError(table, f"invalid value for {key!r}: {value!r}")
        text = str(value)
        if not text.strip():
            raise ConfigurationError(table, f"empty value for {key!r}")
        mapping[key] = text
    return mapping


def parse_ignore_list(table: str, raw: Any) -> IgnoreSet:
    """
    Validate the ignore list.

    Raises:
        ConfigurationError: If the list is malformed
    """
    if not isinstance(raw, list):
        raise ConfigurationError(table, f"expected a JSON array, got {type(raw).__name__}")

    seen: set[str] = set()
    for entry in raw:
        if not isinstance(entry, str):
            raise ConfigurationError(table, f"invalid entry {entry!r}")
        if entry in seen:
            logger.warning("Ignore list repeats %s", entry)
        seen.add(entry)
    return IgnoreSet(seen)


def load_static_tables(tables_dir: Path) -> StaticTables:
    """
    Load every static table from a directory.

    Args:
        tables_dir: Directory holding the mapping and ignore JSON files

    Returns:
        Validated StaticTables

    Raises:
        ConfigurationError: If any table is missing or malformed
    """
    overrides: dict[CardCategory, OverrideTable] = {}
    for category, filename in OVERRIDE_TABLE_FILES.items():
        mapping = parse_string_mapping(filename, _read_json(tables_dir / filename))
        overrides[category] = OverrideTable(category, mapping)

    ignored = parse_ignore_list(IGNORED_FILE, _read_json(tables_dir / IGNORED_FILE))
    corrections = parse_string_mapping(
        DAMAGE_NAME_CORRECTIONS_FILE,
        _read_json(tables_dir / DAMAGE_NAME_CORRECTIONS_FILE),
    )

    logger.info(
        "Loaded static tables from %s: %d ignored, %d damage name corrections",
        tables_dir,
        len(ignored),
        len(corrections),
    )
    for category, table in overrides.items():
        logger.debug("%s overrides: %d", category.value, len(table))

    return StaticTables(
        overrides=MappingProxyType(overrides),
        ignored=ignored,
        damage_name_corrections=MappingProxyType(corrections),
    )
