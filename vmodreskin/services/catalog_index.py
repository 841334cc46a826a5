"""
Catalog Index.

In-memory lookup over one catalog's records. Built once per run from
already-parsed records and never mutated afterwards.

INVARIANTS:
1. identifier is unique within an index (CatalogError otherwise)
2. Exact lookup returns the FIRST record with the value, in file order
3. Case-insensitive lookup returns ALL records with the folded value,
   so callers can reject ambiguity
"""

from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from vmodreskin.models.catalog import CatalogRecord
from vmodreskin.models.failure import CatalogError, FailureKind
from vmodreskin.services.name_normalizer import LookupField


class CatalogIndex:
    """Records of one catalog file, indexed by identifier and lookup fields."""

    def __init__(self, source: str, records: Iterable[CatalogRecord]) -> None:
        self.source = source
        self._records: tuple[CatalogRecord, ...] = tuple(records)
        self._by_identifier = self._build_identifier_index()

        # Exact indices keep the first record per value
        self._exact: dict[LookupField, dict[str, CatalogRecord]] = {}
        self._folded: dict[LookupField, dict[str, list[CatalogRecord]]] = {}
        for lookup_field in LookupField:
            exact: dict[str, CatalogRecord] = {}
            folded: dict[str, list[CatalogRecord]] = defaultdict(list)
            for record in self._records:
                value = _field_value(record, lookup_field)
                if value is None:
                    continue
                if value not in exact:
                    exact[value] = record
                folded[value.lower()].append(record)
            self._exact[lookup_field] = exact
            self._folded[lookup_field] = dict(folded)

    def _build_identifier_index(self) -> dict[str, CatalogRecord]:
        by_identifier: dict[str, CatalogRecord] = {}
        for record in self._records:
            if record.identifier in by_identifier:
                raise CatalogError(
                    self.source,
                    f"duplicate identifier {record.identifier!r}",
                    kind=FailureKind.DUPLICATE_IDENTIFIER,
                    detail=(
                        f"{by_identifier[record.identifier].display_name!r} and "
                        f"{record.display_name!r}"
                    ),
                )
            by_identifier[record.identifier] = record
        return by_identifier

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(self._records)

    def get(self, identifier: str) -> CatalogRecord | None:
        """Record with an exact identifier, or None."""
        return self._by_identifier.get(identifier)

    def find_exact(self, lookup_field: LookupField, value: str) -> CatalogRecord | None:
        """First record whose field equals value (case-sensitive)."""
        return self._exact[lookup_field].get(value)

    def find_case_insensitive(self, lookup_field: LookupField, value: str) -> list[CatalogRecord]:
        """Every record whose lowercased field equals the lowercased value."""
        return list(self._folded[lookup_field].get(value.lower(), []))


def _field_value(record: CatalogRecord, lookup_field: LookupField) -> str | None:
    if lookup_field == LookupField.DISPLAY_NAME:
        return record.display_name
    return record.short_code


@dataclass(frozen=True)
class CatalogSet:
    """
    Every catalog the reconciliation reads.

    Damage cards come from two decks: the core deck is primary and the
    revised (The Force Awakens) deck is secondary.
    """

    pilots: CatalogIndex
    conditions: CatalogIndex
    upgrades: CatalogIndex
    damage_core: CatalogIndex
    damage_revised: CatalogIndex = field(
        default_factory=lambda: CatalogIndex("damage-deck-core-tfa", ())
    )

    def summary(self) -> dict[str, int]:
        """Record counts per catalog, for logging."""
        return {
            index.source: len(index)
            for index in (
                self.pilots,
                self.conditions,
                self.upgrades,
                self.damage_core,
                self.damage_revised,
            )
        }
