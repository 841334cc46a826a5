"""
Card Image Resolution Service.

Pairs module asset filenames with data set card images.

Resolution order, per asset:
1. Skip: ignored filenames (and upgrade card backs) UNLESS an override exists
2. Override: exact filename -> identifier; missing identifier is a stale override
3. Exact: normalized candidate against the category's lookup field
4. Fuzzy: case-insensitive comparison, accepted only when exactly one
   record matches

INVARIANTS:
1. Every asset of the category yields exactly ONE outcome
2. Overrides short-circuit normalization, stale or not
3. Ambiguity is never resolved silently (fuzzy tier only)
4. The resolver performs no I/O and mutates nothing it was given
"""

from collections.abc import Iterable

from vmodreskin.models.catalog import AssetFilename, CardCategory, CatalogRecord
from vmodreskin.models.outcome import (
    Matched,
    MatchTier,
    ResolutionOutcome,
    Skipped,
    SkipReason,
    Unmatched,
    UnmatchedReason,
)
from vmodreskin.models.report import CategoryReport, ResolutionReport
from vmodreskin.services.catalog_index import CatalogIndex, CatalogSet
from vmodreskin.services.name_normalizer import (
    NormalizedName,
    is_card_back,
    is_revised_damage,
    normalize,
)
from vmodreskin.services.static_tables import StaticTables


def categorize_asset(filename: AssetFilename) -> CardCategory | None:
    """
    Category of a module image by its filename convention.

    - Pilot:     Pilot-{name}.jpg or Pilot_{name}.jpg
    - Condition: Condition_{xws}.jpg
    - Damage:    Hit-{name}.png
    - Upgrade:   Upgrade_{slot}_{xws}.jpg

    Returns None for images that are not reconciled (tokens, maps, ...).
    """
    if filename.startswith("Pilot"):
        return CardCategory.PILOT
    if filename.startswith("Condition_") and filename.endswith(".jpg"):
        return CardCategory.CONDITION
    if filename.startswith("Hit-") and filename.endswith(".png"):
        return CardCategory.DAMAGE
    if filename.startswith("Upgrade_"):
        return CardCategory.UPGRADE
    return None


def partition_assets(
    filenames: Iterable[AssetFilename],
) -> dict[CardCategory, list[AssetFilename]]:
    """Split a directory listing into per-category lists, dropping the rest."""
    partitions: dict[CardCategory, list[AssetFilename]] = {c: [] for c in CardCategory}
    for filename in filenames:
        category = categorize_asset(filename)
        if category is not None:
            partitions[category].append(filename)
    return partitions


class CardImageResolver:
    """
    Resolves asset filenames -> catalog images.

    Catalogs and static tables are injected once and treated as read-only,
    so categories can be resolved independently and in any order.
    """

    def __init__(self, catalogs: CatalogSet, tables: StaticTables) -> None:
        self._catalogs = catalogs
        self._tables = tables

    def resolve_all(self, filenames: Iterable[AssetFilename]) -> ResolutionReport:
        """
        Resolve a mixed directory listing.

        Args:
            filenames: Every image filename in the module

        Returns:
            ResolutionReport with one CategoryReport per category
        """
        report = ResolutionReport()
        for category, assets in partition_assets(filenames).items():
            report.add(self.resolve_category(category, assets))
        return report

    def resolve_category(
        self,
        category: CardCategory,
        filenames: Iterable[AssetFilename],
    ) -> CategoryReport:
        """
        Resolve every asset that belongs to one category.

        Filenames of other categories are ignored, not reported.
        """
        report = CategoryReport(category=category)
        for filename in filenames:
            if categorize_asset(filename) != category:
                continue
            report.add(self.resolve_asset(category, filename))
        return report

    def resolve_asset(self, category: CardCategory, filename: AssetFilename) -> ResolutionOutcome:
        """Resolve a single asset already known to belong to category."""
        identifier = self._tables.override_table(category).lookup(filename)

        if identifier is None:
            skip_reason = self._skip_reason(category, filename)
            if skip_reason is not None:
                return Skipped(filename=filename, category=category, reason=skip_reason)
            return self._resolve_by_name(category, filename)

        return self._resolve_override(category, filename, identifier)

    def _skip_reason(self, category: CardCategory, filename: AssetFilename) -> SkipReason | None:
        if self._tables.ignored.is_ignored(filename):
            return SkipReason.IGNORED
        if category == CardCategory.UPGRADE and is_card_back(filename):
            return SkipReason.CARD_BACK
        return None

    def _resolve_override(
        self,
        category: CardCategory,
        filename: AssetFilename,
        identifier: str,
    ) -> ResolutionOutcome:
        for index in self._override_chain(category):
            record = index.get(identifier)
            if record is not None:
                return self._matched(category, filename, record, MatchTier.OVERRIDE, identifier)

        return Unmatched(
            filename=filename,
            category=category,
            candidate=identifier,
            reason=UnmatchedReason.STALE_OVERRIDE,
        )

    def _resolve_by_name(self, category: CardCategory, filename: AssetFilename) -> ResolutionOutcome:
        normalized = self._normalize(category, filename)
        chain = self._lookup_chain(category, filename)

        for index in chain:
            record = index.find_exact(normalized.lookup_field, normalized.candidate)
            if record is not None:
                return self._matched(
                    category, filename, record, MatchTier.EXACT, normalized.candidate
                )

        for index in chain:
            found = index.find_case_insensitive(normalized.lookup_field, normalized.candidate)
            if len(found) == 1:
                return self._matched(
                    category, filename, found[0], MatchTier.FUZZY, normalized.candidate
                )
            if len(found) > 1:
                return Unmatched(
                    filename=filename,
                    category=category,
                    candidate=normalized.candidate,
                    reason=UnmatchedReason.AMBIGUOUS,
                )

        return Unmatched(
            filename=filename,
            category=category,
            candidate=normalized.candidate,
            reason=UnmatchedReason.NO_MATCH,
        )

    def _normalize(self, category: CardCategory, filename: AssetFilename) -> NormalizedName:
        normalized = normalize(category, filename)
        if category == CardCategory.DAMAGE and not is_revised_damage(filename):
            corrected = self._tables.damage_name_corrections.get(filename)
            if corrected is not None:
                return NormalizedName(candidate=corrected, lookup_field=normalized.lookup_field)
        return normalized

    def _lookup_chain(
        self,
        category: CardCategory,
        filename: AssetFilename,
    ) -> tuple[CatalogIndex, ...]:
        if category == CardCategory.DAMAGE and is_revised_damage(filename):
            return (self._catalogs.damage_revised,)
        return self._override_chain(category)

    def _override_chain(self, category: CardCategory) -> tuple[CatalogIndex, ...]:
        if category == CardCategory.PILOT:
            return (self._catalogs.pilots,)
        if category == CardCategory.CONDITION:
            return (self._catalogs.conditions,)
        if category == CardCategory.DAMAGE:
            return (self._catalogs.damage_core, self._catalogs.damage_revised)
        return (self._catalogs.upgrades,)

    @staticmethod
    def _matched(
        category: CardCategory,
        filename: AssetFilename,
        record: CatalogRecord,
        tier: MatchTier,
        candidate: str,
    ) -> ResolutionOutcome:
        if not record.image_ref:
            return Unmatched(
                filename=filename,
                category=category,
                candidate=candidate,
                reason=UnmatchedReason.NO_MATCH,
            )
        return Matched(filename=filename, category=category, record=record, tier=tier)
