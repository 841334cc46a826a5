"""
Resolution outcomes.

Every asset filename handed to the resolver produces exactly one outcome:
Skipped, Matched or Unmatched. Outcomes are frozen once created.
"""

from dataclasses import dataclass
from enum import Enum

from vmodreskin.models.catalog import AssetFilename, CardCategory, CatalogRecord


class SkipReason(str, Enum):
    """Why an asset was deliberately left alone."""

    IGNORED = "ignored"
    CARD_BACK = "card_back"


class MatchTier(str, Enum):
    """Which resolution tier produced a match."""

    OVERRIDE = "override"
    EXACT = "exact"
    FUZZY = "fuzzy"


class UnmatchedReason(str, Enum):
    """Why an asset could not be paired with a catalog image."""

    STALE_OVERRIDE = "stale_override"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class Skipped:
    """Asset intentionally has no catalog counterpart."""

    filename: AssetFilename
    category: CardCategory
    reason: SkipReason


@dataclass(frozen=True, slots=True)
class Matched:
    """Asset paired with a catalog record and its image."""

    filename: AssetFilename
    category: CardCategory
    record: CatalogRecord
    tier: MatchTier

    @property
    def image_ref(self) -> str:
        # Records without an image never produce a Matched outcome.
        return self.record.image_ref or ""


@dataclass(frozen=True, slots=True)
class Unmatched:
    """
    Asset that could not be resolved.

    Attributes:
        candidate: The key that was looked up (normalized name, short code,
            or the override identifier for stale overrides)
        reason: Classification of the failure
    """

    filename: AssetFilename
    category: CardCategory
    candidate: str
    reason: UnmatchedReason


ResolutionOutcome = Skipped | Matched | Unmatched
