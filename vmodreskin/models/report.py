"""
Resolution report models.

A report is built fresh for every run and discarded after it has been
logged and its image pairs consumed. Nothing here is persisted except the
optional JSON summary written by the rebuild job.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from vmodreskin.models.catalog import AssetFilename, CardCategory
from vmodreskin.models.outcome import (
    Matched,
    ResolutionOutcome,
    Skipped,
    Unmatched,
    UnmatchedReason,
)


@dataclass
class CategoryReport:
    """Outcomes for every asset of one category, in input order."""

    category: CardCategory
    outcomes: list[ResolutionOutcome] = field(default_factory=list)

    def add(self, outcome: ResolutionOutcome) -> None:
        """Record an outcome."""
        self.outcomes.append(outcome)

    @property
    def skipped(self) -> list[Skipped]:
        return [o for o in self.outcomes if isinstance(o, Skipped)]

    @property
    def matched(self) -> list[Matched]:
        return [o for o in self.outcomes if isinstance(o, Matched)]

    @property
    def unmatched(self) -> list[Unmatched]:
        return [o for o in self.outcomes if isinstance(o, Unmatched)]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched)

    @property
    def stale_override_count(self) -> int:
        return sum(1 for o in self.unmatched if o.reason == UnmatchedReason.STALE_OVERRIDE)

    def image_pairs(self) -> list[tuple[AssetFilename, str]]:
        """(asset filename, catalog image) pairs for the image swapper."""
        return [(m.filename, m.image_ref) for m in self.matched]


@dataclass
class ResolutionReport:
    """Per-category reports for one run."""

    categories: dict[CardCategory, CategoryReport] = field(default_factory=dict)

    def __getitem__(self, category: CardCategory) -> CategoryReport:
        return self.categories[category]

    def add(self, report: CategoryReport) -> None:
        self.categories[report.category] = report

    @property
    def unmatched_count(self) -> int:
        return sum(r.unmatched_count for r in self.categories.values())

    @property
    def matched_count(self) -> int:
        return sum(r.matched_count for r in self.categories.values())


class UnmatchedEntry(BaseModel):
    """One unresolved asset in a serialized summary."""

    filename: str
    candidate: str
    reason: UnmatchedReason


class CategorySummary(BaseModel):
    """Serialized counts for one category."""

    category: CardCategory
    total: int = Field(..., ge=0, description="Assets of this category in the module")
    skipped: int = Field(..., ge=0)
    matched: int = Field(..., ge=0)
    unmatched: int = Field(..., ge=0)
    stale_overrides: int = Field(
        default=0,
        ge=0,
        description="Unmatched entries caused by an override naming a missing identifier",
    )
    unmatched_entries: list[UnmatchedEntry] = Field(default_factory=list)


class ResolutionSummary(BaseModel):
    """JSON-serializable summary of a whole run."""

    module_version: str | None = None
    categories: list[CategorySummary] = Field(default_factory=list)

    @property
    def total_unmatched(self) -> int:
        return sum(c.unmatched for c in self.categories)
