from vmodreskin.models.catalog import AssetFilename, CardCategory, CatalogRecord
from vmodreskin.models.failure import (
    ArchiveError,
    CatalogError,
    ConfigurationError,
    DownloadError,
    FailureKind,
    ReskinError,
)
from vmodreskin.models.outcome import (
    Matched,
    MatchTier,
    ResolutionOutcome,
    SkipReason,
    Skipped,
    Unmatched,
    UnmatchedReason,
)
from vmodreskin.models.report import (
    CategoryReport,
    CategorySummary,
    ResolutionReport,
    ResolutionSummary,
    UnmatchedEntry,
)

__all__ = [
    "ArchiveError",
    "AssetFilename",
    "CardCategory",
    "CatalogError",
    "CatalogRecord",
    "CategoryReport",
    "CategorySummary",
    "ConfigurationError",
    "DownloadError",
    "FailureKind",
    "MatchTier",
    "Matched",
    "ReskinError",
    "ResolutionOutcome",
    "ResolutionReport",
    "ResolutionSummary",
    "SkipReason",
    "Skipped",
    "Unmatched",
    "UnmatchedEntry",
    "UnmatchedReason",
]
