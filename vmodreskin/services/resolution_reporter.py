"""
Resolution reporting.

Aggregates resolver output for the operator. Advisory only: nothing here
changes which images are swapped or the job's exit status.
"""

import logging

from vmodreskin.models.catalog import CardCategory
from vmodreskin.models.outcome import UnmatchedReason
from vmodreskin.models.report import (
    CategoryReport,
    CategorySummary,
    ResolutionReport,
    ResolutionSummary,
    UnmatchedEntry,
)

logger = logging.getLogger(__name__)

CATEGORY_LABELS: dict[CardCategory, str] = {
    CardCategory.PILOT: "pilot",
    CardCategory.CONDITION: "condition",
    CardCategory.DAMAGE: "crit",
    CardCategory.UPGRADE: "upgrade",
}


def summarize_category(report: CategoryReport) -> CategorySummary:
    """Counts and unmatched entries for one category."""
    return CategorySummary(
        category=report.category,
        total=report.total,
        skipped=report.skipped_count,
        matched=report.matched_count,
        unmatched=report.unmatched_count,
        stale_overrides=report.stale_override_count,
        unmatched_entries=[
            UnmatchedEntry(filename=o.filename, candidate=o.candidate, reason=o.reason)
            for o in report.unmatched
        ],
    )


def summarize(report: ResolutionReport, module_version: str | None = None) -> ResolutionSummary:
    """Serializable summary of a whole run, categories in a fixed order."""
    return ResolutionSummary(
        module_version=module_version,
        categories=[
            summarize_category(report[category])
            for category in CardCategory
            if category in report.categories
        ],
    )


def log_category_report(report: CategoryReport) -> None:
    """
    Log counts for one category, then each unmatched asset.

    Stale overrides are worded differently from normalization failures so
    a bad table entry is not mistaken for a naming problem.
    """
    label = CATEGORY_LABELS[report.category]
    logger.info("--------------- %s CARD IMAGES ---------------", label.upper())
    logger.info("%d %s images in vmod file", report.total, label)
    logger.info("%d skipped %s card images", report.skipped_count, label)
    logger.info("%d unmatched %s card images", report.unmatched_count, label)
    logger.info("%d %s card images matched", report.matched_count, label)

    for outcome in report.unmatched:
        if outcome.reason == UnmatchedReason.STALE_OVERRIDE:
            logger.warning(
                "Override for %s names identifier %s, which is not in the catalog",
                outcome.filename,
                outcome.candidate,
            )
        elif outcome.reason == UnmatchedReason.AMBIGUOUS:
            logger.warning(
                "%s is ambiguous: several records match %r ignoring case",
                outcome.filename,
                outcome.candidate,
            )
        else:
            logger.warning("No match for %s (looked up %r)", outcome.filename, outcome.candidate)

    logger.debug(
        "category_resolved",
        extra={
            "category": report.category.value,
            "total": report.total,
            "skipped": report.skipped_count,
            "matched": report.matched_count,
            "unmatched": report.unmatched_count,
            "stale_overrides": report.stale_override_count,
        },
    )


def log_report(report: ResolutionReport) -> None:
    """Log every category in a fixed order."""
    for category in CardCategory:
        if category in report.categories:
            log_category_report(report[category])
