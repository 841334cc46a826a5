"""
Failure classification for module rebuilds.

Only load-time problems are exceptions. Anything that goes wrong while
resolving an individual asset is an Unmatched outcome, never an error.

Exception types:
- ConfigurationError: a static mapping table is malformed
- CatalogError: a catalog file cannot be turned into an index
- DownloadError: a remote artifact could not be fetched
- ArchiveError: the module archive cannot be read or written
"""

from enum import Enum


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Static table failures
    DUPLICATE_KEY = "duplicate_key"
    INVALID_TABLE = "invalid_table"

    # Catalog failures
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    INVALID_RECORD = "invalid_record"

    # I/O collaborators
    NOT_FOUND = "not_found"
    DOWNLOAD_FAILED = "download_failed"
    ARCHIVE_INVALID = "archive_invalid"


class ReskinError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ConfigurationError(ReskinError):
    """
    Raised when a static table cannot be loaded.

    Fatal and raised before any resolution begins. A duplicate key would
    otherwise shadow silently and make failures nondeterministic.
    """

    def __init__(
        self,
        table: str,
        message: str,
        kind: FailureKind = FailureKind.INVALID_TABLE,
        detail: str | None = None,
    ):
        self.table = table
        super().__init__(
            kind=kind,
            message=f"{table}: {message}",
            detail=detail,
            suggestion="Fix the table file and rerun.",
        )


class CatalogError(ReskinError):
    """Raised when catalog records violate the index invariants."""

    def __init__(
        self,
        source: str,
        message: str,
        kind: FailureKind = FailureKind.INVALID_RECORD,
        detail: str | None = None,
    ):
        self.source = source
        super().__init__(kind=kind, message=f"{source}: {message}", detail=detail)


class DownloadError(ReskinError):
    """Raised when a download fails."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.DOWNLOAD_FAILED,
            message=message,
            detail=detail,
            suggestion="Check the release version and network access, then retry.",
        )


class ArchiveError(ReskinError):
    """Raised when a module archive is missing or is not a zip file."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(kind=FailureKind.ARCHIVE_INVALID, message=message, detail=detail)
