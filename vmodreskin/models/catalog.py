"""
Catalog Models.

Card records from the xwing-data set, the trusted side of a reconciliation.

INVARIANTS:
- identifier is unique within one catalog (enforced by CatalogIndex)
- display_name and short_code are NOT unique and short_code may be absent
- All models are frozen (immutable after construction)
"""

from dataclasses import dataclass
from enum import Enum

# Asset filenames are plain strings straight from a directory listing.
AssetFilename = str


class CardCategory(str, Enum):
    """Card categories reconciled between the module and the data set."""

    PILOT = "pilot"
    CONDITION = "condition"
    DAMAGE = "damage"
    UPGRADE = "upgrade"


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """
    One card definition from the data set.

    Attributes:
        identifier: Stable key within its catalog (xwing-data "id")
        short_code: Terse key used by the data set ("xws"), may be None
        display_name: Human-readable card name
        image_ref: Image path relative to the data set's images/ directory
        source: Name of the catalog file the record came from
    """

    identifier: str
    short_code: str | None
    display_name: str
    image_ref: str | None
    source: str = ""
