"""
vmodreskin services.

Card-image reconciliation and the I/O around it.
"""

from vmodreskin.services.card_image_resolver import (
    CardImageResolver,
    categorize_asset,
    partition_assets,
)
from vmodreskin.services.catalog_index import CatalogIndex, CatalogSet
from vmodreskin.services.name_normalizer import (
    LookupField,
    NormalizationStep,
    NormalizedName,
    normalize,
)
from vmodreskin.services.resolution_reporter import (
    log_category_report,
    log_report,
    summarize,
    summarize_category,
)
from vmodreskin.services.static_tables import (
    IgnoreSet,
    OverrideTable,
    StaticTables,
    load_static_tables,
)

__all__ = [
    # Resolution engine
    "CardImageResolver",
    "categorize_asset",
    "partition_assets",
    "CatalogIndex",
    "CatalogSet",
    "LookupField",
    "NormalizationStep",
    "NormalizedName",
    "normalize",
    # Static tables
    "IgnoreSet",
    "OverrideTable",
    "StaticTables",
    "load_static_tables",
    # Reporting
    "log_category_report",
    "log_report",
    "summarize",
    "summarize_category",
]
