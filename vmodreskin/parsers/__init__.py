from vmodreskin.parsers.xwing_data import (
    load_catalog,
    load_catalogs,
    load_records,
    parse_record,
)

__all__ = [
    "load_catalog",
    "load_catalogs",
    "load_records",
    "parse_record",
]
