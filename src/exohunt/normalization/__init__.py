"""
Data normalization layer for standardizing column names and row values.

Maps heterogeneous catalogue headers to canonical columns and turns
raw CSV rows into records ready for insertion.
"""

from exohunt.normalization.columns import (
    CANONICAL_FIELDS,
    COLUMN_ALIASES,
    map_header,
    map_headers,
    normalize_header,
)
from exohunt.normalization.rows import DEFAULT_SOURCE, transform_row, transform_rows

__all__ = [
    "CANONICAL_FIELDS",
    "COLUMN_ALIASES",
    "DEFAULT_SOURCE",
    "map_header",
    "map_headers",
    "normalize_header",
    "transform_row",
    "transform_rows",
]
