"""
Row transformation from raw CSV records to canonical records.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from exohunt.normalization.columns import map_header
from exohunt.utils.logging import get_logger

log = get_logger(__name__)

SOURCE_FIELD = "source"
DEFAULT_SOURCE = "uploaded_csv"


def _clean_value(value: Any) -> Any:
    """Blank and whitespace-only strings become None; anything else is kept."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def transform_row(
    row: Mapping[str, Any],
    *,
    default_source: str | None = DEFAULT_SOURCE,
) -> dict[str, Any]:
    """
    Convert one raw row to a canonical record.

    Unmapped columns are dropped. When several raw columns map to the same
    canonical column, the first non-null value wins.

    Args:
        row: Raw header -> cell value.
        default_source: Value for the source column when the row has none.
            None disables injection.

    Returns:
        Canonical column -> value (None for blank cells).
    """
    record: dict[str, Any] = {}
    for raw_key, value in row.items():
        canonical = map_header(raw_key)
        if canonical is None:
            continue
        cleaned = _clean_value(value)
        if record.get(canonical) is None:
            record[canonical] = cleaned

    if default_source is not None and SOURCE_FIELD not in record:
        record[SOURCE_FIELD] = default_source

    return record


def transform_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    default_source: str | None = DEFAULT_SOURCE,
) -> list[dict[str, Any]]:
    """
    Convert raw rows to canonical records.

    Args:
        rows: Raw rows as produced by the CSV reader.
        default_source: See transform_row().

    Returns:
        List of canonical records, same order as the input.
    """
    records = [transform_row(row, default_source=default_source) for row in rows]
    log.debug("Transformed rows", rows=len(records))
    return records
