"""
Preflight check of CSV headers.

Runs before any row is transformed or transmitted: the upload is refused
unless the headers cover every required canonical column.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass, field

from exohunt.normalization.columns import CANONICAL_FIELDS, map_header
from exohunt.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_REQUIRED_FIELDS: tuple[str, ...] = ("equilibrium_temp_K",)


@dataclass
class PreflightResult:
    """
    Outcome of checking a header row.

    Attributes:
        header_mapping: Raw header -> canonical column (None when unmapped).
        mapped_fields: Canonical columns covered by the headers.
        unmapped_headers: Raw headers with no canonical column, in file order.
        missing_required: Required canonical columns not covered.
    """

    header_mapping: dict[str, str | None] = field(default_factory=dict)
    mapped_fields: frozenset[str] = frozenset()
    unmapped_headers: list[str] = field(default_factory=list)
    missing_required: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """Whether all required columns are present."""
        return not self.missing_required

    def summary(self) -> str:
        """One-line description including counts and unmapped headers."""
        n_headers = len(self.header_mapping)
        n_mapped = n_headers - len(self.unmapped_headers)
        text = f"{n_mapped} of {n_headers} columns mapped"
        if self.missing_required:
            text += f"; missing required: {', '.join(self.missing_required)}"
        if self.unmapped_headers:
            text += f". Unmapped columns: {', '.join(self.unmapped_headers)}"
        return text


def run_preflight(
    headers: Sequence[str],
    required_fields: Collection[str] = DEFAULT_REQUIRED_FIELDS,
) -> PreflightResult:
    """
    Check that headers cover the required canonical columns.

    Args:
        headers: Raw CSV headers.
        required_fields: Canonical columns that must be present.

    Returns:
        PreflightResult; inspect ``passed`` before uploading.

    Raises:
        ValueError: If a required field is not a canonical column.
    """
    unknown = [name for name in required_fields if name not in CANONICAL_FIELDS]
    if unknown:
        msg = f"Unknown canonical field(s) required: {unknown}"
        raise ValueError(msg)

    header_mapping = {header: map_header(header) for header in headers}
    mapped = frozenset(v for v in header_mapping.values() if v is not None)
    unmapped = [h for h, canonical in header_mapping.items() if canonical is None]
    missing = [name for name in required_fields if name not in mapped]

    result = PreflightResult(
        header_mapping=header_mapping,
        mapped_fields=mapped,
        unmapped_headers=unmapped,
        missing_required=missing,
    )

    if result.passed:
        log.info("Preflight passed", mapped=len(mapped), unmapped=len(unmapped))
    else:
        log.warning("Preflight failed", missing=missing, unmapped=unmapped)

    return result
