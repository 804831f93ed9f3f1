"""
Column name normalization.

Maps the many header spellings found in exoplanet catalogues (Kepler KOI,
TESS/NASA Exoplanet Archive, hand-made spreadsheets) onto one canonical
schema understood by the dataset table.
"""

import re
from collections.abc import Iterable
from types import MappingProxyType

from exohunt.utils.logging import get_logger

log = get_logger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")

# Canonical column -> accepted source spellings.
# Spellings are normalized with normalize_header() before lookup, so case,
# spaces and punctuation do not matter here.
_ALIAS_SPELLINGS: dict[str, tuple[str, ...]] = {
    # Identifiers
    "object_id": (
        "kepid",
        "kepoi_name",
        "koi_name",
        "kepler_name",
        "toi",
        "tid",
        "pl_name",
        "planet_name",
        "id",
    ),
    # Label
    "disposition": (
        "koi_disposition",
        "koi_pdisposition",
        "tfopwg_disp",
        "disp",
        "label",
        "class",
    ),
    # Transit / orbit
    "orbital_period_days": (
        "koi_period",
        "pl_orbper",
        "period",
        "orbital period",
        "orbital_period",
        "per",
    ),
    "transit_duration_hours": (
        "koi_duration",
        "pl_trandurh",
        "transit duration",
        "transit_duration",
        "tran_dur",
        "duration",
    ),
    "transit_depth_ppm": (
        "koi_depth",
        "pl_trandep",
        "transit depth",
        "transit_depth",
        "depth",
        "depth [ppm]",
    ),
    "impact_parameter": ("koi_impact", "pl_imppar", "impact"),
    "model_snr": ("koi_model_snr", "snr", "signal to noise"),
    # Planet
    "planet_radius_earth": (
        "koi_prad",
        "pl_rade",
        "prad",
        "planet radius",
        "planet_radius",
    ),
    "equilibrium_temp_K": (
        "koi_teq",
        "pl_eqt",
        "teq",
        "equilibrium temperature",
        "equilibrium_temp",
        "eq_temp",
        "temp_eq",
    ),
    "insolation_flux": ("koi_insol", "pl_insol", "insol", "insolation"),
    # Host star
    "stellar_teff_K": (
        "koi_steff",
        "st_teff",
        "teff",
        "stellar teff",
        "stellar effective temperature",
    ),
    "stellar_radius_solar": ("koi_srad", "st_rad", "srad", "stellar radius"),
    "stellar_logg": ("koi_slogg", "st_logg", "logg", "stellar logg"),
    # Sky position
    "ra_deg": ("ra", "right ascension"),
    "dec_deg": ("dec", "declination"),
    # Provenance
    "source": ("mission", "origin", "dataset"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a header for alias lookup.

    Trims, lowercases and strips every non-alphanumeric character, so
    ``" KOI_Teq "`` and ``"koi-teq"`` both become ``"koiteq"``.

    Args:
        header: Raw CSV header.

    Returns:
        Normalized lookup key.
    """
    return _NON_ALPHANUMERIC.sub("", header.strip().lower())


def _build_alias_table(
    spellings: dict[str, tuple[str, ...]],
) -> MappingProxyType[str, str]:
    table: dict[str, str] = {}
    for canonical, aliases in spellings.items():
        # Each canonical name is also an alias of itself
        for alias in (canonical, *aliases):
            key = normalize_header(alias)
            existing = table.get(key)
            if existing is not None and existing != canonical:
                msg = f"Alias {alias!r} maps to both {existing!r} and {canonical!r}"
                raise ValueError(msg)
            table[key] = canonical
    return MappingProxyType(table)


# Normalized alias -> canonical column (read-only)
COLUMN_ALIASES = _build_alias_table(_ALIAS_SPELLINGS)

CANONICAL_FIELDS: tuple[str, ...] = tuple(_ALIAS_SPELLINGS)


def map_header(header: str) -> str | None:
    """
    Map a raw CSV header to its canonical column.

    Args:
        header: Raw CSV header.

    Returns:
        Canonical column name, or None if the header is unmapped.
    """
    return COLUMN_ALIASES.get(normalize_header(header))


def map_headers(headers: Iterable[str]) -> dict[str, str | None]:
    """
    Map every header, preserving input order.

    Args:
        headers: Raw CSV headers.

    Returns:
        Dict of raw header -> canonical column (None when unmapped).
    """
    mapping = {header: map_header(header) for header in headers}
    log.debug(
        "Mapped headers",
        mapped=sum(1 for v in mapping.values() if v is not None),
        total=len(mapping),
    )
    return mapping
