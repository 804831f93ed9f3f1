"""
Pandera schema for canonical exoplanet records.

Only numeric columns are declared, and only their parseability is checked.
Identifiers, labels, provenance and physical ranges are owned by the remote
table's constraints; failures here are reported, not enforced.
"""

from collections.abc import Sequence
from typing import Any, Optional

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaErrors
from pandera.typing import Series

from exohunt.utils.logging import get_logger

log = get_logger(__name__)

MAX_REPORTED_FAILURES = 3


class ExoplanetRecordSchema(pa.DataFrameModel):
    """
    Schema for canonical records before upload.

    Every column is optional and nullable; present values must coerce to
    float.
    """

    orbital_period_days: Optional[Series[float]] = pa.Field(
        nullable=True, description="Orbital period in days"
    )
    transit_duration_hours: Optional[Series[float]] = pa.Field(
        nullable=True, description="Transit duration in hours"
    )
    transit_depth_ppm: Optional[Series[float]] = pa.Field(
        nullable=True, description="Transit depth in parts per million"
    )
    impact_parameter: Optional[Series[float]] = pa.Field(
        nullable=True, description="Sky-projected impact parameter"
    )
    model_snr: Optional[Series[float]] = pa.Field(
        nullable=True, description="Transit signal-to-noise ratio"
    )
    planet_radius_earth: Optional[Series[float]] = pa.Field(
        nullable=True, description="Planet radius in Earth radii"
    )
    equilibrium_temp_K: Optional[Series[float]] = pa.Field(
        nullable=True, description="Equilibrium temperature in Kelvin"
    )
    insolation_flux: Optional[Series[float]] = pa.Field(
        nullable=True, description="Insolation flux in Earth units"
    )
    stellar_teff_K: Optional[Series[float]] = pa.Field(
        nullable=True, description="Stellar effective temperature in Kelvin"
    )
    stellar_radius_solar: Optional[Series[float]] = pa.Field(
        nullable=True, description="Stellar radius in solar radii"
    )
    stellar_logg: Optional[Series[float]] = pa.Field(
        nullable=True, description="Stellar surface gravity (log10 cm/s^2)"
    )
    ra_deg: Optional[Series[float]] = pa.Field(
        nullable=True, description="Right ascension in degrees"
    )
    dec_deg: Optional[Series[float]] = pa.Field(
        nullable=True, description="Declination in degrees"
    )

    class Config:
        """Schema configuration."""

        name = "ExoplanetRecordSchema"
        strict = False  # Text columns are not declared
        coerce = True


def _is_reportable(value: Any) -> bool:
    return pd.api.types.is_scalar(value) and not isinstance(value, BaseException)


def _summarize_failures(error: SchemaErrors) -> list[str]:
    """
    Turn Pandera failure cases into one message per column.

    A bad cell fails several checks (coercion, dtype); it is counted once.
    """
    cases = error.failure_cases
    cell_cases = cases[cases["index"].notna()].drop_duplicates(
        subset=["column", "index"]
    )

    messages: list[str] = []
    for column, group in cell_cases.groupby(
        cell_cases["column"].astype(str), sort=False
    ):
        samples = [str(v) for v in group["failure_case"] if _is_reportable(v)]
        text = f"{column}: {len(group)} invalid value(s)"
        if samples:
            text += f" (e.g. {', '.join(samples[:MAX_REPORTED_FAILURES])})"
        messages.append(text)

    # Column-level failures without a failing cell
    reported = set(cell_cases["column"].astype(str))
    for column, group in cases.groupby(cases["column"].astype(str), sort=False):
        if column not in reported:
            checks = sorted({str(c) for c in group["check"]})
            messages.append(f"{column}: failed {', '.join(checks)}")
    return messages


def check_records(records: Sequence[dict[str, Any]]) -> list[str]:
    """
    Report numeric columns holding values that do not parse as numbers.

    The records are not modified.

    Args:
        records: Canonical records from the row transformer.

    Returns:
        Human-readable problems, one per affected column. Empty when every
        value parses.
    """
    if not records:
        return []

    df = pd.DataFrame.from_records(records)
    try:
        ExoplanetRecordSchema.validate(df, lazy=True)
    except SchemaErrors as e:
        problems = _summarize_failures(e)
        log.warning("Unparseable numeric values", problems=problems)
        return problems

    return []
