"""Header validation module."""

from exohunt.validation.preflight import (
    DEFAULT_REQUIRED_FIELDS,
    PreflightResult,
    run_preflight,
)
from exohunt.validation.reporter import ConsoleReporter

__all__ = [
    "DEFAULT_REQUIRED_FIELDS",
    "ConsoleReporter",
    "PreflightResult",
    "run_preflight",
]
