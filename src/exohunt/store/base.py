"""
Row store interface.

The remote table is an external collaborator: it owns the schema and the
constraints, this package only inserts and reads rows.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class StoreResult:
    """
    Outcome of a store call.

    Attributes:
        data: Returned rows (empty for inserts).
        error: Error message, None on success.
        status_code: HTTP status, None if the request never completed.
    """

    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.error is None


class RowStore(Protocol):
    """Minimal table API used by the upload pipeline and the leaderboard."""

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> StoreResult:
        """Insert rows into a table in one request."""
        ...

    def select(
        self,
        table: str,
        columns: Sequence[str],
        *,
        equals: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = True,
        limit: int | None = None,
    ) -> StoreResult:
        """Read rows matching equality filters."""
        ...
