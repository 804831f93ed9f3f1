"""
Append-only status log shown to the user during a submission.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime

from exohunt.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class StatusEntry:
    """One timestamped status message."""

    timestamp: datetime
    message: str

    def __str__(self) -> str:
        return f"[{self.timestamp:%H:%M:%S}] {self.message}"


class StatusLog:
    """
    Ordered, append-only sequence of status entries.

    Entries are never edited or removed. A new submission starts a new log.
    """

    def __init__(
        self,
        suppressed_messages: Sequence[str] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize an empty log.

        Args:
            suppressed_messages: Substrings of known transient messages that
                are recorded but hidden from visible_lines().
            clock: Timestamp source (injectable for tests).
        """
        self._entries: list[StatusEntry] = []
        self._suppressed = tuple(suppressed_messages)
        self._clock = clock

    def append(self, message: str) -> StatusEntry:
        """Record a message with the current time."""
        entry = StatusEntry(timestamp=self._clock(), message=message)
        self._entries.append(entry)
        log.debug("Status", message=message)
        return entry

    @property
    def entries(self) -> tuple[StatusEntry, ...]:
        """All entries in append order."""
        return tuple(self._entries)

    @property
    def messages(self) -> list[str]:
        """Messages without timestamps."""
        return [entry.message for entry in self._entries]

    def is_suppressed(self, entry: StatusEntry) -> bool:
        """Whether an entry is a known transient message."""
        return any(text in entry.message for text in self._suppressed)

    def visible_lines(self) -> list[str]:
        """Formatted lines for display, without suppressed messages."""
        return [str(entry) for entry in self._entries if not self.is_suppressed(entry)]

    def __iter__(self) -> Iterator[StatusEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._entries)
