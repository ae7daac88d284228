"""Audit trail of every jj invocation made during a session."""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class HistoryEntry:
    """One attempted jj invocation."""

    args: Tuple[str, ...]
    success: bool
    output: str = ""  # stdout on success, error text on failure
    duration: float = 0.0  # seconds
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def command_line(self) -> str:
        """Return the invocation as it would be typed."""
        return " ".join(["jj", *self.args])


class CommandHistory:
    """Append-only, thread-safe list of HistoryEntry.

    The lock only guards the backing list; it is never held while a
    subprocess runs.
    """

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._lock = threading.Lock()

    def record(
        self,
        args: Sequence[str],
        success: bool,
        output: str = "",
        duration: float = 0.0,
    ) -> HistoryEntry:
        """Append an entry and return it."""
        entry = HistoryEntry(
            args=tuple(args),
            success=success,
            output=output,
            duration=duration,
        )
        with self._lock:
            self._entries.append(entry)
        return entry

    def last(self) -> Optional[HistoryEntry]:
        """Return the most recent entry, or None if nothing ran yet."""
        with self._lock:
            return self._entries[-1] if self._entries else None

    def snapshot(self) -> List[HistoryEntry]:
        """Return a copy of all entries in the order they were recorded."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.snapshot())
