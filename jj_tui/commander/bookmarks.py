"""jj bookmarks and parsing of `jj bookmark list` output."""

from dataclasses import dataclass, field
from typing import List, Optional

from jj_tui.commander.errors import CommandParseError
from jj_tui.commander.log import parse_bool

# name, remote (empty for local), present, unix time of the target commit
BOOKMARK_TEMPLATE = (
    r'name ++ "\t" ++ if(remote, remote) ++ "\t" ++ present'
    r' ++ "\t" ++ if(normal_target, normal_target.committer().timestamp().format("%s"), "0")'
    r' ++ "\n"'
)


@dataclass
class Bookmark:
    """A named pointer to a commit, local or on a remote.

    Values are snapshots: a Bookmark is not updated when the bookmark is
    later moved or deleted.
    """

    name: str
    remote: Optional[str] = None
    present: bool = True  # False when deleted or conflicted upstream
    timestamp: int = field(default=0, compare=False)  # ordering only

    @property
    def is_local(self) -> bool:
        return self.remote is None

    def __str__(self) -> str:
        """Return the revset symbol, e.g. ``main`` or ``main@origin``."""
        if self.remote is None:
            return self.name
        return f"{self.name}@{self.remote}"


def parse_bookmark_list(output: str) -> List[Bookmark]:
    """Parse BOOKMARK_TEMPLATE output.

    Format example (tab separated):
    main		true	1700000000
    main	origin	true	1700000000
    old	origin	false	0
    """
    bookmarks: List[Bookmark] = []

    for line in output.splitlines():
        if not line.strip():
            continue

        parts = line.split("\t")
        if len(parts) != 4:
            raise CommandParseError(f"expected 4 fields, got {len(parts)}", line)

        name, remote, present, timestamp = parts
        if not name:
            raise CommandParseError("empty bookmark name", line)
        try:
            seconds = int(timestamp)
        except ValueError as e:
            raise CommandParseError(f"bad timestamp {timestamp!r}", line) from e

        bookmarks.append(Bookmark(
            name=name,
            remote=remote or None,
            present=parse_bool(present),
            timestamp=seconds,
        ))

    return bookmarks
