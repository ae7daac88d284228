"""Working-copy head and log rows, parsed from templated `jj log` output."""

from dataclasses import dataclass
from typing import List, Tuple

from jj_tui.commander.errors import CommandParseError
from jj_tui.commander.ids import ChangeId, CommitId

# One line per revision, fields separated by tabs. The description goes last
# so a stray tab inside it cannot shift the other fields.
HEAD_TEMPLATE = r'change_id ++ "\t" ++ commit_id ++ "\n"'

LOG_TEMPLATE = (
    r'change_id ++ "\t" ++ commit_id'
    r' ++ "\t" ++ current_working_copy ++ "\t" ++ empty ++ "\t" ++ immutable'
    r' ++ "\t" ++ author.name() ++ "\t" ++ committer.timestamp().ago()'
    r' ++ "\t" ++ local_bookmarks.map(|b| b.name()).join(" ")'
    r' ++ "\t" ++ description.first_line() ++ "\n"'
)
_LOG_FIELDS = 9


@dataclass(frozen=True)
class Head:
    """Point-in-time snapshot of a revision, usually the working copy.

    A new Head replaces the old one whenever the working state changes;
    compare Heads to detect that.
    """

    change_id: ChangeId
    commit_id: CommitId

    def __str__(self) -> str:
        return f"{self.change_id.short()} {self.commit_id.short()}"


@dataclass(frozen=True)
class LogEntry:
    """One revision as shown in the log tab."""

    change_id: ChangeId
    commit_id: CommitId
    is_working_copy: bool
    is_empty: bool
    is_immutable: bool
    author: str
    timestamp: str  # relative, e.g. "5 minutes ago"
    bookmarks: Tuple[str, ...]
    description: str  # first line only

    @property
    def head(self) -> Head:
        """Return the Head identifying this revision."""
        return Head(self.change_id, self.commit_id)


def parse_bool(text: str) -> bool:
    """Parse a boolean printed by a jj template."""
    if text == "true":
        return True
    if text == "false":
        return False
    raise CommandParseError(f"expected true/false, got {text!r}", text)


def parse_head(output: str) -> Head:
    """Parse HEAD_TEMPLATE output for a single revision."""
    line = output.strip()
    parts = line.split("\t")
    if len(parts) != 2:
        raise CommandParseError("expected '<change id>\\t<commit id>'", output)
    return Head(ChangeId.parse(parts[0]), CommitId.parse(parts[1]))


def parse_log(output: str) -> List[LogEntry]:
    """Parse LOG_TEMPLATE output into log entries, newest first."""
    entries: List[LogEntry] = []

    for line in output.splitlines():
        if not line.strip():
            continue

        parts = line.split("\t", _LOG_FIELDS - 1)
        if len(parts) != _LOG_FIELDS:
            raise CommandParseError(
                f"expected {_LOG_FIELDS} fields, got {len(parts)}", line
            )

        (change_id, commit_id, working_copy, empty, immutable,
         author, timestamp, bookmarks, description) = parts

        entries.append(LogEntry(
            change_id=ChangeId.parse(change_id),
            commit_id=CommitId.parse(commit_id),
            is_working_copy=parse_bool(working_copy),
            is_empty=parse_bool(empty),
            is_immutable=parse_bool(immutable),
            author=author,
            timestamp=timestamp,
            bookmarks=tuple(bookmarks.split()),
            description=description,
        ))

    return entries
