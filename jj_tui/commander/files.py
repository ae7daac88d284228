"""Changed files of a revision, parsed from `jj diff --summary`."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from jj_tui.commander.errors import CommandParseError


class FileStatus(Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"


@dataclass(frozen=True)
class FileChange:
    """A file touched by a revision."""

    status: FileStatus
    path: str
    old_path: Optional[str] = None  # set for renames and copies

    @property
    def display_path(self) -> str:
        if self.old_path:
            return f"{self.old_path} => {self.path}"
        return self.path


# "src/{old.py => new.py}" and plain "old.py => new.py"
_BRACED_RENAME = re.compile(r"^(?P<prefix>.*)\{(?P<old>.*) => (?P<new>.*)\}(?P<suffix>.*)$")
_SUMMARY_LINE = re.compile(r"^(?P<status>[AMDRC]) (?P<path>.+)$")


def _join(prefix: str, middle: str, suffix: str) -> str:
    path = f"{prefix}{middle}{suffix}"
    # An empty side of "{ => dir}/" leaves a doubled or leading separator
    return path.replace("//", "/").lstrip("/")


def split_rename(text: str) -> Tuple[str, str]:
    """Split a rename path into (old, new)."""
    match = _BRACED_RENAME.match(text)
    if match:
        prefix, suffix = match.group("prefix"), match.group("suffix")
        return (
            _join(prefix, match.group("old"), suffix),
            _join(prefix, match.group("new"), suffix),
        )
    if " => " in text:
        old, new = text.split(" => ", 1)
        return old, new
    raise CommandParseError(f"cannot split rename {text!r}", text)


def parse_diff_summary(output: str) -> List[FileChange]:
    """Parse `jj diff --summary` output.

    Format example:
    M README.md
    A src/new.py
    R src/{old.py => renamed.py}
    """
    changes: List[FileChange] = []

    for line in output.splitlines():
        line = line.rstrip()
        if not line:
            continue

        match = _SUMMARY_LINE.match(line)
        if not match:
            raise CommandParseError("unrecognised diff summary line", line)

        status = FileStatus(match.group("status"))
        path = match.group("path")
        if status in (FileStatus.RENAMED, FileStatus.COPIED):
            old_path, new_path = split_rename(path)
            changes.append(FileChange(status, new_path, old_path))
        else:
            changes.append(FileChange(status, path))

    return changes
