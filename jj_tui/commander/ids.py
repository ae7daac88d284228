"""Identifier types for jj revisions."""

import re
from dataclasses import dataclass

from jj_tui.commander.errors import CommandParseError

_COMMIT_ID = re.compile(r"[0-9a-f]+")
# jj prints change ids in "reverse hex": digits 0-f mapped onto z-k
_CHANGE_ID = re.compile(r"[k-z]+")


@dataclass(frozen=True, order=True)
class CommitId:
    """Hex id of a single commit, as printed by jj."""

    value: str

    def __post_init__(self) -> None:
        if not _COMMIT_ID.fullmatch(self.value):
            raise ValueError(f"Invalid commit id: {self.value!r}")

    @classmethod
    def parse(cls, text: str) -> "CommitId":
        """Build a CommitId from jj output, raising CommandParseError if malformed."""
        try:
            return cls(text.strip())
        except ValueError as e:
            raise CommandParseError(str(e), text) from e

    def short(self, length: int = 8) -> str:
        return self.value[:length]

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class ChangeId:
    """Stable id of a change, surviving rewrites of its commit."""

    value: str

    def __post_init__(self) -> None:
        if not _CHANGE_ID.fullmatch(self.value):
            raise ValueError(f"Invalid change id: {self.value!r}")

    @classmethod
    def parse(cls, text: str) -> "ChangeId":
        """Build a ChangeId from jj output, raising CommandParseError if malformed."""
        try:
            return cls(text.strip())
        except ValueError as e:
            raise CommandParseError(str(e), text) from e

    def short(self, length: int = 8) -> str:
        return self.value[:length]

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
