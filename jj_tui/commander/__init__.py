"""Typed command layer over the jj CLI."""

from jj_tui.commander.bookmarks import Bookmark
from jj_tui.commander.commander import Commander
from jj_tui.commander.errors import (
    CommandError,
    CommandExitError,
    CommandLaunchError,
    CommandParseError,
    CommanderError,
)
from jj_tui.commander.files import FileChange, FileStatus
from jj_tui.commander.history import CommandHistory, HistoryEntry
from jj_tui.commander.ids import ChangeId, CommitId
from jj_tui.commander.log import Head, LogEntry
from jj_tui.commander.runner import CommandRunner

__all__ = [
    "Bookmark",
    "ChangeId",
    "CommandError",
    "CommandExitError",
    "CommandHistory",
    "CommandLaunchError",
    "CommandParseError",
    "CommandRunner",
    "Commander",
    "CommanderError",
    "CommitId",
    "FileChange",
    "FileStatus",
    "Head",
    "HistoryEntry",
    "LogEntry",
]
