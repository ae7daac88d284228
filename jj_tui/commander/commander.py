"""Commander: typed jj commands on top of CommandRunner.

Every method builds an argument vector, runs it through the runner, records
it in the command history and either discards the output or parses it.
Read-only queries may be called from worker threads; mutating commands are
serialized by a per-Commander lock.
"""

import logging
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

from jj_tui.commander.bookmarks import BOOKMARK_TEMPLATE, Bookmark, parse_bookmark_list
from jj_tui.commander.errors import CommandError, CommanderError, CommandParseError
from jj_tui.commander.files import FileChange, parse_diff_summary
from jj_tui.commander.history import CommandHistory
from jj_tui.commander.ids import CommitId
from jj_tui.commander.log import (
    HEAD_TEMPLATE,
    LOG_TEMPLATE,
    Head,
    LogEntry,
    parse_bool,
    parse_head,
    parse_log,
)
from jj_tui.commander.runner import CommandRunner

logger = logging.getLogger(__name__)

DIFF_FORMATS = ("color-words", "git")

T = TypeVar("T")


def global_args(repo_path: str, color: bool) -> List[str]:
    """Flags passed to jj before every subcommand."""
    return [
        "--no-pager",
        "--color=always" if color else "--color=never",
        "-R",
        repo_path,
    ]


def edit_args(revision: str, ignore_immutable: bool) -> List[str]:
    args = ["edit", revision]
    if ignore_immutable:
        args.append("--ignore-immutable")
    return args


def squash_args(revision: str, ignore_immutable: bool) -> List[str]:
    args = ["squash", "-u", "--into", revision]
    if ignore_immutable:
        args.append("--ignore-immutable")
    return args


def set_bookmark_args(name: str, commit_id: CommitId) -> List[str]:
    # TODO: make --allow-backwards opt-in once the bookmark popup can ask
    # for confirmation on a backwards move.
    return ["bookmark", "set", name, "-r", commit_id.as_str(), "--allow-backwards"]


def push_args(all_bookmarks: bool, allow_new: bool, commit_id: CommitId) -> List[str]:
    """Build `jj git push` arguments.

    Args:
        all_bookmarks: Push every bookmark instead of the one(s) at commit_id
        allow_new: Allow creating bookmarks that do not exist on the remote
        commit_id: Revision whose bookmarks to push when not pushing all

    Returns:
        Argument list starting with "git", "push"
    """
    args = ["git", "push"]
    if allow_new:
        args.append("--allow-new")
    if all_bookmarks:
        args.append("--all")
    else:
        args.extend(["-r", commit_id.as_str()])
    return args


def fetch_args(all_remotes: bool) -> List[str]:
    args = ["git", "fetch"]
    if all_remotes:
        args.append("--all-remotes")
    return args


def _diff_flag(diff_format: str) -> str:
    if diff_format not in DIFF_FORMATS:
        raise ValueError(f"Unknown diff format: {diff_format}")
    return f"--{diff_format}"


@contextmanager
def _context(message: str) -> Iterator[None]:
    """Re-raise CommandError as CommanderError(message), keeping the cause."""
    try:
        yield
    except CommandError as e:
        raise CommanderError(message) from e


class Commander:
    """Interface to a single jj repository."""

    def __init__(
        self,
        repo_path: str,
        jj_bin: str = "jj",
        runner: Optional[CommandRunner] = None,
        history: Optional[CommandHistory] = None,
    ):
        """Initialize the commander.

        Args:
            repo_path: Root of the jj repository
            jj_bin: jj executable name or path
            runner: Runner to execute jj with (built from jj_bin if omitted)
            history: History to record into (a fresh one if omitted)
        """
        self.repo_path = repo_path
        self.runner = runner or CommandRunner(jj_bin, cwd=repo_path)
        self.command_history = history or CommandHistory()
        self._mutation_lock = threading.Lock()

    @staticmethod
    def find_root(path: str, jj_bin: str = "jj") -> str:
        """Return the root of the jj repository containing path.

        Raises:
            CommandError: jj is missing or path is not inside a repository
        """
        return CommandRunner(jj_bin, cwd=path).run(["root"])

    # ==================== Execution ====================

    def execute_jj_command(
        self,
        args: Sequence[str],
        color: bool = False,
        merge_stderr: bool = False,
    ) -> str:
        """Run jj with args and return its output.

        Args:
            args: Subcommand and its arguments, without global flags
            color: Ask jj for ANSI colored output
            merge_stderr: Include jj's standard error in the result

        Returns:
            Output text with the trailing newline removed

        Raises:
            CommandError: Launch failure or non-zero exit
        """
        args = list(args)
        start = time.monotonic()
        try:
            output = self.runner.run(
                global_args(self.repo_path, color) + args,
                merge_stderr=merge_stderr,
            )
        except CommandError as e:
            self.command_history.record(
                args, False, str(e), time.monotonic() - start
            )
            raise

        duration = time.monotonic() - start
        self.command_history.record(args, True, output, duration)
        logger.debug("jj %s took %.3fs", " ".join(args), duration)
        return output

    def execute_void_jj_command(self, args: Sequence[str]) -> None:
        """Run a mutating jj command and discard its output."""
        with self._mutation_lock:
            self.execute_jj_command(args)

    def run_raw_command(self, args: Sequence[str]) -> str:
        """Run a jj command typed by the user and return all of its output.

        The command may mutate the repository, so it holds the mutation lock.
        """
        with self._mutation_lock:
            return self.execute_jj_command(args, color=True, merge_stderr=True)

    def _query(self, args: Sequence[str], parse: Callable[[str], T]) -> T:
        """Run a read-only command and parse its output.

        A CommandParseError is re-raised with the failing arguments attached.
        """
        output = self.execute_jj_command(args)
        try:
            return parse(output)
        except CommandParseError as e:
            e.command_args = tuple(args)
            raise

    # ==================== Queries ====================

    def get_head(self, revision: str) -> Head:
        """Resolve revision to a Head."""
        return self._query(
            ["log", "--no-graph", "--limit", "1", "-r", revision, "-T", HEAD_TEMPLATE],
            parse_head,
        )

    def get_current_head(self) -> Head:
        """Return the working-copy revision (`@`)."""
        return self.get_head("@")

    def get_commit_id(self, revision: str) -> CommitId:
        """Resolve revision to its commit id."""
        return self._query(
            ["log", "--no-graph", "--limit", "1", "-r", revision, "-T", "commit_id"],
            CommitId.parse,
        )

    def get_commit_description(self, commit_id: CommitId) -> str:
        """Return the full description of a commit.

        jj stores descriptions with a trailing newline; the runner strips it,
        so this returns exactly what was passed to describe.
        """
        return self.execute_jj_command(
            ["log", "--no-graph", "--limit", "1", "-r", commit_id.as_str(),
             "-T", "description"]
        )

    def is_immutable(self, revision: str) -> bool:
        return self._query(
            ["log", "--no-graph", "--limit", "1", "-r", revision, "-T", "immutable"],
            lambda output: parse_bool(output.strip()),
        )

    def get_log(self, revset: Optional[str] = None) -> List[LogEntry]:
        """List revisions in revset (jj's default revset if None)."""
        args = ["log", "--no-graph", "-T", LOG_TEMPLATE]
        if revset:
            args.extend(["-r", revset])
        return self._query(args, parse_log)

    def get_commit_show(self, commit_id: CommitId, diff_format: str = "color-words") -> str:
        """Return colored `jj show` output for a commit."""
        return self.execute_jj_command(
            ["show", commit_id.as_str(), _diff_flag(diff_format)], color=True
        )

    def get_bookmarks_list(self, show_all: bool) -> List[Bookmark]:
        """List bookmarks.

        Args:
            show_all: Include untracked remote bookmarks

        Returns:
            Bookmarks in jj's order (by name, local before remotes)
        """
        args = ["bookmark", "list", "-T", BOOKMARK_TEMPLATE]
        if show_all:
            args.append("--all-remotes")
        return self._query(args, parse_bookmark_list)

    def get_bookmark_show(self, bookmark: Bookmark) -> str:
        """Return colored log output for the revision a bookmark points at."""
        return self.execute_jj_command(["log", "-r", str(bookmark)], color=True)

    def get_file_changes(self, commit_id: CommitId) -> List[FileChange]:
        """List files changed by a commit."""
        return self._query(
            ["diff", "--summary", "-r", commit_id.as_str()], parse_diff_summary
        )

    def get_file_diff(
        self, commit_id: CommitId, path: str, diff_format: str = "color-words"
    ) -> str:
        """Return the colored diff of one file in a commit."""
        return self.execute_jj_command(
            ["diff", "-r", commit_id.as_str(), _diff_flag(diff_format), path],
            color=True,
        )

    # ==================== Revision commands ====================

    def run_new(self, revision: str) -> None:
        """Create a new change after revision. Maps to `jj new <revision>`."""
        with _context("Failed executing jj new"):
            self.execute_void_jj_command(["new", revision])

    def run_edit(self, revision: str, ignore_immutable: bool) -> None:
        """Edit change. Maps to `jj edit <revision>`."""
        with _context("Failed executing jj edit"):
            self.execute_void_jj_command(edit_args(revision, ignore_immutable))

    def run_abandon(self, commit_id: CommitId) -> None:
        """Abandon change. Maps to `jj abandon <revision>`."""
        with _context("Failed executing jj abandon"):
            self.execute_void_jj_command(["abandon", commit_id.as_str()])

    def run_describe(self, revision: str, message: str) -> None:
        """Describe change. Maps to `jj describe <revision> -m <message>`."""
        with _context("Failed executing jj describe"):
            self.execute_void_jj_command(["describe", revision, "-m", message])

    def run_squash(self, revision: str, ignore_immutable: bool) -> None:
        """Squash the working copy. Maps to `jj squash -u --into <revision>`."""
        with _context("Failed executing jj squash"):
            self.execute_void_jj_command(squash_args(revision, ignore_immutable))

    # ==================== Bookmark commands ====================

    def create_bookmark(self, name: str) -> Bookmark:
        """Create bookmark at the working copy. Maps to `jj bookmark create <name>`.

        jj prints nothing parseable, and only ever creates local bookmarks, so
        the returned value is built here. It is valid at the moment of
        creation only.
        """
        self.execute_void_jj_command(["bookmark", "create", name])
        return _new_local_bookmark(name)

    def create_bookmark_commit(self, name: str, commit_id: CommitId) -> Bookmark:
        """Create bookmark at commit. Maps to `jj bookmark create <name> -r <revision>`."""
        self.execute_void_jj_command(
            ["bookmark", "create", name, "-r", commit_id.as_str()]
        )
        return _new_local_bookmark(name)

    def set_bookmark_commit(self, name: str, commit_id: CommitId) -> None:
        """Move bookmark to commit. Maps to `jj bookmark set <name> -r <revision>`.

        Backwards moves are always allowed.
        """
        self.execute_void_jj_command(set_bookmark_args(name, commit_id))

    def rename_bookmark(self, old: str, new: str) -> None:
        """Rename bookmark. Maps to `jj bookmark rename <old> <new>`."""
        self.execute_void_jj_command(["bookmark", "rename", old, new])

    def delete_bookmark(self, name: str) -> None:
        """Delete bookmark. Maps to `jj bookmark delete <name>`.

        The deletion is propagated to remotes on the next push.
        """
        self.execute_void_jj_command(["bookmark", "delete", name])

    def forget_bookmark(self, name: str) -> None:
        """Forget bookmark. Maps to `jj bookmark forget <name>`.

        Unlike delete, nothing is recorded for the next push.
        """
        self.execute_void_jj_command(["bookmark", "forget", name])

    def track_bookmark(self, bookmark: Bookmark) -> None:
        """Track bookmark. Maps to `jj bookmark track <bookmark>@<remote>`."""
        self.execute_void_jj_command(["bookmark", "track", str(bookmark)])

    def untrack_bookmark(self, bookmark: Bookmark) -> None:
        """Untrack bookmark. Maps to `jj bookmark untrack <bookmark>@<remote>`."""
        self.execute_void_jj_command(["bookmark", "untrack", str(bookmark)])

    # ==================== Git commands ====================

    def git_push(self, all_bookmarks: bool, allow_new: bool, commit_id: CommitId) -> str:
        """Push to the git remote. Maps to `jj git push`.

        jj reports progress on stderr, so both streams are returned.
        """
        with self._mutation_lock:
            return self.execute_jj_command(
                push_args(all_bookmarks, allow_new, commit_id),
                color=True,
                merge_stderr=True,
            )

    def git_fetch(self, all_remotes: bool) -> str:
        """Fetch from git remotes. Maps to `jj git fetch`."""
        with self._mutation_lock:
            return self.execute_jj_command(
                fetch_args(all_remotes), color=True, merge_stderr=True
            )


def _new_local_bookmark(name: str) -> Bookmark:
    return Bookmark(
        name=name,
        remote=None,
        present=True,
        timestamp=int(datetime.now(timezone.utc).timestamp()),
    )
