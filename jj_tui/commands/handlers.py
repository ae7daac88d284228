"""Command handlers for the `:` prompt."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from jj_tui.commander.errors import CommandError
from jj_tui.commands.parser import ParsedCommand

if TYPE_CHECKING:
    from jj_tui.commander import Commander

logger = logging.getLogger(__name__)

HELP_TEXT = """
Commands:
  :quit, :q          - Quit
  :refresh, :r       - Reload the current tab
  :tab <n>, :t <n>   - Switch to tab n
  :help, :h          - This help
  :<jj command>      - Run jj, e.g. :st or :jj log -r @-

Global keys:
  1-4     - Log / Files / Bookmarks / Command log
  R       - Refresh
  :       - Command prompt
  ?       - Help
  q       - Quit

Log tab:
  j/k     - Select revision
  Enter   - Show files of revision
  n       - New change after revision
  e/E     - Edit revision (E ignores immutability)
  a       - Abandon revision
  d       - Describe revision
  s/S     - Squash working copy into revision (S ignores immutability)
  b       - Set or create bookmark at revision
  p/P     - Push revision / all bookmarks (ctrl+p allows new)
  f/F     - Fetch / fetch all remotes

Bookmarks tab:
  c       - Create bookmark at working copy
  r       - Rename
  d/f     - Delete / forget
  t/T     - Track / untrack remote bookmark
  n/e     - New change at / edit bookmark
  a       - Toggle all remotes

Details panel:
  ^e/^y   - Scroll line
  ^d/^u   - Scroll half page
  ^f/^b   - Scroll page
  W       - Toggle wrapping
"""


@dataclass
class CommandResult:
    """Result of command execution."""

    success: bool
    message: str = ""
    action: str = ""  # Special action to take: "quit", "refresh", "tab"
    data: Optional[dict] = None


class CommandHandler:
    """Handles command execution."""

    def __init__(self, commander: "Commander", tab_count: int = 4) -> None:
        self.commander = commander
        self.tab_count = tab_count

    def execute(self, cmd: ParsedCommand) -> CommandResult:
        """Execute a parsed command.

        App commands are dispatched to a `_cmd_<name>` method; anything else
        is handed to jj.

        Args:
            cmd: Parsed command

        Returns:
            CommandResult with status and message
        """
        if not cmd.name:
            return CommandResult(success=False, message="No command")

        handler = getattr(self, f"_cmd_{cmd.name}", None)
        if handler:
            return handler(cmd)
        return self._run_jj(cmd.tokens)

    def _cmd_quit(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :quit command."""
        return CommandResult(success=True, action="quit")

    def _cmd_help(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :help command."""
        return CommandResult(success=True, action="help", message=HELP_TEXT)

    def _cmd_refresh(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :refresh command."""
        return CommandResult(success=True, action="refresh")

    def _cmd_tab(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :tab command."""
        try:
            index = int(cmd.first_arg)
        except ValueError:
            return CommandResult(success=False, message="Usage: :tab <number>")

        if not 1 <= index <= self.tab_count:
            return CommandResult(success=False, message=f"No tab {index}")
        return CommandResult(success=True, action="tab", data={"index": index - 1})

    def _cmd_jj(self, cmd: ParsedCommand) -> CommandResult:
        """Handle :jj <args>, the explicit form of a raw jj command."""
        if not cmd.args:
            return CommandResult(success=False, message="Usage: :jj <command>")
        return self._run_jj(cmd.args)

    def _run_jj(self, args) -> CommandResult:
        """Run an arbitrary jj command and return its output for display."""
        logger.info("Running jj command from prompt: %s", args)
        try:
            output = self.commander.run_raw_command(args)
        except CommandError as e:
            return CommandResult(success=False, action="output", message=str(e))
        return CommandResult(success=True, action="output", message=output)
