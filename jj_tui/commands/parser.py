"""Parser for the `:` command prompt."""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class ParsedCommand:
    """A parsed prompt line: command name plus remaining tokens."""

    name: str
    args: List[str] = field(default_factory=list)
    raw: str = ""

    @property
    def first_arg(self) -> str:
        """Get the first argument or empty string."""
        return self.args[0] if self.args else ""

    @property
    def tokens(self) -> List[str]:
        """Name and arguments as one list, e.g. for passing on to jj."""
        return [self.name, *self.args] if self.name else []


# Command aliases
COMMAND_ALIASES: Dict[str, str] = {
    "q": "quit",
    "h": "help",
    "r": "refresh",
    "t": "tab",
}

APP_COMMANDS = ["quit", "help", "refresh", "tab", "jj"]


def parse_command(command_str: str) -> ParsedCommand:
    """Parse a prompt line into a ParsedCommand.

    Supports:
    - App commands: quit, help, refresh, tab 2
    - jj commands, with or without a leading "jj": jj log -r @-, st
    - Quoted args: describe -m "Fix the thing"

    Args:
        command_str: Raw command string (without leading :)

    Returns:
        ParsedCommand instance
    """
    command_str = command_str.strip()
    if not command_str:
        return ParsedCommand(name="", raw=command_str)

    try:
        # Use shlex for proper quote handling
        tokens = shlex.split(command_str)
    except ValueError:
        # Fallback for unbalanced quotes
        tokens = command_str.split()

    if not tokens:
        return ParsedCommand(name="", raw=command_str)

    # Only app command names are case-folded; jj arguments are passed as typed
    name = tokens[0]
    resolved = COMMAND_ALIASES.get(name.lower(), name.lower())
    if resolved in APP_COMMANDS:
        name = resolved

    return ParsedCommand(name=name, args=tokens[1:], raw=command_str)


def get_command_names() -> List[str]:
    """Get list of app command names for completion."""
    return list(APP_COMMANDS)
