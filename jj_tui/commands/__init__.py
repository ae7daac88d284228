"""Command parsing and handling for jj-tui."""

from jj_tui.commands.parser import parse_command, ParsedCommand
from jj_tui.commands.handlers import CommandHandler, CommandResult

__all__ = ["parse_command", "ParsedCommand", "CommandHandler", "CommandResult"]
