"""Command log tab: every jj command run during the session."""

from typing import List

from rich.text import Text

from jj_tui.commander import HistoryEntry
from jj_tui.widgets.base_tab import CommanderTab


class CommandLogTab(CommanderTab[HistoryEntry]):
    """History entries, newest first, with their output."""

    TITLE = "Command log"
    EMPTY_TEXT = "No commands run yet"

    def fetch(self) -> List[HistoryEntry]:
        # Reading the history never runs jj
        return list(reversed(self.commander.command_history.snapshot()))

    def item_key(self, item: HistoryEntry):
        return (item.timestamp, item.args)

    def render_item(self, entry: HistoryEntry) -> Text:
        text = Text()
        if entry.success:
            text.append("✓ ", style="green")
        else:
            text.append("✗ ", style="bold red")
        text.append(entry.timestamp.strftime("%H:%M:%S"), style="dim")
        text.append(" ")
        text.append(entry.command_line)
        text.append(f" ({entry.duration:.2f}s)", style="dim")
        return text

    def load_details(self, entry: HistoryEntry) -> Text:
        text = Text()
        text.append(entry.command_line + "\n\n", style="bold")
        output = Text.from_ansi(entry.output) if entry.output else Text("(no output)", style="dim")
        if not entry.success:
            output.stylize("red")
        text.append_text(output)
        return text
