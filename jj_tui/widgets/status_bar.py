"""Status bar widget."""

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from jj_tui.commander import Head

_HINTS = {
    "log": [
        ("n", "new"),
        ("e", "edit"),
        ("d", "describe"),
        ("s", "squash"),
        ("b", "bookmark"),
        ("p", "push"),
        ("f", "fetch"),
    ],
    "files": [
        ("j/k", "file"),
        ("^d/^u", "scroll"),
        ("W", "wrap"),
    ],
    "bookmarks": [
        ("c", "create"),
        ("r", "rename"),
        ("d", "delete"),
        ("t/T", "track"),
        ("a", "all"),
    ],
    "command_log": [
        ("j/k", "command"),
    ],
}


class StatusBar(Static):
    """Status bar showing the working-copy head and keybinding hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._mode = "log"
        self._head: Optional[Head] = None
        self._message: Optional[str] = None
        self._error = False

    def set_mode(self, mode: str) -> None:
        """Switch the key hints to those of a tab (by tab id)."""
        self._mode = mode
        self._message = None
        self._update()

    def set_head(self, head: Optional[Head]) -> None:
        """Set the working-copy head."""
        self._head = head
        self._update()

    def show_message(self, message: str, error: bool = False) -> None:
        """Show a temporary message."""
        self._message = message
        self._error = error
        self._update()

    def _update(self) -> None:
        """Update the status bar display."""
        text = Text()

        if self._head:
            text.append("@ ", style="bold green")
            text.append(self._head.change_id.short(), style="bold magenta")
            text.append(" ")
            text.append(self._head.commit_id.short(), style="blue")

        if self._message:
            text.append("  ")
            text.append(self._message, style="bold red" if self._error else "yellow")
        else:
            for key, desc in _HINTS.get(self._mode, []):
                text.append("  ")
                text.append(key, style="bold yellow")
                text.append(f" {desc}", style="dim")

        self.update(text)
