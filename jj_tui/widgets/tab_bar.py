"""One-line bar listing the tabs and the global keys."""

from typing import List

from rich.text import Text
from textual.widgets import Static

GLOBAL_KEYS = "q: quit | ?: help | R: refresh | :: jj command"


class TabBar(Static):
    """Tab titles with their number keys; the active one is highlighted."""

    DEFAULT_CSS = """
    TabBar {
        dock: top;
        height: 1;
        background: $surface-darken-1;
    }
    """

    def update_tabs(self, names: List[str], active: int) -> None:
        text = Text()
        for number, name in enumerate(names, start=1):
            style = "bold reverse" if number - 1 == active else ""
            text.append(f" {number} {name} ", style=style)
        text.append("   ")
        text.append(GLOBAL_KEYS, style="dim")
        self.update(text)
