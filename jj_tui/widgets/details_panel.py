"""Scrollable text viewer used on the right side of each tab."""

from typing import Union

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import ScrollableContainer
from textual.widgets import Static


class DetailsPanel(ScrollableContainer, can_focus=False):
    """Shows command output with vim-like scrolling and optional wrapping.

    Scroll keys are forwarded by the owning tab through input() so the list
    on the left can keep focus.
    """

    DEFAULT_CSS = """
    DetailsPanel {
        width: 1fr;
        height: 100%;
        border: round $primary-darken-2;
        padding: 0 1;
    }

    DetailsPanel > #details-content {
        width: 100%;
    }

    DetailsPanel > #details-content.nowrap {
        width: auto;
    }
    """

    # key -> (lines, unit) where unit is "line", "half" or "page"
    SCROLL_KEYS = {
        "ctrl+e": (1, "line"),
        "ctrl+y": (-1, "line"),
        "ctrl+d": (1, "half"),
        "ctrl+u": (-1, "half"),
        "ctrl+f": (1, "page"),
        "ctrl+b": (-1, "page"),
    }

    def __init__(self, title: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.border_title = title
        self._wrap = True
        self._text = Text()

    def compose(self) -> ComposeResult:
        yield Static("", id="details-content")

    def set_content(self, content: Union[str, Text], title: str = "") -> None:
        """Replace the panel text and scroll back to the top.

        Strings are treated as jj output and may contain ANSI colors.
        """
        if isinstance(content, str):
            content = Text.from_ansi(content)
        self._text = content
        if title:
            self.border_title = title
        self._render_text()
        self.scroll_home(animate=False)

    def clear(self) -> None:
        self.set_content(Text())

    def toggle_wrap(self) -> None:
        self._wrap = not self._wrap
        self._render_text()

    def scroll_lines(self, lines: int) -> None:
        self.scroll_relative(y=lines, animate=False)

    def input(self, key: str) -> bool:
        """Handle a key. Returns True if the key was used."""
        if key == "W":
            self.toggle_wrap()
            return True

        if key not in self.SCROLL_KEYS:
            return False

        direction, unit = self.SCROLL_KEYS[key]
        height = max(1, self.size.height)
        if unit == "half":
            amount = max(1, height // 2)
        elif unit == "page":
            amount = height
        else:
            amount = 1
        self.scroll_lines(direction * amount)
        return True

    def _render_text(self) -> None:
        text = self._text.copy()
        text.no_wrap = not self._wrap
        content = self.query_one("#details-content", Static)
        content.set_class(not self._wrap, "nowrap")
        content.update(text)
