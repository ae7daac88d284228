"""Modal popup for command output, errors and help."""

from typing import Union

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static


class MessagePopup(ModalScreen[None]):
    """Scrollable text in a bordered box; any close key dismisses it."""

    DEFAULT_CSS = """
    MessagePopup {
        align: center middle;
    }

    MessagePopup > Vertical {
        width: 80%;
        max-height: 80%;
        height: auto;
        background: $surface;
        border: round $primary;
        padding: 0 1;
    }

    MessagePopup > Vertical.error {
        border: round $error;
    }

    MessagePopup VerticalScroll {
        height: auto;
        max-height: 100%;
    }

    MessagePopup .popup-hint {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
        Binding("q", "dismiss", "Close", show=False),
        Binding("enter", "dismiss", "Close", show=False),
        Binding("j", "scroll_down", "Down", show=False),
        Binding("k", "scroll_up", "Up", show=False),
    ]

    def __init__(self, text: Union[str, Text], title: str = "", error: bool = False) -> None:
        super().__init__()
        if isinstance(text, str):
            text = Text.from_ansi(text)
        self._text = text
        self._title = title
        self._error = error

    def compose(self) -> ComposeResult:
        with Vertical(classes="error" if self._error else "") as box:
            box.border_title = self._title
            with VerticalScroll():
                yield Static(self._text)
            yield Static("Esc/q/Enter=close", classes="popup-hint")

    def action_scroll_down(self) -> None:
        self.query_one(VerticalScroll).scroll_relative(y=1, animate=False)

    def action_scroll_up(self) -> None:
        self.query_one(VerticalScroll).scroll_relative(y=-1, animate=False)
