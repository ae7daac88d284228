"""Single-line prompt docked at the bottom: `:` commands and text prompts."""

import os
from typing import List, Optional

from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

COMMAND_PREFIX = ":"


class PromptHistory:
    """Previously run `:` commands, browsed with up/down."""

    def __init__(self, limit: int = 100) -> None:
        self.limit = limit
        self._lines: List[str] = []
        self._cursor: Optional[int] = None
        self._draft = ""

    def add(self, line: str) -> None:
        if not self._lines or self._lines[-1] != line:
            self._lines.append(line)
            del self._lines[:-self.limit]
        self.reset()

    def reset(self) -> None:
        self._cursor = None
        self._draft = ""

    def older(self, current: str) -> Optional[str]:
        """Step back; returns the line to show or None if nothing changed."""
        if not self._lines:
            return None
        if self._cursor is None:
            self._draft = current
            self._cursor = len(self._lines) - 1
        elif self._cursor > 0:
            self._cursor -= 1
        return self._lines[self._cursor]

    def newer(self) -> Optional[str]:
        """Step forward, ending at the text typed before browsing."""
        if self._cursor is None:
            return None
        if self._cursor < len(self._lines) - 1:
            self._cursor += 1
            return self._lines[self._cursor]
        draft = self._draft
        self.reset()
        return draft


class CommandInput(Widget):
    """Prompt line with a label.

    With the `:` label it takes app or jj commands, with history and
    completion of app command names. With any other label (e.g.
    "describe: ") it collects one line of text for the requesting tab.
    """

    DEFAULT_CSS = """
    CommandInput {
        dock: bottom;
        height: 1;
        layout: horizontal;
        background: $surface;
    }

    CommandInput > #prompt-label {
        width: auto;
        height: 1;
        color: $accent;
    }

    CommandInput > #prompt-text {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0;
        background: $surface;
    }
    """

    class CommandSubmitted(Message):
        """Enter was pressed; command is the text, prefix the label."""

        def __init__(self, command: str, prefix: str) -> None:
            self.command = command
            self.prefix = prefix
            super().__init__()

    class CommandCancelled(Message):
        """Escape was pressed."""

    def __init__(self, commands: Optional[List[str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._commands = sorted(commands or [])
        self._prefix = COMMAND_PREFIX
        self.history = PromptHistory()

    def compose(self) -> ComposeResult:
        yield Static(COMMAND_PREFIX, id="prompt-label")
        yield Input(id="prompt-text")

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def is_command(self) -> bool:
        return self._prefix == COMMAND_PREFIX

    @property
    def text(self) -> Input:
        return self.query_one("#prompt-text", Input)

    def reset(self, prefix: str = COMMAND_PREFIX, value: str = "") -> None:
        """Show a new label and start from value."""
        self._prefix = prefix
        self.query_one("#prompt-label", Static).update(prefix)
        self._set_text(value)
        self.history.reset()

    def focus(self, scroll_visible: bool = True) -> "CommandInput":
        self.text.focus(scroll_visible=scroll_visible)
        return self

    def _set_text(self, value: str) -> None:
        self.text.value = value
        self.text.cursor_position = len(value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        value = self.text.value
        if self.is_command:
            # Free text (descriptions) is passed on untouched
            value = value.strip()
            if value:
                self.history.add(value)
        self.post_message(self.CommandSubmitted(value, self._prefix))

    def on_key(self, event) -> None:
        if event.key == "escape":
            self.post_message(self.CommandCancelled())
        elif not self.is_command:
            return
        elif event.key == "up":
            line = self.history.older(self.text.value)
            if line is not None:
                self._set_text(line)
        elif event.key == "down":
            line = self.history.newer()
            if line is not None:
                self._set_text(line)
        elif event.key == "tab":
            self._complete()
        else:
            return
        event.prevent_default()
        event.stop()

    def _complete(self) -> None:
        """Complete the first word against the app command names."""
        word, sep, rest = self.text.value.lstrip().partition(" ")
        if not word:
            return

        matches = [name for name in self._commands if name.startswith(word)]
        if not matches:
            return
        if len(matches) == 1:
            self._set_text(f"{matches[0]} {rest}")
            return

        common = os.path.commonprefix(matches)
        if len(common) > len(word):
            self._set_text(common + sep + rest)
