"""Messages posted by tabs to the app."""

from typing import Callable, Optional

from rich.text import Text
from textual.message import Message

from jj_tui.commander import Head


class ViewFiles(Message):
    """Show the files tab for a revision."""

    def __init__(self, head: Head) -> None:
        self.head = head
        super().__init__()


class ShowMessage(Message):
    """Show text in a popup (command output, errors, help)."""

    def __init__(self, text: "str | Text", title: str = "", error: bool = False) -> None:
        self.text = text
        self.title = title
        self.error = error
        super().__init__()


class PromptRequested(Message):
    """Ask the user for a line of text.

    on_submit is called with the entered text; nothing is called when the
    prompt is cancelled.
    """

    def __init__(
        self,
        label: str,
        on_submit: Callable[[str], None],
        initial: str = "",
    ) -> None:
        self.label = label
        self.on_submit = on_submit
        self.initial = initial
        super().__init__()


class RepoChanged(Message):
    """A command changed the repository; other tabs are stale."""

    def __init__(self, status: Optional[str] = None) -> None:
        self.status = status
        super().__init__()
