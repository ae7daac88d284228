"""Shared behaviour of the list + details tabs."""

import logging
from functools import partial
from typing import Any, Callable, Generic, List, Optional, TypeVar

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import ListItem, ListView, Static

from jj_tui.commander import (
    CommandError,
    CommandExitError,
    CommandParseError,
    Commander,
    CommanderError,
)
from jj_tui.config import Config
from jj_tui.widgets.details_panel import DetailsPanel
from jj_tui.widgets.messages import RepoChanged, ShowMessage

logger = logging.getLogger(__name__)

T = TypeVar("T")


def format_error(error: Exception) -> str:
    """Turn a command failure into text for the user."""
    if isinstance(error, CommanderError):
        return error.details()
    if isinstance(error, CommandParseError):
        logger.error("Parse failure for %s: %s\n%s", error.command_args, error.reason, error.output)
        return f"{error}\n\nThis usually means an unsupported jj version."
    if isinstance(error, CommandExitError):
        return error.stderr
    return str(error)


class CommanderTab(Widget, Generic[T]):
    """A selectable list on the left and a DetailsPanel on the right.

    Subclasses implement fetch() (read-only jj queries, safe to run in a
    worker thread), render_item() and load_details().
    """

    DEFAULT_CSS = """
    CommanderTab {
        height: 1fr;
    }

    CommanderTab > Horizontal {
        height: 100%;
    }

    CommanderTab ListView {
        width: 1fr;
        height: 100%;
        border: round $primary-darken-2;
    }

    CommanderTab ListView:focus {
        border: round $primary;
    }

    CommanderTab .empty-hint {
        color: $text-muted;
        text-style: italic;
    }
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    TITLE = ""
    EMPTY_TEXT = "Nothing to show"

    def __init__(self, commander: Commander, config: Config, **kwargs) -> None:
        super().__init__(**kwargs)
        self.commander = commander
        self.config = config
        self._items: List[T] = []
        self.stale = True

    def compose(self) -> ComposeResult:
        with Horizontal():
            list_view = ListView(id=f"{self.id}-list")
            list_view.border_title = self.TITLE
            yield list_view
            yield DetailsPanel(id=f"{self.id}-details")

    @property
    def list_view(self) -> ListView:
        return self.query_one(ListView)

    @property
    def details(self) -> DetailsPanel:
        return self.query_one(DetailsPanel)

    @property
    def selected(self) -> Optional[T]:
        """Get the highlighted item."""
        index = self.list_view.index
        if index is None or not 0 <= index < len(self._items):
            return None
        return self._items[index]

    # ==================== Data ====================

    def fetch(self) -> List[T]:
        """Query jj for the items to show. Must not mutate the repository."""
        raise NotImplementedError

    def render_item(self, item: T) -> Text:
        raise NotImplementedError

    def load_details(self, item: T) -> "str | Text":
        """Query jj for the details of one item."""
        raise NotImplementedError

    def item_key(self, item: T) -> Any:
        """Identity used to keep the selection across reloads."""
        return item

    def reload(self) -> None:
        """Fetch and show items, blocking until jj returns."""
        try:
            items = self.fetch()
        except CommandError as e:
            self.post_message(ShowMessage(format_error(e), "Error", error=True))
            return
        self.apply(items)

    def apply(self, items: List[T]) -> None:
        """Show fetched items, keeping the selection if it still exists."""
        previous = self.selected
        previous_key = self.item_key(previous) if previous is not None else None

        self._items = list(items)
        self.stale = False

        list_view = self.list_view
        list_view.clear()
        if not self._items:
            list_view.append(ListItem(Static(self.EMPTY_TEXT, classes="empty-hint"), disabled=True))
            self.details.clear()
            return

        for item in self._items:
            list_view.append(ListItem(Static(self.render_item(item))))

        index = self.initial_index()
        if previous_key is not None:
            for i, item in enumerate(self._items):
                if self.item_key(item) == previous_key:
                    index = i
                    break
        list_view.index = index
        self.show_details()

    def initial_index(self) -> int:
        return 0

    def show_details(self) -> None:
        """Load details of the selected item in a worker thread."""
        item = self.selected
        if item is None:
            self.details.clear()
            return
        self.run_worker(
            partial(self._details_worker, item),
            thread=True,
            exclusive=True,
            group=f"{self.id}-details",
        )

    def _details_worker(self, item: T) -> None:
        try:
            content = self.load_details(item)
        except CommandError as e:
            content = Text(format_error(e), style="red")
        self.app.call_from_thread(self.details.set_content, content)

    # ==================== Actions ====================

    def run_command(self, command: Callable[[], Optional[str]], title: str = "") -> None:
        """Run a mutating command, report failures and refresh.

        If the command returns text (push, fetch) it is shown in a popup.
        """
        try:
            output = command()
        except (CommandError, CommanderError) as e:
            self.post_message(ShowMessage(format_error(e), title or "Error", error=True))
            self.post_message(RepoChanged())
            return

        if output:
            self.post_message(ShowMessage(output, title))
        self.post_message(RepoChanged(f"{title} done" if title else None))

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        event.stop()
        self.show_details()

    def on_key(self, event) -> None:
        """Forward details panel keys."""
        if self.details.input(event.key):
            event.stop()
            event.prevent_default()

    def action_cursor_down(self) -> None:
        self.list_view.action_cursor_down()

    def action_cursor_up(self) -> None:
        self.list_view.action_cursor_up()

    def focus_list(self) -> None:
        self.list_view.focus()
