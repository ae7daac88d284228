"""Main Textual application for jj-tui."""

import logging
from typing import Callable, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import ContentSwitcher, Header

from jj_tui.commander import CommandError, Commander
from jj_tui.commands import CommandHandler, parse_command
from jj_tui.commands.handlers import HELP_TEXT
from jj_tui.commands.parser import get_command_names
from jj_tui.config import Config
from jj_tui.widgets import (
    BookmarksTab,
    CommandInput,
    CommandLogTab,
    FilesTab,
    LogTab,
    MessagePopup,
    PromptRequested,
    RepoChanged,
    ShowMessage,
    StatusBar,
    TabBar,
    ViewFiles,
)
from jj_tui.widgets.base_tab import CommanderTab, format_error

logger = logging.getLogger(__name__)


class JjApp(App):
    """Terminal front-end for a jj repository."""

    TITLE = "jj-tui"
    # ctrl+p is "push, allowing new bookmarks" in the log tab
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("q", "quit", "Quit", show=False),
        Binding("1", "switch_tab(0)", "Log", show=False),
        Binding("2", "switch_tab(1)", "Files", show=False),
        Binding("3", "switch_tab(2)", "Bookmarks", show=False),
        Binding("4", "switch_tab(3)", "Command log", show=False),
        Binding("R", "refresh", "Refresh", show=False),
        Binding("question_mark", "show_help", "Help", show=False),
    ]

    def __init__(
        self,
        commander: Commander,
        config: Optional[Config] = None,
        revset: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.commander = commander
        self.config = config or Config()
        self.sub_title = commander.repo_path

        self._revset = revset if revset is not None else self.config.default_revset
        self._in_prompt = False
        self._prompt_callback: Optional[Callable[[str], None]] = None
        self._active_index = 0

        self._tabs: List[CommanderTab] = [
            LogTab(commander, self.config, revset=self._revset, id="log"),
            FilesTab(commander, self.config, id="files"),
            BookmarksTab(commander, self.config, id="bookmarks"),
        ]
        if self.config.show_command_log:
            self._tabs.append(CommandLogTab(commander, self.config, id="command_log"))

        self._command_handler = CommandHandler(commander, tab_count=len(self._tabs))

    def compose(self) -> ComposeResult:
        """Create the UI layout."""
        yield Header()
        yield TabBar(id="tab-bar")
        with ContentSwitcher(initial=self._tabs[0].id, id="tabs"):
            for tab in self._tabs:
                yield tab
        yield CommandInput(commands=get_command_names(), id="command-input")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        """Load the first tab after mounting."""
        self.query_one("#command-input").display = False
        self._update_tab_bar()
        self._update_head()
        self.active_tab.reload()
        self.active_tab.focus_list()

        if self.config.refresh_interval > 0:
            self.set_interval(self.config.refresh_interval, self._background_refresh)

    @property
    def active_tab(self) -> CommanderTab:
        return self._tabs[self._active_index]

    @property
    def status_bar(self) -> StatusBar:
        return self.query_one("#status-bar", StatusBar)

    def on_key(self, event) -> None:
        """Handle keys that are not bindings."""
        if self._in_prompt:
            return
        if event.character == ":":
            event.stop()
            self._enter_prompt(":")

    # ==================== Actions ====================

    def action_switch_tab(self, index: int) -> None:
        """Switch to the tab at index."""
        if self._in_prompt or not 0 <= index < len(self._tabs):
            return
        self._active_index = index
        tab = self.active_tab
        self.query_one("#tabs", ContentSwitcher).current = tab.id
        self._update_tab_bar()
        self.status_bar.set_mode(tab.id)
        # The command log changes with every command, so it is always reloaded
        if tab.stale or isinstance(tab, CommandLogTab):
            tab.reload()
        tab.focus_list()

    def action_refresh(self) -> None:
        """Reload the working-copy head and the current tab."""
        for tab in self._tabs:
            tab.stale = True
        self._update_head()
        self.active_tab.reload()

    def action_show_help(self) -> None:
        self.push_screen(MessagePopup(HELP_TEXT, "Help"))

    # ==================== Tab messages ====================

    def on_view_files(self, message: ViewFiles) -> None:
        files_tab = self.query_one(FilesTab)
        files_tab.set_head(message.head)
        self.action_switch_tab(self._tabs.index(files_tab))

    def on_show_message(self, message: ShowMessage) -> None:
        if message.error:
            logger.info("Showing error: %s", message.text)
        self.push_screen(MessagePopup(message.text, message.title, error=message.error))

    def on_repo_changed(self, message: RepoChanged) -> None:
        self.action_refresh()
        if message.status:
            self.status_bar.show_message(message.status)

    def on_prompt_requested(self, message: PromptRequested) -> None:
        self._prompt_callback = message.on_submit
        self._enter_prompt(message.label, message.initial)

    # ==================== Prompt ====================

    def _enter_prompt(self, prefix: str, value: str = "") -> None:
        """Show the prompt line in place of the status bar."""
        self._in_prompt = True
        self.status_bar.display = False
        cmd_input = self.query_one("#command-input", CommandInput)
        cmd_input.display = True
        cmd_input.reset(prefix, value)
        cmd_input.focus()

    def _close_prompt(self) -> None:
        self._in_prompt = False
        cmd_input = self.query_one("#command-input", CommandInput)
        cmd_input.display = False
        self.status_bar.display = True
        self.active_tab.focus_list()

    def on_command_input_command_submitted(
        self, event: CommandInput.CommandSubmitted
    ) -> None:
        """Handle a submitted prompt line."""
        self._close_prompt()
        callback, self._prompt_callback = self._prompt_callback, None

        if event.prefix == ":":
            result = self._command_handler.execute(parse_command(event.command))
            self._handle_command_result(result)
        elif callback is not None:
            callback(event.command)

    def on_command_input_command_cancelled(
        self, event: CommandInput.CommandCancelled
    ) -> None:
        self._prompt_callback = None
        self._close_prompt()

    def _handle_command_result(self, result) -> None:
        """Handle command execution result."""
        action = result.action

        if action == "quit":
            self.exit()
        elif action == "help":
            self.push_screen(MessagePopup(result.message, "Help"))
        elif action == "refresh":
            self.action_refresh()
        elif action == "tab":
            self.action_switch_tab((result.data or {}).get("index", 0))
        elif action == "output":
            # A raw jj command may have changed anything
            self.action_refresh()
            self.push_screen(MessagePopup(result.message, "jj", error=not result.success))
        elif result.message:
            self.status_bar.show_message(result.message, error=not result.success)

    # ==================== Helpers ====================

    def _update_tab_bar(self) -> None:
        names = [tab.TITLE for tab in self._tabs]
        self.query_one("#tab-bar", TabBar).update_tabs(names, self._active_index)

    def _update_head(self) -> None:
        try:
            head = self.commander.get_current_head()
        except CommandError as e:
            self.status_bar.show_message(format_error(e).strip(), error=True)
            return
        self.status_bar.set_head(head)

    def _background_refresh(self) -> None:
        """Re-read the head and the current tab without blocking the UI."""
        if self._in_prompt:
            return
        self.run_worker(
            self._refresh_worker,
            thread=True,
            exclusive=True,
            group="refresh",
        )

    def _refresh_worker(self) -> None:
        tab = self.active_tab
        try:
            head = self.commander.get_current_head()
            items = tab.fetch()
        except CommandError as e:
            logger.warning("Background refresh failed: %s", e)
            return
        self.call_from_thread(self.status_bar.set_head, head)
        self.call_from_thread(tab.apply, items)
