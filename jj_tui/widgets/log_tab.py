"""Log tab: revisions of the repository and commands on them."""

from typing import List, Optional

from rich.text import Text
from textual.binding import Binding
from textual.widgets import ListView

from jj_tui.commander import CommandError, Commander, LogEntry
from jj_tui.config import Config
from jj_tui.widgets.base_tab import CommanderTab, format_error
from jj_tui.widgets.messages import PromptRequested, ShowMessage, ViewFiles


def replace_summary(description: str, summary: str) -> str:
    """Swap the first line of description for summary, keeping the body."""
    _, newline, body = description.partition("\n")
    return summary + newline + body


class LogTab(CommanderTab[LogEntry]):
    """Revision list with jj show output for the selected revision."""

    BINDINGS = CommanderTab.BINDINGS + [
        Binding("n", "new", "New", show=False),
        Binding("e", "edit(False)", "Edit", show=False),
        Binding("E", "edit(True)", "Edit immutable", show=False),
        Binding("a", "abandon", "Abandon", show=False),
        Binding("d", "describe", "Describe", show=False),
        Binding("s", "squash(False)", "Squash", show=False),
        Binding("S", "squash(True)", "Squash immutable", show=False),
        Binding("b", "bookmark", "Bookmark", show=False),
        Binding("p", "push(False, False)", "Push", show=False),
        Binding("P", "push(True, False)", "Push all", show=False),
        Binding("ctrl+p", "push(False, True)", "Push new", show=False),
        Binding("f", "fetch(False)", "Fetch", show=False),
        Binding("F", "fetch(True)", "Fetch all remotes", show=False),
    ]

    TITLE = "Log"
    EMPTY_TEXT = "No revisions in revset"

    def __init__(
        self,
        commander: Commander,
        config: Config,
        revset: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(commander, config, **kwargs)
        self.revset = revset

    def fetch(self) -> List[LogEntry]:
        return self.commander.get_log(self.revset)

    def item_key(self, item: LogEntry):
        return item.change_id

    def initial_index(self) -> int:
        for i, entry in enumerate(self._items):
            if entry.is_working_copy:
                return i
        return 0

    def render_item(self, entry: LogEntry) -> Text:
        text = Text()
        if entry.is_working_copy:
            text.append("@ ", style="bold green")
        elif entry.is_immutable:
            text.append("◆ ", style="cyan")
        else:
            text.append("○ ", style="")

        text.append(entry.change_id.short(), style="bold magenta")
        text.append(" ")
        if entry.author:
            text.append(entry.author, style="yellow")
            text.append(" ")
        text.append(entry.timestamp, style="cyan")
        for bookmark in entry.bookmarks:
            text.append(f" {bookmark}", style="magenta")
        text.append(" ")
        text.append(entry.commit_id.short(), style="blue")
        text.append("\n  ")
        if entry.is_empty:
            text.append("(empty) ", style="green")
        if entry.description:
            text.append(entry.description)
        else:
            text.append("(no description set)", style="dim")
        return text

    def load_details(self, entry: LogEntry) -> str:
        return self.commander.get_commit_show(entry.commit_id, self.config.diff_format)

    # ==================== Actions ====================

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        self.action_view_files()

    def action_view_files(self) -> None:
        entry = self.selected
        if entry:
            self.post_message(ViewFiles(entry.head))

    def action_new(self) -> None:
        entry = self.selected
        if entry:
            self.run_command(lambda: self.commander.run_new(entry.commit_id.as_str()))

    def action_edit(self, ignore_immutable: bool) -> None:
        entry = self.selected
        if entry:
            self.run_command(
                lambda: self.commander.run_edit(entry.commit_id.as_str(), ignore_immutable)
            )

    def action_abandon(self) -> None:
        entry = self.selected
        if entry:
            self.run_command(lambda: self.commander.run_abandon(entry.commit_id))

    def action_describe(self) -> None:
        entry = self.selected
        if not entry:
            return
        try:
            current = self.commander.get_commit_description(entry.commit_id)
        except CommandError as e:
            self.post_message(ShowMessage(format_error(e), "Error", error=True))
            return

        def describe(summary: str) -> None:
            message = replace_summary(current, summary)
            self.run_command(
                lambda: self.commander.run_describe(entry.commit_id.as_str(), message)
            )

        # The prompt is single-line: only the summary is edited
        self.post_message(PromptRequested("describe: ", describe, current.partition("\n")[0]))

    def action_squash(self, ignore_immutable: bool) -> None:
        entry = self.selected
        if entry:
            self.run_command(
                lambda: self.commander.run_squash(entry.commit_id.as_str(), ignore_immutable)
            )

    def action_bookmark(self) -> None:
        entry = self.selected
        if not entry:
            return

        def set_bookmark(name: str) -> None:
            name = name.strip()
            if not name:
                return

            def command() -> None:
                existing = {b.name for b in self.commander.get_bookmarks_list(False)}
                if name in existing:
                    self.commander.set_bookmark_commit(name, entry.commit_id)
                else:
                    self.commander.create_bookmark_commit(name, entry.commit_id)

            self.run_command(command)

        initial = entry.bookmarks[0] if entry.bookmarks else ""
        self.post_message(PromptRequested("bookmark: ", set_bookmark, initial))

    def action_push(self, all_bookmarks: bool, allow_new: bool) -> None:
        entry = self.selected
        if entry:
            self.run_command(
                lambda: self.commander.git_push(all_bookmarks, allow_new, entry.commit_id),
                "jj git push",
            )

    def action_fetch(self, all_remotes: bool) -> None:
        self.run_command(lambda: self.commander.git_fetch(all_remotes), "jj git fetch")
