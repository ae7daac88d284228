"""Bookmarks tab: list bookmarks and run bookmark commands."""

from typing import List

from rich.text import Text
from textual.binding import Binding

from jj_tui.commander import Bookmark
from jj_tui.widgets.base_tab import CommanderTab
from jj_tui.widgets.messages import PromptRequested, ShowMessage


class BookmarksTab(CommanderTab[Bookmark]):
    """Local and remote bookmarks with the log of their target."""

    BINDINGS = CommanderTab.BINDINGS + [
        Binding("a", "toggle_all", "All remotes", show=False),
        Binding("c", "create", "Create", show=False),
        Binding("r", "rename", "Rename", show=False),
        Binding("d", "delete", "Delete", show=False),
        Binding("f", "forget", "Forget", show=False),
        Binding("t", "track", "Track", show=False),
        Binding("T", "untrack", "Untrack", show=False),
        Binding("n", "new", "New at bookmark", show=False),
        Binding("e", "edit", "Edit bookmark", show=False),
    ]

    TITLE = "Bookmarks"
    EMPTY_TEXT = "No bookmarks"

    show_all = False

    def fetch(self) -> List[Bookmark]:
        return self.commander.get_bookmarks_list(self.show_all)

    def item_key(self, item: Bookmark):
        return str(item)

    def render_item(self, bookmark: Bookmark) -> Text:
        text = Text()
        text.append(bookmark.name, style="bold magenta")
        if bookmark.remote is not None:
            text.append(f"@{bookmark.remote}", style="dim magenta")
        if not bookmark.present:
            text.append(" (deleted)", style="red")
        return text

    def load_details(self, bookmark: Bookmark) -> "str | Text":
        if not bookmark.present:
            return Text(f"{bookmark} does not point to a commit", style="dim")
        return self.commander.get_bookmark_show(bookmark)

    def _selected_local(self, action: str):
        bookmark = self.selected
        if bookmark is not None and bookmark.remote is not None:
            self.post_message(ShowMessage(f"Cannot {action} remote bookmark {bookmark}", "Error", error=True))
            return None
        return bookmark

    def _selected_remote(self, action: str):
        bookmark = self.selected
        if bookmark is not None and bookmark.remote is None:
            self.post_message(ShowMessage(f"Only remote bookmarks can be {action}", "Error", error=True))
            return None
        return bookmark

    # ==================== Actions ====================

    def action_toggle_all(self) -> None:
        self.show_all = not self.show_all
        self.list_view.border_title = "Bookmarks (all remotes)" if self.show_all else self.TITLE
        self.reload()

    def action_create(self) -> None:
        def create(name: str) -> None:
            name = name.strip()
            if not name:
                return

            def command() -> None:
                self.commander.create_bookmark(name)

            self.run_command(command)

        self.post_message(PromptRequested("new bookmark: ", create))

    def action_rename(self) -> None:
        bookmark = self._selected_local("rename")
        if bookmark is None:
            return

        def rename(new: str) -> None:
            new = new.strip()
            if new and new != bookmark.name:
                self.run_command(lambda: self.commander.rename_bookmark(bookmark.name, new))

        self.post_message(PromptRequested("rename to: ", rename, bookmark.name))

    def action_delete(self) -> None:
        bookmark = self._selected_local("delete")
        if bookmark is not None:
            self.run_command(lambda: self.commander.delete_bookmark(bookmark.name))

    def action_forget(self) -> None:
        bookmark = self._selected_local("forget")
        if bookmark is not None:
            self.run_command(lambda: self.commander.forget_bookmark(bookmark.name))

    def action_track(self) -> None:
        bookmark = self._selected_remote("tracked")
        if bookmark is not None:
            self.run_command(lambda: self.commander.track_bookmark(bookmark))

    def action_untrack(self) -> None:
        bookmark = self._selected_remote("untracked")
        if bookmark is not None:
            self.run_command(lambda: self.commander.untrack_bookmark(bookmark))

    def action_new(self) -> None:
        bookmark = self.selected
        if bookmark is not None and bookmark.present:
            self.run_command(lambda: self.commander.run_new(str(bookmark)))

    def action_edit(self) -> None:
        bookmark = self.selected
        if bookmark is not None and bookmark.present:
            self.run_command(lambda: self.commander.run_edit(str(bookmark), False))
