"""Files tab: files changed by one revision and their diffs."""

from typing import List, Optional

from rich.text import Text

from jj_tui.commander import FileChange, FileStatus, Head
from jj_tui.widgets.base_tab import CommanderTab

_STATUS_STYLES = {
    FileStatus.ADDED: "green",
    FileStatus.MODIFIED: "cyan",
    FileStatus.DELETED: "red",
    FileStatus.RENAMED: "yellow",
    FileStatus.COPIED: "yellow",
}


class FilesTab(CommanderTab[FileChange]):
    """Changed files of the head chosen in the log tab."""

    TITLE = "Files"
    EMPTY_TEXT = "No changes in revision"

    head: Optional[Head] = None

    def set_head(self, head: Head) -> None:
        """Show files of another revision on the next reload."""
        if head != self.head:
            self.head = head
            self.stale = True
            self.list_view.border_title = f"Files of {head}"

    def fetch(self) -> List[FileChange]:
        if self.head is None:
            self.head = self.commander.get_current_head()
        return self.commander.get_file_changes(self.head.commit_id)

    def item_key(self, item: FileChange):
        return item.path

    def render_item(self, change: FileChange) -> Text:
        text = Text()
        text.append(change.status.value, style=f"bold {_STATUS_STYLES[change.status]}")
        text.append(" ")
        text.append(change.display_path)
        return text

    def load_details(self, change: FileChange) -> str:
        head = self.head
        if head is None:
            return ""
        return self.commander.get_file_diff(head.commit_id, change.path, self.config.diff_format)
