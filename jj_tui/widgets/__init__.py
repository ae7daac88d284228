"""Textual widgets for jj-tui."""

from jj_tui.widgets.bookmarks_tab import BookmarksTab
from jj_tui.widgets.command_input import CommandInput
from jj_tui.widgets.command_log_tab import CommandLogTab
from jj_tui.widgets.details_panel import DetailsPanel
from jj_tui.widgets.files_tab import FilesTab
from jj_tui.widgets.log_tab import LogTab
from jj_tui.widgets.message_popup import MessagePopup
from jj_tui.widgets.messages import PromptRequested, RepoChanged, ShowMessage, ViewFiles
from jj_tui.widgets.status_bar import StatusBar
from jj_tui.widgets.tab_bar import TabBar

__all__ = [
    "BookmarksTab",
    "CommandInput",
    "CommandLogTab",
    "DetailsPanel",
    "FilesTab",
    "LogTab",
    "MessagePopup",
    "PromptRequested",
    "RepoChanged",
    "ShowMessage",
    "StatusBar",
    "TabBar",
    "ViewFiles",
]
