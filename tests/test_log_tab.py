"""Tests for log tab helpers."""

import pytest

from jj_tui.widgets.log_tab import replace_summary


class TestReplaceSummary:
    """Test editing the first line of a description."""

    def test_body_preserved(self):
        """Only the summary line changes; the body stays byte for byte."""
        assert replace_summary("Title\n\nBody\nmore", "New") == "New\n\nBody\nmore"

    def test_unchanged_summary_is_identity(self):
        """Accepting the prompt as-is must not rewrite the description."""
        description = "Title\n\nBody"
        assert replace_summary(description, "Title") == description

    @pytest.mark.parametrize("description", ["", "Title"])
    def test_single_line(self, description):
        """Descriptions without a body become just the summary."""
        assert replace_summary(description, "New") == "New"

    def test_empty_summary_keeps_body(self):
        assert replace_summary("Title\n\nBody", "") == "\n\nBody"
