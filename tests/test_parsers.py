"""Tests for identifiers and the parsers of templated jj output."""

import pytest

from jj_tui.commander import Bookmark, ChangeId, CommandParseError, CommitId, Head
from jj_tui.commander.bookmarks import parse_bookmark_list
from jj_tui.commander.files import FileChange, FileStatus, parse_diff_summary, split_rename
from jj_tui.commander.log import parse_bool, parse_head, parse_log

COMMIT = "0123456789abcdef0123456789abcdef01234567"
CHANGE = "kkmpptxzrspxrzommnulwmwkkqwworpl"


class TestIds:
    """Test CommitId and ChangeId."""

    def test_commit_id_valid(self):
        """Lowercase hex should be accepted."""
        cid = CommitId(COMMIT)
        assert cid.as_str() == COMMIT
        assert str(cid) == COMMIT
        assert cid.short() == "01234567"
        assert cid.short(4) == "0123"

    @pytest.mark.parametrize("value", ["", "xyz", "ABC123", "abc 123", "abc\n", "\nabc"])
    def test_commit_id_invalid(self, value):
        """Anything but lowercase hex should be rejected."""
        with pytest.raises(ValueError):
            CommitId(value)

    def test_commit_id_equality_and_order(self):
        """Ids should compare by value."""
        assert CommitId("abc") == CommitId("abc")
        assert CommitId("abc") != CommitId("abd")
        assert sorted([CommitId("b1"), CommitId("a2")]) == [CommitId("a2"), CommitId("b1")]
        assert len({CommitId("abc"), CommitId("abc")}) == 1

    def test_commit_id_parse_strips(self):
        """parse should ignore surrounding whitespace."""
        assert CommitId.parse(f"  {COMMIT}\n") == CommitId(COMMIT)

    def test_commit_id_parse_error(self):
        """parse should raise the jj parse error, not ValueError."""
        with pytest.raises(CommandParseError) as info:
            CommitId.parse("Error: no such revision")
        assert info.value.output == "Error: no such revision"
        assert info.value.kind == "parse"

    def test_change_id(self):
        """Change ids use the letters k-z only."""
        assert ChangeId(CHANGE).short() == CHANGE[:8]
        with pytest.raises(ValueError):
            ChangeId("0123abcd")
        with pytest.raises(CommandParseError):
            ChangeId.parse("abc")

    @pytest.mark.parametrize("value", ["kkk\n", "kkk\r\n", "kk kk"])
    def test_change_id_rejects_whitespace(self, value):
        """A trailing newline is not part of a change id."""
        with pytest.raises(ValueError):
            ChangeId(value)


class TestParseHead:
    """Test parse_head and parse_bool."""

    def test_parse_head(self):
        """A change id and commit id separated by a tab."""
        head = parse_head(f"{CHANGE}\t{COMMIT}")
        assert head == Head(ChangeId(CHANGE), CommitId(COMMIT))

    def test_parse_head_trailing_newline(self):
        assert parse_head(f"{CHANGE}\t{COMMIT}\n").commit_id == CommitId(COMMIT)

    @pytest.mark.parametrize("output", ["", COMMIT, f"{CHANGE}\t{COMMIT}\textra"])
    def test_parse_head_malformed(self, output):
        """Wrong field count should raise CommandParseError."""
        with pytest.raises(CommandParseError):
            parse_head(output)

    def test_head_str(self):
        """str(Head) shows both short ids."""
        head = Head(ChangeId(CHANGE), CommitId(COMMIT))
        assert str(head) == f"{CHANGE[:8]} {COMMIT[:8]}"

    def test_parse_bool(self):
        assert parse_bool("true") is True
        assert parse_bool("false") is False
        with pytest.raises(CommandParseError):
            parse_bool("yes")


def log_line(description="Add feature", bookmarks="", wc="false", empty="false", immutable="false"):
    return "\t".join([
        CHANGE, COMMIT, wc, empty, immutable,
        "Test User", "5 minutes ago", bookmarks, description,
    ])


class TestParseLog:
    """Test parse_log."""

    def test_single_entry(self):
        """All fields should be mapped."""
        [entry] = parse_log(log_line(bookmarks="main dev", wc="true", empty="true"))

        assert entry.change_id == ChangeId(CHANGE)
        assert entry.commit_id == CommitId(COMMIT)
        assert entry.is_working_copy is True
        assert entry.is_empty is True
        assert entry.is_immutable is False
        assert entry.author == "Test User"
        assert entry.timestamp == "5 minutes ago"
        assert entry.bookmarks == ("main", "dev")
        assert entry.description == "Add feature"
        assert entry.head == Head(ChangeId(CHANGE), CommitId(COMMIT))

    def test_multiple_entries_keep_order(self):
        """Entries should come back in jj's order."""
        output = "\n".join([log_line("first"), log_line("second"), ""])
        entries = parse_log(output)
        assert [e.description for e in entries] == ["first", "second"]

    def test_empty_description_and_bookmarks(self):
        [entry] = parse_log(log_line(description=""))
        assert entry.description == ""
        assert entry.bookmarks == ()

    def test_tab_in_description(self):
        """A tab in the last field should stay in the description."""
        [entry] = parse_log(log_line(description="a\tb"))
        assert entry.description == "a\tb"

    def test_blank_lines_skipped(self):
        assert parse_log("\n\n") == []

    def test_too_few_fields(self):
        with pytest.raises(CommandParseError):
            parse_log(f"{CHANGE}\t{COMMIT}\ttrue")

    def test_bad_bool(self):
        with pytest.raises(CommandParseError):
            parse_log(log_line(wc="maybe"))


class TestParseBookmarks:
    """Test parse_bookmark_list and Bookmark."""

    def test_local_and_remote(self):
        """An empty remote field means a local bookmark."""
        output = (
            "main\t\ttrue\t1700000000\n"
            "main\torigin\ttrue\t1700000000\n"
            "old\torigin\tfalse\t0\n"
        )
        bookmarks = parse_bookmark_list(output)

        assert bookmarks == [
            Bookmark("main"),
            Bookmark("main", "origin"),
            Bookmark("old", "origin", present=False),
        ]
        assert bookmarks[0].is_local
        assert not bookmarks[1].is_local
        assert bookmarks[0].timestamp == 1700000000

    def test_str_is_revset_symbol(self):
        assert str(Bookmark("main")) == "main"
        assert str(Bookmark("main", "origin")) == "main@origin"

    def test_timestamp_not_compared(self):
        """Equality should ignore the ordering timestamp."""
        assert Bookmark("main", timestamp=1) == Bookmark("main", timestamp=2)
        assert Bookmark("main") != Bookmark("main", "origin")

    def test_empty(self):
        assert parse_bookmark_list("") == []

    @pytest.mark.parametrize("line", [
        "main\ttrue\t0",
        "\t\ttrue\t0",
        "main\t\ttrue\tsoon",
        "main\t\tyes\t0",
    ])
    def test_malformed(self, line):
        with pytest.raises(CommandParseError):
            parse_bookmark_list(line)


class TestParseDiffSummary:
    """Test parse_diff_summary and split_rename."""

    def test_statuses(self):
        output = "M README.md\nA src/new.py\nD old.txt\n"
        assert parse_diff_summary(output) == [
            FileChange(FileStatus.MODIFIED, "README.md"),
            FileChange(FileStatus.ADDED, "src/new.py"),
            FileChange(FileStatus.DELETED, "old.txt"),
        ]

    def test_path_with_spaces(self):
        [change] = parse_diff_summary("M docs/my notes.md")
        assert change.path == "docs/my notes.md"

    def test_braced_rename(self):
        [change] = parse_diff_summary("R src/{old.py => new.py}")
        assert change.status is FileStatus.RENAMED
        assert change.old_path == "src/old.py"
        assert change.path == "src/new.py"
        assert change.display_path == "src/old.py => src/new.py"

    def test_rename_into_directory(self):
        """An empty side of the braces should not leave a double slash."""
        assert split_rename("{ => lib}/util.py") == ("util.py", "lib/util.py")
        assert split_rename("src/{ => lib}/util.py") == ("src/util.py", "src/lib/util.py")

    def test_plain_rename(self):
        assert split_rename("a.txt => b.txt") == ("a.txt", "b.txt")

    def test_copy(self):
        [change] = parse_diff_summary("C {a.txt => b.txt}")
        assert change.status is FileStatus.COPIED
        assert (change.old_path, change.path) == ("a.txt", "b.txt")

    def test_unknown_line(self):
        with pytest.raises(CommandParseError):
            parse_diff_summary("Working copy changes:")

    def test_empty(self):
        assert parse_diff_summary("") == []
