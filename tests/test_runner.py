"""Tests for the subprocess runner and command history."""

import sys
import threading

import pytest

from jj_tui.commander.errors import CommandExitError, CommandLaunchError
from jj_tui.commander.history import CommandHistory
from jj_tui.commander.runner import CommandRunner


def python_runner() -> CommandRunner:
    """Runner using the current interpreter as the wrapped program."""
    return CommandRunner(sys.executable)


class TestCommandRunner:
    """Test CommandRunner against a small Python child process."""

    def test_success_returns_stdout(self):
        """Exit 0 should return stdout without the trailing newline."""
        output = python_runner().run(["-c", "print('hello')"])
        assert output == "hello"

    def test_only_one_trailing_newline_stripped(self):
        """Inner and repeated newlines should be preserved."""
        output = python_runner().run(["-c", "print('a\\n\\nb\\n')"])
        assert output == "a\n\nb\n"

    def test_no_trailing_newline(self):
        """Output without a newline should be returned unchanged."""
        output = python_runner().run(["-c", "import sys; sys.stdout.write('x')"])
        assert output == "x"

    def test_nonzero_exit_carries_stderr_verbatim(self):
        """stderr should be captured exactly, newlines included."""
        script = "import sys; sys.stderr.write('Error: bad\\n  hint\\n\\n'); sys.exit(3)"
        with pytest.raises(CommandExitError) as info:
            python_runner().run(["-c", script])

        assert info.value.returncode == 3
        assert info.value.stderr == "Error: bad\n  hint\n\n"
        assert str(info.value) == "Error: bad\n  hint\n\n"
        assert info.value.command_args == ("-c", script)

    def test_stderr_ignored_on_success(self):
        """Warnings on stderr should not leak into the result."""
        script = "import sys; sys.stderr.write('warning'); print('ok')"
        assert python_runner().run(["-c", script]) == "ok"

    def test_merge_stderr(self):
        """Merged output should contain both streams."""
        script = (
            "import sys; sys.stdout.write('out\\n'); sys.stdout.flush(); "
            "sys.stderr.write('err\\n')"
        )
        output = python_runner().run(["-c", script], merge_stderr=True)
        assert output == "out\nerr"

    def test_merge_stderr_failure_keeps_only_stderr(self):
        """A failing merged run should carry stderr alone, not the progress on stdout."""
        script = (
            "import sys; sys.stdout.write('progress\\n'); "
            "sys.stderr.write('Error: rejected\\n'); sys.exit(1)"
        )
        with pytest.raises(CommandExitError) as info:
            python_runner().run(["-c", script], merge_stderr=True)
        assert info.value.stderr == "Error: rejected\n"
        assert str(info.value) == "Error: rejected\n"

    def test_nul_byte_argument(self):
        """An argument the OS cannot pass should raise CommandLaunchError."""
        with pytest.raises(CommandLaunchError) as info:
            python_runner().run(["-c", "print(1)", "a\x00b"])
        assert isinstance(info.value.__cause__, ValueError)
        assert info.value.kind == "launch"

    def test_launch_failure(self, tmp_path):
        """A missing binary should raise CommandLaunchError."""
        runner = CommandRunner(str(tmp_path / "no-such-jj"))
        with pytest.raises(CommandLaunchError) as info:
            runner.run(["log"])

        assert isinstance(info.value.error, OSError)
        assert isinstance(info.value.__cause__, OSError)
        assert info.value.kind == "launch"

    def test_cwd(self, tmp_path):
        """The child should run in the configured directory."""
        runner = CommandRunner(sys.executable, cwd=str(tmp_path))
        output = runner.run(["-c", "import os; print(os.getcwd())"])
        assert output == str(tmp_path.resolve()) or output == str(tmp_path)

    def test_no_stdin(self):
        """The child should see an empty stdin instead of blocking."""
        output = python_runner().run(["-c", "import sys; print(repr(sys.stdin.read()))"])
        assert output == "''"


class TestCommandHistory:
    """Test CommandHistory."""

    def test_empty(self):
        """New history should be empty."""
        history = CommandHistory()
        assert len(history) == 0
        assert history.last() is None
        assert history.snapshot() == []

    def test_record_order(self):
        """Entries should be returned in record order."""
        history = CommandHistory()
        history.record(["new", "@"], True)
        history.record(["edit", "abc"], False, "Error: immutable")

        entries = history.snapshot()
        assert [e.args for e in entries] == [("new", "@"), ("edit", "abc")]
        assert history.last().args == ("edit", "abc")
        assert history.last().success is False
        assert history.last().output == "Error: immutable"

    def test_snapshot_is_copy(self):
        """Changing a snapshot should not change the history."""
        history = CommandHistory()
        history.record(["log"], True)
        snapshot = history.snapshot()
        snapshot.clear()
        assert len(history) == 1

    def test_command_line(self):
        """command_line should read like a shell command."""
        history = CommandHistory()
        entry = history.record(["bookmark", "create", "main"], True)
        assert entry.command_line == "jj bookmark create main"

    def test_entries_frozen(self):
        """Entries are part of an audit trail and should be immutable."""
        entry = CommandHistory().record(["log"], True)
        with pytest.raises(AttributeError):
            entry.success = False

    def test_concurrent_record(self):
        """Concurrent appends and reads should not lose entries."""
        history = CommandHistory()
        threads_count = 8
        per_thread = 200

        def worker(n: int) -> None:
            for i in range(per_thread):
                history.record(["log", str(n), str(i)], True)
                history.last()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        entries = history.snapshot()
        assert len(entries) == threads_count * per_thread
        # Per-thread order is preserved
        for n in range(threads_count):
            mine = [int(e.args[2]) for e in entries if e.args[1] == str(n)]
            assert mine == list(range(per_thread))
