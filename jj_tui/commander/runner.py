"""Subprocess wrapper for the jj CLI."""

import logging
import subprocess
from typing import Dict, Optional, Sequence

from jj_tui.commander.errors import CommandExitError, CommandLaunchError

logger = logging.getLogger(__name__)


def _strip_trailing_newline(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


class CommandRunner:
    """Run a program to completion and capture its output.

    The runner knows nothing about jj itself; it only turns exit statuses
    into return values and exceptions. There is no timeout: a hung child
    hangs the caller.
    """

    def __init__(
        self,
        program: str = "jj",
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
    ):
        """Initialize the runner.

        Args:
            program: Executable to run, looked up on PATH
            cwd: Working directory for the child process
            env: Full environment for the child (None inherits ours)
        """
        self.program = program
        self.cwd = cwd
        self.env = env

    def run(self, args: Sequence[str], merge_stderr: bool = False) -> str:
        """Run the program with the given arguments.

        Args:
            args: Arguments passed after the program name
            merge_stderr: Append standard error to the returned output on success

        Returns:
            Standard output with one trailing newline removed

        Raises:
            CommandLaunchError: The process could not be started, or an
                argument could not be passed to it
            CommandExitError: The process exited with a non-zero status
        """
        cmd = [self.program, *args]
        logger.debug("Running %s", cmd)

        try:
            proc = subprocess.run(
                cmd,
                cwd=self.cwd,
                env=self.env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as e:
            # ValueError: an argument the OS cannot pass, e.g. one with a NUL byte
            logger.warning("Could not launch %s: %s", self.program, e)
            raise CommandLaunchError(args, e) from e

        if proc.returncode != 0:
            logger.warning(
                "%s exited with status %d: %s", cmd, proc.returncode, proc.stderr.strip()
            )
            raise CommandExitError(args, proc.returncode, proc.stderr)

        output = proc.stdout + proc.stderr if merge_stderr else proc.stdout
        return _strip_trailing_newline(output)
