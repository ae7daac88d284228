"""Errors raised while talking to jj."""

from typing import Optional, Sequence


class CommandError(Exception):
    """Base class for a failed jj invocation.

    Subclasses tag the kind of failure so callers can branch on it.
    """

    def __init__(self, message: str, args: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command_args = tuple(args)

    @property
    def kind(self) -> str:
        """Short name of the failure kind, used in the command log."""
        return "error"


class CommandLaunchError(CommandError):
    """The jj process could not be started (missing binary, permissions,
    an argument containing a NUL byte)."""

    def __init__(self, args: Sequence[str], error: Exception) -> None:
        super().__init__(f"Failed to launch jj: {error}", args)
        self.error = error

    @property
    def kind(self) -> str:
        return "launch"


class CommandExitError(CommandError):
    """jj ran but exited with a non-zero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str) -> None:
        super().__init__(stderr, args)
        self.returncode = returncode
        self.stderr = stderr

    @property
    def kind(self) -> str:
        return "exit"

    def __str__(self) -> str:
        return self.stderr


class CommandParseError(CommandError):
    """jj output did not have the expected shape."""

    def __init__(self, reason: str, output: str = "", args: Sequence[str] = ()) -> None:
        super().__init__(f"Unexpected output from jj: {reason}", args)
        self.reason = reason
        self.output = output

    @property
    def kind(self) -> str:
        return "parse"


class CommanderError(Exception):
    """A failure with human-readable context attached.

    Raised ``from`` the underlying CommandError, which stays reachable
    through ``cause``.
    """

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def details(self) -> str:
        """Message plus the underlying jj diagnostic, for display."""
        cause = self.cause
        if cause is None or not str(cause):
            return str(self)
        return f"{self}\n\n{cause}"
