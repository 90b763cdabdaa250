"""Execution of git subcommands.

Every process this package spawns goes through :class:`CommandRunner`, so the
timeout and the failure policy are defined in one place. The runner delegates
the actual spawning to a :data:`CommandExecutor`, which tests replace with an
in-memory fake.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from git import Git
from git.exc import GitCommandNotFound

from repo_inspector.errors import CommandError, ErrorCode
from repo_inspector.git.common import PathLike

logger = logging.getLogger(__name__)

# (args, working directory, timeout in seconds) -> raw stdout; raises CommandError
CommandExecutor = Callable[[Sequence[str], Path, float], str]

DEFAULT_TIMEOUT = 10.0

TIMEOUT_MARKER = "Timeout:"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a mutation that reports failure instead of raising."""

    success: bool
    output: str

    @classmethod
    def ok(cls, output: str) -> "CommandResult":
        """Build a successful result from trimmed tool output."""
        return cls(success=True, output=output)

    @classmethod
    def failure(cls, message: str) -> "CommandResult":
        """Build a failed result carrying the tool's message."""
        return cls(success=False, output=message)


def _failure_message(stderr: str, status: int, args: Sequence[str]) -> str:
    message = stderr.strip()
    if message:
        return message
    return f"git {' '.join(args)} exited with status {status}"


class GitPythonExecutor:
    """Run git through GitPython's ``Git.execute``."""

    def __init__(self, executable: str = "git") -> None:
        """Initialize the executor.

        Parameters
        ----------
        executable : str
            Name or path of the git executable
        """
        self.executable = executable

    def __call__(self, args: Sequence[str], cwd: Path, timeout: float) -> str:
        """Run ``git <args>`` in ``cwd`` and return its standard output.

        Parameters
        ----------
        args : Sequence[str]
            Subcommand and arguments, without the executable
        cwd : Path
            Working directory of the process
        timeout : float
            Seconds after which the process is killed

        Returns
        -------
        str
            Raw standard output

        Raises
        ------
        CommandError
            If git cannot be started, exits non-zero or times out
        """
        command = [self.executable, *args]
        # GitPython falls back to the process cwd when cwd is unusable
        if not cwd.is_dir():
            raise CommandError(
                f"Working directory {cwd} does not exist",
                command=command,
                code=ErrorCode.REPO_ERROR,
            )
        try:
            status, stdout, stderr = Git(str(cwd)).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=timeout,
            )
        except (GitCommandNotFound, OSError) as err:
            raise CommandError(
                f"Failed to start {self.executable} in {cwd}",
                command=command,
                code=ErrorCode.COMMAND_NOT_FOUND,
                cause=err,
            ) from err

        if status != 0:
            code = ErrorCode.TIMEOUT_ERROR if stderr.startswith(TIMEOUT_MARKER) else ErrorCode.COMMAND_ERROR
            raise CommandError(
                _failure_message(stderr, status, args),
                command=command,
                status=status,
                stderr=stderr,
                code=code,
            )
        return stdout


class CommandRunner:
    """Run git subcommands against a working directory with a fixed timeout."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the runner.

        Parameters
        ----------
        executor : Optional[CommandExecutor]
            Process executor. If None, git is run through GitPython.
        timeout : float
            Seconds allowed per command
        """
        self.executor = executor or GitPythonExecutor()
        self.timeout = timeout

    def run(self, args: Sequence[str], cwd: PathLike) -> str:
        """Run a git subcommand and return its trimmed output.

        Parameters
        ----------
        args : Sequence[str]
            Subcommand and arguments
        cwd : str | Path
            Working directory

        Returns
        -------
        str
            Output with surrounding whitespace removed

        Raises
        ------
        CommandError
            If the command fails, cannot be started or times out
        """
        logger.debug("Running git %s in %s", " ".join(args), cwd)
        return self.executor(list(args), Path(cwd), self.timeout).strip()

    def run_safe(self, args: Sequence[str], cwd: PathLike) -> Optional[str]:
        """Run a git subcommand, returning None instead of raising.

        Parameters
        ----------
        args : Sequence[str]
            Subcommand and arguments
        cwd : str | Path
            Working directory

        Returns
        -------
        Optional[str]
            Trimmed output, or None if the command failed
        """
        try:
            return self.run(args, cwd)
        except CommandError as err:
            logger.debug("git %s failed in %s: %s", " ".join(args), cwd, err)
            return None
