"""Custom error types for the repo_inspector package."""

from enum import Enum, auto
from typing import Optional, Sequence


class ErrorCode(Enum):
    """Error codes for git operations."""

    # Command errors
    COMMAND_ERROR = auto()
    COMMAND_NOT_FOUND = auto()
    TIMEOUT_ERROR = auto()

    # Git errors
    BRANCH_ERROR = auto()
    REPO_ERROR = auto()
    CHECKOUT_ERROR = auto()
    FETCH_ERROR = auto()
    PULL_ERROR = auto()
    WORKTREE_ERROR = auto()

    # Configuration errors
    CONFIG_INVALID = auto()
    CONFIG_NOT_FOUND = auto()

    UNKNOWN_ERROR = auto()


class GitError(Exception):
    """Base error raised by repository inspection.

    Informational absence (not a repository, no upstream) is never reported
    through this type; only failures a caller asked to know about are.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[str] = None,
        branch_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize the error.

        Parameters
        ----------
        message : str
            Human-readable description of what failed
        code : ErrorCode, optional
            Error code, by default ErrorCode.UNKNOWN_ERROR
        details : Optional[str], optional
            Additional error details, by default None
        branch_name : Optional[str], optional
            Name of the branch involved in the error, by default None
        cause : Optional[Exception], optional
            Original exception that caused this error, by default None
        """
        super().__init__(message)
        self.code = code
        self.details = details
        self.branch_name = branch_name
        self.cause = cause


class CommandError(GitError):
    """A git process exited non-zero, could not be started, or timed out."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        status: Optional[int] = None,
        stderr: str = "",
        code: ErrorCode = ErrorCode.COMMAND_ERROR,
        branch_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize command error.

        Parameters
        ----------
        message : str
            Error message, normally the tool's own stderr
        command : Sequence[str], optional
            The argument vector that was executed
        status : Optional[int], optional
            Exit status of the process, None if it never ran
        stderr : str, optional
            Raw standard error of the process
        code : ErrorCode, optional
            Error code, by default ErrorCode.COMMAND_ERROR
        branch_name : Optional[str], optional
            Name of the branch involved in the error, by default None
        cause : Optional[Exception], optional
            Original exception that caused this error, by default None
        """
        super().__init__(
            message,
            code=code,
            details=" ".join(command) or None,
            branch_name=branch_name,
            cause=cause,
        )
        self.command = list(command)
        self.status = status
        self.stderr = stderr


class ConfigError(GitError):
    """Raised when an inspector configuration file cannot be read or validated."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize configuration error.

        Parameters
        ----------
        message : str
            Description of the configuration problem
        code : ErrorCode, optional
            Error code, by default ErrorCode.CONFIG_INVALID
        details : Optional[str], optional
            Path of the offending configuration file, by default None
        cause : Optional[Exception], optional
            Original exception that caused this error, by default None
        """
        super().__init__(message, code=code, details=details, cause=cause)
