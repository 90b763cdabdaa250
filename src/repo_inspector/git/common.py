"""Common git functionality."""

import logging
from pathlib import Path
from typing import Union

from repo_inspector.errors import ErrorCode, GitError

# Type aliases
BranchName = str
PathLike = Union[str, Path]

# Sentinel reported for a detached (or undeterminable) HEAD
DETACHED_HEAD = "HEAD"

INVALID_BRANCH_CHARS = [" ", "~", "^", ":", "?", "*", "[", "\\"]

# Set up logging
logger = logging.getLogger(__name__)


def log_git_error(error: GitError, message: str) -> None:
    """Log a git error with additional context.

    Parameters
    ----------
    error : GitError
        The error to log
    message : str
        Additional context message
    """
    logger.error("%s: %s", message, str(error))


def remote_prefix(remote: str) -> str:
    """Return the short-name prefix of refs under ``remote``, e.g. ``origin/``."""
    return f"{remote}/"


def remote_ref_namespace(remote: str) -> str:
    """Return the full ref namespace of ``remote``, e.g. ``refs/remotes/origin/``."""
    return f"refs/remotes/{remote}/"


def validate_branch_name(branch_name: BranchName) -> None:
    """Validate that a branch name can be passed to git as a ref.

    Parameters
    ----------
    branch_name : str
        The name of the branch to validate

    Raises
    ------
    GitError
        If the branch name is invalid
    """
    if not branch_name:
        raise GitError(
            "Branch name cannot be empty",
            code=ErrorCode.BRANCH_ERROR,
            details="Branch names must contain at least one character",
        )

    # Would otherwise be parsed as an option
    if branch_name.startswith("-"):
        raise GitError(
            f"Branch name '{branch_name}' is invalid",
            code=ErrorCode.BRANCH_ERROR,
            details="Branch names cannot start with a hyphen",
            branch_name=branch_name,
        )

    found_chars = [char for char in INVALID_BRANCH_CHARS if char in branch_name]
    if found_chars:
        raise GitError(
            f"Branch name '{branch_name}' contains invalid characters",
            code=ErrorCode.BRANCH_ERROR,
            details=f"Found invalid characters: {', '.join(repr(c) for c in found_chars)}",
            branch_name=branch_name,
        )

    if any(ord(char) < 32 or ord(char) == 127 for char in branch_name):
        raise GitError(
            f"Branch name '{branch_name}' contains control characters",
            code=ErrorCode.BRANCH_ERROR,
            details="Branch names cannot contain control characters",
            branch_name=branch_name,
        )

    if ".." in branch_name or "@{" in branch_name:
        raise GitError(
            f"Branch name '{branch_name}' contains a revision range sequence",
            code=ErrorCode.BRANCH_ERROR,
            details="Branch names cannot contain '..' or '@{'",
            branch_name=branch_name,
        )
