"""Worktree listing."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from repo_inspector.errors import CommandError, ErrorCode
from repo_inspector.git.common import PathLike
from repo_inspector.git.runner import CommandRunner

logger = logging.getLogger(__name__)

HEADS_PREFIX = "refs/heads/"


@dataclass(frozen=True)
class WorktreeInfo:
    """Information about a worktree."""

    path: Path
    branch: Optional[str]
    commit: str
    is_bare: bool
    is_detached: bool
    is_locked: bool
    is_prunable: bool


def _to_worktree_info(fields: Dict[str, str]) -> WorktreeInfo:
    branch = fields.get("branch")
    if branch is not None:
        branch = branch.removeprefix(HEADS_PREFIX)
    return WorktreeInfo(
        path=Path(fields["worktree"]),
        branch=branch,
        commit=fields.get("HEAD", ""),
        is_bare="bare" in fields,
        is_detached="detached" in fields or branch is None,
        is_locked="locked" in fields,
        is_prunable="prunable" in fields,
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Each worktree is a block of ``key value`` or bare ``key`` lines, blocks
    separated by blank lines. Blocks without a ``worktree`` line are skipped.

    Parameters
    ----------
    output : str
        Porcelain output

    Returns
    -------
    List[WorktreeInfo]
        Worktrees in the order git lists them
    """
    worktrees = []
    fields: Dict[str, str] = {}

    for line in [*output.splitlines(), ""]:
        if not line.strip():
            if "worktree" in fields:
                worktrees.append(_to_worktree_info(fields))
            elif fields:
                logger.debug("Skipping worktree block without a path: %r", fields)
            fields = {}
            continue

        key, _, value = line.partition(" ")
        fields[key] = value

    return worktrees


class WorktreeManager:
    """List the worktrees attached to a repository."""

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize worktree manager.

        Parameters
        ----------
        runner : CommandRunner
            Runner used for the worktree query
        """
        self.runner = runner

    def list_worktrees(self, repo_root: PathLike) -> List[WorktreeInfo]:
        """List all worktrees.

        Parameters
        ----------
        repo_root : str | Path
            Any worktree of the repository

        Returns
        -------
        List[WorktreeInfo]
            List of worktree information

        Raises
        ------
        CommandError
            If worktrees cannot be listed
        """
        try:
            output = self.runner.run(["worktree", "list", "--porcelain"], repo_root)
        except CommandError as err:
            raise CommandError(
                f"Failed to list worktrees: {err}",
                command=err.command,
                status=err.status,
                stderr=err.stderr,
                code=ErrorCode.WORKTREE_ERROR,
                cause=err,
            ) from err
        return parse_worktree_porcelain(output)

    def branch_worktrees(self, repo_root: PathLike) -> Dict[str, Path]:
        """Map branch names to the linked worktree that has them checked out.

        The worktree containing ``repo_root`` itself is left out, however
        ``repo_root`` is spelled. A failed query yields an empty mapping.
        """
        output = self.runner.run_safe(["worktree", "list", "--porcelain"], repo_root)
        if output is None:
            return {}

        toplevel = self.runner.run_safe(["rev-parse", "--show-toplevel"], repo_root)
        root = Path(toplevel or repo_root).resolve()
        return {
            worktree.branch: worktree.path
            for worktree in parse_worktree_porcelain(output)
            if worktree.branch and worktree.path.resolve() != root
        }
