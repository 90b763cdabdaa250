"""Repository inspector facade."""

import logging
from typing import List, Optional

from repo_inspector.config import InspectorConfig
from repo_inspector.git.branches import BranchEnumerator, BranchRecord
from repo_inspector.git.common import BranchName, PathLike
from repo_inspector.git.divergence import DivergenceCalculator, DivergenceCount
from repo_inspector.git.locator import RepositoryInfo, RepositoryLocator
from repo_inspector.git.operations import MutationOperations
from repo_inspector.git.runner import CommandExecutor, CommandResult, CommandRunner, GitPythonExecutor
from repo_inspector.git.worktree import WorktreeInfo, WorktreeManager


class RepositoryInspector:
    """Read repository state and run pass-through git operations.

    Every call spawns fresh git processes; nothing is cached.
    """

    def __init__(
        self,
        config: Optional[InspectorConfig] = None,
        executor: Optional[CommandExecutor] = None,
    ) -> None:
        """Initialize the inspector.

        Parameters
        ----------
        config : Optional[InspectorConfig]
            Configuration. If None, defaults and environment are used.
        executor : Optional[CommandExecutor]
            Process executor. If None, git is run through GitPython.
        """
        self.config = config or InspectorConfig()
        logging.getLogger("repo_inspector").setLevel(self.config.log_level)

        git_config = self.config.git
        self.runner = CommandRunner(
            executor or GitPythonExecutor(git_config.executable),
            timeout=git_config.timeout,
        )
        self.locator = RepositoryLocator(
            self.runner,
            remote=git_config.remote,
            default_candidates=self.config.branch.default_candidates,
            fallback_default=self.config.branch.fallback_default,
        )
        self.divergence = DivergenceCalculator(self.runner, remote=git_config.remote)
        self.worktrees = WorktreeManager(self.runner)
        self.branches = BranchEnumerator(
            self.runner,
            self.divergence,
            worktrees=self.worktrees,
            remote=git_config.remote,
        )
        self.operations = MutationOperations(self.runner, fetch_prune=git_config.fetch_prune)

    def locate(self, path: PathLike) -> Optional[RepositoryInfo]:
        """Describe the repository containing ``path``, or None outside one."""
        return self.locator.locate(path)

    def list_branches(self, repo_root: PathLike) -> List[BranchRecord]:
        """List local and remote-only branches with divergence."""
        return self.branches.list_branches(repo_root)

    def branch_status(self, repo_root: PathLike, branch_name: BranchName) -> DivergenceCount:
        """Return ahead/behind counts of ``branch_name`` against the remote."""
        return self.divergence.status(repo_root, branch_name)

    def list_worktrees(self, repo_root: PathLike) -> List[WorktreeInfo]:
        """List the repository's worktrees."""
        return self.worktrees.list_worktrees(repo_root)

    def fetch(self, path: PathLike) -> CommandResult:
        """Fetch from the remote, never raising."""
        return self.operations.fetch(path)

    def pull(self, path: PathLike) -> CommandResult:
        """Pull the current branch, never raising."""
        return self.operations.pull(path)

    def checkout(self, path: PathLike, branch_name: BranchName) -> CommandResult:
        """Check out ``branch_name``; raises CommandError on failure."""
        return self.operations.checkout(path, branch_name)
