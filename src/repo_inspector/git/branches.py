"""Branch enumeration.

Local branches and remote-only branches of the primary remote are merged into
a single list keyed by short branch name. A branch that exists locally is
reported once, as local, even when the remote also tracks it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

from repo_inspector.git.common import DETACHED_HEAD, PathLike, remote_prefix, remote_ref_namespace
from repo_inspector.git.divergence import DivergenceCalculator
from repo_inspector.git.runner import CommandRunner
from repo_inspector.git.worktree import WorktreeManager

logger = logging.getLogger(__name__)

LOCAL_REFS_ARGS = ["for-each-ref", "--format=%(refname:short)%09%(HEAD)", "refs/heads/"]


@dataclass(frozen=True)
class BranchRecord:
    """A branch as shown to the caller."""

    name: str
    is_current: bool
    is_remote: bool
    ahead: int = 0
    behind: int = 0
    worktree_path: Optional[Path] = None


class BranchEnumerator:
    """List local and remote-only branches with their divergence."""

    def __init__(
        self,
        runner: CommandRunner,
        divergence: DivergenceCalculator,
        worktrees: Optional[WorktreeManager] = None,
        remote: str = "origin",
    ) -> None:
        """Initialize branch enumerator.

        Parameters
        ----------
        runner : CommandRunner
            Runner used for ref queries
        divergence : DivergenceCalculator
            Calculator used for each local branch
        worktrees : Optional[WorktreeManager]
            Used to annotate branches checked out in linked worktrees
        remote : str
            Name of the primary remote
        """
        self.runner = runner
        self.divergence = divergence
        self.worktrees = worktrees
        self.remote = remote

    def list_branches(self, repo_root: PathLike) -> List[BranchRecord]:
        """List branches of the repository at ``repo_root``.

        Local branches come first, then branches that only exist on the
        primary remote, each group in the order git reports them.

        Parameters
        ----------
        repo_root : str | Path
            Repository root

        Returns
        -------
        List[BranchRecord]
            Branch records, empty if the local ref query fails
        """
        local_raw = self.runner.run_safe(LOCAL_REFS_ARGS, repo_root)
        if local_raw is None:
            logger.debug("Could not list local branches in %s", repo_root)
            return []

        branches = self._local_branches(repo_root, local_raw)
        seen = {branch.name for branch in branches}
        branches.extend(self._remote_only_branches(repo_root, seen))
        return branches

    def _local_branches(self, repo_root: PathLike, raw: str) -> List[BranchRecord]:
        worktree_paths = self.worktrees.branch_worktrees(repo_root) if self.worktrees else {}

        branches = []
        for line in raw.splitlines():
            if not line.strip():
                continue
            name, _, head = line.partition("\t")
            name = name.strip()
            count = self.divergence.status(repo_root, name)
            branches.append(
                BranchRecord(
                    name=name,
                    is_current=head.strip() == "*",
                    is_remote=False,
                    ahead=count.ahead,
                    behind=count.behind,
                    worktree_path=worktree_paths.get(name),
                )
            )
        return branches

    def _remote_only_branches(self, repo_root: PathLike, seen: Set[str]) -> List[BranchRecord]:
        raw = self.runner.run_safe(
            ["for-each-ref", "--format=%(refname:short)", remote_ref_namespace(self.remote)],
            repo_root,
        )
        if not raw:
            return []

        prefix = remote_prefix(self.remote)
        branches = []
        for line in raw.splitlines():
            full = line.strip()
            # git may shorten refs/remotes/<remote>/HEAD to the bare remote name
            if not full or full == self.remote:
                continue
            name = full.removeprefix(prefix)
            if name == DETACHED_HEAD or name in seen:
                continue
            seen.add(name)
            branches.append(BranchRecord(name=name, is_current=False, is_remote=True))
        return branches
