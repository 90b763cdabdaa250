"""Repository discovery: root, current branch and default branch."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from repo_inspector.git.common import DETACHED_HEAD, PathLike, remote_ref_namespace
from repo_inspector.git.runner import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryInfo:
    """Snapshot of a repository as seen from a path inside it."""

    root: Path
    name: str
    current_branch: str
    default_branch: str
    is_worktree: bool = False

    @property
    def is_detached(self) -> bool:
        """True when HEAD is detached or the current branch was undeterminable."""
        return self.current_branch == DETACHED_HEAD


def _listed_branch_names(output: str) -> List[str]:
    """Names from ``git branch --list`` output, without the current marker."""
    names = []
    for line in output.splitlines():
        name = line.strip().lstrip("*+").strip()
        if name:
            names.append(name)
    return names


def _is_linked_worktree(path: PathLike, dirs: Optional[str]) -> bool:
    """Only a linked worktree has a git dir that differs from the common dir.

    ``dirs`` is the output of ``rev-parse --git-dir --git-common-dir``; both
    lines may be relative to ``path``.
    """
    lines = dirs.splitlines() if dirs else []
    if len(lines) != 2:
        return False
    git_dir, common_dir = ((Path(path) / line.strip()).resolve() for line in lines)
    return git_dir != common_dir


class RepositoryLocator:
    """Resolve repository information for a filesystem path."""

    def __init__(
        self,
        runner: CommandRunner,
        remote: str = "origin",
        default_candidates: Sequence[str] = ("main", "master"),
        fallback_default: str = "main",
    ) -> None:
        """Initialize the locator.

        Parameters
        ----------
        runner : CommandRunner
            Runner used for all git queries
        remote : str
            Name of the primary remote
        default_candidates : Sequence[str]
            Local branch names checked, in order, for the default branch
        fallback_default : str
            Default branch used when nothing else can be determined
        """
        self.runner = runner
        self.remote = remote
        self.default_candidates = list(default_candidates)
        self.fallback_default = fallback_default

    def locate(self, path: PathLike) -> Optional[RepositoryInfo]:
        """Describe the repository containing ``path``.

        Parameters
        ----------
        path : str | Path
            Any path inside the working tree

        Returns
        -------
        Optional[RepositoryInfo]
            Repository information, or None if ``path`` is not inside a
            repository or git is unavailable
        """
        root = self.runner.run_safe(["rev-parse", "--show-toplevel"], path)
        if not root:
            logger.debug("%s is not inside a git repository", path)
            return None

        # Detached HEAD and a failed query are reported the same way
        current_branch = self.runner.run_safe(["rev-parse", "--abbrev-ref", "HEAD"], path) or DETACHED_HEAD

        git_dirs = self.runner.run_safe(["rev-parse", "--git-dir", "--git-common-dir"], path)

        return RepositoryInfo(
            root=Path(root),
            name=PurePosixPath(root.replace("\\", "/")).name,
            current_branch=current_branch,
            default_branch=self.resolve_default_branch(root),
            is_worktree=_is_linked_worktree(path, git_dirs),
        )

    def resolve_default_branch(self, repo_root: PathLike) -> str:
        """Determine the repository's default branch.

        The remote's HEAD pointer wins; otherwise the first configured
        candidate that exists locally; otherwise the fallback name.

        Parameters
        ----------
        repo_root : str | Path
            Repository root

        Returns
        -------
        str
            Default branch name, never empty
        """
        namespace = remote_ref_namespace(self.remote)
        remote_head = self.runner.run_safe(["symbolic-ref", f"{namespace}HEAD"], repo_root)
        if remote_head:
            return remote_head.removeprefix(namespace)

        listed = self.runner.run_safe(["branch", "--list", *self.default_candidates], repo_root) or ""
        present = set(_listed_branch_names(listed))
        for candidate in self.default_candidates:
            if candidate in present:
                return candidate

        logger.debug("No default branch found in %s, using %s", repo_root, self.fallback_default)
        return self.fallback_default
